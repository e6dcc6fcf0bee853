"""
Integration tests for the solver classes: metrics, tracing, persistence,
plotting and the command line entry point.
"""

import contextlib
import io
import json
import os
import tempfile
import unittest
import warnings
from pathlib import Path

import matplotlib.pyplot as plt

from quadsect import NaiveSolver, QuadtreeSolver
from quadsect.algorithms.quadtree import DIVIDED, SOLVED
from quadsect.main import create_curves_from_config, main, run_solver
from tests.test_fixtures.curves import (
    COMB, DIAGONAL_DOWN, DIAGONAL_UP, FIGURE_EIGHT, HORIZONTAL_HIGH,
    HORIZONTAL_LOW, MEANDER, arc, rounded
)

REPO_CONFIGS = Path(__file__).resolve().parents[2] / "configs"


class SolverAgreementTests(unittest.TestCase):
    """The subdivision solver finds what brute force finds."""

    def test_meander_and_comb(self):
        curves = [MEANDER, COMB]
        quadtree = QuadtreeSolver().solve_points(curves)
        naive = NaiveSolver().solve_points(curves)
        self.assertEqual(len(quadtree), 4)
        self.assertEqual(rounded(quadtree), rounded(naive))

    def test_self_intersect_mode(self):
        curves = [MEANDER, COMB]
        quadtree = QuadtreeSolver().solve_points(curves, self_intersect=True)
        naive = NaiveSolver().solve_points(curves, self_intersect=True)
        self.assertEqual(rounded(quadtree), rounded(naive))

    def test_subdivision_results_are_a_subset_of_brute_force(self):
        curves = [arc(60, radius=8.0), arc(45, radius=5.0, sweep=0.6), MEANDER, COMB]
        quadtree = set(rounded(QuadtreeSolver().solve_points(curves, self_intersect=True)))
        naive = set(rounded(NaiveSolver().solve_points(curves, self_intersect=True)))
        self.assertTrue(quadtree)
        self.assertLessEqual(quadtree, naive)


class QuadtreeSolverTests(unittest.TestCase):

    def test_metrics(self):
        solver = QuadtreeSolver()
        solver.solve([MEANDER, COMB])
        metrics = solver.get_metrics()

        self.assertEqual(metrics['num_curves'], 2)
        self.assertEqual(metrics['num_segments'], 12)
        self.assertEqual(metrics['intersections_found'], 4)
        self.assertGreaterEqual(metrics['raw_intersections'], 4)
        self.assertEqual(metrics['quadrants_inspected'],
                         metrics['quadrants_solved'] + metrics['quadrants_divided'])
        self.assertGreater(metrics['quadrants_divided'], 0)
        self.assertEqual(metrics['depth_capped'], 0)
        self.assertGreaterEqual(metrics['solve_time'], 0.0)

    def test_small_input_is_solved_without_subdivision(self):
        solver = QuadtreeSolver()
        solver.solve([DIAGONAL_UP, DIAGONAL_DOWN])
        self.assertEqual(solver.quadrants_inspected, 1)
        self.assertEqual(solver.quadrants_divided, 0)

    def test_quadrant_trace(self):
        solver = QuadtreeSolver(record_quadrants=True)
        solver.solve([FIGURE_EIGHT], self_intersect=True)

        self.assertEqual(len(solver.quadrant_trace), solver.quadrants_inspected)
        root = solver.quadrant_trace[0]
        self.assertEqual(root.status, DIVIDED)
        self.assertEqual(root.depth, 0)
        self.assertEqual(root.bounds, ((0.0, 0.0), (10.0, 10.0)))
        self.assertTrue(any(r.status == SOLVED and r.found > 0 for r in solver.quadrant_trace))

    def test_trace_is_off_by_default(self):
        solver = QuadtreeSolver()
        solver.solve([FIGURE_EIGHT], self_intersect=True)
        self.assertEqual(solver.quadrant_trace, [])

    def test_depth_cap_on_coincident_points(self):
        # Both curves pile eight points onto the origin, so the density of
        # the quadrant holding it never drops
        c1 = [[0, 0]] * 8 + [[10, 10]]
        c2 = [[0, 0]] * 8 + [[10, 2]]
        c3 = [[0, 10], [10, 0]]
        solver = QuadtreeSolver({'parameters': {'max_depth': 20}})
        points = solver.solve_points([c1, c2, c3])

        self.assertEqual(rounded(points), [(5.0, 5.0), (8.3333, 1.6667)])
        self.assertGreater(solver.depth_capped, 0)
        self.assertEqual(solver.max_depth_reached, 20)

    def test_naive_threshold_from_config(self):
        solver = QuadtreeSolver({'parameters': {'naive_threshold': 100}})
        solver.solve([MEANDER, COMB])
        self.assertEqual(solver.quadrants_inspected, 1)
        self.assertEqual(len(solver.intersections), 4)

    def test_configured_self_intersect_default(self):
        solver = QuadtreeSolver({'parameters': {'self_intersect': True}})
        self.assertEqual(len(solver.solve([FIGURE_EIGHT])), 1)
        self.assertEqual(solver.solve([FIGURE_EIGHT], self_intersect=False), [])

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            QuadtreeSolver({'parameters': {'naive_threshold': -3}})

    def test_malformed_curve(self):
        with self.assertRaises(ValueError):
            QuadtreeSolver().solve([[[0, 0, 0]]])

    def test_str(self):
        solver = QuadtreeSolver()
        self.assertEqual(str(solver), "QuadtreeSolver (not solved)")
        solver.solve([DIAGONAL_UP, DIAGONAL_DOWN])
        self.assertEqual(str(solver), "QuadtreeSolver (1 intersections)")


class NaiveSolverTests(unittest.TestCase):

    def test_pairs_tested(self):
        solver = NaiveSolver()
        solver.solve([MEANDER, COMB])
        # 7 meander segments against 5 comb segments
        self.assertEqual(solver.get_metrics()['pairs_tested'], 35)

    def test_self_intersect_pairs(self):
        solver = NaiveSolver()
        points = solver.solve_points([FIGURE_EIGHT], self_intersect=True)
        self.assertEqual(rounded(points), [(5.0, 5.0)])
        self.assertEqual(solver.pairs_tested, 3)


class PersistenceTests(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.solver = QuadtreeSolver()
        self.solver.solve([MEANDER, COMB])

    def tearDown(self):
        self._tmp.cleanup()

    def test_json_round_trip(self):
        path = str(self.tmp / "results.json")
        self.solver.save_results(path)

        with open(path) as f:
            data = json.load(f)
        self.assertEqual(data['metrics']['intersections_found'], 4)

        loaded = QuadtreeSolver.load_results(path)
        self.assertEqual([(r.curve_a, r.curve_b) for r in loaded], [("c0", "c1")] * 4)
        self.assertEqual(rounded(r.point for r in loaded), rounded(self.solver.get_points()))

    def test_csv_round_trip(self):
        path = str(self.tmp / "results.csv")
        self.solver.save_results(path)
        loaded = QuadtreeSolver.load_results(path)
        self.assertEqual(len(loaded), 4)
        self.assertEqual(loaded[0].curve_a, "c0")
        self.assertEqual(rounded(r.point for r in loaded), rounded(self.solver.get_points()))

    def test_csv_round_trip_with_delimiter_in_names(self):
        curves = create_curves_from_config([("left, upper", DIAGONAL_UP), ('say "b"', DIAGONAL_DOWN)])
        solver = QuadtreeSolver()
        solver.solve(curves)

        path = str(self.tmp / "named.csv")
        solver.save_results(path)
        loaded = QuadtreeSolver.load_results(path)

        self.assertEqual([(r.curve_a, r.curve_b) for r in loaded], [("left, upper", 'say "b"')])
        self.assertEqual(rounded(r.point for r in loaded), [(5.0, 5.0)])

    def test_csv_without_intersections(self):
        solver = QuadtreeSolver()
        solver.solve([HORIZONTAL_LOW, HORIZONTAL_HIGH])

        path = str(self.tmp / "empty.csv")
        solver.save_results(path)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            self.assertEqual(QuadtreeSolver.load_results(path), [])

    def test_npy_round_trip(self):
        path = str(self.tmp / "results.npy")
        self.solver.save_results(path)
        loaded = QuadtreeSolver.load_results(path)
        self.assertEqual(rounded(r.point for r in loaded), rounded(self.solver.get_points()))

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            self.solver.save_results(str(self.tmp / "results.txt"))
        with self.assertRaises(ValueError):
            QuadtreeSolver.load_results(str(self.tmp / "results.txt"))

    def test_save_before_solve(self):
        with self.assertRaises(ValueError):
            NaiveSolver().save_results(str(self.tmp / "results.json"))


class VisualizationTests(unittest.TestCase):

    def test_visualize_with_quadrants(self):
        solver = QuadtreeSolver(record_quadrants=True)
        solver.solve([MEANDER, COMB])
        fig, ax = plt.subplots()
        try:
            solver.visualize(ax)
            self.assertEqual(len(ax.patches), len(solver.quadrant_trace))
            self.assertEqual(len(ax.lines), 2)
        finally:
            plt.close(fig)

    def test_visualize_before_solve(self):
        fig, ax = plt.subplots()
        try:
            with self.assertRaises(ValueError):
                NaiveSolver().visualize(ax)
        finally:
            plt.close(fig)


class CommandLineTests(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        (self.tmp / "solver.yaml").write_text(
            "solver:\n"
            "  parameters:\n"
            "    naive_threshold: 2\n"
            "  output:\n"
            f"    save_path: {self.tmp / 'out'}\n"
        )

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, *args):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(list(args))
        return out.getvalue()

    def test_quadtree_run_saves_results(self):
        curves_file = self.tmp / "curves.yaml"
        curves_file.write_text("curves:\n"
                               "  - name: figure_eight\n"
                               "    points: [[0, 0], [10, 10], [0, 10], [10, 0]]\n")
        output = self._run('--curves', str(curves_file),
                           '--config-dir', str(self.tmp), '--self-intersect',
                           '--show-quadrants', '--save', '--no-viz')

        self.assertIn("figure_eight x figure_eight: (5.0000, 5.0000)", output)
        self.assertIn("quadrants_inspected", output)
        self.assertTrue(os.path.exists(self.tmp / 'out' / 'intersections.json'))
        self.assertTrue(os.path.exists(self.tmp / 'out' / 'intersections.png'))

        loaded = QuadtreeSolver.load_results(str(self.tmp / 'out' / 'intersections.json'))
        self.assertEqual([(r.curve_a, r.curve_b) for r in loaded], [("figure_eight", "figure_eight")])

    def test_naive_run(self):
        args = ['--curves', str(REPO_CONFIGS / "curves.yaml"),
                '--config-dir', str(self.tmp), '--algorithm', 'naive', '--no-viz']
        output = self._run(*args)
        self.assertIn("pairs_tested", output)
        self.assertNotIn("figure_eight x figure_eight", output)

        output = self._run(*args, '--self-intersect')
        self.assertIn("figure_eight x figure_eight: (5.0000, 5.0000)", output)

    def test_unknown_algorithm(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            solver = run_solver('sweep', str(REPO_CONFIGS / "curves.yaml"),
                                config_dir=str(self.tmp), visualize=False)
        self.assertIsNone(solver)
        self.assertIn("Unknown algorithm", out.getvalue())

    def test_no_self_intersect_overrides_config(self):
        (self.tmp / "solver.yaml").write_text(
            "solver:\n"
            "  parameters:\n"
            "    self_intersect: true\n"
        )
        args = ['--curves', str(REPO_CONFIGS / "curves.yaml"),
                '--config-dir', str(self.tmp), '--algorithm', 'naive', '--no-viz']

        self.assertIn("figure_eight x figure_eight", self._run(*args))
        self.assertNotIn("figure_eight x figure_eight", self._run(*args, '--no-self-intersect'))

    def test_self_intersect_flags_are_exclusive(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(['--curves', 'curves.yaml', '--self-intersect', '--no-self-intersect'])

    def test_curves_from_config_carry_names_without_segments(self):
        curves = create_curves_from_config([("up", DIAGONAL_UP), ("down", DIAGONAL_DOWN)])
        self.assertEqual([c.name for c in curves], ["up", "down"])
        self.assertEqual([c.segments for c in curves], [[], []])

        solver = NaiveSolver()
        (result,) = solver.solve(curves)
        self.assertEqual((result.curve_a.name, result.curve_b.name), ("up", "down"))
        self.assertEqual(solver.arena.num_segments, 2)


if __name__ == '__main__':
    unittest.main()
