"""
Main entry point for curve intersection solving.

This CLI allows users to run the intersection solvers on curves loaded
from YAML files, with solver parameters taken from YAML configuration files.
"""

import argparse
import logging
from pathlib import Path
import matplotlib.pyplot as plt

from .algorithms.naive import NaiveSolver
from .algorithms.quadtree import QuadtreeSolver
from .core.curve import Curve, as_point_array
from .utils.config_loader import load_curves_config, load_solver_config, merge_configs
from .utils.visualization import setup_plot_limits


ALGORITHM_MAP = {
    'quadtree': QuadtreeSolver,
    'naive': NaiveSolver,
}


def create_curves_from_config(curve_entries: list) -> list:
    """
    Create named Curve objects from (name, points) pairs.

    Only the points are validated here; segments are built when a solver
    registers the curves.

    Args:
        curve_entries: Output of load_curves_config

    Returns:
        List of Curve objects in file order
    """
    return [Curve(id=idx, points=as_point_array(points), point_offset=0, name=name)
            for idx, (name, points) in enumerate(curve_entries)]


def run_solver(algorithm_name: str, curves_file: str, config_dir: str = 'configs',
               self_intersect: bool = None, show_quadrants: bool = False,
               visualize: bool = True, save: bool = False):
    """
    Run an intersection solver.

    Args:
        algorithm_name: Name of algorithm ('quadtree', 'naive')
        curves_file: YAML file with the curves to intersect
        config_dir: Directory containing configuration files
        self_intersect: Override the configured self-intersection setting
        show_quadrants: Draw the quadrant subdivision (quadtree only)
        visualize: Whether to show visualization
        save: Whether to save output files

    Returns:
        The solver after the run, or None if the algorithm is unknown
    """
    if algorithm_name not in ALGORITHM_MAP:
        print(f"Error: Unknown algorithm '{algorithm_name}'")
        print(f"Available algorithms: {', '.join(ALGORITHM_MAP.keys())}")
        return None

    print(f"\n{'='*60}")
    print(f"Running {algorithm_name.upper()} Intersection Solver")
    print(f"{'='*60}\n")

    # Load configurations
    print("Loading configurations...")
    solver_config = load_solver_config(config_dir)
    if self_intersect is not None:
        parameters = merge_configs(solver_config.get('parameters', {}), {'self_intersect': self_intersect})
        solver_config = merge_configs(solver_config, {'parameters': parameters})

    curves = create_curves_from_config(load_curves_config(curves_file))
    print(f"Curves: {len(curves)} with {sum(max(len(c) - 1, 0) for c in curves)} segments")

    # Create solver
    SolverClass = ALGORITHM_MAP[algorithm_name]
    if SolverClass is QuadtreeSolver:
        solver = SolverClass(solver_config, record_quadrants=show_quadrants)
    else:
        solver = SolverClass(solver_config)
    print(f"Solver: {solver!r}")

    # Solve
    print("\nSolving intersections...")
    intersections = solver.solve(curves)

    # Display metrics
    print("\n" + "="*60)
    print("Results:")
    print("="*60)
    for key, value in solver.get_metrics().items():
        print(f"  {key}: {value}")
    print("="*60 + "\n")

    decimals = solver.parameters.point_decimals
    for curve_a, curve_b, (x, y) in intersections:
        print(f"  {curve_a.name} x {curve_b.name}: ({x:.{decimals}f}, {y:.{decimals}f})")
    print(f"\nFound {len(intersections)} intersections")

    output_config = solver_config.get('output', {})
    save_path = Path(output_config.get('save_path', f'outputs/{algorithm_name}/'))
    if save:
        save_path.mkdir(parents=True, exist_ok=True)
        results_file = save_path / output_config.get('results_filename', 'intersections.json')
        solver.save_results(str(results_file))
        print(f"Results saved to: {results_file}")

    # Visualize
    if visualize or save:
        fig, ax = plt.subplots(figsize=(10, 8))
        solver.visualize(ax, show_quadrants=show_quadrants)
        bounds = [c.bounds() for c in curves if len(c)]
        if bounds:
            setup_plot_limits(ax,
                              min(b[0][0] for b in bounds), max(b[1][0] for b in bounds),
                              min(b[0][1] for b in bounds), max(b[1][1] for b in bounds))
        plt.tight_layout()

        if save:
            plot_file = save_path / output_config.get('plot_filename', 'intersections.png')
            plt.savefig(plot_file, dpi=150, bbox_inches='tight')
            print(f"Plot saved to: {plot_file}")

        if visualize:
            plt.show()
        plt.close(fig)

    return solver


def main(argv=None):
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description='Real-time Intersection Solving of Multiple Curves',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Intersect the example curves with the quadrant solver
  quadsect --curves configs/curves.yaml

  # Include self-intersections and draw the quadrants
  quadsect --curves configs/curves.yaml --self-intersect --show-quadrants

  # Brute-force baseline, save results without showing a window
  quadsect --curves configs/curves.yaml --algorithm naive --save --no-viz
        """
    )

    parser.add_argument(
        '--curves',
        type=str,
        required=True,
        help='YAML file with the curves to intersect'
    )

    parser.add_argument(
        '--algorithm', '-a',
        type=str,
        choices=list(ALGORITHM_MAP.keys()),
        default='quadtree',
        help='Intersection solver to use (default: quadtree)'
    )

    parser.add_argument(
        '--config-dir', '-c',
        type=str,
        default='configs',
        help='Directory containing YAML configuration files (default: configs)'
    )

    self_intersect_group = parser.add_mutually_exclusive_group()
    self_intersect_group.add_argument(
        '--self-intersect',
        dest='self_intersect',
        action='store_true',
        default=None,
        help='Also report crossings within each curve'
    )
    self_intersect_group.add_argument(
        '--no-self-intersect',
        dest='self_intersect',
        action='store_false',
        default=None,
        help='Ignore crossings within each curve, overriding the config'
    )

    parser.add_argument(
        '--show-quadrants',
        action='store_true',
        help='Draw the quadrant subdivision (quadtree solver only)'
    )

    parser.add_argument(
        '--save', '-s',
        action='store_true',
        help='Save output files (results, plot)'
    )

    parser.add_argument(
        '--no-viz',
        action='store_true',
        help='Disable visualization'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    run_solver(
        algorithm_name=args.algorithm,
        curves_file=args.curves,
        config_dir=args.config_dir,
        self_intersect=args.self_intersect,
        show_quadrants=args.show_quadrants,
        visualize=not args.no_viz,
        save=args.save
    )


if __name__ == '__main__':
    main()
