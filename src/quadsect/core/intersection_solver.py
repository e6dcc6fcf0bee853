"""
Abstract base class for curve intersection solvers.

This module defines the common interface that the quadrant subdivision
solver and the brute-force baseline implement, together with result
persistence and plotting shared by both.
"""

import csv
import json
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple
import numpy as np

from .curve import SegmentArena
from ..utils.config_loader import SolverParameters
from ..utils.dedup import distinct, point_identifier, result_identifier
from ..utils.geometry import Point


class Intersection(NamedTuple):
    """A crossing between two curves; curve_a is curve_b for self-intersections."""
    curve_a: Any
    curve_b: Any
    point: Point


# (curve id, curve id, point) as produced inside one solver run
RawIntersection = Tuple[int, int, Point]


class IntersectionSolver(ABC):
    """
    Abstract base class for curve intersection solvers.

    Attributes:
        config (Dict[str, Any]): Solver configuration (see configs/solver.yaml)
        parameters (SolverParameters): Validated algorithm parameters
        arena (Optional[SegmentArena]): Curves of the last run
        intersections (List[Intersection]): Deduplicated result of the last run
        solve_time (float): Time taken by the last run (seconds)
        metrics (Dict[str, Any]): Counters from the last run
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the solver.

        Args:
            config: Dictionary with an optional 'parameters' section, as loaded
                from YAML. Missing values fall back to the defaults.

        Raises:
            ValueError: If a parameter value is invalid
        """
        self.config = config or {}
        self.parameters = SolverParameters.from_config(self.config)
        self.arena: Optional[SegmentArena] = None
        self.intersections: List[Intersection] = []
        self.solve_time: float = 0.0
        self.metrics: Dict[str, Any] = {}
        self._initialize_algorithm()

    @abstractmethod
    def _initialize_algorithm(self) -> None:
        """
        Reset algorithm-specific state.

        Called from __init__ and at the start of every solve().
        """
        pass

    @abstractmethod
    def _find_intersections(self, arena: SegmentArena, self_intersect: bool) -> List[RawIntersection]:
        """
        Find raw, possibly duplicated intersections.

        Args:
            arena: Registered curves
            self_intersect: Whether crossings within one curve count

        Returns:
            List of (curve_id_a, curve_id_b, point) in discovery order
        """
        pass

    @abstractmethod
    def get_metrics(self) -> Dict[str, Any]:
        """
        Get performance counters from the last run.

        Returns:
            Dictionary with at least num_curves, num_segments,
            intersections_found and solve_time
        """
        pass

    def solve(self, curves: Sequence[Any], self_intersect: Optional[bool] = None) -> List[Intersection]:
        """
        Find all intersections between the given curves.

        Args:
            curves: Curves as sequences of (x, y) pairs, (n, 2) arrays or Curve
                objects. The same object passed twice counts as one curve.
            self_intersect: Whether crossings within one curve count. Defaults
                to the configured value.

        Returns:
            Deduplicated intersections in discovery order. curve_a and
            curve_b are the objects passed in.

        Raises:
            ValueError: If a curve is not a sequence of finite (x, y) pairs

        Example:
            >>> solver = QuadtreeSolver()
            >>> solver.solve([[[0, 0], [10, 10]], [[0, 10], [10, 0]]])
            [Intersection(curve_a=[[0, 0], [10, 10]], curve_b=[[0, 10], [10, 0]], point=(5.0, 5.0))]
        """
        if self_intersect is None:
            self_intersect = self.parameters.self_intersect

        start_time = time.time()
        self.metrics = {}
        self._initialize_algorithm()

        self.arena = SegmentArena()
        self.arena.add_curves(curves)

        raw = self._find_intersections(self.arena, self_intersect)
        self.metrics['raw_intersections'] = len(raw)

        decimals = self.parameters.point_decimals
        curve_ids = {curve.id: f"c{curve.id}" for curve in self.arena.curves}
        unique = distinct(raw, lambda r: result_identifier(r, curve_ids, decimals))

        self.intersections = [
            Intersection(self.arena.curve(a).source, self.arena.curve(b).source, point)
            for a, b, point in unique
        ]
        self.solve_time = time.time() - start_time
        return self.intersections

    def solve_points(self, curves: Sequence[Any], self_intersect: Optional[bool] = None) -> List[Point]:
        """
        Find intersection points only, deduplicated by rounded position.

        A crossing point shared by several curve pairs is reported once.
        """
        self.solve(curves, self_intersect)
        return self.get_points()

    def get_points(self) -> List[Point]:
        """Points of the last result, deduplicated by rounded position."""
        decimals = self.parameters.point_decimals
        points = [i.point for i in self.intersections]
        return distinct(points, lambda p: point_identifier(p, decimals))

    def curve_name(self, source: Any) -> str:
        """Display name of a curve of the last run, looked up by the object passed in."""
        for curve in self.arena.curves:
            if curve.source is source:
                return curve.name
        raise ValueError("Curve was not part of the last run")

    def visualize(self, ax, **kwargs) -> None:
        """
        Plot the curves and intersections of the last run.

        Args:
            ax: Matplotlib axis object to draw on
            **kwargs: point_color, point_size
        """
        from ..utils.visualization import draw_curves, draw_intersections

        if self.arena is None:
            raise ValueError("Nothing to visualize. Run solve() first.")

        ax.clear()
        draw_curves(ax, self.arena.curves)
        draw_intersections(ax, [i.point for i in self.intersections],
                           color=kwargs.get('point_color', 'black'),
                           size=kwargs.get('point_size', 30))
        ax.set_title(f"{self.__class__.__name__}: {len(self.intersections)} intersections")
        ax.legend(loc='best')

    def save_results(self, filename: str) -> None:
        """
        Save the last result to a file.

        Supports multiple formats based on file extension:
        - .npy: NumPy binary format (points only)
        - .json: JSON format with intersections and metrics
        - .csv: Comma-separated values (x, y, curve_a, curve_b)

        Args:
            filename: Output file path with extension

        Raises:
            ValueError: If nothing was solved yet or the format is unsupported

        Example:
            >>> solver.save_results('outputs/intersections.json')
        """
        if self.arena is None:
            raise ValueError("No results to save. Run solve() first.")

        rows = [
            (float(i.point[0]), float(i.point[1]),
             self.curve_name(i.curve_a), self.curve_name(i.curve_b))
            for i in self.intersections
        ]

        if filename.endswith('.npy'):
            np.save(filename, np.array([r[:2] for r in rows], dtype=float).reshape(-1, 2))
        elif filename.endswith('.json'):
            with open(filename, 'w') as f:
                json.dump({
                    'intersections': [
                        {'curve_a': a, 'curve_b': b, 'point': [x, y]}
                        for x, y, a, b in rows
                    ],
                    'metrics': self.get_metrics()
                }, f, indent=2)
        elif filename.endswith('.csv'):
            # Curve names are free text, so they are quoted when needed
            with open(filename, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(['x', 'y', 'curve_a', 'curve_b'])
                writer.writerows(rows)
        else:
            raise ValueError(f"Unsupported file format: {filename}. "
                             f"Use .npy, .json, or .csv")

    @staticmethod
    def load_results(filename: str) -> List[Intersection]:
        """
        Load results written by save_results.

        Curves are identified by name in the loaded results. Files in .npy
        format carry no curve names, so curve_a and curve_b are None.

        Args:
            filename: Input file path

        Returns:
            List of intersections
        """
        if filename.endswith('.npy'):
            points = np.load(filename)
            return [Intersection(None, None, (float(x), float(y))) for x, y in points]
        elif filename.endswith('.json'):
            with open(filename, 'r') as f:
                data = json.load(f)
            return [Intersection(r['curve_a'], r['curve_b'], tuple(r['point']))
                    for r in data['intersections']]
        elif filename.endswith('.csv'):
            with open(filename, 'r', newline='') as f:
                reader = csv.reader(f)
                next(reader, None)
                return [Intersection(a, b, (float(x), float(y))) for x, y, a, b in reader]
        else:
            raise ValueError(f"Unsupported file format: {filename}")

    def _base_metrics(self) -> Dict[str, Any]:
        arena = self.arena
        return {
            'num_curves': len(arena.curves) if arena else 0,
            'num_segments': arena.num_segments if arena else 0,
            'raw_intersections': self.metrics.get('raw_intersections', 0),
            'intersections_found': len(self.intersections),
            'solve_time': self.solve_time,
        }

    def __repr__(self) -> str:
        """String representation of the solver."""
        return f"{self.__class__.__name__}(config={self.config})"

    def __str__(self) -> str:
        """Human-readable string representation."""
        status = f"{len(self.intersections)} intersections" if self.arena else "not solved"
        return f"{self.__class__.__name__} ({status})"
