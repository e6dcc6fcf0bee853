"""
Public intersection API.

Thin functions over QuadtreeSolver with the default parameters, meant to be
called once per animation tick by code that generates curves and draws the
results. Every call starts from scratch and keeps no state.
"""

from typing import Any, List, Sequence

from .algorithms.quadtree import QuadtreeSolver
from .core.intersection_solver import Intersection
from .utils.geometry import Point


def self_intersections(curve: Any) -> List[Point]:
    """
    Find the points where a curve crosses itself.

    Args:
        curve: Sequence of (x, y) pairs

    Returns:
        Crossing points, deduplicated by rounded position

    Example:
        >>> self_intersections([[0, 0], [10, 10], [0, 10], [10, 0]])
        [(5.0, 5.0)]
    """
    return QuadtreeSolver().solve_points([curve], self_intersect=True)


def pair_intersections(curve_a: Any, curve_b: Any, self_intersect: bool = False) -> List[Point]:
    """
    Find the points where two curves cross.

    Args:
        curve_a: Sequence of (x, y) pairs
        curve_b: Sequence of (x, y) pairs
        self_intersect: Also report crossings within each curve

    Returns:
        Crossing points, deduplicated by rounded position

    Example:
        >>> pair_intersections([[0, 0], [10, 10]], [[0, 10], [10, 0]])
        [(5.0, 5.0)]
    """
    return QuadtreeSolver().solve_points([curve_a, curve_b], self_intersect=self_intersect)


def all_intersections(curves: Sequence[Any], self_intersect: bool = False) -> List[Intersection]:
    """
    Find all crossings between any number of curves.

    Args:
        curves: Curves as sequences of (x, y) pairs
        self_intersect: Also report crossings within each curve

    Returns:
        (curve_a, curve_b, point) triples in discovery order, where curve_a
        and curve_b are the curve objects passed in. A crossing is reported
        once per pair of curves.
    """
    return QuadtreeSolver().solve(curves, self_intersect=self_intersect)
