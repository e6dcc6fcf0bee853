"""
Quadsect - Real-time Intersection Solving of Multiple Curves

Finds the crossings between polylines with adaptive quadrant subdivision,
falling back to brute force on small quadrants.

Modules:
    api: self_intersections, pair_intersections, all_intersections
    core: curves, quadrants and the solver base class
    algorithms: quadrant subdivision and brute-force solvers
    utils: geometry predicates, deduplication, configuration, visualization
"""

from .api import all_intersections, pair_intersections, self_intersections
from .algorithms.naive import NaiveSolver
from .algorithms.quadtree import QuadtreeSolver
from .core.intersection_solver import Intersection

__version__ = "1.0.0"

__all__ = [
    "all_intersections",
    "pair_intersections",
    "self_intersections",
    "Intersection",
    "NaiveSolver",
    "QuadtreeSolver",
]
