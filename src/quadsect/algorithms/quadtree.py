"""
Quadrant subdivision intersection solver.

Testing every segment pair is quadratic and becomes the bottleneck once
curves have hundreds of segments. This solver starts from one quadrant
covering all curves and refines it breadth-first: crowded quadrants are split
into four, quadrants that cannot hold an intersection are dropped, and
quadrants with few segment endpoints are solved by brute force.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, List, NamedTuple

from ..core.curve import SegmentArena
from ..core.intersection_solver import IntersectionSolver, RawIntersection
from ..core.quadrant import Quadrant, divide_quadrant, initial_quadrant
from ..utils.geometry import Rect
from .naive import quadrant_intersections

logger = logging.getLogger(__name__)

SOLVED = 'solved'
DIVIDED = 'divided'


class QuadrantRecord(NamedTuple):
    """
    Trace entry for one inspected quadrant.

    found is the number of raw intersections for a solved quadrant and the
    number of surviving children for a divided one.
    """
    bounds: Rect
    depth: int
    status: str
    found: int


class QuadtreeSolver(IntersectionSolver):
    """
    Breadth-first quadrant subdivision solver.

    A quadrant whose density (segment endpoints inside it) is at most
    naive_threshold is solved by brute force. Otherwise it is divided and the
    children holding segments of too few curves are pruned: at least one curve
    is needed when self-intersections count, two otherwise.

    The density ignores segments recorded only because they cross a quadrant,
    so a quadrant may be solved directly while holding more segments than
    its density suggests.

    Subdivision stops at max_depth, or once the larger side of a quadrant is
    at most min_quadrant_size; such quadrants are solved by brute force. This
    bounds the work on inputs with many coincident points, where the density
    would never drop.

    Attributes:
        record_quadrants (bool): Whether to keep a trace of inspected quadrants
        quadrant_trace (List[QuadrantRecord]): Trace of the last run
        quadrants_inspected (int): Quadrants taken from the queue
        quadrants_solved (int): Quadrants solved by brute force
        quadrants_divided (int): Quadrants split into children
        quadrants_pruned (int): Children dropped for holding too few curves
        max_depth_reached (int): Deepest level inspected
        depth_capped (int): Quadrants solved early because of the depth/size cap
    """

    def __init__(self, config: Dict[str, Any] = None, record_quadrants: bool = False):
        """
        Initialize the solver.

        Args:
            config: Solver configuration with an optional 'parameters' section
            record_quadrants: Keep a trace of every inspected quadrant, used
                by visualize() to draw the subdivision
        """
        self.record_quadrants = record_quadrants
        super().__init__(config)

    def _initialize_algorithm(self) -> None:
        """Initialize subdivision counters and trace."""
        self.quadrant_trace: List[QuadrantRecord] = []
        self.quadrants_inspected = 0
        self.quadrants_solved = 0
        self.quadrants_divided = 0
        self.quadrants_pruned = 0
        self.max_depth_reached = 0
        self.depth_capped = 0

    def _at_size_limit(self, quadrant: Quadrant) -> bool:
        if quadrant.depth >= self.parameters.max_depth:
            return True
        return max(quadrant.size) <= self.parameters.min_quadrant_size

    def _find_intersections(self, arena: SegmentArena, self_intersect: bool) -> List[RawIntersection]:
        root = initial_quadrant(arena)
        if root is None:
            return []
        return self.divide_till_solved(deque([root]), self_intersect)

    def divide_till_solved(self, quadrants: Deque[Quadrant], self_intersect: bool) -> List[RawIntersection]:
        """
        Process a queue of quadrants until it is empty.

        Quadrants are taken from the front and children appended to the back,
        so the subdivision proceeds level by level.

        Args:
            quadrants: Queue of quadrants to process, consumed in place
            self_intersect: Whether crossings within one curve count

        Returns:
            Raw (curve_a, curve_b, point) triples in discovery order,
            possibly with duplicates
        """
        results = []
        min_curves = 1 if self_intersect else 2
        threshold = self.parameters.naive_threshold

        while quadrants:
            quadrant = quadrants.popleft()
            self.quadrants_inspected += 1
            self.max_depth_reached = max(self.max_depth_reached, quadrant.depth)

            capped = quadrant.density > threshold and self._at_size_limit(quadrant)
            if quadrant.density <= threshold or capped:
                if capped:
                    self.depth_capped += 1
                    logger.debug("Quadrant %s at depth %d hit the subdivision cap with density %d",
                                 quadrant.bounds, quadrant.depth, quadrant.density)
                found = quadrant_intersections(quadrant, self_intersect)
                results.extend(found)
                self.quadrants_solved += 1
                self._record(quadrant, SOLVED, len(found))
                continue

            children = divide_quadrant(quadrant)
            kept = [child for child in children if child.num_curves >= min_curves]
            self.quadrants_divided += 1
            self.quadrants_pruned += len(children) - len(kept)
            self._record(quadrant, DIVIDED, len(kept))
            quadrants.extend(kept)

        logger.debug("Inspected %d quadrants (%d solved, %d divided, %d pruned), max depth %d",
                     self.quadrants_inspected, self.quadrants_solved, self.quadrants_divided,
                     self.quadrants_pruned, self.max_depth_reached)
        return results

    def _record(self, quadrant: Quadrant, status: str, found: int) -> None:
        if self.record_quadrants:
            self.quadrant_trace.append(QuadrantRecord(quadrant.bounds, quadrant.depth, status, found))

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get subdivision metrics.

        Returns:
            Dictionary containing:
            - num_curves, num_segments: Size of the input
            - raw_intersections: Crossings found before deduplication
            - intersections_found: Crossings after deduplication
            - quadrants_inspected, quadrants_solved, quadrants_divided,
              quadrants_pruned: Work done by the subdivision
            - max_depth_reached, depth_capped: Depth statistics
            - solve_time: Time of the last run (seconds)
        """
        metrics = self._base_metrics()
        metrics.update({
            'quadrants_inspected': self.quadrants_inspected,
            'quadrants_solved': self.quadrants_solved,
            'quadrants_divided': self.quadrants_divided,
            'quadrants_pruned': self.quadrants_pruned,
            'max_depth_reached': self.max_depth_reached,
            'depth_capped': self.depth_capped,
        })
        return metrics

    def visualize(self, ax, **kwargs) -> None:
        """
        Plot curves and intersections, plus the quadrant trace if recorded.

        Args:
            ax: Matplotlib axis object to draw on
            **kwargs: point_color, point_size, show_quadrants (default True)
        """
        from ..utils.visualization import draw_quadrants

        super().visualize(ax, **kwargs)
        if kwargs.get('show_quadrants', True) and self.quadrant_trace:
            draw_quadrants(ax, self.quadrant_trace)
