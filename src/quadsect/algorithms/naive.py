"""
Brute-force pairwise intersection search.

quadrant_intersections is the leaf step of the subdivision solver: once a
quadrant holds only a few segments, every pair of them is tested directly.
NaiveSolver applies the same pair test to the whole input at once and serves
as a baseline for benchmarking and cross-checking.
"""

from typing import Dict, List, Tuple, Any

from ..core.curve import Segment, SegmentArena
from ..core.intersection_solver import IntersectionSolver, RawIntersection
from ..core.quadrant import Quadrant
from ..utils.geometry import intersect, line_intersection, segments_connected


def pairwise_intersections(curve_segments: Dict[int, List[Segment]],
                           self_intersect: bool) -> Tuple[List[RawIntersection], int]:
    """
    Test every relevant segment pair of a curve -> segments mapping.

    Each unordered pair of curves is tested once. When self_intersect is set,
    segment pairs within one curve are tested as well, skipping pairs that
    share an endpoint: neighbouring segments of a polyline always touch at
    their common vertex.

    Args:
        curve_segments: Segments per curve id
        self_intersect: Whether crossings within one curve count

    Returns:
        (results, pairs_tested) where results holds (curve_a, curve_b, point)
        triples in discovery order
    """
    results = []
    pairs_tested = 0
    entries = list(curve_segments.items())

    for i, (curve_a, segments_a) in enumerate(entries):
        first = i if self_intersect else i + 1
        for j_a, s1 in enumerate(segments_a):
            for curve_b, segments_b in entries[first:]:
                others = segments_b[j_a + 1:] if curve_b == curve_a else segments_b
                for s2 in others:
                    pairs_tested += 1
                    if self_intersect and segments_connected(s1, s2):
                        continue
                    if not intersect(s1.start, s1.end, s2.start, s2.end):
                        continue
                    point = line_intersection(s1.start, s1.end, s2.start, s2.end)
                    if point is not None:
                        results.append((curve_a, curve_b, point))

    return results, pairs_tested


def quadrant_intersections(quadrant: Quadrant, self_intersect: bool) -> List[RawIntersection]:
    """
    Find the intersections between the segments held by one quadrant.

    Args:
        quadrant: A quadrant small enough to be solved directly
        self_intersect: Whether crossings within one curve count

    Returns:
        (curve_a, curve_b, point) triples; duplicates across quadrants are
        left to the caller
    """
    results, _ = pairwise_intersections(quadrant.curve_segments, self_intersect)
    return results


class NaiveSolver(IntersectionSolver):
    """
    All-pairs intersection solver without spatial subdivision.

    Quadratic in the total number of segments. Finds every proper crossing,
    including those the diagonal heuristic of the subdivision solver can miss
    near quadrant corners.

    Attributes:
        pairs_tested (int): Segment pairs examined in the last run
    """

    def _initialize_algorithm(self) -> None:
        """Initialize brute-force counters."""
        self.pairs_tested = 0

    def _find_intersections(self, arena: SegmentArena, self_intersect: bool) -> List[RawIntersection]:
        curve_segments = {curve.id: curve.segments for curve in arena.curves if curve.segments}
        results, self.pairs_tested = pairwise_intersections(curve_segments, self_intersect)
        return results

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get brute-force metrics.

        Returns:
            Dictionary with curve and segment counts, pairs_tested,
            intersections_found and solve_time
        """
        metrics = self._base_metrics()
        metrics['pairs_tested'] = self.pairs_tested
        return metrics
