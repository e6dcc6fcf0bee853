"""
Quadrant representation for spatial subdivision.

A quadrant is an axis-aligned region together with the segments of each
curve that may take part in an intersection inside it. Quadrants are built
for one solver run and thrown away afterwards.
"""

from typing import Dict, List, Optional, Tuple

from .curve import Segment, SegmentArena
from ..utils.geometry import (
    Rect, divide_rect, merge_rects, rect_size,
    rectangle_crosses, segment_end_in_rect
)


class Quadrant:
    """
    A rectangular region plus the segments relevant to it.

    Attributes:
        bounds (Rect): ((x_min, y_min), (x_max, y_max))
        curve_segments (Dict[int, List[Segment]]): Segments per curve id,
            in insertion order
        density (int): Number of segment endpoints found inside the bounds
        depth (int): Subdivision level, 0 for the root quadrant
    """

    def __init__(self, bounds: Rect, curve_segments: Dict[int, List[Segment]] = None,
                 density: int = 0, depth: int = 0):
        self.bounds = bounds
        self.curve_segments = curve_segments if curve_segments is not None else {}
        self.density = density
        self.depth = depth

    def add_segment(self, segment: Segment) -> None:
        """Record a segment under its curve."""
        self.curve_segments.setdefault(segment.curve_id, []).append(segment)

    @property
    def num_curves(self) -> int:
        return len(self.curve_segments)

    @property
    def num_segments(self) -> int:
        return sum(len(segments) for segments in self.curve_segments.values())

    @property
    def size(self) -> Tuple[float, float]:
        return rect_size(self.bounds)

    def __repr__(self) -> str:
        return (f"Quadrant(bounds={self.bounds}, curves={self.num_curves}, "
                f"segments={self.num_segments}, density={self.density}, depth={self.depth})")


def divide_quadrant(quadrant: Quadrant) -> List[Quadrant]:
    """
    Split a quadrant into four children at the midpoint of its bounds.

    Every segment of the parent is offered to every child. A segment with an
    endpoint inside a child is recorded there and raises the child's density;
    a segment crossing one of the child's diagonals is recorded without
    changing the density. A segment straddling a boundary can therefore be
    recorded in several children.

    The parent is left untouched.

    Args:
        quadrant: Quadrant to divide

    Returns:
        Four new quadrants at depth + 1, ordered as in divide_rect
    """
    children = [Quadrant(rect, depth=quadrant.depth + 1) for rect in divide_rect(quadrant.bounds)]

    for segments in quadrant.curve_segments.values():
        for segment in segments:
            for child in children:
                if segment_end_in_rect(segment.start, segment.end, child.bounds):
                    child.density += 1
                elif not rectangle_crosses(segment.start, segment.end, child.bounds):
                    continue
                child.add_segment(segment)

    return children


def initial_quadrant(arena: SegmentArena) -> Optional[Quadrant]:
    """
    Build the root quadrant covering every curve of the arena.

    Only curves with at least one segment are taken into account. The root
    density starts from the total number of segments.

    Returns:
        The root quadrant, or None if no curve has a segment
    """
    curves = [curve for curve in arena.curves if curve.segments]
    if not curves:
        return None

    bounds = merge_rects(curve.bounds() for curve in curves)
    curve_segments = {curve.id: list(curve.segments) for curve in curves}
    density = sum(len(curve.segments) for curve in curves)

    return Quadrant(bounds, curve_segments, density=density, depth=0)
