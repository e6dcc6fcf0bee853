"""
Curve and segment representation for intersection solving.

Curves and segments are identified by integer ids handed out by a
SegmentArena when the curves are added. Identity never depends on
coordinates: two curves with the same points are still two curves, and
two vertices that coincide are still two points.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import numpy as np

from ..utils.geometry import Point, Rect, bounding_rect


@dataclass(eq=False)
class Segment:
    """
    One straight edge between two consecutive points of a curve.

    Attributes:
        id (int): Arena-wide segment id
        curve_id (int): Id of the owning curve
        index (int): Position of the segment within its curve
        start (Point): First endpoint
        end (Point): Second endpoint
        start_id (int): Arena-wide id of the first endpoint
        end_id (int): Arena-wide id of the second endpoint
    """
    id: int
    curve_id: int
    index: int
    start: Point
    end: Point
    start_id: int
    end_id: int

    def __repr__(self) -> str:
        return (f"Segment(id={self.id}, curve={self.curve_id}, "
                f"{self.start} -> {self.end})")


@dataclass(eq=False)
class Curve:
    """
    An ordered polyline.

    Attributes:
        id (int): Arena-wide curve id
        points (np.ndarray): Points as an (n, 2) float array
        point_offset (int): Global id of the first point
        source (Any): The object the curve was built from
        name (str): Display name
        segments (List[Segment]): The n - 1 consecutive segments
    """
    id: int
    points: np.ndarray
    point_offset: int
    source: Any = None
    name: str = ""
    segments: List[Segment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def bounds(self) -> Optional[Rect]:
        """Bounding rectangle of the curve, None if it has no points."""
        if len(self.points) == 0:
            return None
        return bounding_rect(self.points)

    def __repr__(self) -> str:
        return (f"Curve(id={self.id}, name={self.name!r}, "
                f"points={len(self.points)}, segments={len(self.segments)})")


def as_point_array(points: Any) -> np.ndarray:
    """
    Convert a sequence of (x, y) pairs into an (n, 2) float array.

    Args:
        points: List/tuple of pairs, an (n, 2) array, or a Curve

    Returns:
        Float array of shape (n, 2); (0, 2) for an empty input

    Raises:
        ValueError: If the points are not numeric pairs or not finite
    """
    if isinstance(points, Curve):
        return points.points

    try:
        array = np.asarray(points, dtype=float)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Curve points must be numeric (x, y) pairs: {e}")

    if array.size == 0:
        return np.empty((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"Curve points must have shape (n, 2), got {array.shape}")
    if not np.all(np.isfinite(array)):
        raise ValueError("Curve points must be finite")

    return array


class SegmentArena:
    """
    Registry assigning ids to curves, points and segments.

    Adding the same object twice returns the curve built the first time,
    so curves are identified by reference the way callers hand them in.

    Example:
        >>> arena = SegmentArena()
        >>> curve = arena.add_curve([[0, 0], [10, 10], [0, 10]])
        >>> len(curve.segments)
        2
    """

    def __init__(self):
        self.curves: List[Curve] = []
        self.segments: List[Segment] = []
        self._by_source: Dict[int, Curve] = {}
        self._next_point_id = 0

    def add_curve(self, points: Any, name: Optional[str] = None) -> Curve:
        """
        Register a curve and build its segments.

        Args:
            points: Sequence of (x, y) pairs, an (n, 2) array or a Curve
            name: Optional display name (defaults to "c<id>")

        Returns:
            The registered Curve
        """
        source = points
        known = self._by_source.get(id(source))
        if known is not None:
            return known

        array = as_point_array(points)
        if name is None and isinstance(points, Curve):
            name = points.name

        curve_id = len(self.curves)
        curve = Curve(
            id=curve_id,
            points=array,
            point_offset=self._next_point_id,
            source=source,
            name=name or f"c{curve_id}",
        )
        self._next_point_id += len(array)

        coords = [(float(x), float(y)) for x, y in array]
        for i in range(len(coords) - 1):
            segment = Segment(
                id=len(self.segments),
                curve_id=curve_id,
                index=i,
                start=coords[i],
                end=coords[i + 1],
                start_id=curve.point_offset + i,
                end_id=curve.point_offset + i + 1,
            )
            curve.segments.append(segment)
            self.segments.append(segment)

        self.curves.append(curve)
        self._by_source[id(source)] = curve
        return curve

    def add_curves(self, curves: Sequence[Any]) -> List[Curve]:
        """Register several curves, returning them in input order."""
        return [self.add_curve(c) for c in curves]

    def curve(self, curve_id: int) -> Curve:
        """Look up a curve by id."""
        return self.curves[curve_id]

    def segment(self, segment_id: int) -> Segment:
        """Look up a segment by id."""
        return self.segments[segment_id]

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    def __repr__(self) -> str:
        return f"SegmentArena(curves={len(self.curves)}, segments={len(self.segments)})"

