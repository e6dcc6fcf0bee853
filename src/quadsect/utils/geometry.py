"""
Geometric utility functions for curve intersection solving.

This module provides the fundamental predicates shared by the quadrant
subdivision and the brute-force solvers: orientation testing, segment
crossing, line intersection and axis-aligned rectangle helpers.

Rectangles are stored as ``((x_min, y_min), (x_max, y_max))``.
"""

from typing import Iterable, List, Optional, Tuple
import numpy as np

Point = Tuple[float, float]
Rect = Tuple[Point, Point]


def ccw(A: Point, B: Point, C: Point) -> bool:
    """
    Test if three points are in counter-clockwise order.

    This function is a building block for line segment intersection testing.
    It determines the orientation of an ordered triplet of points.

    Args:
        A: First point (x, y)
        B: Second point (x, y)
        C: Third point (x, y)

    Returns:
        True if points A, B, C are in counter-clockwise order
        False otherwise (clockwise or collinear)

    Mathematical Background:
        Uses the cross product of vectors AB and AC:
        - Positive cross product → counter-clockwise
        - Negative cross product → clockwise
        - Zero cross product → collinear

    Example:
        >>> ccw((0, 0), (1, 1), (0, 2))
        True  # Counter-clockwise
        >>> ccw((0, 0), (1, 1), (2, 0))
        False  # Clockwise
    """
    return (C[1] - A[1]) * (B[0] - A[0]) > (B[1] - A[1]) * (C[0] - A[0])


def intersect(A: Point, B: Point, C: Point, D: Point) -> bool:
    """
    Test if line segment AB properly crosses line segment CD.

    Two segments cross if and only if:
    1. The endpoints of one segment are on opposite sides of the other segment
    2. The endpoints of the other segment are on opposite sides of the first

    Args:
        A: Start of first line segment (x, y)
        B: End of first line segment (x, y)
        C: Start of second line segment (x, y)
        D: End of second line segment (x, y)

    Returns:
        True if segments AB and CD cross
        False if segments do not cross

    Examples:
        >>> intersect((0, 0), (2, 2), (0, 2), (2, 0))
        True
        >>> intersect((0, 0), (1, 0), (0, 1), (1, 1))
        False

    Note:
        Collinear overlaps and touching endpoints are not specially handled,
        so exact boundary cases may go either way.
    """
    return ccw(A, C, D) != ccw(B, C, D) and ccw(A, B, C) != ccw(A, B, D)


def line_intersection(A: Point, B: Point, C: Point, D: Point) -> Optional[Point]:
    """
    Compute where the infinite lines through AB and CD meet.

    Vertical and horizontal lines take explicit branches so that no slope
    division by zero can happen. The result is not checked against the
    segment extents; callers are expected to have run ``intersect`` first.

    Args:
        A: First point of the first line
        B: Second point of the first line
        C: First point of the second line
        D: Second point of the second line

    Returns:
        The crossing point (x, y), or None when either segment has zero
        length or the lines are parallel.

    Example:
        >>> line_intersection((0, 0), (10, 10), (0, 10), (10, 0))
        (5.0, 5.0)
    """
    ax, ay = A
    bx, by = B
    cx, cy = C
    dx, dy = D

    delta_x1, delta_y1 = ax - bx, ay - by
    delta_x2, delta_y2 = cx - dx, cy - dy

    if (delta_x1 == 0 and (delta_y1 == 0 or delta_x2 == 0)) or \
            (delta_y2 == 0 and (delta_x2 == 0 or delta_y1 == 0)):
        return None

    if delta_x1 == 0:  # AB vertical
        return (float(ax), (ax - dx) * delta_y2 / delta_x2 + dy)
    if delta_y1 == 0:  # AB horizontal
        return ((ay - dy) * delta_x2 / delta_y2 + dx, float(ay))
    if delta_x2 == 0:  # CD vertical
        return (float(cx), (cx - bx) * delta_y1 / delta_x1 + by)
    if delta_y2 == 0:  # CD horizontal
        return ((cy - by) * delta_x1 / delta_y1 + bx, float(cy))

    yx1, yx2 = delta_y1 / delta_x1, delta_y2 / delta_x2
    xy1, xy2 = 1 / yx1, 1 / yx2
    if yx1 == yx2 or xy1 == xy2:
        return None

    x = (yx1 * bx - yx2 * dx - by + dy) / (yx1 - yx2)
    y = (xy1 * by - xy2 * dy - bx + dx) / (xy1 - xy2)
    return (x, y)


def segments_connected(s1, s2) -> bool:
    """
    Check whether two segments share an endpoint.

    Endpoints are compared by their point ids, not by coordinates, so two
    distinct vertices that happen to coincide are not considered shared.
    """
    return (s1.start_id == s2.start_id or s1.start_id == s2.end_id or
            s1.end_id == s2.start_id or s1.end_id == s2.end_id)


def point_in_rect(point: Point, rect: Rect) -> bool:
    """Inclusive point-in-rectangle test."""
    (x_min, y_min), (x_max, y_max) = rect
    x, y = point
    return x_min <= x <= x_max and y_min <= y <= y_max


def segment_end_in_rect(A: Point, B: Point, rect: Rect) -> bool:
    """True if either endpoint of segment AB lies inside the rectangle."""
    return point_in_rect(A, rect) or point_in_rect(B, rect)


def flipped_diagonal(rect: Rect) -> Rect:
    """
    Get the anti-diagonal of a rectangle.

    A rectangle read as a segment is its main diagonal, from the min corner
    to the max corner. The flipped diagonal runs from (x_min, y_max) to
    (x_max, y_min).
    """
    (x_min, y_min), (x_max, y_max) = rect
    return ((x_min, y_max), (x_max, y_min))


def rectangle_crosses(A: Point, B: Point, rect: Rect) -> bool:
    """
    Approximate whether segment AB passes through a rectangle.

    The rectangle is treated as its two diagonals and the segment counts as
    crossing if it properly crosses either of them. A segment that clips a
    corner without reaching a diagonal is not detected.

    Args:
        A: Segment start (x, y)
        B: Segment end (x, y)
        rect: Rectangle ((x_min, y_min), (x_max, y_max))

    Returns:
        True if AB crosses one of the rectangle's diagonals
    """
    lower, upper = rect
    if intersect(A, B, lower, upper):
        return True
    flipped_start, flipped_end = flipped_diagonal(rect)
    return intersect(A, B, flipped_start, flipped_end)


def divide_rect(rect: Rect) -> List[Rect]:
    """
    Split a rectangle at its midpoint into four equal children.

    Returns:
        Children in the order lower-left, lower-right, upper-left, upper-right.
        Their union is the parent and their interiors are disjoint.
    """
    (x_min, y_min), (x_max, y_max) = rect
    x_mid = (x_min + x_max) / 2
    y_mid = (y_min + y_max) / 2
    return [
        ((x_min, y_min), (x_mid, y_mid)),
        ((x_mid, y_min), (x_max, y_mid)),
        ((x_min, y_mid), (x_mid, y_max)),
        ((x_mid, y_mid), (x_max, y_max)),
    ]


def bounding_rect(points: np.ndarray) -> Rect:
    """
    Smallest axis-aligned rectangle holding every point.

    Args:
        points: Array of shape (n, 2) with n >= 1

    Returns:
        Rectangle ((x_min, y_min), (x_max, y_max))
    """
    x_min, y_min = np.min(points, axis=0)
    x_max, y_max = np.max(points, axis=0)
    return ((float(x_min), float(y_min)), (float(x_max), float(y_max)))


def merge_rects(rects: Iterable[Rect]) -> Rect:
    """
    Smallest rectangle holding all given rectangles.

    Raises:
        ValueError: If no rectangle is given
    """
    rects = list(rects)
    if not rects:
        raise ValueError("Cannot merge an empty list of rectangles")

    corners = np.array([corner for rect in rects for corner in rect], dtype=float)
    return bounding_rect(corners)


def rect_size(rect: Rect) -> Tuple[float, float]:
    """(width, height) of a rectangle."""
    (x_min, y_min), (x_max, y_max) = rect
    return (x_max - x_min, y_max - y_min)
