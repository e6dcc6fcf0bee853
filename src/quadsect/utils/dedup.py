"""
Deduplication of intersection results.

Segments straddling a quadrant boundary are recorded in several quadrants,
so the same crossing is usually found more than once. Results are reduced
to a canonical string identifier and only the first occurrence is kept.
"""

from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

T = TypeVar('T')

DEFAULT_POINT_DECIMALS = 4


def point_identifier(point, decimals: int = DEFAULT_POINT_DECIMALS) -> str:
    """
    Canonical identifier of a point, rounded to a fixed number of decimals.

    Example:
        >>> point_identifier((5.000001, 4.99999))
        '5.0000,5.0000'
    """
    x, y = point
    return f"{x:.{decimals}f},{y:.{decimals}f}"


def result_identifier(result, curve_ids: Dict[int, str], decimals: int = DEFAULT_POINT_DECIMALS) -> str:
    """
    Canonical identifier of a (curve_a, curve_b, point) result.

    The curve identifiers are sorted so that the pair does not depend on the
    order in which it was discovered.

    Args:
        result: (curve_a, curve_b, point) triple
        curve_ids: Mapping from the curves in the result to their identifiers
        decimals: Number of decimals kept for the point

    Example:
        >>> result_identifier((1, 0, (5, 5)), {0: 'c0', 1: 'c1'})
        '5.0000,5.0000,c0,c1'
    """
    curve_a, curve_b, point = result
    pair = sorted([curve_ids[curve_a], curve_ids[curve_b]])
    return ",".join([point_identifier(point, decimals)] + pair)


def distinct(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for each key, preserving order."""
    seen = set()
    result = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        result.append(item)
    return result
