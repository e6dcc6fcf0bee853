"""
Visualization utilities for curve intersection solving.

This module provides common matplotlib drawing functions for curves,
intersection markers and the quadrant subdivision trace.
"""

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from typing import List, Sequence, Tuple

# Quadrant trace colors: solved with hits, solved empty, divided with
# surviving children, divided with every child pruned
QUADRANT_COLORS = {
    ('solved', True): 'green',
    ('solved', False): 'red',
    ('divided', True): 'gold',
    ('divided', False): 'black',
}


def draw_curves(ax, curves: Sequence, linewidth: float = 1.5):
    """
    Draw curves as polylines, one color per curve.

    Args:
        ax: Matplotlib axis to draw on
        curves: Curve objects (anything with .points and .name)
        linewidth: Line width of the curves

    Example:
        >>> fig, ax = plt.subplots()
        >>> draw_curves(ax, solver.arena.curves)
    """
    cmap = plt.get_cmap('tab10')
    for idx, curve in enumerate(curves):
        if len(curve.points) == 0:
            continue
        ax.plot(curve.points[:, 0], curve.points[:, 1], color=cmap(idx % 10),
                linewidth=linewidth, label=curve.name, zorder=2)

    ax.set_xlabel("X Position")
    ax.set_ylabel("Y Position")
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)


def draw_intersections(ax, points: List[Tuple[float, float]], color: str = 'black', size: int = 30):
    """
    Mark intersection points.

    Args:
        ax: Matplotlib axis to draw on
        points: Intersection points [(x1, y1), ...]
        color: Marker color
        size: Marker size
    """
    if not points:
        return
    xs, ys = zip(*points)
    ax.scatter(xs, ys, color=color, s=size, marker='o', label="Intersections",
               zorder=10, edgecolors='white', linewidths=1.0)


def draw_quadrants(ax, trace: Sequence, linewidth: float = 0.8):
    """
    Draw the outlines of inspected quadrants.

    Divided quadrants are drawn faint and below the solved ones, deeper
    levels on top of shallower ones.

    Args:
        ax: Matplotlib axis to draw on
        trace: QuadrantRecord entries from QuadtreeSolver
        linewidth: Outline width
    """
    for record in trace:
        (x_min, y_min), (x_max, y_max) = record.bounds
        color = QUADRANT_COLORS[(record.status, record.found > 0)]
        alpha = 1.0 if record.status == 'solved' else 0.3
        rectangle = patches.Rectangle(
            (x_min, y_min),
            x_max - x_min, y_max - y_min,
            fill=False,
            edgecolor=color,
            linewidth=linewidth,
            alpha=alpha,
            zorder=1 + 0.01 * record.depth
        )
        ax.add_patch(rectangle)


def setup_plot_limits(ax, x_min: float, x_max: float, y_min: float, y_max: float, margin: float = 1.0):
    """
    Set plot axis limits with optional margin.

    Args:
        ax: Matplotlib axis
        x_min: Minimum x value
        x_max: Maximum x value
        y_min: Minimum y value
        y_max: Maximum y value
        margin: Additional margin around boundaries (default: 1.0)
    """
    ax.set_xlim(x_min - margin, x_max + margin)
    ax.set_ylim(y_min - margin, y_max + margin)
