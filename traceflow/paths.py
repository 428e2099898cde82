"""Path geometry for routed edges: rounded corners and label anchors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import Point

CORNER_RADIUS = 16.0


@dataclass(frozen=True)
class Corner:
    """A rounded bend: line to ``start``, quadratic through ``control`` to ``end``."""

    start: Point
    control: Point
    end: Point
    radius: float


def format_number(value: float) -> str:
    """Format a coordinate compactly (at most two decimals, no trailing zeros)."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_point(point: Point) -> str:
    return f"{format_number(point[0])} {format_number(point[1])}"


def rounded_corners(
    points: Sequence[Point],
    radius: float = CORNER_RADIUS,
) -> list[Corner | None]:
    """Compute the rounded corner for every interior waypoint.

    The radius at each bend is clamped to half the shorter adjacent segment.
    Bends next to a zero-length segment stay sharp and yield ``None``.

    Args:
        points: List of (x, y) waypoints
        radius: Nominal corner radius

    Returns:
        One entry per interior waypoint (``len(points) - 2`` entries)
    """
    corners: list[Corner | None] = []

    for i in range(1, len(points) - 1):
        prev = points[i - 1]
        curr = points[i]
        next_pt = points[i + 1]

        # Incoming and outgoing vectors
        v1x, v1y = curr[0] - prev[0], curr[1] - prev[1]
        v2x, v2y = next_pt[0] - curr[0], next_pt[1] - curr[1]

        len1 = math.hypot(v1x, v1y)
        len2 = math.hypot(v2x, v2y)

        if len1 == 0 or len2 == 0:
            corners.append(None)
            continue

        r = min(radius, min(len1, len2) / 2)

        corners.append(Corner(
            start=(curr[0] - v1x / len1 * r, curr[1] - v1y / len1 * r),
            control=(curr[0], curr[1]),
            end=(curr[0] + v2x / len2 * r, curr[1] + v2y / len2 * r),
            radius=r,
        ))

    return corners


def rounded_path(points: Sequence[Point], radius: float = CORNER_RADIUS) -> str:
    """Build SVG path data for ``points`` with rounded bends.

    Two points give a single straight segment; longer paths replace each
    bend with a line to the curve start and a quadratic curve whose control
    point is the original waypoint.
    """
    if len(points) < 2:
        return f"M {format_point(points[0])}" if points else ""

    commands = [f"M {format_point(points[0])}"]

    if len(points) > 2:
        for point, corner in zip(points[1:-1], rounded_corners(points, radius)):
            if corner is None:
                commands.append(f"L {format_point(point)}")
                continue
            commands.append(f"L {format_point(corner.start)}")
            commands.append(
                f"Q {format_point(corner.control)} {format_point(corner.end)}"
            )

    commands.append(f"L {format_point(points[-1])}")
    return " ".join(commands)


def label_anchor(points: Sequence[Point]) -> Point:
    """Pick the label position for a path.

    Two points: the segment midpoint. Longer paths: the midpoint of the
    segment straddling the middle index, not the arc-length midpoint, so the
    label sits on the visually central segment.
    """
    if not points:
        return (0.0, 0.0)
    if len(points) == 1:
        return points[0]

    mid = len(points) // 2
    p1 = points[mid - 1]
    p2 = points[mid]
    return ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)
