"""Node outline shapes, derived purely from a node's center, box and type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import NodeType
from .paths import format_number as _n

if TYPE_CHECKING:
    from .models import PositionedNode

DEFAULT_CORNER_RADIUS = 12.0


def stadium_path(node: PositionedNode) -> str:
    """Pill shape: a rectangle with semicircular end caps of radius h/2."""
    r = node.height / 2
    left, right = node.left, node.right
    top, bottom = node.top, node.bottom
    return (
        f"M {_n(left + r)} {_n(top)} "
        f"L {_n(right - r)} {_n(top)} "
        f"A {_n(r)} {_n(r)} 0 0 1 {_n(right - r)} {_n(bottom)} "
        f"L {_n(left + r)} {_n(bottom)} "
        f"A {_n(r)} {_n(r)} 0 0 1 {_n(left + r)} {_n(top)} Z"
    )


def diamond_path(node: PositionedNode) -> str:
    """Diamond through the midpoints of the four box edges."""
    return (
        f"M {_n(node.x)} {_n(node.top)} "
        f"L {_n(node.right)} {_n(node.y)} "
        f"L {_n(node.x)} {_n(node.bottom)} "
        f"L {_n(node.left)} {_n(node.y)} Z"
    )


def rounded_rect_path(node: PositionedNode, radius: float = DEFAULT_CORNER_RADIUS) -> str:
    """Rectangle with quadratic corners, radius clamped to half the box."""
    r = max(0.0, min(radius, node.width / 2, node.height / 2))
    left, right = node.left, node.right
    top, bottom = node.top, node.bottom
    return (
        f"M {_n(left + r)} {_n(top)} "
        f"L {_n(right - r)} {_n(top)} "
        f"Q {_n(right)} {_n(top)} {_n(right)} {_n(top + r)} "
        f"L {_n(right)} {_n(bottom - r)} "
        f"Q {_n(right)} {_n(bottom)} {_n(right - r)} {_n(bottom)} "
        f"L {_n(left + r)} {_n(bottom)} "
        f"Q {_n(left)} {_n(bottom)} {_n(left)} {_n(bottom - r)} "
        f"L {_n(left)} {_n(top + r)} "
        f"Q {_n(left)} {_n(top)} {_n(left + r)} {_n(top)} Z"
    )


def node_outline(node: PositionedNode, corner_radius: float | None = None) -> str:
    """Return the closed outline path for a positioned node.

    start/end nodes are stadiums, decisions are diamonds; databases (a
    simplified cylinder), processes and every other type are rounded
    rectangles using ``corner_radius`` or the fallback radius.
    """
    radius = DEFAULT_CORNER_RADIUS if corner_radius is None else corner_radius

    if node.type in (NodeType.START, NodeType.END):
        return stadium_path(node)
    if node.type == NodeType.DECISION:
        return diamond_path(node)
    return rounded_rect_path(node, radius)
