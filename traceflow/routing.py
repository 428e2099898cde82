"""Orthogonal edge routing with collision avoidance.

Every route is built from axis-aligned segments only. Routes depend on the
diagram's primary flow direction:

- forward edges in vertical flows run straight or jog at the vertical
  midpoint, unless they are decision branches or their straight line would
  cut through another node, in which case they detour around the side of
  the whole diagram;
- backward edges (cycles) always detour around the right side of the
  diagram (below it in horizontal flows) so they never cross the main flow
  column;
- horizontal flows are the same under an axis swap, without the
  collision detour.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import Direction, EdgeStyle, NodeType, PositionedEdge

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import Edge, Point, PositionedNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutingConfig:
    """Fixed routing constants; they do not vary with the theme."""

    # Distance between the diagram's outermost node edge and detour lines
    margin: float = 40.0
    # Max horizontal offset for a straight vertical edge (TB/BT)
    vertical_tolerance: float = 60.0
    # Max vertical offset for a straight horizontal edge (LR/RL)
    horizontal_tolerance: float = 20.0
    # Padding around node boxes for collision tests
    collision_padding: float = 10.0


DEFAULT_ROUTING_CONFIG = RoutingConfig()


def blocks_vertical_segment(
    node: PositionedNode,
    x: float,
    y1: float,
    y2: float,
    padding: float = DEFAULT_ROUTING_CONFIG.collision_padding,
) -> bool:
    """Check whether a vertical line at ``x`` over [y1, y2] hits ``node``.

    The node's box is grown by ``padding`` on every side; the line is
    blocked when that box contains ``x`` horizontally and overlaps the
    segment's span vertically.
    """
    low, high = min(y1, y2), max(y1, y2)
    return (
        node.left - padding <= x <= node.right + padding
        and node.top - padding <= high
        and node.bottom + padding >= low
    )


def is_decision_branch(edge: Edge, source: PositionedNode) -> bool:
    """A dashed or dotted edge leaving a decision node."""
    return source.type == NodeType.DECISION and edge.style in (
        EdgeStyle.DASHED,
        EdgeStyle.DOTTED,
    )


class EdgeRouter:
    """Routes edges between positioned nodes.

    Usage:
        router = EdgeRouter(nodes, Direction.TB)
        positioned = router.route_all(graph.edges)
    """

    def __init__(
        self,
        nodes: Sequence[PositionedNode] | Mapping[str, PositionedNode],
        direction: Direction = Direction.TB,
        config: RoutingConfig | None = None,
    ):
        if isinstance(nodes, Mapping):
            nodes = list(nodes.values())
        self.nodes: list[PositionedNode] = list(nodes)
        self.lookup: dict[str, PositionedNode] = {n.id: n for n in self.nodes}
        self.direction = direction
        self.config = config or DEFAULT_ROUTING_CONFIG

        # Diagram extremes used for detour lines
        if self.nodes:
            self._min_x = min(n.left for n in self.nodes)
            self._max_x = max(n.right for n in self.nodes)
            self._min_y = min(n.top for n in self.nodes)
            self._max_y = max(n.bottom for n in self.nodes)
        else:
            self._min_x = self._max_x = self._min_y = self._max_y = 0.0

    def route_all(self, edges: Iterable[Edge]) -> list[PositionedEdge]:
        """Route every edge, skipping edges whose endpoints are unknown."""
        routed = []
        for edge in edges:
            source = self.lookup.get(edge.source)
            target = self.lookup.get(edge.target)
            if source is None or target is None:
                logger.debug(
                    "Skipping edge %s -> %s with unpositioned endpoint",
                    edge.source, edge.target,
                )
                continue
            routed.append(PositionedEdge(edge=edge, points=self.route(edge, source, target)))
        logger.debug("Routed %d edges (%s)", len(routed), self.direction.value)
        return routed

    def route(
        self,
        edge: Edge,
        source: PositionedNode | None = None,
        target: PositionedNode | None = None,
    ) -> list[Point]:
        """Compute the waypoints of ``edge``."""
        source = source or self.lookup[edge.source]
        target = target or self.lookup[edge.target]

        if source.id == target.id:
            return self._self_loop(source)
        if self.direction.is_vertical:
            return self._route_vertical(edge, source, target)
        return self._route_horizontal(source, target)

    # --- Vertical flow (TB / BT) --------------------------------------------

    def _route_vertical(
        self, edge: Edge, source: PositionedNode, target: PositionedNode
    ) -> list[Point]:
        # sign is +1 when the flow runs down, -1 when it runs up
        sign = -1 if self.direction.is_reversed else 1
        is_forward = (target.y - source.y) * sign > 0

        if not is_forward:
            return self._back_edge(source, target)

        exit_y = source.y + sign * source.height / 2
        entry_y = target.y - sign * target.height / 2

        if is_decision_branch(edge, source) or self._vertical_line_blocked(
            source.x, exit_y, entry_y, source, target
        ):
            return self._side_detour(source, target)

        if abs(target.x - source.x) < self.config.vertical_tolerance:
            mid_x = (source.x + target.x) / 2
            return [(mid_x, exit_y), (mid_x, entry_y)]

        mid_y = (exit_y + entry_y) / 2
        return [
            (source.x, exit_y),
            (source.x, mid_y),
            (target.x, mid_y),
            (target.x, entry_y),
        ]

    def _vertical_line_blocked(
        self,
        x: float,
        y1: float,
        y2: float,
        source: PositionedNode,
        target: PositionedNode,
    ) -> bool:
        for node in self.nodes:
            if node.id in (source.id, target.id):
                continue
            if blocks_vertical_segment(node, x, y1, y2, self.config.collision_padding):
                return True
        return False

    def _side_detour(self, source: PositionedNode, target: PositionedNode) -> list[Point]:
        # The side follows the target's position relative to the source, not
        # the position of whatever node blocks the straight line
        if target.x >= source.x:
            route_x = self._max_x + self.config.margin
            source_x, target_x = source.right, target.right
        else:
            route_x = self._min_x - self.config.margin
            source_x, target_x = source.left, target.left
        return [
            (source_x, source.y),
            (route_x, source.y),
            (route_x, target.y),
            (target_x, target.y),
        ]

    # --- Horizontal flow (LR / RL) ------------------------------------------

    def _route_horizontal(
        self, source: PositionedNode, target: PositionedNode
    ) -> list[Point]:
        sign = -1 if self.direction.is_reversed else 1
        is_forward = (target.x - source.x) * sign > 0

        if not is_forward:
            return self._back_edge(source, target)

        exit_x = source.x + sign * source.width / 2
        entry_x = target.x - sign * target.width / 2

        if abs(target.y - source.y) < self.config.horizontal_tolerance:
            mid_y = (source.y + target.y) / 2
            return [(exit_x, mid_y), (entry_x, mid_y)]

        # Out of the source horizontally, into the target's top or bottom
        entry_y = target.top if target.y > source.y else target.bottom
        return [
            (exit_x, source.y),
            (target.x, source.y),
            (target.x, entry_y),
        ]

    # --- Backward edges -----------------------------------------------------

    def _back_edge(self, source: PositionedNode, target: PositionedNode) -> list[Point]:
        # Always around the right (vertical) or bottom (horizontal) extreme,
        # whatever the relative position of the two nodes
        if self.direction.is_vertical:
            route_x = self._max_x + self.config.margin
            return [
                (source.right, source.y),
                (route_x, source.y),
                (route_x, target.y),
                (target.right, target.y),
            ]
        route_y = self._max_y + self.config.margin
        return [
            (source.x, source.bottom),
            (source.x, route_y),
            (target.x, route_y),
            (target.x, target.bottom),
        ]

    # --- Self loops ---------------------------------------------------------

    def _self_loop(self, node: PositionedNode) -> list[Point]:
        if self.direction.is_vertical:
            route_x = self._max_x + self.config.margin
            y1 = node.y - node.height / 4
            y2 = node.y + node.height / 4
            return [(node.right, y1), (route_x, y1), (route_x, y2), (node.right, y2)]
        route_y = self._max_y + self.config.margin
        x1 = node.x - node.width / 4
        x2 = node.x + node.width / 4
        return [(x1, node.bottom), (x1, route_y), (x2, route_y), (x2, node.bottom)]


def route_edges(
    edges: Iterable[Edge],
    nodes: Sequence[PositionedNode],
    direction: Direction = Direction.TB,
    config: RoutingConfig | None = None,
) -> list[PositionedEdge]:
    """Route ``edges`` between ``nodes`` in one call."""
    return EdgeRouter(nodes, direction, config).route_all(edges)
