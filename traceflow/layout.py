"""Layout: node dimensioning, layered positioning and the final bounding box."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import networkx as nx

from .models import (
    Direction,
    LayoutResult,
    NodeType,
    PositionedNode,
    bounding_box,
)
from .routing import EdgeRouter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import Graph, Node
    from .routing import RoutingConfig
    from .themes import ResolvedTheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Fallback sizes and spacing used when no theme is supplied."""

    node_width: float = 180
    node_height: float = 60
    decision_height: float = 80  # Diamonds need more room for their label
    node_spacing: float = 50  # Between nodes of the same rank
    rank_spacing: float = 80  # Between consecutive ranks
    margin: float = 40  # Canvas margin on every side
    ordering_sweeps: int = 4  # Barycenter passes when ordering ranks


DEFAULT_LAYOUT_CONFIG = LayoutConfig()


@dataclass(frozen=True)
class LayoutOptions:
    """Parameters handed to the positioning engine."""

    direction: Direction = Direction.TB
    node_spacing: float = DEFAULT_LAYOUT_CONFIG.node_spacing
    rank_spacing: float = DEFAULT_LAYOUT_CONFIG.rank_spacing
    margin_x: float = DEFAULT_LAYOUT_CONFIG.margin
    margin_y: float = DEFAULT_LAYOUT_CONFIG.margin


@dataclass(frozen=True)
class EngineNode:
    """A node as the positioning engine sees it: an id and a box size."""

    id: str
    width: float
    height: float


@dataclass(frozen=True)
class EnginePlacement:
    """Center and size the engine assigned to a node."""

    x: float
    y: float
    width: float
    height: float


class LayoutEngine(Protocol):
    """Assigns ranks, order and center coordinates to nodes."""

    def position(
        self,
        nodes: Sequence[EngineNode],
        edges: Sequence[tuple[str, str]],
        options: LayoutOptions,
    ) -> dict[str, EnginePlacement]:
        ...


def node_dimensions(
    node: Node,
    theme: ResolvedTheme | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> tuple[float, float]:
    """Calculate the (width, height) a node is laid out with.

    Width is the theme's minimum node width; decision nodes get a taller
    box than every other type.
    """
    width = theme.shapes.node_min_width if theme is not None else config.node_width
    height = config.decision_height if node.type == NodeType.DECISION else config.node_height
    return width, height


def spacing_options(
    direction: Direction,
    theme: ResolvedTheme | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> LayoutOptions:
    """Spacing parameters for the engine, from the theme when there is one."""
    if theme is None:
        return LayoutOptions(
            direction=direction,
            node_spacing=config.node_spacing,
            rank_spacing=config.rank_spacing,
            margin_x=config.margin,
            margin_y=config.margin,
        )
    return LayoutOptions(
        direction=direction,
        node_spacing=theme.layout.node_spacing_x,
        rank_spacing=theme.layout.node_spacing_y,
        margin_x=theme.layout.canvas_padding,
        margin_y=theme.layout.canvas_padding,
    )


class LayeredLayoutEngine:
    """Layered (Sugiyama-style) positioning on top of NetworkX.

    Cycles are broken by reversing depth-first back edges, ranks
    come from the longest path over a topological order, each rank is
    ordered by repeated barycenter sweeps and then placed along the flow
    axis, centered across it.
    """

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG):
        self.config = config

    def position(
        self,
        nodes: Sequence[EngineNode],
        edges: Sequence[tuple[str, str]],
        options: LayoutOptions,
    ) -> dict[str, EnginePlacement]:
        if not nodes:
            return {}

        graph = self._acyclic_graph(nodes, edges)
        ranks = self._assign_ranks(graph)
        layers = self._order_layers(graph, ranks, [n.id for n in nodes])
        sizes = {n.id: n for n in nodes}
        return self._place(layers, sizes, options)

    def _acyclic_graph(
        self,
        nodes: Sequence[EngineNode],
        edges: Sequence[tuple[str, str]],
    ) -> nx.DiGraph:
        """Build a DAG from the document graph, reversing DFS back edges."""
        graph = nx.DiGraph()
        graph.add_nodes_from(n.id for n in nodes)
        graph.add_edges_from(
            (u, v) for u, v in edges if u != v and u in graph and v in graph
        )

        # A non-tree edge into a node still on the DFS stack closes a cycle
        on_stack: set[str] = set()
        back_edges = []
        for u, v, kind in nx.dfs_labeled_edges(graph):
            if kind == "forward":
                on_stack.add(v)
            elif kind == "reverse":
                on_stack.discard(v)
            elif kind == "nontree" and v in on_stack:
                back_edges.append((u, v))

        for u, v in back_edges:
            graph.remove_edge(u, v)
            if not graph.has_edge(v, u):
                graph.add_edge(v, u)
        if back_edges:
            logger.debug("Reversed %d back edges to break cycles", len(back_edges))
        return graph

    def _assign_ranks(self, graph: nx.DiGraph) -> dict[str, int]:
        """Longest-path layering: every node one rank below its deepest parent."""
        ranks: dict[str, int] = {}
        for node_id in nx.topological_sort(graph):
            preds = [ranks[p] + 1 for p in graph.predecessors(node_id)]
            ranks[node_id] = max(preds, default=0)
        return ranks

    def _order_layers(
        self,
        graph: nx.DiGraph,
        ranks: dict[str, int],
        document_order: list[str],
    ) -> list[list[str]]:
        """Order nodes within ranks to reduce crossings (barycenter heuristic)."""
        layer_count = max(ranks.values()) + 1
        layers: list[list[str]] = [[] for _ in range(layer_count)]
        for node_id in document_order:
            layers[ranks[node_id]].append(node_id)

        def sweep(order: range, neighbors) -> None:
            for rank in order:
                position = {}
                for layer in layers:
                    for i, node_id in enumerate(layer):
                        position[node_id] = i

                def barycenter(node_id: str, current: int) -> float:
                    linked = [position[n] for n in neighbors(node_id)]
                    return sum(linked) / len(linked) if linked else current

                layers[rank] = sorted(
                    layers[rank],
                    key=lambda n: barycenter(n, position[n]),
                )

        for _ in range(self.config.ordering_sweeps):
            sweep(range(1, layer_count), graph.predecessors)
            sweep(range(layer_count - 2, -1, -1), graph.successors)

        return layers

    def _place(
        self,
        layers: list[list[str]],
        sizes: dict[str, EngineNode],
        options: LayoutOptions,
    ) -> dict[str, EnginePlacement]:
        """Convert ranks and order into center coordinates."""
        vertical = options.direction.is_vertical

        def along(n: EngineNode) -> float:
            return n.height if vertical else n.width

        def across(n: EngineNode) -> float:
            return n.width if vertical else n.height

        thickness = [max(along(sizes[i]) for i in layer) for layer in layers]
        breadth = [
            sum(across(sizes[i]) for i in layer) + options.node_spacing * (len(layer) - 1)
            for layer in layers
        ]
        max_breadth = max(breadth)
        total_depth = sum(thickness) + options.rank_spacing * (len(layers) - 1)

        margin_along = options.margin_y if vertical else options.margin_x
        margin_across = options.margin_x if vertical else options.margin_y

        placements: dict[str, EnginePlacement] = {}
        depth = 0.0
        for layer, layer_thickness, layer_breadth in zip(layers, thickness, breadth):
            center_along = depth + layer_thickness / 2
            if options.direction.is_reversed:
                center_along = total_depth - center_along
            cursor = margin_across + (max_breadth - layer_breadth) / 2
            for node_id in layer:
                n = sizes[node_id]
                center_across = cursor + across(n) / 2
                cursor += across(n) + options.node_spacing
                if vertical:
                    x, y = center_across, margin_along + center_along
                else:
                    x, y = margin_along + center_along, center_across
                placements[node_id] = EnginePlacement(x=x, y=y, width=n.width, height=n.height)
            depth += layer_thickness + options.rank_spacing

        return placements


def position_nodes(
    graph: Graph,
    theme: ResolvedTheme | None = None,
    engine: LayoutEngine | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[PositionedNode]:
    """Dimension every node and let the engine position it.

    Returns positioned nodes in document order.
    """
    engine = engine or LayeredLayoutEngine(config)

    engine_nodes = []
    for node in graph.nodes:
        width, height = node_dimensions(node, theme, config)
        engine_nodes.append(EngineNode(id=node.id, width=width, height=height))
    engine_edges = [(edge.source, edge.target) for edge in graph.edges]

    placements = engine.position(
        engine_nodes, engine_edges, spacing_options(graph.direction, theme, config)
    )

    return [
        PositionedNode(
            node=node,
            x=placements[node.id].x,
            y=placements[node.id].y,
            width=placements[node.id].width,
            height=placements[node.id].height,
        )
        for node in graph.nodes
    ]


def node_lookup(nodes: Sequence[PositionedNode]) -> dict[str, PositionedNode]:
    """Map node id to positioned node."""
    return {n.id: n for n in nodes}


def compute_layout(
    graph: Graph,
    theme: ResolvedTheme | None = None,
    engine: LayoutEngine | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    routing: RoutingConfig | None = None,
) -> LayoutResult:
    """Position nodes, route edges and size the canvas.

    The canvas encloses every node box and every waypoint plus the canvas
    padding on each side; ``offset_x``/``offset_y`` translate content into it.
    """
    nodes = position_nodes(graph, theme, engine, config)
    router = EdgeRouter(node_lookup(nodes), graph.direction, routing)
    edges = router.route_all(graph.edges)

    padding = theme.layout.canvas_padding if theme is not None else config.margin
    min_x, min_y, max_x, max_y = bounding_box(nodes, edges)
    width = max(0.0, max_x - min_x) + padding * 2
    height = max(0.0, max_y - min_y) + padding * 2

    logger.debug(
        "Laid out %d nodes and %d edges in %.0fx%.0f",
        len(nodes), len(edges), width, height,
    )

    return LayoutResult(
        nodes=tuple(nodes),
        edges=tuple(edges),
        width=width,
        height=height,
        offset_x=padding - min_x,
        offset_y=padding - min_y,
        direction=graph.direction,
    )
