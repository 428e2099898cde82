"""Data models for traceflow diagrams."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# A waypoint or center coordinate
Point = tuple[float, float]


class Direction(Enum):
    """Primary flow direction of a diagram."""

    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.TB, Direction.BT)

    @property
    def is_reversed(self) -> bool:
        """True when the flow runs against the axis (upwards or leftwards)."""
        return self in (Direction.BT, Direction.RL)


class NodeType(Enum):
    """Node types determine the visual shape."""

    START = "start"
    END = "end"
    PROCESS = "process"
    DECISION = "decision"
    DATABASE = "database"
    EXTERNAL = "external"
    MANUAL = "manual"
    DELAY = "delay"


class Emphasis(Enum):
    """Visual prominence of a node."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class Status(Enum):
    """Status color treatment of a node."""

    DEFAULT = "default"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class EdgeStyle(Enum):
    """Edge line styles."""

    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


@dataclass(frozen=True)
class Node:
    """A node in the diagram."""

    id: str
    label: str
    type: NodeType = NodeType.PROCESS
    description: str | None = None
    emphasis: Emphasis = Emphasis.NORMAL
    status: Status = Status.DEFAULT


@dataclass(frozen=True)
class Edge:
    """A directed edge between two node ids."""

    source: str
    target: str
    label: str | None = None
    description: str | None = None
    style: EdgeStyle = EdgeStyle.SOLID
    animate: bool = False


@dataclass(frozen=True)
class Graph:
    """A validated diagram document: nodes, edges and flow direction.

    The graph is assumed to be well formed (unique ids, edges referencing
    existing nodes, sizes within limits); nothing here checks that.
    """

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    direction: Direction = Direction.TB
    title: str | None = None
    theme: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Graph:
        """Build a graph from the document's mapping form.

        Nodes are ``{id, label, type?, description?, emphasis?, status?}``,
        edges ``{from, to, label?, description?, style?, animate?}``.
        Unknown enum values raise ``ValueError``.
        """
        nodes = [
            Node(
                id=str(item["id"]),
                label=str(item.get("label", "")),
                type=NodeType(item.get("type") or "process"),
                description=item.get("description"),
                emphasis=Emphasis(item.get("emphasis") or "normal"),
                status=Status(item.get("status") or "default"),
            )
            for item in data.get("nodes", ())
        ]
        edges = [
            Edge(
                source=str(item["from"]),
                target=str(item["to"]),
                label=item.get("label"),
                description=item.get("description"),
                style=EdgeStyle(item.get("style") or "solid"),
                animate=bool(item.get("animate", False)),
            )
            for item in data.get("edges", ())
        ]
        return cls(
            nodes=tuple(nodes),
            edges=tuple(edges),
            direction=Direction(data.get("direction") or "TB"),
            title=data.get("title"),
            theme=data.get("theme"),
        )


@dataclass(frozen=True)
class PositionedNode:
    """A node with its center (x, y) and box size assigned by layout."""

    node: Node
    x: float
    y: float
    width: float
    height: float

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def type(self) -> NodeType:
        return self.node.type

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True)
class PositionedEdge:
    """An edge with its routed waypoints (first = start, last = end)."""

    edge: Edge
    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    @property
    def source(self) -> str:
        return self.edge.source

    @property
    def target(self) -> str:
        return self.edge.target


@dataclass(frozen=True)
class LayoutResult:
    """Positioned nodes and edges plus the overall canvas size.

    ``width`` and ``height`` enclose every node box and waypoint plus
    padding once the content is translated by ``(offset_x, offset_y)``.
    """

    nodes: tuple[PositionedNode, ...]
    edges: tuple[PositionedEdge, ...]
    width: float
    height: float
    offset_x: float = 0
    offset_y: float = 0
    direction: Direction = Direction.TB
    _lookup: dict[str, PositionedNode] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "_lookup", {n.id: n for n in self.nodes})

    def node(self, node_id: str) -> PositionedNode | None:
        """Look up a positioned node by id."""
        return self._lookup.get(node_id)


def bounding_box(
    nodes: Sequence[PositionedNode],
    edges: Sequence[PositionedEdge] = (),
) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) over node boxes and waypoints."""
    xs: list[float] = []
    ys: list[float] = []
    for n in nodes:
        xs.extend((n.left, n.right))
        ys.extend((n.top, n.bottom))
    for e in edges:
        for px, py in e.points:
            xs.append(px)
            ys.append(py)
    if not xs:
        return (0.0, 0.0, 0.0, 0.0)
    return (min(xs), min(ys), max(xs), max(ys))
