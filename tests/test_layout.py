"""Tests for node dimensioning, layered positioning and canvas sizing."""

import pytest

from traceflow.layout import (
    EngineNode,
    EnginePlacement,
    LayeredLayoutEngine,
    LayoutConfig,
    LayoutOptions,
    compute_layout,
    node_dimensions,
    position_nodes,
    spacing_options,
)
from traceflow.models import Direction, Edge, Graph, Node, NodeType


def assert_enclosed(layout):
    """Every node box and waypoint lies inside the canvas after the offset."""
    for node in layout.nodes:
        assert node.left + layout.offset_x >= 0
        assert node.top + layout.offset_y >= 0
        assert node.right + layout.offset_x <= layout.width
        assert node.bottom + layout.offset_y <= layout.height
    for edge in layout.edges:
        for x, y in edge.points:
            assert 0 <= x + layout.offset_x <= layout.width
            assert 0 <= y + layout.offset_y <= layout.height


class TestNodeDimensions:
    def test_fallback_sizes(self):
        assert node_dimensions(Node("a", "A")) == (180, 60)
        assert node_dimensions(Node("d", "D?", type=NodeType.DECISION)) == (180, 80)

    def test_width_from_theme(self, default_theme, blueprint_theme):
        assert node_dimensions(Node("a", "A"), default_theme) == (120, 60)
        assert node_dimensions(Node("a", "A"), blueprint_theme) == (140, 60)

    def test_spacing_from_theme(self, blueprint_theme):
        options = spacing_options(Direction.LR, blueprint_theme)
        assert options == LayoutOptions(
            direction=Direction.LR,
            node_spacing=60,
            rank_spacing=70,
            margin_x=30,
            margin_y=30,
        )


class TestLayeredEngine:
    def test_chain_stacks_top_to_bottom(self, chain_graph, default_theme):
        nodes = position_nodes(chain_graph, default_theme)

        assert [n.id for n in nodes] == ["start", "work", "done"]
        assert [n.y for n in nodes] == [70, 210, 350]
        assert {n.x for n in nodes} == {100}

    def test_bottom_to_top_reverses_ranks(self, chain_graph, default_theme):
        graph = Graph(chain_graph.nodes, chain_graph.edges, Direction.BT)
        ys = [n.y for n in position_nodes(graph, default_theme)]
        assert ys[0] > ys[1] > ys[2]

    def test_left_to_right(self, chain_graph, default_theme):
        graph = Graph(chain_graph.nodes, chain_graph.edges, Direction.LR)
        nodes = position_nodes(graph, default_theme)
        xs = [n.x for n in nodes]
        assert xs[0] < xs[1] < xs[2]
        assert len({n.y for n in nodes}) == 1

    def test_siblings_share_a_rank(self, default_theme):
        graph = Graph.from_dict({
            "nodes": [{"id": "root", "label": "Root"}, {"id": "l", "label": "L"}, {"id": "r", "label": "R"}],
            "edges": [{"from": "root", "to": "l"}, {"from": "root", "to": "r"}],
        })
        root, left, right = position_nodes(graph, default_theme)
        assert left.y == right.y > root.y
        # Same-rank neighbours are separated by width plus spacing
        assert abs(right.x - left.x) == pytest.approx(120 + 50)

    def test_cycles_are_broken(self, default_theme):
        graph = Graph.from_dict({
            "nodes": [{"id": i, "label": i} for i in "abc"],
            "edges": [{"from": "a", "to": "b"}, {"from": "b", "to": "c"}, {"from": "c", "to": "a"}],
        })
        a, b, c = position_nodes(graph, default_theme)
        assert a.y < b.y < c.y

    def test_self_loops_do_not_affect_ranks(self):
        placements = LayeredLayoutEngine().position(
            [EngineNode("a", 100, 60), EngineNode("b", 100, 60)],
            [("a", "a"), ("a", "b")],
            LayoutOptions(),
        )
        assert placements["a"].y < placements["b"].y

    def test_no_nodes(self):
        assert LayeredLayoutEngine().position([], [], LayoutOptions()) == {}


class TestComputeLayout:
    def test_canvas_encloses_everything(self, decision_graph, default_theme):
        layout = compute_layout(decision_graph, default_theme)

        assert layout.width > 0
        assert layout.height > 0
        assert len(layout.edges) == 4
        assert_enclosed(layout)

    def test_padding_on_every_side(self, chain_graph, default_theme):
        layout = compute_layout(chain_graph, default_theme)
        lefts = [n.left + layout.offset_x for n in layout.nodes]
        tops = [n.top + layout.offset_y for n in layout.nodes]
        assert min(lefts) == pytest.approx(40)
        assert min(tops) == pytest.approx(40)
        assert layout.width == pytest.approx(120 + 80)

    def test_detour_past_the_left_edge_grows_canvas(self, default_theme):
        graph = Graph.from_dict({
            "nodes": [
                {"id": "d", "label": "D?", "type": "decision"},
                {"id": "l", "label": "L"},
                {"id": "r", "label": "R"},
            ],
            "edges": [
                {"from": "d", "to": "l", "style": "dashed"},
                {"from": "d", "to": "r", "style": "dashed"},
            ],
        })
        layout = compute_layout(graph, default_theme)

        leftmost = min(x for e in layout.edges for x, _ in e.points)
        assert leftmost + layout.offset_x == pytest.approx(40)
        # The detour runs 40 left of the leftmost node
        assert layout.node("l").left + layout.offset_x == pytest.approx(80)
        assert_enclosed(layout)

    def test_decision_node_is_taller(self, decision_graph, default_theme):
        layout = compute_layout(decision_graph, default_theme)
        assert layout.node("check").height == 80
        assert layout.node("fix").height == 60

    def test_loop_back_detours(self, decision_graph, default_theme):
        layout = compute_layout(decision_graph, default_theme)
        loop = next(e for e in layout.edges if e.source == "fix" and e.target == "check")
        assert len(loop.points) == 4

    def test_loop_back_runs_right_of_every_node(self, decision_graph, default_theme):
        layout = compute_layout(decision_graph, default_theme)
        loop = next(e for e in layout.edges if e.source == "fix" and e.target == "check")
        rightmost = max(n.right for n in layout.nodes)
        assert loop.points[1][0] == pytest.approx(rightmost + 40)
        assert loop.points[2][0] == pytest.approx(rightmost + 40)

    def test_empty_graph(self):
        layout = compute_layout(Graph())
        assert layout.nodes == ()
        assert layout.width == layout.height == 80

    def test_without_theme_uses_config(self, chain_graph):
        layout = compute_layout(chain_graph, config=LayoutConfig(margin=10))
        assert layout.node("work").width == 180
        assert layout.width == pytest.approx(180 + 20)

    def test_injected_engine(self, chain_graph):
        class Diagonal:
            def position(self, nodes, edges, options):
                return {
                    n.id: EnginePlacement(x=i * 300, y=i * 200, width=n.width, height=n.height)
                    for i, n in enumerate(nodes)
                }

        layout = compute_layout(chain_graph, engine=Diagonal())
        assert [(n.x, n.y) for n in layout.nodes] == [(0, 0), (300, 200), (600, 400)]
        assert_enclosed(layout)

    def test_lookup_by_id(self, chain_graph):
        layout = compute_layout(chain_graph)
        assert layout.node("done").type == NodeType.END
        assert layout.node("missing") is None


def test_edges_keep_document_data(chain_graph):
    layout = compute_layout(chain_graph)
    assert [e.edge for e in layout.edges] == [Edge("start", "work"), Edge("work", "done")]
