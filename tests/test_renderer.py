"""Tests for SVG rendering and the end-to-end pipeline."""

import pytest

from traceflow.layout import compute_layout
from traceflow.models import Edge, EdgeStyle, Emphasis, Graph, LayoutResult, NodeType, PositionedEdge, Status
from traceflow.renderer import (
    DiagramRenderer,
    parse_shadow,
    render_layout,
    render_to_svg,
    truncate_text,
)


class TestParseShadow:
    def test_rgba_shadow(self):
        assert parse_shadow("0 2px 8px rgba(0, 0, 0, 0.08)") == {
            "dx": 0,
            "dy": 2,
            "std_deviation": 4,
            "color": "rgb(0, 0, 0)",
            "opacity": pytest.approx(0.08),
        }

    def test_plain_color(self):
        shadow = parse_shadow("1px 1px #333")
        assert shadow["color"] == "#333"
        assert shadow["opacity"] == 1
        assert shadow["std_deviation"] == 0

    @pytest.mark.parametrize("value", ["none", "", "garbage"])
    def test_no_shadow(self, value):
        assert parse_shadow(value) is None


def test_truncate_text():
    assert truncate_text("Manual correction", 7) == "Manual…"
    assert truncate_text("short", 10) == "short"
    assert truncate_text("anything", 0) == ""


class TestNodeMarkup:
    def test_escapes_label_and_attributes(self, place, default_theme):
        node = place("a&b", 100, 100, label="<script>alert('x')</script>")
        markup = DiagramRenderer(default_theme).node_markup(node)

        assert "<script>" not in markup
        assert "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;" in markup
        assert 'data-id="a&amp;b"' in markup
        assert 'id="node-a_b"' in markup

    def test_data_attributes(self, place, default_theme):
        node = place("n", 0, 0, type=NodeType.DECISION, status=Status.WARNING, emphasis=Emphasis.LOW)
        markup = DiagramRenderer(default_theme).node_markup(node)

        assert 'data-type="decision"' in markup
        assert 'data-status="warning"' in markup
        assert 'data-emphasis="low"' in markup
        assert 'opacity="0.6"' in markup

    def test_end_node_filled_with_accent(self, place, default_theme):
        markup = DiagramRenderer(default_theme).node_markup(place("e", 0, 0, type=NodeType.END))
        assert f'fill="{default_theme.colors.accent}"' in markup
        assert 'fill="#FFFFFF"' in markup

    def test_status_colors_border(self, place, default_theme):
        node = place("n", 0, 0, status=Status.ERROR)
        markup = DiagramRenderer(default_theme).node_markup(node)
        assert f'stroke="{default_theme.colors.error}"' in markup

    def test_high_emphasis_uses_accent_border(self, place, default_theme):
        node = place("n", 0, 0, emphasis=Emphasis.HIGH, status=Status.ERROR)
        markup = DiagramRenderer(default_theme).node_markup(node)
        assert f'stroke="{default_theme.colors.accent}"' in markup
        assert 'stroke-width="2"' in markup

    def test_description_line(self, place, default_theme):
        node = place("n", 0, 0, description="Receipts & limits")
        markup = DiagramRenderer(default_theme).node_markup(node)
        assert "trace-node-description" in markup
        assert "Receipts &amp; limits" in markup

    def test_palette_cycles_by_index(self, place, default_theme):
        from dataclasses import replace

        shapes = replace(default_theme.shapes, node_colors=("#111111", "#222222"))
        renderer = DiagramRenderer(replace(default_theme, shapes=shapes))
        assert 'fill="#222222"' in renderer.node_markup(place("n", 0, 0), index=3)

    def test_font_family_quotes_escaped(self, place, blueprint_theme):
        markup = DiagramRenderer(blueprint_theme).node_markup(place("n", 0, 0))
        assert 'font-family="&quot;JetBrains Mono&quot;' in markup

    def test_shadow_filter_only_when_theme_has_shadow(self, place, default_theme, blueprint_theme):
        node = place("n", 0, 0)
        assert 'filter="url(#shadow)"' in DiagramRenderer(default_theme).node_markup(node)
        assert "filter=" not in DiagramRenderer(blueprint_theme).node_markup(node)


class TestEdgeMarkup:
    def _edge(self, **kwargs):
        return PositionedEdge(edge=Edge("a", "b", **kwargs), points=[(0, 0), (0, 100)])

    def test_path_and_marker(self, default_theme):
        markup = DiagramRenderer(default_theme).edge_markup(self._edge())
        assert 'id="edge-a-b"' in markup
        assert 'd="M 0 0 L 0 100"' in markup
        assert 'marker-end="url(#arrowhead)"' in markup
        assert "stroke-dasharray" not in markup

    @pytest.mark.parametrize("style, dash", [(EdgeStyle.DASHED, "8 4"), (EdgeStyle.DOTTED, "2 4")])
    def test_dash_patterns(self, default_theme, style, dash):
        markup = DiagramRenderer(default_theme).edge_markup(self._edge(style=style))
        assert f'stroke-dasharray="{dash}"' in markup

    def test_label_at_midpoint(self, default_theme):
        markup = DiagramRenderer(default_theme).edge_markup(self._edge(label="a < b"))
        assert 'x="0" y="50"' in markup
        assert ">a &lt; b</text>" in markup

    def test_description_tooltip(self, default_theme):
        markup = DiagramRenderer(default_theme).edge_markup(self._edge(description="on & off"))
        assert "<title>on &amp; off</title>" in markup

    def test_animation(self, default_theme):
        markup = DiagramRenderer(default_theme).edge_markup(self._edge(animate=True))
        assert 'attributeName="stroke-dashoffset"' in markup
        assert 'stroke-dasharray="8 4"' in markup

    def test_endpoint_ids_escaped(self, default_theme):
        edge = PositionedEdge(edge=Edge('x"y', "z"), points=[(0, 0), (0, 10)])
        markup = DiagramRenderer(default_theme).edge_markup(edge)
        assert 'data-from="x&quot;y"' in markup
        assert 'id="edge-x_y-z"' in markup


class TestDocument:
    def test_defs(self, decision_graph, default_theme):
        svg = render_layout(compute_layout(decision_graph, default_theme), default_theme)

        assert svg.startswith("<?xml") or svg.startswith("<svg")
        assert 'id="shadow"' in svg
        assert 'id="arrowhead"' in svg
        assert "feDropShadow" in svg

    def test_layer_order(self, decision_graph, default_theme):
        svg = render_layout(compute_layout(decision_graph, default_theme), default_theme)
        assert svg.index('class="trace-edges"') < svg.index('class="trace-nodes"')

    def test_dot_grid(self, chain_graph, default_theme):
        svg = render_layout(compute_layout(chain_graph, default_theme), default_theme)
        assert 'id="traceGrid"' in svg
        assert "<circle" in svg
        assert 'fill="url(#traceGrid)"' in svg

    def test_blueprint_grid(self, chain_graph, blueprint_theme):
        svg = render_layout(compute_layout(chain_graph, blueprint_theme), blueprint_theme)
        assert 'id="traceGrid"' in svg
        assert "<circle" not in svg

    def test_no_grid(self, chain_graph, corporate_theme):
        svg = render_layout(compute_layout(chain_graph, corporate_theme), corporate_theme)
        assert "traceGrid" not in svg

    def test_duplicate_edges_get_unique_ids(self, default_theme):
        graph = Graph.from_dict({
            "nodes": [{"id": "a", "label": "A"}, {"id": "b", "label": "B"}],
            "edges": [{"from": "a", "to": "b"}, {"from": "a", "to": "b", "style": "dotted"}],
        })
        svg = render_layout(compute_layout(graph, default_theme), default_theme)
        assert 'id="edge-a-b"' in svg
        assert 'id="edge-a-b-1"' in svg

    def test_empty_layout(self, default_theme):
        svg = render_layout(LayoutResult(nodes=(), edges=(), width=80, height=80), default_theme)
        assert 'class="trace-nodes"' in svg


class TestRenderToSvg:
    def test_uses_graph_theme(self, decision_graph):
        graph = Graph(
            decision_graph.nodes,
            decision_graph.edges,
            decision_graph.direction,
            theme={"name": "blueprint", "mode": "dark"},
        )
        svg = render_to_svg(graph)
        assert "#0F172A" in svg

    def test_explicit_theme_and_mode(self, chain_graph):
        svg = render_to_svg(chain_graph, "default", mode="dark")
        assert "#1E1E1E" in svg

    def test_resolved_theme_passes_through(self, chain_graph, corporate_theme):
        svg = render_to_svg(chain_graph, corporate_theme)
        assert "traceGrid" not in svg

    def test_title_escaped(self):
        graph = Graph.from_dict({"title": "A & B", "nodes": [{"id": "a", "label": "A"}]})
        assert "<title>A &amp; B</title>" in render_to_svg(graph)

    def test_saves_file(self, chain_graph, tmp_path):
        render_to_svg(chain_graph, filename=str(tmp_path / "chain"))
        saved = (tmp_path / "chain.svg").read_text()
        assert 'class="trace-nodes"' in saved

    def test_malicious_graph_stays_well_formed(self):
        import xml.etree.ElementTree as ET

        graph = Graph.from_dict({
            "title": "</svg><script>",
            "nodes": [
                {"id": "<a>", "label": "\"quoted\" & 'single'", "description": "<b>bold</b>"},
                {"id": "b\n", "label": "]]>", "type": "end"},
            ],
            "edges": [{"from": "<a>", "to": "b\n", "label": "<&>", "description": "x\ty"}],
        })
        root = ET.fromstring(render_to_svg(graph))
        assert root.tag.endswith("svg")
        assert not [el for el in root.iter() if el.tag.endswith("script")]
