"""SVG renderer using drawsvg.

The document shell (defs, background, grid and group structure) is built
with drawsvg elements. Node and edge groups carry user-controlled text and
ids, so they are assembled as markup fragments in which every such value
goes through :mod:`traceflow.escape` exactly once.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import drawsvg as draw

from .escape import escape_xml, escape_xml_attr, sanitize_id
from .layout import compute_layout
from .models import Emphasis, NodeType, Status
from .paths import format_number as _n
from .paths import label_anchor, rounded_path
from .resolver import ThemeResolver, create_default_registry
from .shapes import node_outline
from .themes import ResolvedTheme

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .layout import LayoutEngine
    from .models import Graph, LayoutResult, PositionedEdge, PositionedNode
    from .themes import Mode, ThemeSpec

logger = logging.getLogger(__name__)

SHADOW_FILTER_ID = "shadow"
ARROWHEAD_ID = "arrowhead"
GRID_PATTERN_ID = "traceGrid"

DASH_PATTERNS = {
    "dashed": "8 4",
    "dotted": "2 4",
}

END_NODE_TEXT_COLOR = "#FFFFFF"
LOW_EMPHASIS_OPACITY = 0.6
CHAR_WIDTH_RATIO = 0.55  # Average glyph width relative to font size

_SHADOW_RE = re.compile(
    r"^\s*(?P<dx>-?[\d.]+)(?:px)?\s+(?P<dy>-?[\d.]+)(?:px)?"
    r"(?:\s+(?P<blur>[\d.]+)(?:px)?)?(?:\s+(?P<spread>-?[\d.]+)(?:px)?)?"
    r"\s+(?P<color>.+?)\s*$"
)
_RGBA_RE = re.compile(
    r"^rgba\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*\)$"
)


def parse_shadow(shadow: str) -> dict[str, Any] | None:
    """Translate a CSS-like box shadow into drop-shadow filter parameters.

    Returns None for ``none`` or anything that does not parse.
    """
    if not shadow or shadow.strip().lower() == "none":
        return None
    match = _SHADOW_RE.match(shadow)
    if not match:
        return None

    color = match.group("color")
    opacity = 1.0
    rgba = _RGBA_RE.match(color)
    if rgba:
        r, g, b, a = rgba.groups()
        color = f"rgb({r}, {g}, {b})"
        opacity = float(a)

    blur = float(match.group("blur") or 0)
    return {
        "dx": float(match.group("dx")),
        "dy": float(match.group("dy")),
        "std_deviation": blur / 2,
        "color": color,
        "opacity": opacity,
    }


def truncate_text(text: str, max_chars: int) -> str:
    """Truncate text to max characters with ellipsis."""
    if max_chars < 1:
        return ""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 1] + "…"


def _fits(width: float, font_size: float) -> int:
    """Number of characters that fit in ``width`` at ``font_size``."""
    return int(width / (font_size * CHAR_WIDTH_RATIO))


class DiagramRenderer:
    """Renders a laid-out diagram to SVG."""

    def __init__(self, theme: ResolvedTheme):
        self.theme = theme
        self._edge_ids: dict[str, int] = {}

    def render(self, layout: LayoutResult, title: str | None = None) -> draw.Drawing:
        """Render a layout result to a drawsvg Drawing."""
        self._edge_ids = {}
        theme = self.theme

        d = draw.Drawing(layout.width, layout.height)

        self._add_defs(d)

        d.append(
            draw.Rectangle(
                0, 0, layout.width, layout.height,
                fill=theme.colors.background,
            )
        )
        if theme.background.show_grid:
            d.append(self._grid_overlay(d, layout.width, layout.height))

        content = draw.Group(
            class_="trace-content",
            transform=f"translate({_n(layout.offset_x)}, {_n(layout.offset_y)})",
        )
        if title:
            content.append(draw.Raw(f"<title>{escape_xml(title)}</title>"))

        edges_group = draw.Group(class_="trace-edges")
        for edge in layout.edges:
            edges_group.append(draw.Raw(self.edge_markup(edge)))
        content.append(edges_group)

        nodes_group = draw.Group(class_="trace-nodes")
        for index, node in enumerate(layout.nodes):
            nodes_group.append(draw.Raw(self.node_markup(node, index)))
        content.append(nodes_group)

        d.append(content)

        logger.debug(
            "Rendered %d nodes and %d edges with theme '%s' (%s)",
            len(layout.nodes), len(layout.edges), theme.name, theme.mode,
        )
        return d

    # --- Defs ---------------------------------------------------------------

    def _add_defs(self, d: draw.Drawing) -> None:
        theme = self.theme

        shadow = parse_shadow(theme.shapes.node_shadow)
        shadow_filter = draw.Filter(
            id=SHADOW_FILTER_ID, x="-20%", y="-20%", width="140%", height="140%",
        )
        shadow_filter.append(
            draw.FilterItem(
                "feDropShadow",
                dx=_n(shadow["dx"]) if shadow else 0,
                dy=_n(shadow["dy"]) if shadow else 2,
                stdDeviation=_n(shadow["std_deviation"]) if shadow else 4,
                flood_color=shadow["color"] if shadow else "#000",
                flood_opacity=_n(shadow["opacity"]) if shadow else 0.08,
            )
        )
        d.append_def(shadow_filter)

        # Chevron arrowhead in a 10x10 box, sized in user units
        size = theme.connectors.arrow_size
        marker = draw.Marker(
            0, 0, 10, 10,
            scale=size / 10,
            orient="auto",
            id=ARROWHEAD_ID,
            refX=8,
            refY=5,
            markerUnits="userSpaceOnUse",
        )
        marker.append(
            draw.Lines(
                1, 1, 8, 5, 1, 9,
                close=False,
                fill="none",
                stroke=theme.colors.connector_stroke,
                stroke_width=1.5,
                stroke_linecap="round",
                stroke_linejoin="round",
            )
        )
        d.append_def(marker)

    def _grid_overlay(self, d: draw.Drawing, width: float, height: float) -> draw.Rectangle:
        """Add the grid pattern to defs and return a rect filled with it."""
        background = self.theme.background
        color = background.grid_color
        spacing = background.grid_spacing

        if background.grid_style == "lines":
            pattern = draw.Pattern(spacing, spacing, id=GRID_PATTERN_ID)
            pattern.append(
                draw.Path(
                    d=f"M {_n(spacing)} 0 L 0 0 0 {_n(spacing)}",
                    fill="none",
                    stroke=color,
                    stroke_width=0.5,
                )
            )
        elif background.grid_style == "blueprint":
            # Major cell of five minor cells
            major = spacing * 5
            pattern = draw.Pattern(major, major, id=GRID_PATTERN_ID)
            minor = " ".join(
                f"M {_n(spacing * i)} 0 L {_n(spacing * i)} {_n(major)} "
                f"M 0 {_n(spacing * i)} L {_n(major)} {_n(spacing * i)}"
                for i in range(1, 5)
            )
            pattern.append(
                draw.Path(d=minor, fill="none", stroke=color, stroke_width=0.5, opacity=0.6)
            )
            pattern.append(
                draw.Path(
                    d=f"M {_n(major)} 0 L 0 0 0 {_n(major)}",
                    fill="none",
                    stroke=color,
                    stroke_width=1,
                )
            )
        else:
            pattern = draw.Pattern(spacing, spacing, id=GRID_PATTERN_ID)
            pattern.append(draw.Circle(spacing / 2, spacing / 2, 1, fill=color))

        d.append_def(pattern)
        return draw.Rectangle(0, 0, width, height, fill=f"url(#{GRID_PATTERN_ID})")

    # --- Edges --------------------------------------------------------------

    def _edge_element_id(self, edge: PositionedEdge) -> str:
        base = f"edge-{sanitize_id(edge.source)}-{sanitize_id(edge.target)}"
        count = self._edge_ids.get(base, 0)
        self._edge_ids[base] = count + 1
        return base if count == 0 else f"{base}-{count}"

    def edge_markup(self, edge: PositionedEdge) -> str:
        """Markup for one edge group: path, optional tooltip and label."""
        theme = self.theme
        data = edge.edge
        stroke = escape_xml_attr(theme.colors.connector_stroke)

        dash = DASH_PATTERNS.get(data.style.value, "")
        if data.animate and not dash:
            dash = DASH_PATTERNS["dashed"]

        classes = "trace-edge trace-edge-animated" if data.animate else "trace-edge"
        parts = [
            f'<g class="{classes}" data-from="{escape_xml_attr(data.source)}" '
            f'data-to="{escape_xml_attr(data.target)}" data-style="{data.style.value}">'
        ]
        if data.description:
            parts.append(f"<title>{escape_xml(data.description)}</title>")

        path_attrs = (
            f'id="{self._edge_element_id(edge)}" d="{rounded_path(edge.points)}" '
            f'fill="none" stroke="{stroke}" '
            f'stroke-width="{_n(theme.connectors.stroke_width)}" '
            + (f'stroke-dasharray="{dash}" ' if dash else "")
            + f'marker-end="url(#{ARROWHEAD_ID})"'
        )
        if data.animate:
            parts.append(
                f"<path {path_attrs}>"
                '<animate attributeName="stroke-dashoffset" from="24" to="0" '
                'dur="1s" repeatCount="indefinite"/>'
                "</path>"
            )
        else:
            parts.append(f"<path {path_attrs}/>")

        if data.label:
            x, y = label_anchor(edge.points)
            font_size = theme.typography.font_size_description
            box_width = len(data.label) * font_size * CHAR_WIDTH_RATIO + 16
            box_height = font_size + 8
            parts.append(
                f'<rect x="{_n(x - box_width / 2)}" y="{_n(y - box_height / 2)}" '
                f'width="{_n(box_width)}" height="{_n(box_height)}" '
                f'fill="{escape_xml_attr(theme.colors.background)}" rx="4"/>'
            )
            parts.append(
                f'<text class="trace-edge-label" x="{_n(x)}" y="{_n(y)}" '
                'text-anchor="middle" dominant-baseline="middle" '
                f'fill="{escape_xml_attr(theme.colors.text_muted)}" '
                f'font-family="{escape_xml_attr(theme.typography.font_family)}" '
                f'font-size="{_n(font_size)}" font-weight="500">'
                f"{escape_xml(data.label)}</text>"
            )

        parts.append("</g>")
        return "".join(parts)

    # --- Nodes --------------------------------------------------------------

    def _node_colors(self, node: PositionedNode, index: int) -> tuple[str, str, str]:
        """Return (fill, stroke, text color) for a node."""
        colors = self.theme.colors
        data = node.node

        if data.type == NodeType.END:
            fill = colors.accent
            text = END_NODE_TEXT_COLOR
        else:
            palette = self.theme.shapes.node_colors
            fill = palette[index % len(palette)] if palette else colors.node_background
            text = colors.text

        status_colors = {
            Status.SUCCESS: colors.success,
            Status.WARNING: colors.warning,
            Status.ERROR: colors.error,
        }
        if data.emphasis == Emphasis.HIGH:
            stroke = colors.accent
        elif data.status in status_colors:
            stroke = status_colors[data.status]
        else:
            stroke = colors.node_border

        return fill, stroke, text

    def node_markup(self, node: PositionedNode, index: int = 0) -> str:
        """Markup for one node group: outline path, label and description."""
        theme = self.theme
        data = node.node
        fill, stroke, text_color = self._node_colors(node, index)

        border_width = theme.shapes.node_border_width
        if data.emphasis == Emphasis.HIGH:
            border_width += 1

        opacity = (
            f' opacity="{_n(LOW_EMPHASIS_OPACITY)}"' if data.emphasis == Emphasis.LOW else ""
        )
        shadow = (
            f' filter="url(#{SHADOW_FILTER_ID})"'
            if parse_shadow(theme.shapes.node_shadow) is not None
            else ""
        )

        parts = [
            f'<g class="trace-node" data-id="{escape_xml_attr(data.id)}" '
            f'data-type="{escape_xml_attr(data.type.value)}" '
            f'data-status="{data.status.value}" '
            f'data-emphasis="{data.emphasis.value}"{opacity}>',
            f'<path id="node-{sanitize_id(data.id)}" d="{node_outline(node, theme.shapes.node_corner_radius)}" '
            f'fill="{escape_xml_attr(fill)}" stroke="{escape_xml_attr(stroke)}" '
            f'stroke-width="{_n(border_width)}"{shadow}/>',
        ]

        typography = theme.typography
        inner_width = max(0.0, node.width - theme.shapes.node_padding * 2)
        font_family = escape_xml_attr(typography.font_family)

        label_y = node.y
        if data.description:
            label_y -= typography.font_size_description * 0.6

        parts.append(
            f'<text class="trace-node-label" x="{_n(node.x)}" y="{_n(label_y)}" dy="0.35em" '
            f'text-anchor="middle" fill="{escape_xml_attr(text_color)}" '
            f'font-family="{font_family}" font-size="{_n(typography.font_size_label)}" '
            f'font-weight="{typography.font_weight_label}">{escape_xml(data.label)}</text>'
        )

        if data.description:
            description = truncate_text(
                data.description, _fits(inner_width, typography.font_size_description)
            )
            description_color = (
                text_color if data.type == NodeType.END else theme.colors.text_muted
            )
            parts.append(
                f'<text class="trace-node-description" x="{_n(node.x)}" '
                f'y="{_n(node.y + typography.font_size_label * 0.7)}" dy="0.35em" '
                f'text-anchor="middle" fill="{escape_xml_attr(description_color)}" '
                f'font-family="{font_family}" '
                f'font-size="{_n(typography.font_size_description)}" '
                f'font-weight="{typography.font_weight_description}">'
                f"{escape_xml(description)}</text>"
            )

        parts.append("</g>")
        return "".join(parts)


def render_layout(layout: LayoutResult, theme: ResolvedTheme, title: str | None = None) -> str:
    """Render a layout result straight to an SVG string."""
    return DiagramRenderer(theme).render(layout, title=title).as_svg()


def render_to_svg(
    graph: Graph,
    theme: ResolvedTheme | ThemeSpec | str | Mapping[str, Any] | None = None,
    filename: str | None = None,
    *,
    resolver: ThemeResolver | None = None,
    mode: Mode | None = None,
    engine: LayoutEngine | None = None,
) -> str:
    """Run the whole pipeline: resolve the theme, lay out, route and render.

    Args:
        graph: The validated diagram
        theme: A resolved theme, or a ThemeSpec, name or mapping; defaults to the graph's own
        filename: Optional filename to save to (without extension)
        resolver: Theme resolver; one over the bundled themes by default
        mode: Explicit light/dark mode, overriding the requested one
        engine: Positioning engine; the layered NetworkX engine by default

    Returns:
        SVG content as string
    """
    if not isinstance(theme, ResolvedTheme):
        resolver = resolver or ThemeResolver(create_default_registry())
        theme = resolver.resolve(theme if theme is not None else graph.theme, mode)

    layout = compute_layout(graph, theme, engine)
    drawing = DiagramRenderer(theme).render(layout, title=graph.title)

    if filename:
        drawing.save_svg(f"{filename}.svg")

    return drawing.as_svg()
