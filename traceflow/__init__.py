"""traceflow - Flow diagram layout and SVG rendering.

Example usage:
    from traceflow import Graph, render_to_svg

    graph = Graph.from_dict({
        "direction": "TB",
        "nodes": [
            {"id": "start", "label": "Start", "type": "start"},
            {"id": "check", "label": "Valid?", "type": "decision"},
            {"id": "done", "label": "Done", "type": "end"},
        ],
        "edges": [
            {"from": "start", "to": "check"},
            {"from": "check", "to": "done", "label": "yes"},
        ],
    })
    svg = render_to_svg(graph, {"name": "blueprint", "mode": "dark"})
"""

from .bundled_themes import (
    BLUEPRINT_THEME,
    BUNDLED_THEMES,
    CORPORATE_THEME,
    DEFAULT_THEME,
    VIBRANT_THEME,
)
from .errors import (
    ThemeRegistryError,
    TraceflowError,
)
from .escape import (
    escape_xml,
    escape_xml_attr,
    sanitize_id,
)
from .layout import (
    LayeredLayoutEngine,
    LayoutConfig,
    LayoutEngine,
    compute_layout,
)
from .models import (
    Direction,
    Edge,
    EdgeStyle,
    Emphasis,
    Graph,
    LayoutResult,
    Node,
    NodeType,
    PositionedEdge,
    PositionedNode,
    Status,
)
from .paths import (
    label_anchor,
    rounded_path,
)
from .renderer import (
    DiagramRenderer,
    render_layout,
    render_to_svg,
)
from .resolver import (
    ColorSchemeMonitor,
    ThemeRegistry,
    ThemeResolver,
    create_default_registry,
    resolve_theme_direct,
)
from .routing import (
    EdgeRouter,
    RoutingConfig,
    route_edges,
)
from .shapes import node_outline
from .themes import (
    ResolvedTheme,
    Theme,
    ThemeOverrides,
    ThemeSpec,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "Graph",
    "Node",
    "Edge",
    "Direction",
    "NodeType",
    "EdgeStyle",
    "Emphasis",
    "Status",
    "PositionedNode",
    "PositionedEdge",
    "LayoutResult",
    # Themes
    "Theme",
    "ThemeSpec",
    "ThemeOverrides",
    "ResolvedTheme",
    "ThemeRegistry",
    "ThemeResolver",
    "ColorSchemeMonitor",
    "create_default_registry",
    "resolve_theme_direct",
    "DEFAULT_THEME",
    "BLUEPRINT_THEME",
    "CORPORATE_THEME",
    "VIBRANT_THEME",
    "BUNDLED_THEMES",
    # Layout and routing
    "compute_layout",
    "LayoutConfig",
    "LayoutEngine",
    "LayeredLayoutEngine",
    "EdgeRouter",
    "RoutingConfig",
    "route_edges",
    "rounded_path",
    "label_anchor",
    "node_outline",
    # Rendering
    "render_to_svg",
    "render_layout",
    "DiagramRenderer",
    "escape_xml",
    "escape_xml_attr",
    "sanitize_id",
    # Errors
    "TraceflowError",
    "ThemeRegistryError",
    # Version
    "__version__",
]
