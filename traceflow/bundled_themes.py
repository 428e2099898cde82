"""Themes shipped with traceflow."""

from __future__ import annotations

from .themes import (
    AccentColors,
    BackgroundTokens,
    Connectors,
    LayoutTokens,
    ModeColors,
    Shapes,
    Theme,
    Typography,
)

# Clean, minimal design
DEFAULT_THEME = Theme(
    name="default",
    display_name="Default",
    accent=AccentColors(
        primary="#3a7d69",  # Teal, used for end nodes and emphasis
        muted="#d4e8e2",
        success="#22C55E",
        warning="#F59E0B",
        error="#EF4444",
    ),
    light=ModeColors(
        background="#F8F8F8",
        node_background="#FFFFFF",
        node_border="#E0E0E0",
        text="#1A1A1A",
        text_muted="#6B6B6B",
        connector_stroke="#E0E0E0",
        grid_color="#E0E0E0",
    ),
    dark=ModeColors(
        background="#1A1A1A",
        node_background="#1E1E1E",
        node_border="#3A3A3A",
        text="#F5F5F5",
        text_muted="#A0A0A0",
        connector_stroke="#4A4A4A",
        grid_color="#252525",
    ),
    typography=Typography(
        font_family="Inter, system-ui, -apple-system, sans-serif",
        font_size_label=14,
        font_size_description=12,
        font_weight_label=600,
        font_weight_description=400,
    ),
    shapes=Shapes(
        node_corner_radius=12,
        node_padding=16,
        node_shadow="0 2px 8px rgba(0, 0, 0, 0.08)",
        node_min_width=120,
        node_max_width=280,
    ),
    connectors=Connectors(stroke_width=2, curve_style="bezier", arrow_size=10),
    layout=LayoutTokens(
        node_spacing_x=50,
        node_spacing_y=80,
        group_padding=24,
        canvas_padding=40,
    ),
    background=BackgroundTokens(show_grid=True, grid_style="dots", grid_spacing=20),
)

# Technical, engineering aesthetic
BLUEPRINT_THEME = Theme(
    name="blueprint",
    display_name="Blueprint",
    accent=AccentColors(
        primary="#60A5FA",
        muted="#1E3A5F",
        success="#34D399",
        warning="#FBBF24",
        error="#F87171",
    ),
    light=ModeColors(
        background="#1E3A5F",  # Classic blueprint navy
        node_background="#254E78",
        node_border="#60A5FA",
        text="#FFFFFF",
        text_muted="#94A3B8",
        connector_stroke="#60A5FA",
        grid_color="#2D5A8A",
    ),
    dark=ModeColors(
        background="#0F172A",
        node_background="#1E293B",
        node_border="#3B82F6",
        text="#F8FAFC",
        text_muted="#64748B",
        connector_stroke="#3B82F6",
        grid_color="#1E3A5F",
    ),
    typography=Typography(
        font_family='"JetBrains Mono", "Fira Code", monospace',
        font_size_label=13,
        font_size_description=11,
        font_weight_label=500,
        font_weight_description=400,
    ),
    shapes=Shapes(
        node_corner_radius=4,
        node_padding=12,
        node_shadow="none",  # Flat look
        node_min_width=140,
        node_max_width=260,
        node_border_width=1.5,
    ),
    connectors=Connectors(stroke_width=1.5, curve_style="orthogonal", arrow_size=8),
    layout=LayoutTokens(
        node_spacing_x=60,
        node_spacing_y=70,
        group_padding=20,
        canvas_padding=30,
    ),
    background=BackgroundTokens(show_grid=True, grid_style="blueprint", grid_spacing=24),
)

# Professional, subdued business aesthetic
CORPORATE_THEME = Theme(
    name="corporate",
    display_name="Corporate",
    accent=AccentColors(
        primary="#2563EB",
        muted="#DBEAFE",
        success="#059669",
        warning="#D97706",
        error="#DC2626",
    ),
    light=ModeColors(
        background="#F9FAFB",
        node_background="#FFFFFF",
        node_border="#D1D5DB",
        text="#111827",
        text_muted="#6B7280",
        connector_stroke="#9CA3AF",
        grid_color="#E5E7EB",
    ),
    dark=ModeColors(
        background="#111827",
        node_background="#1F2937",
        node_border="#374151",
        text="#F9FAFB",
        text_muted="#9CA3AF",
        connector_stroke="#4B5563",
        grid_color="#1F2937",
    ),
    typography=Typography(
        font_family='"SF Pro Display", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif',
        font_size_label=14,
        font_size_description=12,
        font_weight_label=500,
        font_weight_description=400,
    ),
    shapes=Shapes(
        node_corner_radius=8,
        node_padding=16,
        node_shadow="0 1px 3px rgba(0, 0, 0, 0.1)",
        node_min_width=140,
        node_max_width=300,
    ),
    connectors=Connectors(stroke_width=1.5, curve_style="bezier", arrow_size=10),
    layout=LayoutTokens(
        node_spacing_x=60,
        node_spacing_y=80,
        group_padding=24,
        canvas_padding=40,
    ),
    background=BackgroundTokens(show_grid=False, grid_style="dots", grid_spacing=20),
)

# Colorful, modern, playful aesthetic
VIBRANT_THEME = Theme(
    name="vibrant",
    display_name="Vibrant",
    accent=AccentColors(
        primary="#8B5CF6",
        muted="#DDD6FE",
        success="#10B981",
        warning="#F59E0B",
        error="#EF4444",
    ),
    light=ModeColors(
        background="#FFFBF5",
        node_background="#FFFFFF",
        node_border="#E9D5FF",
        text="#1F2937",
        text_muted="#6B7280",
        connector_stroke="#C4B5FD",
        grid_color="#F3E8FF",
    ),
    dark=ModeColors(
        background="#1E1B2E",
        node_background="#2D2A3E",
        node_border="#6D28D9",
        text="#F5F3FF",
        text_muted="#A78BFA",
        connector_stroke="#7C3AED",
        grid_color="#2D2A3E",
    ),
    typography=Typography(
        font_family='"Plus Jakarta Sans", "DM Sans", system-ui, sans-serif',
        font_size_label=14,
        font_size_description=12,
        font_weight_label=600,
        font_weight_description=400,
    ),
    shapes=Shapes(
        node_corner_radius=16,
        node_padding=18,
        node_shadow="0 4px 14px rgba(139, 92, 246, 0.15)",
        node_min_width=130,
        node_max_width=280,
        node_border_width=1.5,
    ),
    connectors=Connectors(stroke_width=2.5, curve_style="bezier", arrow_size=12),
    layout=LayoutTokens(
        node_spacing_x=55,
        node_spacing_y=85,
        group_padding=28,
        canvas_padding=45,
    ),
    background=BackgroundTokens(show_grid=True, grid_style="dots", grid_spacing=24),
)

BUNDLED_THEMES: tuple[Theme, ...] = (
    DEFAULT_THEME,
    BLUEPRINT_THEME,
    CORPORATE_THEME,
    VIBRANT_THEME,
)
