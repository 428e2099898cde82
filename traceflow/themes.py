"""Theme tokens, typed overrides and the field-by-field merge functions.

A ``Theme`` carries mode-invariant token groups plus one ``ModeColors`` set
per color scheme. Overrides are expressed with one struct per token group in
which every field is optional; ``None`` means "keep the base value". The
merge functions below list every field explicitly and always return new
objects, so themes registered once can be shared freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, TypeVar

if TYPE_CHECKING:
    from collections.abc import Mapping

Mode = Literal["light", "dark"]
ModePreference = Literal["light", "dark", "system"]
CurveStyle = Literal["bezier", "orthogonal", "organic"]
GridStyle = Literal["dots", "lines", "blueprint"]

MODES: tuple[str, ...] = ("light", "dark")
MODE_PREFERENCES: tuple[str, ...] = ("light", "dark", "system")

T = TypeVar("T")


def _pick(value: T | None, fallback: T) -> T:
    """Return the override value unless it was left unspecified."""
    return fallback if value is None else value


# --- Token groups ---------------------------------------------------------


@dataclass(frozen=True)
class AccentColors:
    """Accent colors shared by the light and dark modes."""

    primary: str
    muted: str
    success: str
    warning: str
    error: str


@dataclass(frozen=True)
class ModeColors:
    """Colors that differ between light and dark mode."""

    background: str
    node_background: str
    node_border: str
    text: str
    text_muted: str
    connector_stroke: str
    grid_color: str


@dataclass(frozen=True)
class Typography:
    font_family: str
    font_size_label: float
    font_size_description: float
    font_weight_label: int
    font_weight_description: int


@dataclass(frozen=True)
class Shapes:
    """Node shape tokens.

    ``node_colors`` is an optional palette cycled across nodes in document
    order; when empty every node uses the mode's node background.
    """

    node_corner_radius: float
    node_padding: float
    node_shadow: str
    node_min_width: float
    node_max_width: float
    node_border_width: float = 1
    node_colors: tuple[str, ...] = ()


@dataclass(frozen=True)
class Connectors:
    stroke_width: float
    curve_style: CurveStyle
    arrow_size: float


@dataclass(frozen=True)
class LayoutTokens:
    node_spacing_x: float
    node_spacing_y: float
    group_padding: float
    canvas_padding: float


@dataclass(frozen=True)
class BackgroundTokens:
    show_grid: bool
    grid_style: GridStyle
    grid_spacing: float


@dataclass(frozen=True)
class Theme:
    """A complete theme definition with both color schemes."""

    name: str
    display_name: str
    accent: AccentColors
    light: ModeColors
    dark: ModeColors
    typography: Typography
    shapes: Shapes
    connectors: Connectors
    layout: LayoutTokens
    background: BackgroundTokens

    def colors_for(self, mode: Mode) -> ModeColors:
        return self.dark if mode == "dark" else self.light


# --- Resolved (flattened) theme -------------------------------------------


@dataclass(frozen=True)
class ResolvedColors:
    """Mode colors flattened together with the shared accents."""

    background: str
    node_background: str
    node_border: str
    text: str
    text_muted: str
    connector_stroke: str
    grid_color: str
    accent: str
    accent_muted: str
    success: str
    warning: str
    error: str


@dataclass(frozen=True)
class ResolvedBackground:
    show_grid: bool
    grid_style: GridStyle
    grid_spacing: float
    grid_color: str


@dataclass(frozen=True)
class ResolvedTheme:
    """A theme flattened to one concrete color scheme."""

    name: str
    display_name: str
    mode: Mode
    colors: ResolvedColors
    typography: Typography
    shapes: Shapes
    connectors: Connectors
    layout: LayoutTokens
    background: ResolvedBackground


def flatten_theme(theme: Theme, mode: Mode) -> ResolvedTheme:
    """Flatten ``theme`` to the colors of ``mode``."""
    palette = theme.colors_for(mode)
    return ResolvedTheme(
        name=theme.name,
        display_name=theme.display_name,
        mode=mode,
        colors=ResolvedColors(
            background=palette.background,
            node_background=palette.node_background,
            node_border=palette.node_border,
            text=palette.text,
            text_muted=palette.text_muted,
            connector_stroke=palette.connector_stroke,
            grid_color=palette.grid_color,
            accent=theme.accent.primary,
            accent_muted=theme.accent.muted,
            success=theme.accent.success,
            warning=theme.accent.warning,
            error=theme.accent.error,
        ),
        typography=theme.typography,
        shapes=theme.shapes,
        connectors=theme.connectors,
        layout=theme.layout,
        background=ResolvedBackground(
            show_grid=theme.background.show_grid,
            grid_style=theme.background.grid_style,
            grid_spacing=theme.background.grid_spacing,
            grid_color=palette.grid_color,
        ),
    )


# --- Overrides --------------------------------------------------------------


@dataclass(frozen=True)
class ColorOverrides:
    """Color overrides; mode fields apply to the selected mode only."""

    background: str | None = None
    node_background: str | None = None
    node_border: str | None = None
    text: str | None = None
    text_muted: str | None = None
    connector_stroke: str | None = None
    grid_color: str | None = None
    accent: str | None = None
    accent_muted: str | None = None
    success: str | None = None
    warning: str | None = None
    error: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ColorOverrides:
        return cls(
            background=data.get("background"),
            node_background=data.get("nodeBackground"),
            node_border=data.get("nodeBorder"),
            text=data.get("text"),
            text_muted=data.get("textMuted"),
            connector_stroke=data.get("connectorStroke"),
            grid_color=data.get("gridColor"),
            accent=data.get("accent"),
            accent_muted=data.get("accentMuted"),
            success=data.get("success"),
            warning=data.get("warning"),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class TypographyOverrides:
    font_family: str | None = None
    font_size_label: float | None = None
    font_size_description: float | None = None
    font_weight_label: int | None = None
    font_weight_description: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TypographyOverrides:
        return cls(
            font_family=data.get("fontFamily"),
            font_size_label=data.get("fontSizeLabel"),
            font_size_description=data.get("fontSizeDescription"),
            font_weight_label=data.get("fontWeightLabel"),
            font_weight_description=data.get("fontWeightDescription"),
        )


@dataclass(frozen=True)
class ShapeOverrides:
    node_corner_radius: float | None = None
    node_padding: float | None = None
    node_shadow: str | None = None
    node_min_width: float | None = None
    node_max_width: float | None = None
    node_border_width: float | None = None
    node_colors: tuple[str, ...] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ShapeOverrides:
        colors = data.get("nodeColors")
        return cls(
            node_corner_radius=data.get("nodeCornerRadius"),
            node_padding=data.get("nodePadding"),
            node_shadow=data.get("nodeShadow"),
            node_min_width=data.get("nodeMinWidth"),
            node_max_width=data.get("nodeMaxWidth"),
            node_border_width=data.get("nodeBorderWidth"),
            node_colors=tuple(colors) if colors is not None else None,
        )


@dataclass(frozen=True)
class ConnectorOverrides:
    stroke_width: float | None = None
    curve_style: CurveStyle | None = None
    arrow_size: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectorOverrides:
        return cls(
            stroke_width=data.get("strokeWidth"),
            curve_style=data.get("curveStyle"),
            arrow_size=data.get("arrowSize"),
        )


@dataclass(frozen=True)
class LayoutOverrides:
    node_spacing_x: float | None = None
    node_spacing_y: float | None = None
    group_padding: float | None = None
    canvas_padding: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LayoutOverrides:
        return cls(
            node_spacing_x=data.get("nodeSpacingX"),
            node_spacing_y=data.get("nodeSpacingY"),
            group_padding=data.get("groupPadding"),
            canvas_padding=data.get("canvasPadding"),
        )


@dataclass(frozen=True)
class BackgroundOverrides:
    show_grid: bool | None = None
    grid_style: GridStyle | None = None
    grid_spacing: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackgroundOverrides:
        return cls(
            show_grid=data.get("showGrid"),
            grid_style=data.get("gridStyle"),
            grid_spacing=data.get("gridSpacing"),
        )


@dataclass(frozen=True)
class ThemeOverrides:
    """Partial token groups layered over a base theme."""

    colors: ColorOverrides | None = None
    typography: TypographyOverrides | None = None
    shapes: ShapeOverrides | None = None
    connectors: ConnectorOverrides | None = None
    layout: LayoutOverrides | None = None
    background: BackgroundOverrides | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThemeOverrides:
        """Build overrides from the document's camelCase mapping form."""

        def group(key: str, factory: Any) -> Any:
            value = data.get(key)
            return factory.from_dict(value) if value is not None else None

        return cls(
            colors=group("colors", ColorOverrides),
            typography=group("typography", TypographyOverrides),
            shapes=group("shapes", ShapeOverrides),
            connectors=group("connectors", ConnectorOverrides),
            layout=group("layout", LayoutOverrides),
            background=group("background", BackgroundOverrides),
        )


# --- Merges -----------------------------------------------------------------


def merge_mode_colors(base: ModeColors, overrides: ColorOverrides | None) -> ModeColors:
    if overrides is None:
        return base
    return ModeColors(
        background=_pick(overrides.background, base.background),
        node_background=_pick(overrides.node_background, base.node_background),
        node_border=_pick(overrides.node_border, base.node_border),
        text=_pick(overrides.text, base.text),
        text_muted=_pick(overrides.text_muted, base.text_muted),
        connector_stroke=_pick(overrides.connector_stroke, base.connector_stroke),
        grid_color=_pick(overrides.grid_color, base.grid_color),
    )


def merge_accent(base: AccentColors, overrides: ColorOverrides | None) -> AccentColors:
    if overrides is None:
        return base
    return AccentColors(
        primary=_pick(overrides.accent, base.primary),
        muted=_pick(overrides.accent_muted, base.muted),
        success=_pick(overrides.success, base.success),
        warning=_pick(overrides.warning, base.warning),
        error=_pick(overrides.error, base.error),
    )


def merge_typography(base: Typography, overrides: TypographyOverrides | None) -> Typography:
    if overrides is None:
        return base
    return Typography(
        font_family=_pick(overrides.font_family, base.font_family),
        font_size_label=_pick(overrides.font_size_label, base.font_size_label),
        font_size_description=_pick(
            overrides.font_size_description, base.font_size_description
        ),
        font_weight_label=_pick(overrides.font_weight_label, base.font_weight_label),
        font_weight_description=_pick(
            overrides.font_weight_description, base.font_weight_description
        ),
    )


def merge_shapes(base: Shapes, overrides: ShapeOverrides | None) -> Shapes:
    if overrides is None:
        return base
    return Shapes(
        node_corner_radius=_pick(overrides.node_corner_radius, base.node_corner_radius),
        node_padding=_pick(overrides.node_padding, base.node_padding),
        node_shadow=_pick(overrides.node_shadow, base.node_shadow),
        node_min_width=_pick(overrides.node_min_width, base.node_min_width),
        node_max_width=_pick(overrides.node_max_width, base.node_max_width),
        node_border_width=_pick(overrides.node_border_width, base.node_border_width),
        # Palettes are replaced wholesale, never merged element-wise
        node_colors=_pick(overrides.node_colors, base.node_colors),
    )


def merge_connectors(base: Connectors, overrides: ConnectorOverrides | None) -> Connectors:
    if overrides is None:
        return base
    return Connectors(
        stroke_width=_pick(overrides.stroke_width, base.stroke_width),
        curve_style=_pick(overrides.curve_style, base.curve_style),
        arrow_size=_pick(overrides.arrow_size, base.arrow_size),
    )


def merge_layout(base: LayoutTokens, overrides: LayoutOverrides | None) -> LayoutTokens:
    if overrides is None:
        return base
    return LayoutTokens(
        node_spacing_x=_pick(overrides.node_spacing_x, base.node_spacing_x),
        node_spacing_y=_pick(overrides.node_spacing_y, base.node_spacing_y),
        group_padding=_pick(overrides.group_padding, base.group_padding),
        canvas_padding=_pick(overrides.canvas_padding, base.canvas_padding),
    )


def merge_background(
    base: BackgroundTokens, overrides: BackgroundOverrides | None
) -> BackgroundTokens:
    if overrides is None:
        return base
    return BackgroundTokens(
        show_grid=_pick(overrides.show_grid, base.show_grid),
        grid_style=_pick(overrides.grid_style, base.grid_style),
        grid_spacing=_pick(overrides.grid_spacing, base.grid_spacing),
    )


def apply_overrides(theme: Theme, overrides: ThemeOverrides | None, mode: Mode) -> Theme:
    """Return a new theme with ``overrides`` layered over ``theme``.

    Color overrides touch only the palette of ``mode``; the other palette is
    carried over untouched.
    """
    if overrides is None:
        return theme
    light = theme.light
    dark = theme.dark
    if mode == "dark":
        dark = merge_mode_colors(dark, overrides.colors)
    else:
        light = merge_mode_colors(light, overrides.colors)
    return Theme(
        name=theme.name,
        display_name=theme.display_name,
        accent=merge_accent(theme.accent, overrides.colors),
        light=light,
        dark=dark,
        typography=merge_typography(theme.typography, overrides.typography),
        shapes=merge_shapes(theme.shapes, overrides.shapes),
        connectors=merge_connectors(theme.connectors, overrides.connectors),
        layout=merge_layout(theme.layout, overrides.layout),
        background=merge_background(theme.background, overrides.background),
    )


# --- Theme specification ----------------------------------------------------


@dataclass(frozen=True)
class ThemeSpec:
    """A theme request: name, preferred mode and overrides."""

    name: str = "default"
    mode: ModePreference | None = None
    overrides: ThemeOverrides | None = None

    def __post_init__(self) -> None:
        if self.mode is not None and self.mode not in MODE_PREFERENCES:
            raise ValueError(
                f"Invalid theme mode '{self.mode}', must be one of {MODE_PREFERENCES}"
            )

    @classmethod
    def coerce(cls, value: ThemeSpec | str | Mapping[str, Any] | None) -> ThemeSpec:
        """Normalize a bare name, a mapping or ``None`` to a ``ThemeSpec``."""
        if value is None:
            return cls()
        if isinstance(value, ThemeSpec):
            return value
        if isinstance(value, str):
            return cls(name=value)
        overrides = value.get("overrides")
        if overrides is not None and not isinstance(overrides, ThemeOverrides):
            overrides = ThemeOverrides.from_dict(overrides)
        return cls(
            name=value.get("name") or "default",
            mode=value.get("mode"),
            overrides=overrides,
        )
