"""Theme resolution: registry lookup, mode selection and flattening."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable

from .errors import ThemeRegistryError
from .themes import MODES, ThemeSpec, apply_overrides, flatten_theme

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .themes import Mode, ResolvedTheme, Theme

logger = logging.getLogger(__name__)

ColorSchemeCallback = Callable[["Mode"], None]


class ThemeRegistry:
    """Named themes plus the designated fallback theme.

    A registry is built once by the host and then only read. Lookups of
    unknown names fall back to the default theme; a registry that never
    received a default theme is considered uninitialized.
    """

    def __init__(
        self,
        themes: Iterable[Theme] = (),
        default: Theme | None = None,
    ):
        self._themes: dict[str, Theme] = {}
        self._default: Theme | None = None
        for theme in themes:
            self.register(theme)
        if default is not None:
            self.register(default, default=True)

    def register(self, theme: Theme, default: bool = False) -> None:
        """Add ``theme`` under its name, optionally as the fallback."""
        self._themes[theme.name] = theme
        if default:
            self._default = theme

    @property
    def initialized(self) -> bool:
        return self._default is not None

    @property
    def default(self) -> Theme:
        if self._default is None:
            raise ThemeRegistryError(
                "Theme registry not initialized: no default theme registered"
            )
        return self._default

    def get(self, name: str) -> Theme:
        """Return the theme called ``name`` or the default theme."""
        default = self.default
        theme = self._themes.get(name)
        if theme is None:
            logger.debug("Unknown theme '%s', falling back to '%s'", name, default.name)
            return default
        return theme

    def names(self) -> list[str]:
        return list(self._themes)

    def __contains__(self, name: object) -> bool:
        return name in self._themes


def create_default_registry() -> ThemeRegistry:
    """Build a registry holding the bundled themes, ``default`` as fallback."""
    from .bundled_themes import BUNDLED_THEMES, DEFAULT_THEME

    return ThemeRegistry(BUNDLED_THEMES, default=DEFAULT_THEME)


class ColorSchemeMonitor:
    """Observer for the ambient light/dark preference.

    The host wires the real OS signal to :meth:`publish`; tests publish
    directly. Subscribers are notified at most once per actual change, in no
    particular order, on the thread that calls :meth:`publish`.
    """

    def __init__(self, initial: Mode | None = None):
        self._current = initial
        self._subscribers: dict[int, ColorSchemeCallback] = {}
        self._next_token = 0
        self._lock = threading.Lock()

    def current(self) -> Mode | None:
        """The last known preference, or ``None`` when unknown."""
        return self._current

    def subscribe(self, callback: ColorSchemeCallback) -> Callable[[], None]:
        """Register ``callback`` and return a disposer.

        The disposer may be called any number of times.
        """
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback

        def dispose() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return dispose

    def publish(self, mode: Mode) -> None:
        """Record a new preference and notify subscribers if it changed."""
        if mode not in MODES:
            raise ValueError(f"Invalid color scheme '{mode}', must be one of {MODES}")
        with self._lock:
            if mode == self._current:
                return
            self._current = mode
            callbacks = list(self._subscribers.values())
        for callback in callbacks:
            try:
                callback(mode)
            except Exception:
                logger.exception("Color scheme callback failed")


class ThemeResolver:
    """Resolves theme specifications against an explicit registry.

    Usage:
        resolver = ThemeResolver(create_default_registry())
        theme = resolver.resolve({"name": "blueprint", "mode": "dark"})
    """

    def __init__(
        self,
        registry: ThemeRegistry,
        color_scheme: ColorSchemeMonitor | None = None,
    ):
        self.registry = registry
        self.color_scheme = color_scheme

    def select_mode(self, spec: ThemeSpec, mode: Mode | None = None) -> Mode:
        """Pick the effective mode.

        Precedence: explicit ``mode`` > the ThemeSpec mode unless ``system`` >
        ambient preference > light.

        Raises:
            ValueError: ``mode`` is neither light nor dark.
        """
        if mode is not None:
            if mode not in MODES:
                raise ValueError(f"Invalid mode '{mode}', must be one of {MODES}")
            return mode
        if spec.mode is not None and spec.mode != "system":
            return spec.mode
        if self.color_scheme is not None:
            ambient = self.color_scheme.current()
            if ambient is not None:
                return ambient
        return "light"

    def resolve(
        self,
        spec: ThemeSpec | str | Mapping[str, Any] | None = None,
        mode: Mode | None = None,
    ) -> ResolvedTheme:
        """Resolve ``spec`` to a flattened theme.

        Raises:
            ThemeRegistryError: the registry has no default theme.
        """
        if not self.registry.initialized:
            raise ThemeRegistryError(
                "Theme registry not initialized: register a default theme "
                "before resolving (see create_default_registry)"
            )
        spec = ThemeSpec.coerce(spec)
        base = self.registry.get(spec.name)
        effective_mode = self.select_mode(spec, mode)
        merged = apply_overrides(base, spec.overrides, effective_mode)
        logger.debug("Resolved theme '%s' in %s mode", merged.name, effective_mode)
        return flatten_theme(merged, effective_mode)


def resolve_theme_direct(theme: Theme, mode: Mode = "light") -> ResolvedTheme:
    """Flatten ``theme`` without going through a registry."""
    return flatten_theme(theme, mode)
