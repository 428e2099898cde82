"""Exceptions raised by traceflow."""


class TraceflowError(Exception):
    """Base class for traceflow errors."""


class ThemeRegistryError(TraceflowError, RuntimeError):
    """Raised when a theme is resolved against a registry with no default theme.

    This is a wiring bug in the host application, never a recoverable
    condition, so it is raised instead of silently falling back.
    """
