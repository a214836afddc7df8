"""Perch exception hierarchy.

Shared across Router, App, and the render engine so every module
raises and catches the same types. ``SKIP`` is a resolver outcome,
not an error, and lives in ``perch.routing.resolver``.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when route registration or app configuration is invalid.

    Typically surfaces during ``Router.add()`` or ``App._freeze()``.
    """


class NotFound(PerchError):  # noqa: N818 — conventional name in routing libraries
    """No registered route accepted the navigated path.

    Raised by the render engine after every candidate route either failed
    to match or was skipped by its resolver.
    """

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        super().__init__(detail or f"No route matches {path!r}")
