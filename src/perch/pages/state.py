"""Page state — what the active page is and what it has reported.

Two instances are live at any time: ``current`` and ``previous``. Both are
held by a ``PageStateStore``, and only the page lifecycle writes to it.
"""

from collections.abc import Mapping
from typing import Any, Final

ROUTE_NAME_KEY: Final = "routeName"
"""Reserved data key holding the name of the route that mounted the page."""


class _Absent:
    """Type of the ``ABSENT`` sentinel returned for unset keys."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


class PageState:
    """The mounted page's identity plus a bag of page-reported data.

    ``component`` is fixed at construction. A navigation replaces the
    whole PageState instead of mutating it.

    Usage::

        state = PageState(DiscussionPage, {ROUTE_NAME_KEY: "discussion"})
        state.set("discussion_id", "42")
        state.matches(DiscussionPage, {"discussion_id": "42"})  # True
    """

    __slots__ = ("_component", "_data")

    def __init__(self, component: Any, data: Mapping[str, Any] | None = None) -> None:
        self._component = component
        self._data: dict[str, Any] = dict(data or {})

    @property
    def component(self) -> Any:
        return self._component

    @property
    def route_name(self) -> Any:
        return self.get(ROUTE_NAME_KEY)

    def get(self, key: str, default: Any = ABSENT) -> Any:
        """Return the stored value, or *default* (``ABSENT``) when unset."""
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def matches(self, component: Any, partial: Mapping[str, Any] | None = None) -> bool:
        """True iff *component* is the stored identity and *partial* is a subset of data."""
        if self._component != component:
            return False
        for key, value in (partial or {}).items():
            if key not in self._data or self._data[key] != value:
                return False
        return True

    def __repr__(self) -> str:
        name = getattr(self._component, "__name__", repr(self._component))
        return f"PageState({name}, {self._data!r})"


class PageStateStore:
    """Holder for the ``current`` and ``previous`` page states.

    Both are ``None`` until the first navigation. ``replace()`` is the
    only writer; it is called by the page lifecycle once per navigation.
    """

    __slots__ = ("_current", "_previous")

    def __init__(self) -> None:
        self._current: PageState | None = None
        self._previous: PageState | None = None

    @property
    def current(self) -> PageState | None:
        return self._current

    @property
    def previous(self) -> PageState | None:
        return self._previous

    def replace(self, component: Any, route_name: str) -> PageState:
        """Start a new PageState for *component*, demoting current to previous."""
        state = PageState(component, {ROUTE_NAME_KEY: route_name})
        self._previous, self._current = self._current, state
        return state
