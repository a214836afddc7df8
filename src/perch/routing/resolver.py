"""Route resolvers — turn a route match into a mountable page node.

A resolver decides three things for the render engine:

1. which page component to mount,
2. the key that controls whether the mounted page is reused or replaced,
3. what happens after the page has rendered.

Returning ``SKIP`` from ``resolve()`` tells the engine to try the next
matching route. It is a first-class outcome, not an error.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from perch.pages.state import ROUTE_NAME_KEY

if TYPE_CHECKING:
    from perch.context import NavigationContext
    from perch.engine import Mounted
    from perch.routing.route import Route


class Skip:
    """Type of the ``SKIP`` sentinel. There is exactly one instance."""

    __slots__ = ()
    _instance: Skip | None = None

    def __new__(cls) -> Skip:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __bool__(self) -> bool:
        return False


SKIP: Final = Skip()
"""Resolver outcome meaning "try the next matching route"."""


@dataclass(frozen=True, slots=True)
class ResolvedNode:
    """A renderable node tagged with its component, attrs, and key.

    Attributes:
        component: The page class to mount.
        attrs: Route args plus the injected ``routeName``.
        key: Identity key. Equal keys across navigations mean "reuse".
    """

    component: type[Any]
    attrs: dict[str, Any] = field(default_factory=dict)
    key: str = ""

    @property
    def route_name(self) -> str:
        return self.attrs.get(ROUTE_NAME_KEY, "")


class RouteResolver:
    """Default resolver: mount ``component`` keyed by route name and params.

    Subclasses override ``make_key`` to collapse or split keys, ``resolve``
    to gate or record state during matching, and ``on_post_render`` for
    side effects that must wait for the rendered tree.
    """

    def __init__(
        self,
        component: type[Any],
        route_name: str,
        context: NavigationContext | None = None,
    ) -> None:
        self.component = component
        self.route_name = route_name
        self.context = context

    def resolve(
        self,
        args: Mapping[str, Any],
        requested_path: str,
        route: Route,
    ) -> ResolvedNode | Skip:
        """Resolve a route match into a node for the render engine."""
        return ResolvedNode(
            component=self.component,
            attrs=self.make_attrs(args),
            key=self.make_key(self.route_name, args),
        )

    def make_attrs(self, args: Mapping[str, Any]) -> dict[str, Any]:
        """Attrs passed to the page: route args plus ``routeName``."""
        return {**args, ROUTE_NAME_KEY: self.route_name}

    def make_key(self, route_name: str, params: Mapping[str, Any]) -> str:
        """Route name followed by a canonical JSON encoding of *params*.

        Keys are sorted, so the result does not depend on insertion order.
        Values that JSON cannot encode fall back to ``str()``.
        """
        return route_name + json.dumps(
            dict(params),
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )

    def on_post_render(self, mounted: Mounted) -> None:
        """Called after the mounted page has rendered. No-op by default."""

    def __repr__(self) -> str:
        component = getattr(self.component, "__name__", repr(self.component))
        return f"{type(self).__name__}({component}, {self.route_name!r})"


class GatedResolver(RouteResolver):
    """Resolver that skips its route unless ``allow()`` returns True.

    Register with ``functools.partial`` to bind the predicate::

        app.route("/admin", name="admin", resolver=partial(GatedResolver, allow=is_admin))
    """

    def __init__(
        self,
        component: type[Any],
        route_name: str,
        context: NavigationContext | None = None,
        *,
        allow: Callable[[], bool],
    ) -> None:
        super().__init__(component, route_name, context)
        self.allow = allow

    def resolve(
        self,
        args: Mapping[str, Any],
        requested_path: str,
        route: Route,
    ) -> ResolvedNode | Skip:
        if not self.allow():
            return SKIP
        return super().resolve(args, requested_path, route)
