"""Compiled router with trie-based path matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. Unlike a server router, a page
router yields *every* candidate for a path: a resolver may skip a match
and the engine then tries the next one.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, unquote, urlencode

from perch.errors import ConfigurationError, NotFound
from perch.routing.params import CONVERTERS, convert_param
from perch.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/tags"             -> [PathSegment("tags")]
        "/d/{id}"           -> [PathSegment("d"), PathSegment("{id}", is_param=True, ...)]
        "/d/{id}/{near}"    -> [..., PathSegment("{near}", is_param=True, ...)]
        "/p/{path:path}"    -> [..., PathSegment("{path:path}", param_type="path")]

    Raises ``ConfigurationError`` for ``<param>`` placeholders and
    unknown converter types.
    """
    if "<" in path and ">" in path:
        msg = (
            f"Route path {path!r} uses <param> placeholders. "
            "Perch expects {param} (e.g. /d/{id})."
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown converter {param_type!r} in route path {path!r}"
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all", "children", "param_children", "routes")

    def __init__(self) -> None:
        # Static segment children: "d" -> node
        self.children: dict[str, _TrieNode] = {}
        # Parameter children, one per converter type, in insertion order
        self.param_children: dict[str, _ParamEdge] = {}
        # Catch-all routes (path converter) hanging off this node
        self.catch_all: list[Route] = []
        # Routes terminating at this node, in registration order
        self.routes: list[Route] = []


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/d/{id}", DiscussionPage, "discussion", resolver))
        router.compile()
        for match in router.match_all("/d/42-hello"):
            ...
    """

    __slots__ = ("_by_name", "_compiled", "_root", "_routes", "_segments")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False
        self._routes: list[Route] = []
        self._by_name: dict[str, Route] = {}
        self._segments: dict[str, list[PathSegment]] = {}

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if route.name in self._by_name:
            msg = f"Duplicate route name {route.name!r} ({route.path!r})"
            raise ConfigurationError(msg)

        segments = parse_path(route.path)
        self._segments[route.path] = segments
        self._by_name[route.name] = route
        self._routes.append(route)

        node = self._root
        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                node.catch_all.append(route)
                return

            if seg.is_param:
                edge = node.param_children.get(seg.param_type)
                if edge is None:
                    pattern, _ = CONVERTERS[seg.param_type]
                    edge = _ParamEdge(
                        param_type=seg.param_type,
                        regex=re.compile(f"^{pattern}$"),
                        node=_TrieNode(),
                    )
                    node.param_children[seg.param_type] = edge
                node = edge.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        node.routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def get(self, name: str) -> Route:
        """Return the route registered under *name*.

        Raises ``KeyError`` for unknown names.
        """
        return self._by_name[name]

    def match_all(self, path: str) -> Iterator[RouteMatch]:
        """Yield every route matching *path*, best candidate first.

        Static segments beat parameters, parameters beat catch-alls, and
        routes with the same shape keep their registration order.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        yield from self._walk(self._root, parts, 0, [])

    def match(self, path: str) -> RouteMatch:
        """Return the best match for *path*.

        Raises ``NotFound`` if no route matches.
        """
        for match in self.match_all(path):
            return match
        raise NotFound(path)

    def _walk(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        captured: list[str],
    ) -> Iterator[RouteMatch]:
        """Depth-first walk of the trie, yielding matches in priority order."""
        if index == len(parts):
            for route in node.routes:
                yield RouteMatch(route=route, path_params=self._bind(route, captured))
            return

        part = parts[index]

        # 1. Static child (exact match)
        child = node.children.get(part)
        if child is not None:
            yield from self._walk(child, parts, index + 1, captured)

        # 2. Parameter children
        for edge in node.param_children.values():
            if edge.regex.match(part):
                yield from self._walk(edge.node, parts, index + 1, [*captured, part])

        # 3. Catch-all consumes the remaining path
        if node.catch_all:
            remaining = "/".join(parts[index:])
            for route in node.catch_all:
                yield RouteMatch(
                    route=route,
                    path_params=self._bind(route, [*captured, remaining]),
                )

    def _bind(self, route: Route, captured: list[str]) -> dict[str, Any]:
        """Name the positional captures using the route's own segments.

        Typed captures (``{n:int}``, ``{x:float}``) are converted to their type.
        """
        params = [s for s in self._segments[route.path] if s.is_param]
        return {
            seg.param_name or "": convert_param(unquote(value), seg.param_type)
            for seg, value in zip(params, captured, strict=True)
        }

    def url_for(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Build the path for the route named *name*.

        Path parameters fill their segments; remaining non-None parameters
        become a query string sorted by key::

            router.url_for("discussion.near", {"id": "42-hi", "near": 7})
            # -> "/d/42-hi/7"

        Raises ``KeyError`` for unknown names and ``ConfigurationError``
        when a path parameter is missing.
        """
        route = self._by_name[name]
        params = dict(params or {})
        parts: list[str] = []
        used: set[str] = set()
        for seg in self._segments[route.path]:
            if not seg.is_param:
                parts.append(seg.value)
                continue
            param_name = seg.param_name or ""
            if params.get(param_name) is None:
                msg = f"Route {name!r} requires parameter {param_name!r}"
                raise ConfigurationError(msg)
            safe = "/" if seg.param_type == "path" else ""
            parts.append(quote(str(params[param_name]), safe=safe))
            used.add(param_name)

        url = "/" + "/".join(parts)
        extra = sorted((k, str(v)) for k, v in params.items() if k not in used and v is not None)
        if extra:
            url = f"{url}?{urlencode(extra)}"
        return url
