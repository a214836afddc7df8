"""Render engine — one synchronous pass per navigation.

For each navigated path the engine:

1. drains tasks deferred by the previous render,
2. walks candidate routes until a resolver returns a node (``SKIP`` moves on),
3. reuses the mounted page when the node key is unchanged, otherwise
   builds the new page, removes the old one and activates the new one,
4. renders the page (body class, then kida view) and commits the HTML,
5. runs the resolver's post-render hook.

At most one navigation is in flight: ``navigate()`` does not re-enter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from perch.context import NavigationContext
from perch.errors import NotFound
from perch.pages.lifecycle import PageLifecycle
from perch.pages.renderer import PageRenderer
from perch.routing.params import split_path
from perch.routing.resolver import ResolvedNode, RouteResolver, Skip
from perch.routing.route import Route, RouteMatch
from perch.routing.router import Router

logger = logging.getLogger("perch.navigation")


@dataclass(slots=True)
class Mounted:
    """The page currently attached to the document."""

    page: Any
    node: ResolvedNode
    route: Route
    html: str = ""

    @property
    def key(self) -> str:
        return self.node.key

    @property
    def resolver(self) -> RouteResolver:
        return self.route.resolver


class RenderEngine:
    """Mounts, reuses, and renders pages for navigated paths."""

    __slots__ = ("_mounted", "context", "lifecycle", "log_navigation", "renderer", "router")

    def __init__(
        self,
        router: Router,
        context: NavigationContext,
        renderer: PageRenderer,
        *,
        log_navigation: bool = True,
    ) -> None:
        self.router = router
        self.context = context
        self.renderer = renderer
        self.lifecycle = PageLifecycle(context.state, context.document)
        self.log_navigation = log_navigation
        self._mounted: Mounted | None = None

    @property
    def mounted(self) -> Mounted | None:
        return self._mounted

    def resolve(self, requested_path: str) -> tuple[RouteMatch, ResolvedNode]:
        """Find the first candidate route whose resolver accepts *requested_path*.

        Raises ``NotFound`` when every candidate is missing or skipped.
        """
        path, query = split_path(requested_path)
        for match in self.router.match_all(path):
            args = {**query, **match.path_params}
            result = match.route.resolver.resolve(args, requested_path, match.route)
            if isinstance(result, Skip):
                logger.debug("Route %r skipped %s", match.route.name, requested_path)
                continue
            return match, result
        raise NotFound(requested_path)

    def navigate(self, requested_path: str) -> Mounted:
        """Navigate to *requested_path* and return the mounted page."""
        self.context.tasks.run_pending()

        match, node = self.resolve(requested_path)
        previous = self._mounted

        if previous is not None and previous.key == node.key:
            page = previous.page
            self._update(page, node.attrs)
            self._log("Reused %s for %s (key %s)", page, requested_path, node.key)
        else:
            # Build before removing: a failing constructor keeps the old page
            page = node.component(node.attrs)
            if previous is not None:
                self._mounted = None
                self.lifecycle.remove(previous.page)
            self.lifecycle.activate(page, node.route_name)
            self._log("Mounted %s for %s (key %s)", page, requested_path, node.key)

        mounted = Mounted(page=page, node=node, route=match.route)
        self._mounted = mounted
        self._render(mounted)
        return mounted

    def redraw(self) -> Mounted | None:
        """Re-render the mounted page without navigating."""
        if self._mounted is not None:
            self._render(self._mounted)
        return self._mounted

    def flush(self) -> int:
        """Run deferred post-render tasks. Returns how many ran."""
        return self.context.tasks.run_pending()

    def _render(self, mounted: Mounted) -> None:
        self.lifecycle.render(mounted.page)
        mounted.html = self.renderer.render(mounted.page)
        self.context.document.commit(mounted.html)
        mounted.resolver.on_post_render(mounted)

    def _update(self, page: Any, attrs: Mapping[str, Any]) -> None:
        on_update = getattr(page, "on_update", None)
        if on_update is not None:
            on_update(attrs)

    def _log(self, msg: str, page: Any, path: str, key: str) -> None:
        if self.log_navigation:
            logger.debug(msg, type(page).__name__, path, key)
