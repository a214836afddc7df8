"""Discussion resolver — one mounted page per thread, scroll instead of remount.

Jumping between posts of the same discussion (``/d/42-hello/5`` to
``/d/42-hello/12``) must not rebuild the page. The resolver drops
``near`` from the key and reduces the slug to its id, so every post of a
thread shares one key. When the requested thread is already on screen,
the requested post goes into a single-slot ``ScrollTarget``. After the
render it is handed to the page's stream on the next task turn.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Final

from perch.context import ScrollTarget
from perch.pages.state import ABSENT
from perch.routing.resolver import ResolvedNode, RouteResolver, Skip
from perch.routing.router import parse_path

if TYPE_CHECKING:
    from perch.context import NavigationContext
    from perch.engine import Mounted
    from perch.routing.route import Route

logger = logging.getLogger("perch.resolvers")

DISCUSSION_ID_KEY: Final = "discussion_id"
"""PageState key under which a discussion page reports its thread id."""

STREAM_KEY: Final = "stream"
"""PageState key under which a discussion page exposes ``go_to_number``."""

NEAR_PARAM: Final = "near"
REPLY: Final = "reply"


def leading_id(slug: Any) -> str | None:
    """Extract the thread id from a ``"<id>-<title>"`` slug.

    ``"42-my-title"`` -> ``"42"``; ``"42"`` -> ``"42"``; ``None`` or ``""`` -> ``None``.
    """
    if slug is None:
        return None
    head = str(slug).split("-", 1)[0].strip()
    return head or None


def parse_near(value: Any) -> int | str | None:
    """Normalise a ``near`` route param into a scroll target.

    A missing value means the first post. ``"reply"`` is passed through
    for the reply composer. Anything that is not an integer gives ``None``.
    """
    if value is None or value == "":
        return 1
    if value == REPLY:
        return REPLY
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@functools.cache
def _is_thread_path(path: str, segment: str) -> bool:
    """True when *path* has an ``{id}`` param directly after the static *segment*."""
    segments = parse_path(path)
    return any(
        not prev.is_param and prev.value == segment and seg.is_param and seg.param_name == "id"
        for prev, seg in zip(segments, segments[1:])
    )


class DiscussionPageResolver(RouteResolver):
    """Resolver for discussion routes (``/d/{id}`` and ``/d/{id}/{near}``).

    Args:
        component: The discussion page class.
        route_name: ``"discussion"`` or ``"discussion.near"``; both share keys.
        context: Navigation context supplying page state and the task queue.
        id_from_slug: Strategy that reduces the ``id`` param to a stable id.
    """

    thread_segment: str = "d"
    """Static segment that precedes ``{id}`` in thread routes."""

    def __init__(
        self,
        component: type[Any],
        route_name: str,
        context: NavigationContext | None = None,
        *,
        id_from_slug: Callable[[Any], str | None] = leading_id,
    ) -> None:
        super().__init__(component, route_name, context)
        self.id_from_slug = id_from_slug
        # Shared by every discussion resolver of the app: one pending target
        self.scroll_target = context.scroll_target if context is not None else ScrollTarget()

    def make_attrs(self, args: Mapping[str, Any]) -> dict[str, Any]:
        """Route attrs plus the thread id reduced by ``id_from_slug``."""
        attrs = super().make_attrs(args)
        if "id" in args:
            attrs[DISCUSSION_ID_KEY] = self.id_from_slug(args["id"])
        return attrs

    def make_key(self, route_name: str, params: Mapping[str, Any]) -> str:
        params = dict(params)
        params.pop(NEAR_PARAM, None)
        if "id" in params:
            params["id"] = self.id_from_slug(params["id"])
        return super().make_key(route_name.removesuffix(".near"), params)

    def resolve(
        self,
        args: Mapping[str, Any],
        requested_path: str,
        route: Route,
    ) -> ResolvedNode | Skip:
        if _is_thread_path(route.path, self.thread_segment) and self._is_displayed(args.get("id")):
            target = parse_near(args.get(NEAR_PARAM))
            if target is not None:
                self.scroll_target.set(target)
        return super().resolve(args, requested_path, route)

    def on_post_render(self, mounted: Mounted) -> None:
        if self.context is None or not self.scroll_target.pending or self.scroll_target.scheduled:
            return
        self.scroll_target.scheduled = True
        self.context.tasks.defer(self._jump)

    def _is_displayed(self, slug: Any) -> bool:
        """True when the thread for *slug* is the one currently on screen."""
        if self.context is None:
            return False
        requested = self.id_from_slug(slug)
        current = self.context.state.current
        if requested is None or current is None:
            return False
        return current.matches(self.component, {DISCUSSION_ID_KEY: requested})

    def _jump(self) -> None:
        # Reads the slot at fire time: later overwrites win.
        self.scroll_target.scheduled = False
        target = self.scroll_target.take()
        if target is None or self.context is None:
            return
        current = self.context.state.current
        stream = current.get(STREAM_KEY) if current is not None else ABSENT
        if stream is ABSENT:
            logger.debug("No stream on the current page; dropping jump to %r", target)
            return
        stream.go_to_number(target)
