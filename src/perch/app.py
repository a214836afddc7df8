"""Perch application class.

Mutable during setup (route registration, template globals).
Frozen on the first navigation or an explicit ``freeze()``.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from perch.config import AppConfig
from perch.context import NavigationContext
from perch.document import Document
from perch.engine import Mounted, RenderEngine
from perch.pages.renderer import PageRenderer
from perch.pages.state import PageState, PageStateStore
from perch.routing.resolver import RouteResolver
from perch.routing.route import Route
from perch.routing.router import Router
from perch.scheduling import TaskQueue
from perch.templating import create_environment

ResolverFactory = Callable[..., RouteResolver]
"""``(component, route_name, context) -> RouteResolver``; resolver classes qualify."""


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    component: type[Any]
    name: str
    resolver: ResolverFactory


class App:
    """The perch application.

    Usage::

        app = App()

        @app.route("/", name="index")
        class IndexPage(Page):
            template = "<h1>All discussions</h1>"

        @app.route("/d/{id}", name="discussion", resolver=DiscussionPageResolver)
        @app.route("/d/{id}/{near}", name="discussion.near", resolver=DiscussionPageResolver)
        class ThreadPage(DiscussionPage):
            pass

        app.navigate("/d/42-hello/3")

    Thread safety:
        Navigation is single-threaded. The freeze transition still uses a
        Lock + double-check so a host that freezes from a worker thread
        compiles exactly once.
    """

    __slots__ = (
        "_engine",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_pending_routes",
        "_router",
        "_template_globals",
        "config",
        "context",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.context = NavigationContext(
            state=PageStateStore(),
            tasks=TaskQueue(),
            document=Document(scroll_restoration=self.config.scroll_restoration_default),
        )
        self._pending_routes: list[_PendingRoute] = []
        self._template_globals: dict[str, Any] = {}
        self._frozen = False
        self._freeze_lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: Router | None = None
        self._kida_env: Environment | None = None
        self._engine: RenderEngine | None = None

    # -- Shared state --

    @property
    def state(self) -> PageStateStore:
        return self.context.state

    @property
    def current(self) -> PageState | None:
        return self.context.state.current

    @property
    def previous(self) -> PageState | None:
        return self.context.state.previous

    @property
    def document(self) -> Document:
        return self.context.document

    @property
    def tasks(self) -> TaskQueue:
        return self.context.tasks

    @property
    def router(self) -> Router:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    @property
    def engine(self) -> RenderEngine:
        self._ensure_frozen()
        assert self._engine is not None
        return self._engine

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        name: str,
        resolver: ResolverFactory = RouteResolver,
    ) -> Callable[[type[Any]], type[Any]]:
        """Register a page component via class decorator.

        Args:
            path: Path pattern. Use ``{param}`` for path parameters.
            name: Route name, injected into the page as ``routeName`` and
                used for ``url_for``.
            resolver: Resolver class or factory, called at freeze time as
                ``resolver(component, name, context)``.
        """

        def decorator(component: type[Any]) -> type[Any]:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, component, name, resolver))
            return component

        return decorator

    def template_global(
        self, name: str | None = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a template global via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._template_globals[name or func.__name__] = func
            return func

        return decorator

    # -- Navigation --

    def navigate(self, path: str) -> Mounted:
        """Navigate to *path*. Raises ``NotFound`` if no route accepts it."""
        return self.engine.navigate(path)

    def flush(self) -> int:
        """Run tasks deferred by the last render (the "after paint" turn)."""
        return self.engine.flush()

    def url_for(self, name: str, **params: Any) -> str:
        return self.router.url_for(name, params)

    def freeze(self) -> None:
        self._ensure_frozen()

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile route table, building one resolver per route
        router = Router()
        for pending in self._pending_routes:
            resolver = pending.resolver(pending.component, pending.name, self.context)
            router.add(Route(pending.path, pending.component, pending.name, resolver))
        router.compile()
        self._router = router

        # 2. Initialize kida environment
        globals_ = {"url_for": self._url_for_global, **self._template_globals}
        self._kida_env = create_environment(self.config, globals_)

        # 3. Wire the engine
        renderer = PageRenderer(self._kida_env, has_loader=self.config.template_dir is not None)
        self._engine = RenderEngine(
            router,
            self.context,
            renderer,
            log_navigation=self.config.log_navigation,
        )
        self._frozen = True

    def _url_for_global(self, name: str, **params: Any) -> str:
        assert self._router is not None
        return self._router.url_for(name, params)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after the first navigation. "
                "Register routes and template globals before calling app.navigate()."
            )
            raise RuntimeError(msg)
