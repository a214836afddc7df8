"""Perch — client-side page routing and page state for forum front ends.

Resolves navigated paths to page components, decides whether the mounted
page is reused or replaced, and runs the shared page lifecycle.

Basic usage::

    from perch import App, Page

    app = App()

    @app.route("/", name="index")
    class IndexPage(Page):
        body_class = "App--index"
        template = "<h1>Discussions</h1>"

    app.navigate("/")
    app.current.matches(IndexPage, {"routeName": "index"})  # True
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ABSENT",
    "SKIP",
    "App",
    "AppConfig",
    "ConfigurationError",
    "DiscussionPage",
    "DiscussionPageResolver",
    "GatedResolver",
    "NotFound",
    "Page",
    "PageState",
    "PerchError",
    "RouteResolver",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name in ("PerchError", "ConfigurationError", "NotFound"):
        from perch import errors as _errors

        return getattr(_errors, name)

    if name in ("Page", "PageState", "ABSENT"):
        from perch import pages as _pages

        return getattr(_pages, name)

    if name == "DiscussionPage":
        from perch.pages.discussion import DiscussionPage

        return DiscussionPage

    if name in ("RouteResolver", "GatedResolver", "SKIP"):
        from perch.routing import resolver as _resolver

        return getattr(_resolver, name)

    if name == "DiscussionPageResolver":
        from perch.resolvers.discussion import DiscussionPageResolver

        return DiscussionPageResolver

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
