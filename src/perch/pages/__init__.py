"""Pages — page components, their shared lifecycle, and page state.

Every mounted page goes through ``PageLifecycle``: activation swaps the
``current``/``previous`` page states, closes overlays, and resets scroll;
each render applies the page's body class.

Usage::

    class IndexPage(Page):
        body_class = "IndexPage"
        template = "<h1>All discussions</h1>"
"""

from perch.pages.lifecycle import PageLifecycle
from perch.pages.page import Page
from perch.pages.renderer import PageRenderer
from perch.pages.state import ABSENT, ROUTE_NAME_KEY, PageState, PageStateStore

__all__ = [
    "ABSENT",
    "ROUTE_NAME_KEY",
    "Page",
    "PageLifecycle",
    "PageRenderer",
    "PageState",
    "PageStateStore",
]
