"""Cross-cutting behaviour applied to every mounted page.

``PageLifecycle`` wraps page components rather than being inherited by
them. The render engine calls it at three points:

- ``activate``: once per mount, before the page's first render:
  new PageState, overlays closed, scroll reset, scroll restoration set.
- ``render``: on every render pass: apply the page's body class.
- ``remove``: on unmount: run the page hook, drop its body class.
"""

import logging
from typing import Any

from perch.document import Document
from perch.pages.state import PageState, PageStateStore

logger = logging.getLogger("perch.pages")


class PageLifecycle:
    """Applies page declarations to the shared state and document.

    This is the only writer of the ``PageStateStore``.
    """

    __slots__ = ("document", "state")

    def __init__(self, state: PageStateStore, document: Document) -> None:
        self.state = state
        self.document = document

    def activate(self, page: Any, route_name: str) -> PageState:
        """Run the activation steps for a freshly mounted *page*."""
        # 1. Swap page state: current -> previous, new -> current
        page_state = self.state.replace(type(page), route_name)
        page.state = page_state

        # 2. Dismiss transient UI
        self.document.close_modal()
        self.document.close_drawer()

        # 3. Scroll to top unless explicitly disabled
        if getattr(page, "scroll_top_on_create", True) is not False:
            self.document.viewport.scroll_to_top()

        # 4. History scroll restoration: manual on opt-out, else the app default
        viewport = self.document.viewport
        if getattr(page, "use_browser_scroll_restoration", True) is False:
            viewport.scroll_restoration = "manual"
        else:
            viewport.scroll_restoration = viewport.default_restoration

        on_init = getattr(page, "on_init", None)
        if on_init is not None:
            on_init()
        return page_state

    def render(self, page: Any) -> None:
        """Apply the page's body class, replacing the previous page's."""
        self.document.root.set_extension_class(getattr(page, "body_class", "") or "")

    def remove(self, page: Any) -> None:
        on_remove = getattr(page, "on_remove", None)
        if on_remove is not None:
            on_remove()
        body_class = (getattr(page, "body_class", "") or "").strip()
        if body_class and self.document.root.extension_class == body_class:
            self.document.root.set_extension_class("")
        logger.debug("Removed page %s", type(page).__name__)
