"""Base class for routed pages.

A page is any object the render engine can build from ``attrs`` and that
exposes the lifecycle declarations read by ``PageLifecycle``. Subclassing
``Page`` is the convenient way to get the defaults; nothing requires it.

Declarations (class attributes):

- ``scroll_top_on_create``: scroll the viewport to the top on activation.
- ``use_browser_scroll_restoration``: leave history scroll restoration on.
- ``body_class``: extension class applied to the app root while mounted.
- ``template`` / ``template_name``: inline kida source or a template file.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from perch.pages.state import ROUTE_NAME_KEY, PageState


class Page:
    """A routed page component.

    Usage::

        class TagsPage(Page):
            body_class = "TagsPage"
            template = "<ul>{% for tag in tags %}<li>{{ tag }}</li>{% end %}</ul>"

            def context(self) -> dict[str, Any]:
                return {"tags": load_tags()}
    """

    scroll_top_on_create: ClassVar[bool] = True
    use_browser_scroll_restoration: ClassVar[bool] = True
    body_class: ClassVar[str] = ""
    template: ClassVar[str] = ""
    template_name: ClassVar[str | None] = None

    def __init__(self, attrs: Mapping[str, Any]) -> None:
        self.attrs: dict[str, Any] = dict(attrs)
        # Set by the lifecycle on activation, before on_init()
        self.state: PageState | None = None

    @property
    def route_name(self) -> str:
        return self.attrs.get(ROUTE_NAME_KEY, "")

    def on_init(self) -> None:
        """Called once after activation, before the first render."""

    def on_update(self, attrs: Mapping[str, Any]) -> None:
        """Called when a navigation reuses this page with new attrs."""
        self.attrs = dict(attrs)

    def on_remove(self) -> None:
        """Called when the page is unmounted."""

    def context(self) -> dict[str, Any]:
        """Template context for the page's view."""
        return {"attrs": self.attrs}
