"""Reference discussion page.

Reports its thread id and itself as the post stream into the page state,
so ``DiscussionPageResolver`` can tell when a navigation targets the
thread already on screen and hand it the post to jump to.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from perch.pages.page import Page
from perch.resolvers.discussion import (
    DISCUSSION_ID_KEY,
    NEAR_PARAM,
    STREAM_KEY,
    leading_id,
    parse_near,
)


class DiscussionPage(Page):
    """A thread view positioned at a post number (or ``"reply"``)."""

    use_browser_scroll_restoration: ClassVar[bool] = False
    body_class: ClassVar[str] = "App--discussion"
    template: ClassVar[str] = (
        '<div class="DiscussionPage" data-id="{{ discussion_id }}" data-near="{{ near }}"></div>'
    )

    def __init__(self, attrs: Mapping[str, Any]) -> None:
        super().__init__(attrs)
        # Resolvers pass the id reduced by their slug strategy
        self.discussion_id = self.attrs.get(DISCUSSION_ID_KEY, leading_id(self.attrs.get("id")))
        self.near: int | str = parse_near(self.attrs.get(NEAR_PARAM)) or 1

    def on_init(self) -> None:
        if self.state is not None:
            self.state.set(DISCUSSION_ID_KEY, self.discussion_id)
            self.state.set(STREAM_KEY, self)

    def go_to_number(self, number: int | str) -> None:
        """Move the visible position to post *number*."""
        self.near = number
        if self.state is not None:
            self.state.set(NEAR_PARAM, number)

    def context(self) -> dict[str, Any]:
        return {"discussion_id": self.discussion_id, "near": self.near, "attrs": self.attrs}
