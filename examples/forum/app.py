"""Forum — index, tags, and discussion pages with post jumps.

Demonstrates the discussion resolver: moving between posts of one thread
keeps the page mounted and scrolls it, while a different thread remounts.
The admin route is gated and falls through to a denial page for guests.

Run::

    PYTHONPATH=examples/forum perch routes app:app
    PYTHONPATH=examples/forum perch key app:app /d/42-welcome/3 /d/42-welcome/10
"""

from functools import partial
from typing import Any

from perch import App, DiscussionPage, DiscussionPageResolver, GatedResolver, Page

app = App()

session: dict[str, Any] = {"admin": False}

DISCUSSIONS = {
    "42": "Welcome to the forum",
    "43": "Release notes",
}


@app.route("/", name="index")
class IndexPage(Page):
    body_class = "App--index"
    scroll_top_on_create = False
    template = (
        "<ul>{% for d in discussions %}"
        '<li><a href="{{ url_for("discussion", id=d["id"]) }}">{{ d["title"] }}</a></li>'
        "{% end %}</ul>"
    )

    def context(self) -> dict[str, Any]:
        return {"discussions": [{"id": k, "title": v} for k, v in sorted(DISCUSSIONS.items())]}


@app.route("/tags", name="tags")
class TagsPage(Page):
    body_class = "App--tags"
    template = '<div class="TagsPage">Tags</div>'


@app.route("/d/{id}", name="discussion", resolver=DiscussionPageResolver)
@app.route("/d/{id}/{near}", name="discussion.near", resolver=DiscussionPageResolver)
class ThreadPage(DiscussionPage):
    template = "<h2>{{ title }}</h2><p>post {{ near }}</p>"

    def context(self) -> dict[str, Any]:
        return {"title": DISCUSSIONS.get(self.discussion_id or "", "Not found"), "near": self.near}


@app.route("/admin", name="admin", resolver=partial(GatedResolver, allow=lambda: session["admin"]))
class AdminPage(Page):
    body_class = "App--admin"
    template = "<h2>Administration</h2>"


@app.route("/admin", name="admin.denied")
class DeniedPage(Page):
    template = "<p>You do not have permission to view this page.</p>"
