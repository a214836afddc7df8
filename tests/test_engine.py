"""Tests for perch.engine — mount/reuse decisions and render ordering."""

from functools import partial
from typing import Any

import pytest
from kida import Environment

from perch.context import NavigationContext
from perch.engine import RenderEngine
from perch.errors import NotFound
from perch.pages.discussion import DiscussionPage
from perch.pages.page import Page
from perch.pages.renderer import PageRenderer
from perch.resolvers.discussion import DiscussionPageResolver
from perch.routing.resolver import GatedResolver, RouteResolver
from perch.routing.route import Route
from perch.routing.router import Router


class IndexPage(Page):
    body_class = "App--index"
    template = "<h1>{{ title }}</h1>"

    def context(self) -> dict[str, Any]:
        return {"title": "All Discussions"}


class TagsPage(Page):
    body_class = "App--tags"
    template = "<ul class=\"TagsPage\"></ul>"


class CountingPage(Page):
    created = 0
    template = "<p>{{ sort }}</p>"

    def __init__(self, attrs: Any) -> None:
        super().__init__(attrs)
        type(self).created += 1

    def context(self) -> dict[str, Any]:
        return {"sort": self.attrs.get("sort", "")}


class StayPutPage(Page):
    scroll_top_on_create = False


class RemovablePage(Page):
    body_class = "App--a"

    def __init__(self, attrs: Any) -> None:
        super().__init__(attrs)
        self.removed = 0

    def on_remove(self) -> None:
        self.removed += 1


class BrokenConstructorPage(Page):
    def __init__(self, attrs: Any) -> None:
        raise RuntimeError("cannot build")


class BrokenInitPage(Page):
    def on_init(self) -> None:
        raise RuntimeError("cannot init")


def _engine(*specs: tuple[str, type, str, Any]) -> RenderEngine:
    context = NavigationContext()
    router = Router()
    for path, component, name, factory in specs:
        router.add(Route(path, component, name, factory(component, name, context)))
    router.compile()
    return RenderEngine(router, context, PageRenderer(Environment()))


class TestMountAndReuse:
    def test_first_navigation_mounts(self) -> None:
        engine = _engine(("/", IndexPage, "index", RouteResolver))
        mounted = engine.navigate("/")
        assert isinstance(mounted.page, IndexPage)
        assert engine.mounted is mounted
        assert mounted.key == "index{}"

    def test_equal_keys_reuse_instance(self) -> None:
        CountingPage.created = 0
        engine = _engine(("/all", CountingPage, "all", RouteResolver))
        first = engine.navigate("/all").page
        second = engine.navigate("/all").page
        assert first is second
        assert CountingPage.created == 1

    def test_reuse_keeps_page_state(self) -> None:
        engine = _engine(("/all", CountingPage, "all", RouteResolver))
        engine.navigate("/all")
        state = engine.context.state.current
        engine.navigate("/all")
        assert engine.context.state.current is state

    def test_different_keys_remount(self) -> None:
        CountingPage.created = 0
        engine = _engine(("/all", CountingPage, "all", RouteResolver))
        first = engine.navigate("/all?sort=top").page
        second = engine.navigate("/all?sort=new").page
        assert first is not second
        assert CountingPage.created == 2

    def test_remount_swaps_state(self) -> None:
        engine = _engine(
            ("/", IndexPage, "index", RouteResolver),
            ("/tags", TagsPage, "tags", RouteResolver),
        )
        engine.navigate("/")
        before = engine.context.state.current
        engine.navigate("/tags")
        current = engine.context.state.current
        assert engine.context.state.previous is before
        assert current is not None
        assert current.matches(TagsPage, {"routeName": "tags"})

    def test_query_args_reach_page(self) -> None:
        engine = _engine(("/all", CountingPage, "all", RouteResolver))
        mounted = engine.navigate("/all?sort=top")
        assert mounted.page.attrs == {"sort": "top", "routeName": "all"}
        assert mounted.html == "<p>top</p>"

    def test_path_params_win_over_query(self) -> None:
        engine = _engine(("/u/{username}", CountingPage, "user", RouteResolver))
        mounted = engine.navigate("/u/toby?username=evil")
        assert mounted.page.attrs["username"] == "toby"

    def test_typed_params_reach_page_converted(self) -> None:
        engine = _engine(("/all/{page:int}", CountingPage, "all.page", RouteResolver))
        mounted = engine.navigate("/all/2")
        assert mounted.page.attrs["page"] == 2
        assert mounted.key == 'all.page{"page":2}'

    def test_reuse_updates_attrs(self) -> None:
        engine = _engine(
            ("/d/{id}/{near}", DiscussionPage, "discussion.near", DiscussionPageResolver),
        )
        page = engine.navigate("/d/42-hello/3").page
        engine.navigate("/d/42-hello/8")
        assert page.attrs["near"] == "8"


class TestFailedMount:
    def _engine(self, failing: type) -> RenderEngine:
        return _engine(
            ("/a", RemovablePage, "a", RouteResolver),
            ("/b", failing, "b", RouteResolver),
        )

    def test_failing_constructor_keeps_old_page(self) -> None:
        engine = self._engine(BrokenConstructorPage)
        first = engine.navigate("/a")
        with pytest.raises(RuntimeError):
            engine.navigate("/b")
        assert engine.mounted is first
        assert first.page.removed == 0
        assert engine.context.document.root.has_class("App--a")
        assert engine.navigate("/a").page is first.page

    def test_failing_init_drops_old_page(self) -> None:
        engine = self._engine(BrokenInitPage)
        first = engine.navigate("/a")
        with pytest.raises(RuntimeError):
            engine.navigate("/b")
        assert engine.mounted is None
        assert first.page.removed == 1
        again = engine.navigate("/a")
        assert again.page is not first.page
        assert engine.context.state.current is again.page.state


class TestRender:
    def test_html_committed(self) -> None:
        engine = _engine(("/", IndexPage, "index", RouteResolver))
        engine.navigate("/")
        assert engine.context.document.content == "<h1>All Discussions</h1>"

    def test_body_class_replaced_on_navigation(self) -> None:
        engine = _engine(
            ("/", IndexPage, "index", RouteResolver),
            ("/tags", TagsPage, "tags", RouteResolver),
        )
        engine.navigate("/")
        assert engine.context.document.root.has_class("App--index")
        engine.navigate("/tags")
        assert engine.context.document.root.has_class("App--tags")
        assert not engine.context.document.root.has_class("App--index")

    def test_redraw_reapplies_body_class(self) -> None:
        engine = _engine(("/", IndexPage, "index", RouteResolver))
        engine.navigate("/")
        engine.context.document.root.set_extension_class("")
        engine.redraw()
        assert engine.context.document.root.has_class("App--index")

    def test_redraw_before_navigation(self) -> None:
        engine = _engine(("/", IndexPage, "index", RouteResolver))
        assert engine.redraw() is None

    def test_page_without_template_renders_empty(self) -> None:
        engine = _engine(("/stay", StayPutPage, "stay", RouteResolver))
        assert engine.navigate("/stay").html == ""

    def test_reuse_does_not_scroll_to_top(self) -> None:
        engine = _engine(("/all", CountingPage, "all", RouteResolver))
        engine.navigate("/all")
        engine.context.document.viewport.scroll_to(400)
        engine.navigate("/all")
        assert engine.context.document.viewport.scroll_y == 400

    def test_remount_scrolls_to_top(self) -> None:
        engine = _engine(
            ("/", IndexPage, "index", RouteResolver),
            ("/tags", TagsPage, "tags", RouteResolver),
        )
        engine.navigate("/")
        engine.context.document.viewport.scroll_to(400)
        engine.navigate("/tags")
        assert engine.context.document.viewport.scroll_y == 0


class TestSkip:
    def test_skipped_route_falls_through(self) -> None:
        engine = _engine(
            ("/admin", IndexPage, "admin", partial(GatedResolver, allow=lambda: False)),
            ("/admin", TagsPage, "admin.denied", RouteResolver),
        )
        mounted = engine.navigate("/admin")
        assert isinstance(mounted.page, TagsPage)
        assert mounted.route.name == "admin.denied"

    def test_all_skipped_is_not_found(self) -> None:
        engine = _engine(
            ("/admin", IndexPage, "admin", partial(GatedResolver, allow=lambda: False)),
        )
        with pytest.raises(NotFound):
            engine.navigate("/admin")

    def test_no_route_is_not_found(self) -> None:
        engine = _engine(("/", IndexPage, "index", RouteResolver))
        with pytest.raises(NotFound) as exc_info:
            engine.navigate("/missing")
        assert exc_info.value.path == "/missing"

    def test_not_found_leaves_mount_untouched(self) -> None:
        engine = _engine(("/", IndexPage, "index", RouteResolver))
        mounted = engine.navigate("/")
        with pytest.raises(NotFound):
            engine.navigate("/missing")
        assert engine.mounted is mounted


class TestPostRender:
    def test_post_render_after_commit(self) -> None:
        seen: list[str] = []

        class Probe(RouteResolver):
            def on_post_render(self, mounted: Any) -> None:
                seen.append(mounted.html)

        engine = _engine(("/", IndexPage, "index", Probe))
        engine.navigate("/")
        assert seen == ["<h1>All Discussions</h1>"]

    def test_post_render_on_reuse(self) -> None:
        calls: list[str] = []

        class Probe(RouteResolver):
            def on_post_render(self, mounted: Any) -> None:
                calls.append(mounted.key)

        engine = _engine(("/", IndexPage, "index", Probe))
        engine.navigate("/")
        engine.navigate("/")
        assert calls == ["index{}", "index{}"]

    def test_pending_tasks_run_before_next_navigation(self) -> None:
        order: list[str] = []

        class Probe(RouteResolver):
            def on_post_render(self, mounted: Any) -> None:
                self.context.tasks.defer(lambda: order.append(f"task:{mounted.key}"))

        engine = _engine(
            ("/", IndexPage, "index", Probe),
            ("/tags", TagsPage, "tags", RouteResolver),
        )
        engine.navigate("/")
        assert order == []
        engine.navigate("/tags")
        assert order == ["task:index{}"]


class TestDiscussionScenario:
    def _engine(self) -> RenderEngine:
        return _engine(
            ("/d/{id}", DiscussionPage, "discussion", DiscussionPageResolver),
            ("/d/{id}/{near}", DiscussionPage, "discussion.near", DiscussionPageResolver),
        )

    def test_jump_within_thread_reuses_and_scrolls(self) -> None:
        engine = self._engine()
        first = engine.navigate("/d/42-my-title/7")
        assert first.page.near == 7
        assert not engine.context.scroll_target.pending

        second = engine.navigate("/d/42-my-title/99")
        assert second.key == first.key
        assert second.page is first.page
        assert engine.context.scroll_target.peek() == 99

        assert engine.flush() == 1
        assert first.page.near == 99
        assert not engine.context.scroll_target.pending
        assert engine.flush() == 0

    def test_other_thread_remounts(self) -> None:
        engine = self._engine()
        first = engine.navigate("/d/42-my-title/7")
        second = engine.navigate("/d/43-other/7")
        assert second.page is not first.page
        assert not engine.context.scroll_target.pending

    def test_plain_and_near_routes_share_page(self) -> None:
        engine = self._engine()
        first = engine.navigate("/d/42-my-title")
        second = engine.navigate("/d/42-my-title/12")
        assert second.page is first.page
        engine.flush()
        assert first.page.near == 12

    def test_discussion_page_declarations(self) -> None:
        engine = self._engine()
        engine.navigate("/d/42-my-title/7")
        document = engine.context.document
        assert document.root.has_class("App--discussion")
        assert document.viewport.scroll_restoration == "manual"
        assert 'data-id="42"' in document.content
