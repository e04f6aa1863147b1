"""Tests for warble.interceptor: link click and popstate interception."""

from typing import Any

import pytest

from warble.interceptor import NavigationInterceptor, emit_popstate
from warble.testing import Browser, Element, MouseEvent, PopStateEvent


class Recorder:
    def __init__(self) -> None:
        self.events: list[Any] = []

    async def __call__(self, event: Any) -> None:
        self.events.append(event)


def _link(browser: Browser, href: str | None, **attributes: str) -> Element:
    attrs = dict(attributes)
    if href is not None:
        attrs["href"] = href
    link = browser.document.create_element("a", attrs)
    browser.document.body.append(link)
    return link


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def interceptor(browser: Browser, recorder: Recorder) -> NavigationInterceptor:
    return NavigationInterceptor(browser.window, recorder)


class TestInstall:
    @pytest.mark.anyio
    async def test_runs_initial_pass(self, interceptor: NavigationInterceptor, recorder: Recorder) -> None:
        await interceptor.install()
        assert recorder.events == [None]
        assert interceptor.installed

    @pytest.mark.anyio
    async def test_idempotent(self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser) -> None:
        handle = await interceptor.install()
        again = await interceptor.install()

        assert again is handle
        assert recorder.events == [None]
        assert browser.document.body.listener_count("click") == 1
        assert browser.window.listener_count("popstate") == 1

    @pytest.mark.anyio
    async def test_close_removes_listeners(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        handle = await interceptor.install()
        handle.close()

        assert handle.closed
        assert not interceptor.installed
        assert browser.document.body.listener_count("click") == 0

        event = await browser.click(_link(browser, "/users/42"))
        assert not event.default_prevented
        assert browser.location == "http://localhost/"
        assert recorder.events == [None]

    @pytest.mark.anyio
    async def test_reinstall_after_close(self, interceptor: NavigationInterceptor, recorder: Recorder) -> None:
        first = await interceptor.install()
        first.close()
        second = await interceptor.install()

        assert second is not first
        assert recorder.events == [None, None]


class TestClicks:
    @pytest.mark.anyio
    async def test_same_origin_link_is_intercepted(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        event = await browser.click(_link(browser, "/users/42"))

        assert event.default_prevented
        assert browser.location == "http://localhost/users/42"
        assert browser.window.history.length == 2
        assert recorder.events == [None, event]

    @pytest.mark.anyio
    async def test_click_inside_link(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        link = _link(browser, "/inner")
        label = browser.document.create_element("span")
        link.append(label)

        event = await browser.click(label)
        assert event.default_prevented
        assert browser.location == "http://localhost/inner"

    @pytest.mark.anyio
    async def test_relative_href(self, interceptor: NavigationInterceptor, browser: Browser) -> None:
        await interceptor.install()
        await browser.click(_link(browser, "docs/intro"))
        assert browser.location == "http://localhost/docs/intro"

    @pytest.mark.anyio
    async def test_absolute_same_origin_href(self, interceptor: NavigationInterceptor, browser: Browser) -> None:
        await interceptor.install()
        event = await browser.click(_link(browser, "http://localhost/abs"))
        assert event.default_prevented
        assert browser.location == "http://localhost/abs"

    @pytest.mark.anyio
    async def test_link_to_current_location(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        event = await browser.click(_link(browser, "/"))

        assert event.default_prevented
        assert browser.window.history.length == 1
        assert recorder.events == [None]

    @pytest.mark.anyio
    async def test_one_pass_per_click_and_observers_see_popstate(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        observed: list[Any] = []
        browser.window.add_event_listener("popstate", observed.append)
        await interceptor.install()

        await browser.click(_link(browser, "/a"))

        assert len(observed) == 1
        assert isinstance(observed[0], PopStateEvent)
        assert len(recorder.events) == 2
        assert isinstance(recorder.events[-1], MouseEvent)

    @pytest.mark.anyio
    @pytest.mark.parametrize("modifier", ["meta_key", "ctrl_key", "shift_key", "alt_key"])
    async def test_modifier_keys_ignored(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser, modifier: str
    ) -> None:
        await interceptor.install()
        event = await browser.click(_link(browser, "/a"), **{modifier: True})

        assert not event.default_prevented
        assert browser.location == "http://localhost/"
        assert recorder.events == [None]

    @pytest.mark.anyio
    async def test_non_primary_button_ignored(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        event = await browser.click(_link(browser, "/a"), button=1)
        assert not event.default_prevented
        assert recorder.events == [None]

    @pytest.mark.anyio
    async def test_already_handled_ignored(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        link = _link(browser, "/a")
        link.add_event_listener("click", lambda e: e.prevent_default())

        await browser.click(link)
        assert browser.location == "http://localhost/"
        assert recorder.events == [None]

    @pytest.mark.anyio
    async def test_click_outside_links_ignored(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        div = browser.document.create_element("div")
        browser.document.body.append(div)

        event = await browser.click(div)
        assert not event.default_prevented
        assert recorder.events == [None]

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("href", "attributes"),
        [
            ("/a", {"target": "_blank"}),
            ("/a", {"download": ""}),
            ("/a", {"rel": "external"}),
            ("/a", {"rel": "noopener external"}),
            (None, {}),
            ("", {}),
            ("mailto:someone@example.com", {}),
            ("javascript:void(0)", {}),
            ("http://example.com/a", {}),
            ("//example.com/a", {}),
            ("https://localhost/a", {}),
            ("http://localhost:8080/a", {}),
        ],
    )
    async def test_links_left_to_the_host(
        self,
        interceptor: NavigationInterceptor,
        recorder: Recorder,
        browser: Browser,
        href: str | None,
        attributes: dict[str, str],
    ) -> None:
        await interceptor.install()
        event = await browser.click(_link(browser, href, **attributes))

        assert not event.default_prevented
        assert browser.location == "http://localhost/"
        assert recorder.events == [None]


class TestPopstate:
    @pytest.mark.anyio
    async def test_back_navigation(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        await browser.click(_link(browser, "/a"))
        await browser.back()

        assert browser.location == "http://localhost/"
        assert isinstance(recorder.events[-1], PopStateEvent)
        assert len(recorder.events) == 3

    @pytest.mark.anyio
    async def test_emit_popstate_helper(
        self, interceptor: NavigationInterceptor, recorder: Recorder, browser: Browser
    ) -> None:
        await interceptor.install()
        browser.window.history.push_state({"step": 2}, "", "/wizard/2")
        assert recorder.events == [None]

        await emit_popstate(browser.window, {"step": 2})
        assert browser.location == "http://localhost/wizard/2"
        assert recorder.events[-1].state == {"step": 2}
