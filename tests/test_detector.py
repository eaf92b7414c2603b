"""
Tests for completion-signal racing.

The first group races plain asyncio signals; the second uses a real browser
page where a click either opens a new tab or navigates in place.
"""

import asyncio

import pytest

from anyteam_e2e.core.detector import (
    CompletionDetector,
    CompletionResult,
    Signal,
    element_visible,
    new_page,
    page_closed,
    url_host_contains,
    url_matches,
)
from anyteam_e2e.exceptions import CompletionTimeout, InvalidConfiguration

from conftest import html


def after(name, seconds, value=None):
    async def wait(timeout):
        await asyncio.sleep(seconds)
        return value if value is not None else name
    return Signal(name, wait)


def failing(name, seconds=0):
    async def wait(timeout):
        await asyncio.sleep(seconds)
        raise RuntimeError(f"{name} broke")
    return Signal(name, wait)


def never(name):
    async def wait(timeout):
        await asyncio.sleep(3600)
    return Signal(name, wait)


@pytest.fixture
def detector():
    return CompletionDetector(timeout=500, fallback_probe=100)


class TestRace:
    @pytest.mark.asyncio
    async def test_fastest_signal_wins(self, detector):
        result = await detector.race([after("slow", 0.2), after("fast", 0.01)])

        assert result == CompletionResult("fast", "fast")

    @pytest.mark.asyncio
    async def test_declaration_order_breaks_ties(self, detector):
        result = await detector.race([after("first", 0), after("second", 0)])

        assert result.signal == "first"

    @pytest.mark.asyncio
    async def test_failing_signal_does_not_win(self, detector):
        result = await detector.race([failing("broken"), after("ok", 0.02)])

        assert result.signal == "ok"

    @pytest.mark.asyncio
    async def test_losers_are_cancelled(self, detector):
        loser_cancelled = asyncio.Event()

        async def slow(timeout):
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                loser_cancelled.set()
                raise

        await detector.race([after("winner", 0), Signal("loser", slow)])

        assert loser_cancelled.is_set()

    @pytest.mark.asyncio
    async def test_signals_are_armed_before_trigger(self, detector):
        events = []
        fired = asyncio.Event()

        async def armed(timeout):
            events.append("armed")
            await fired.wait()
            return "done"

        async def trigger():
            events.append("trigger")
            fired.set()

        result = await detector.race([Signal("done", armed)], trigger=trigger)

        assert events == ["armed", "trigger"]
        assert result.value == "done"

    @pytest.mark.asyncio
    async def test_timeout_names_all_signals(self, detector):
        with pytest.raises(CompletionTimeout) as exc_info:
            await detector.race([never("url"), never("new_page")], timeout=50)

        assert exc_info.value.signals == ["url", "new_page"]
        assert exc_info.value.timeout_ms == 50

    @pytest.mark.asyncio
    async def test_all_signals_failing_times_out(self, detector):
        with pytest.raises(CompletionTimeout):
            await detector.race([failing("a"), failing("b")], timeout=50)

    @pytest.mark.asyncio
    async def test_fallback_is_probed_after_timeout(self, detector):
        result = await detector.race(
            [never("url")], timeout=20, fallback=after("container", 0))

        assert result.signal == "container"

    @pytest.mark.asyncio
    async def test_failed_fallback_still_times_out(self, detector):
        with pytest.raises(CompletionTimeout):
            await detector.race([never("url")], timeout=20, fallback=failing("container"))

    @pytest.mark.asyncio
    async def test_requires_signals(self, detector):
        with pytest.raises(InvalidConfiguration):
            await detector.race([])


TAB_OPENER = html("""
<button id="open" onclick="window.open('/meet', '_blank')">Open</button>
<button id="go" onclick="location.href='/insights'">Go</button>
<button id="show" onclick="document.getElementById('panel').style.display='block'">Show</button>
<div id="panel" style="display:none">Notifications</div>
""")


@pytest.mark.browser
class TestPageSignals:
    @pytest.fixture(autouse=True)
    def _sites(self, sites):
        sites.add("https://app.anyteam.com/home", TAB_OPENER)
        sites.add("https://app.anyteam.com/meet", html("Meet"))
        sites.add("https://app.anyteam.com/insights", html("Insights"))
        sites.add("https://accounts.google.com/signin", html("Sign in"))

    @pytest.mark.asyncio
    async def test_new_tab_beats_url_change(self, open_page, context, detector):
        page = await open_page("https://app.anyteam.com/home")

        result = await detector.race(
            [url_matches(page, "**/insights", "navigated"), new_page(context)],
            timeout=5000,
            trigger=lambda: page.click("#open"),
        )

        assert result.signal == "new_page"
        assert result.value.url.endswith("/meet") or result.value.url == "about:blank"

    @pytest.mark.asyncio
    async def test_url_change_beats_new_tab(self, open_page, context, detector):
        page = await open_page("https://app.anyteam.com/home")

        result = await detector.race(
            [url_matches(page, "**/insights", "navigated"), new_page(context)],
            timeout=5000,
            trigger=lambda: page.click("#go"),
        )

        assert result.signal == "navigated"
        assert result.value.endswith("/insights")

    @pytest.mark.asyncio
    async def test_element_visible(self, open_page, detector):
        page = await open_page("https://app.anyteam.com/home")

        result = await detector.race(
            [element_visible(page.locator("#panel"), "panel")],
            timeout=5000,
            trigger=lambda: page.click("#show"),
        )

        assert result.signal == "panel"

    @pytest.mark.asyncio
    async def test_host_already_matching_fires_at_once(self, open_page, detector):
        page = await open_page("https://app.anyteam.com/home")

        result = await detector.race([url_host_contains(page, "anyteam.com", "app")])

        assert result.signal == "app"

    @pytest.mark.asyncio
    async def test_page_closed(self, context, detector):
        popup = await context.new_page()

        result = await detector.race([page_closed(popup)], timeout=5000,
                                     trigger=popup.close)

        assert result.signal == "page_closed"
        assert popup.is_closed()
