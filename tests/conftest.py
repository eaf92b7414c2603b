"""
Pytest fixtures for the anyteam-e2e offline tests.

Two kinds of doubles are provided:

- In-memory fakes (``FakePage``, ``FakeLocator``, ``FakeContext``) that stand
  in for Playwright objects in the core unit tests.
- A real Chromium browser whose context serves hand-written Google and
  Anyteam pages through ``BrowserContext.route``. Tests using the ``browser``
  fixture are skipped when Chromium is not installed.
"""

import asyncio
import os
import sys
from typing import AsyncGenerator, Callable, Dict, Optional
from urllib.parse import urlparse

import pytest
import pytest_asyncio

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from playwright.async_api import Browser, BrowserContext, Page, Route, async_playwright  # noqa: E402
from playwright.async_api import Error as PlaywrightError  # noqa: E402
from playwright.async_api import TimeoutError as PlaywrightTimeoutError  # noqa: E402

from anyteam_e2e.browser import new_context  # noqa: E402
from anyteam_e2e.config import (  # noqa: E402
    AccountSettings,
    BrowserSettings,
    Settings,
    TimeoutSettings,
    get_settings,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "browser: needs a local Chromium")
    config.addinivalue_line("markers", "live: runs against the real Anyteam app")


# =============================================================================
# Settings
# =============================================================================

def make_settings(results_dir, **timeouts) -> Settings:
    """Settings with short timeouts for tests, independent of the environment."""
    values = dict(
        action=2000,
        navigation=5000,
        candidate=1000,
        overall=5000,
        completion=5000,
        redirect=5000,
        flow=30000,
        settle=0,
        typing_delay=0,
    )
    values.update(timeouts)
    return Settings(
        base_url="https://app.anyteam.com",
        results_dir=results_dir,
        auth_state_path=results_dir / "auth.json",
        browser=BrowserSettings(name="chromium", headless=True),
        timeouts=TimeoutSettings(**values),
        account=AccountSettings(email="user@test.com", password="secret", name="Test User"),
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def clear_settings_cache():
    """Clear the cached settings before and after a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# In-memory Playwright fakes
# =============================================================================

class FakeKeyboard:
    def __init__(self):
        self.typed = []
        self.pressed = []

    async def type(self, text, delay=0):
        self.typed.append(text)

    async def press(self, key):
        self.pressed.append(key)


class FakeLocator:
    """
    Locator double.

    ``fail_gentle`` / ``fail_forced`` make the normal or the forced attempt of
    any interaction raise a Playwright error.
    """

    def __init__(self, selector: str, page: "FakePage", visible: bool = True,
                 text: str = "", fail_gentle: bool = False, fail_forced: bool = False,
                 wait_delay: float = 0):
        self.selector = selector
        self.page = page
        self.visible = visible
        self.text = text
        self.fail_gentle = fail_gentle
        self.fail_forced = fail_forced
        self.wait_delay = wait_delay
        self.value = ""
        self.calls = []

    def __repr__(self):
        return f"<FakeLocator {self.selector}>"

    @property
    def first(self):
        return self

    async def wait_for(self, state="visible", timeout=None):
        self.page.probed.append(self.selector)
        if self.wait_delay:
            await asyncio.sleep(self.wait_delay)
        if not self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    async def text_content(self, timeout=None):
        return self.text

    async def is_disabled(self):
        return False

    async def scroll_into_view_if_needed(self, timeout=None):
        self.calls.append(("scroll", False))

    def _act(self, name: str, forced: bool) -> None:
        self.calls.append((name, forced))
        if self.fail_forced if forced else self.fail_gentle:
            raise PlaywrightError(f"{name} intercepted by overlay")

    async def click(self, force=False, timeout=None, button="left"):
        self._act("right_click" if button == "right" else "click", force)

    async def clear(self, force=False, timeout=None):
        self._act("clear", force)
        self.value = ""

    async def fill(self, value, force=False, timeout=None):
        self._act("fill", force)
        self.value = value

    async def focus(self, timeout=None):
        self._act("focus", True)

    async def press_sequentially(self, value, delay=0, timeout=None):
        self._act("press_sequentially", False)
        self.value += value


class FakePage:
    """Page double; unknown selectors resolve to invisible locators."""

    def __init__(self, url: str = "about:blank", context: Optional["FakeContext"] = None):
        self.url = url
        self.context = context
        self.keyboard = FakeKeyboard()
        self.elements: Dict[str, FakeLocator] = {}
        self.probed = []
        self.closed = False

    def add(self, selector: str, **kwargs) -> FakeLocator:
        locator = FakeLocator(selector, self, **kwargs)
        self.elements[selector] = locator
        return locator

    def locator(self, selector: str) -> FakeLocator:
        return self.elements.get(selector) or FakeLocator(selector, self, visible=False)

    def is_closed(self) -> bool:
        return self.closed


class FakeContext:
    def __init__(self):
        self.pages = []

    def new_page(self, url: str = "about:blank") -> FakePage:
        page = FakePage(url, self)
        self.pages.append(page)
        return page


@pytest.fixture
def fake_context() -> FakeContext:
    return FakeContext()


@pytest.fixture
def fake_page(fake_context) -> FakePage:
    return fake_context.new_page("https://app.anyteam.com/home")


# =============================================================================
# Browser-backed fixtures with routed fake sites
# =============================================================================

def html(body: str, title: str = "Test") -> str:
    return f"<!DOCTYPE html><html><head><title>{title}</title></head><body>{body}</body></html>"


class FakeSites:
    """Maps ``host + path`` to HTML served for any request in the context."""

    def __init__(self):
        self.pages: Dict[str, str] = {}
        self.requests = []

    def add(self, url: str, body: str) -> None:
        parsed = urlparse(url)
        self.pages[f"{parsed.hostname}{parsed.path}"] = body

    async def handle(self, route: Route) -> None:
        parsed = urlparse(route.request.url)
        self.requests.append(route.request.url)
        body = self.pages.get(f"{parsed.hostname}{parsed.path}")
        if body is None:
            await route.fulfill(status=404, content_type="text/plain", body="not found")
        else:
            await route.fulfill(status=200, content_type="text/html", body=body)


@pytest_asyncio.fixture
async def browser() -> AsyncGenerator[Browser, None]:
    """Launch headless Chromium, or skip when it is not installed."""
    async with async_playwright() as pw:
        try:
            browser = await pw.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium not available: {(str(e).splitlines() or [''])[0]}")
        yield browser
        await browser.close()


@pytest.fixture
def sites() -> FakeSites:
    return FakeSites()


@pytest_asyncio.fixture
async def context(browser: Browser, settings: Settings,
                  sites: FakeSites) -> AsyncGenerator[BrowserContext, None]:
    """Context whose every request is answered by ``sites``."""
    context = await new_context(browser, settings)
    await context.route("**/*", sites.handle)
    yield context
    await context.close()


@pytest_asyncio.fixture
async def page(context: BrowserContext) -> Page:
    return await context.new_page()


@pytest.fixture
def open_page(page: Page) -> Callable:
    """Navigate the test page to a routed URL."""

    async def _open(url: str) -> Page:
        await page.goto(url, wait_until="domcontentloaded")
        return page

    return _open


# =============================================================================
# Fake Google sign-in and Anyteam pages
# =============================================================================

APP_ONBOARDING_URL = "https://app.anyteam.com/onboarding?jwt=test-jwt&userId=42"

LOGIN_HTML = html("""
<img alt="anyteam-logo" width="40" height="40">
<h6>Use business email to unlock more features</h6>
<button onclick="location.href='https://accounts.google.com/v3/signin/identifier?client=anyteam'">
  <img alt="logo-google" width="16" height="16"><p>Continue with Google</p>
</button>
<p>By continuing you accept the <span>terms of service</span> and <span>privacy policy</span></p>
""", title="Anyteam")

IDENTIFIER_HTML = html("""
<h1>Sign in</h1>
<input type="email" name="identifier" id="identifierId" aria-label="Email or phone">
<button jsname="LgbsSe" onclick="submitEmail()"><span jsname="V67aGc">Next</span></button>
<script>
function submitEmail() {
  const email = document.getElementById("identifierId").value;
  if (email) {
    location.href = "/v3/signin/challenge/pwd?email=" + encodeURIComponent(email);
  }
}
</script>
""", title="Sign in - Google Accounts")

PASSWORD_HTML = html("""
<h1>Welcome</h1>
<input type="password" name="Passwd" aria-label="Enter your password">
<div id="error" hidden>Wrong password</div>
<button jsname="LgbsSe" onclick="submitPassword()"><span jsname="V67aGc">Next</span></button>
<script>
function submitPassword() {
  if (document.querySelector("input[name=Passwd]").value === "secret") {
    location.href = "/signin/oauth/consent";
  } else {
    document.getElementById("error").hidden = false;
  }
}
</script>
""", title="Sign in - Google Accounts")

CONSENT_HTML = html("""
<h1>You're signing back in to Anyteam</h1>
<button jsname="LgbsSe" onclick="location.href='/signin/oauth/v2/consentsummary'">
  <span jsname="V67aGc" class="VfPpkd-vQzf8d">Continue</span>
</button>
""", title="Sign in - Google Accounts")

PERMISSIONS_HTML = html(f"""
<h1>Anyteam wants to access your Google Account</h1>
<button jsname="LgbsSe" onclick="location.href='{APP_ONBOARDING_URL}'">
  <span jsname="V67aGc" class="VfPpkd-vQzf8d">Allow</span>
</button>
""", title="Sign in - Google Accounts")

ONBOARDING_HTML = html("""
<p>Setting up your workspace</p>
<script>setTimeout(() => { location.href = "/home"; }, 1500);</script>
""", title="Anyteam")

HOME_HTML = html("""
<nav data-sidebar="sidebar"><button data-sidebar="menu-button">Menu</button></nav>
<h2>Good Morning, Test</h2>
<button>Ask AI</button>
""", title="Anyteam")


@pytest.fixture
def fake_google(sites: FakeSites) -> FakeSites:
    """Google sign-in (e-mail, password, consent, permissions) ending in the app."""
    sites.add("https://app.anyteam.com/onboarding/Login", LOGIN_HTML)
    sites.add("https://accounts.google.com/v3/signin/identifier", IDENTIFIER_HTML)
    sites.add("https://accounts.google.com/v3/signin/challenge/pwd", PASSWORD_HTML)
    sites.add("https://accounts.google.com/signin/oauth/consent", CONSENT_HTML)
    sites.add("https://accounts.google.com/signin/oauth/v2/consentsummary", PERMISSIONS_HTML)
    sites.add("https://app.anyteam.com/onboarding", ONBOARDING_HTML)
    sites.add("https://app.anyteam.com/home", HOME_HTML)
    return sites
