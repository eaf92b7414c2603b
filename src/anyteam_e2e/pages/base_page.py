"""
Base Page Object class with common functionality for all pages.

Page objects only describe where things are: each UI element is a
``Candidates`` list of selectors in priority order. Interaction goes through
the action classes.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from ..config import Settings, get_settings
from ..core.resolver import Candidates, ElementResolver

logger = logging.getLogger(__name__)

APP_DOMAIN = "anyteam.com"

LOADING_SELECTOR = (
    '[class*="loading"], [class*="spinner"], [class*="loader"], '
    '[data-testid*="loading"]'
)

_NO_VISIBLE_LOADER_JS = """
(selector) => !Array.from(document.querySelectorAll(selector)).some((el) => {
    const style = getComputedStyle(el);
    return style.display !== "none" && style.visibility !== "hidden"
        && style.opacity !== "0";
})
"""


def is_app_host(url: str, domain: str = APP_DOMAIN) -> bool:
    """True when ``url`` points at ``domain`` or one of its subdomains."""
    host = urlparse(url).hostname or ""
    return host == domain or host.endswith(f".{domain}")


class BasePage:
    """Base class for all Page Objects with common functionality."""

    # Home page indicators, any of which means the app shell rendered
    greeting = Candidates.of(
        "home greeting",
        "text=/Good (Morning|Afternoon|Evening)/i",
    )
    sidebar = Candidates.of(
        "sidebar",
        "[data-sidebar]",
        'button[data-sidebar="menu-button"]',
    )
    ask_ai = Candidates.of("Ask AI", "text=/Ask AI/i")

    def __init__(self, page: Page, settings: Optional[Settings] = None,
                 resolver: Optional[ElementResolver] = None):
        self.page = page
        self.settings = settings or get_settings()
        self.resolver = resolver or ElementResolver(
            self.settings.timeouts.candidate, self.settings.timeouts.overall)

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    # Common navigation methods
    async def navigate_to(self, path: str = "") -> None:
        """Navigate to a path of the Anyteam app, or to an absolute URL."""
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url
        await self.page.goto(url, timeout=self.settings.timeouts.navigation)
        await self.wait_for_page_load()

    async def wait_for_page_load(self, timeout: Optional[int] = None) -> None:
        """Wait for network idle, settling for DOM content on busy pages."""
        timeout = timeout or self.settings.timeouts.action
        try:
            await self.page.wait_for_load_state("networkidle", timeout=timeout)
        except PlaywrightError:
            logger.debug("Network never went idle on %s", self.page.url)
            await self.page.wait_for_load_state("domcontentloaded", timeout=timeout)

    async def wait_for_loading_complete(self, timeout: Optional[int] = None) -> bool:
        """
        Wait until no loading indicator is rendered.

        Returns False, after logging, if something still spins when the
        timeout runs out.
        """
        timeout = timeout or self.settings.timeouts.navigation
        try:
            await self.page.wait_for_function(
                _NO_VISIBLE_LOADER_JS, arg=LOADING_SELECTOR, timeout=timeout)
        except PlaywrightError:
            logger.warning("Loading indicator still visible on %s after %dms",
                           self.page.url, timeout)
            return False
        return True

    async def is_visible(self, candidates: Candidates,
                         timeout: Optional[int] = None) -> bool:
        return await self.resolver.is_visible(self.page, candidates, timeout)

    async def is_home_page_displayed(self, timeout: Optional[int] = None) -> bool:
        """Check for any of the home page indicators."""
        for indicator in (self.greeting, self.sidebar, self.ask_ai):
            if await self.is_visible(indicator, timeout):
                return True
        return False

    def is_on_path(self, *fragments: str) -> bool:
        return any(fragment in self.page.url for fragment in fragments)
