"""
Tracking of the single active page across tabs and popups.

Google sign-in may run in a popup, the OAuth redirect may land the app in a
different tab, and joining a meeting opens Google Meet in a new tab. Steps
never hold on to a page themselves; they ask the session for the current one.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import BrowserContext, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..exceptions import CompletionTimeout, SessionLostError

logger = logging.getLogger(__name__)


class SessionBridge:
    """Owns the active page of a flow."""

    def __init__(self, page: Page) -> None:
        self._active = page
        self._history: list[Page] = [page]

    @property
    def context(self) -> BrowserContext:
        return self._active.context

    def current(self) -> Page:
        """
        Return the active page.

        If the active page has been closed, ownership falls back to the most
        recently owned page that is still open.

        Raises:
            SessionLostError: If every owned page has been closed.
        """
        if not self._active.is_closed():
            return self._active
        for page in reversed(self._history):
            if not page.is_closed():
                logger.info("Active page closed, falling back to %s", page.url)
                self._active = page
                return page
        raise SessionLostError("All pages owned by the session are closed")

    def activate(self, page: Page) -> Page:
        """Make ``page`` the active page."""
        if page is not self._active:
            logger.debug("Active page -> %s", page.url)
            self._active = page
            if page in self._history:
                self._history.remove(page)
            self._history.append(page)
        return page

    def on_new_page_detected(self, page: Page, expected: bool) -> Page:
        """
        Handle a page that appeared during a step.

        Ownership moves only when the step expected a new tab.
        """
        if not expected:
            logger.warning("Ignoring unexpected new page %s", page.url)
            return self.current()
        return self.activate(page)

    def find_page(self, predicate: Callable[[Page], bool]) -> Optional[Page]:
        """Return the first open page in the context satisfying ``predicate``."""
        for page in self.context.pages:
            if not page.is_closed() and predicate(page):
                return page
        return None

    async def expect_new_page(
        self,
        trigger: Callable[[], Awaitable[Any]],
        timeout: float = 15000,
    ) -> Page:
        """
        Run ``trigger`` and take ownership of the tab it opens.

        Raises:
            CompletionTimeout: If no page opened within ``timeout`` ms.
        """
        try:
            async with self.context.expect_page(timeout=timeout) as page_info:
                await trigger()
            page = await page_info.value
        except PlaywrightTimeoutError as e:
            raise CompletionTimeout(["new_page"], timeout) from e
        await page.wait_for_load_state("domcontentloaded")
        return self.on_new_page_detected(page, expected=True)
