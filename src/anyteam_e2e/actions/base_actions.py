"""
Base class for action classes.

An action class wraps one page object. It never holds a page itself: the page
object is rebuilt from the session's active page on every access, so actions
keep working after a tab hand-off.
"""

import logging
from typing import Generic, Optional, Type, TypeVar, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from ..config import Settings, get_settings
from ..core.detector import CompletionDetector
from ..core.executor import InteractionExecutor
from ..core.resolver import Candidates, ElementResolver, ResolvedElement
from ..core.session import SessionBridge
from ..pages.base_page import BasePage

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BasePage)


class BaseActions(Generic[P]):
    """Shared plumbing: session, settings and the three core services."""

    page_class: Type[P]

    def __init__(self, page_or_session: Union[Page, SessionBridge],
                 settings: Optional[Settings] = None):
        if isinstance(page_or_session, SessionBridge):
            self.session = page_or_session
        else:
            self.session = SessionBridge(page_or_session)
        self.settings = settings or get_settings()
        timeouts = self.settings.timeouts
        self.resolver = ElementResolver(timeouts.candidate, timeouts.overall)
        self.executor = InteractionExecutor(timeouts.action, timeouts.typing_delay)
        self.detector = CompletionDetector(timeouts.completion)

    @property
    def page(self) -> Page:
        return self.session.current()

    @property
    def page_object(self) -> P:
        return self.page_class(self.page, self.settings, self.resolver)

    async def resolve(self, candidates: Candidates,
                      timeout: Optional[float] = None,
                      match_text: Optional[str] = None) -> ResolvedElement:
        return await self.resolver.resolve(
            self.page, candidates, overall_timeout=timeout, match_text=match_text)

    async def try_resolve(self, candidates: Candidates,
                          timeout: Optional[float] = None,
                          match_text: Optional[str] = None) -> Optional[ResolvedElement]:
        return await self.resolver.try_resolve(
            self.page, candidates, per_candidate_timeout=timeout,
            overall_timeout=timeout, match_text=match_text)

    async def click(self, candidates: Candidates, timeout: Optional[float] = None,
                    force: bool = False) -> ResolvedElement:
        """Resolve ``candidates`` and click the winner."""
        element = await self.resolve(candidates, timeout)
        await self.executor.click(element, force=force)
        return element

    async def click_if_visible(self, candidates: Candidates,
                               timeout: Optional[float] = None) -> bool:
        """Click conditional UI; returns False when it never showed up."""
        element = await self.try_resolve(candidates, timeout)
        if element is None:
            logger.debug("'%s' not shown, nothing to click", candidates.name)
            return False
        await self.executor.click(element)
        return True

    async def fill(self, candidates: Candidates, value: str,
                   timeout: Optional[float] = None) -> ResolvedElement:
        element = await self.resolve(candidates, timeout)
        await self.executor.fill(element, value)
        return element

    async def type_text(self, candidates: Candidates, value: str,
                        timeout: Optional[float] = None) -> ResolvedElement:
        element = await self.resolve(candidates, timeout)
        await self.executor.type_text(element, value)
        return element

    async def is_visible(self, candidates: Candidates,
                         timeout: Optional[float] = None) -> bool:
        return await self.resolver.is_visible(self.page, candidates, timeout)

    async def text_of(self, candidates: Candidates,
                      timeout: Optional[float] = None) -> Optional[str]:
        """Text content of the first visible candidate, or None."""
        element = await self.try_resolve(candidates, timeout)
        if element is None:
            return None
        try:
            text = await element.locator.text_content(
                timeout=self.settings.timeouts.action)
        except PlaywrightError:
            return None
        return text.strip() if text else text
