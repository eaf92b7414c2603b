"""
Element resolution from prioritized candidate selector lists.

Third-party UIs (Google sign-in, Google Calendar) ship minified, unstable
markup, so every element is described by several selectors ordered from most
to least specific. The resolver probes them one by one and hands back the
first that is visible.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Frame, Locator, Page

from ..exceptions import ElementNotFound, InvalidConfiguration

logger = logging.getLogger(__name__)

Selector = Union[str, Locator]
Scope = Union[Page, Frame, Locator]


def describe(selector: Selector) -> str:
    """Return a printable form of a selector for logs and errors."""
    if isinstance(selector, str):
        return selector
    return repr(selector)


@dataclass(frozen=True)
class Candidates:
    """Ordered, immutable list of selectors for one logical UI element."""

    name: str
    selectors: tuple[Selector, ...]

    @classmethod
    def of(cls, name: str, *selectors: Selector) -> "Candidates":
        return cls(name=name, selectors=tuple(selectors))

    def __len__(self) -> int:
        return len(self.selectors)

    def describe(self) -> list[str]:
        return [describe(s) for s in self.selectors]


@dataclass(frozen=True)
class ResolvedElement:
    """A visible element found by the resolver.

    Valid only until the next navigation of its page; resolve again after.
    """

    locator: Locator
    candidate: str
    index: int
    target: str

    @property
    def page(self) -> Page:
        return self.locator.page


class ElementResolver:
    """Resolves candidate lists to visible elements, strictly in order."""

    def __init__(self, per_candidate_timeout: float = 2000,
                 overall_timeout: float = 10000) -> None:
        self.per_candidate_timeout = per_candidate_timeout
        self.overall_timeout = overall_timeout

    def _locate(self, scope: Scope, selector: Selector) -> Locator:
        if isinstance(selector, str):
            return scope.locator(selector).first
        return selector.first

    async def resolve(
        self,
        scope: Scope,
        candidates: Candidates,
        per_candidate_timeout: Optional[float] = None,
        overall_timeout: Optional[float] = None,
        match_text: Optional[str] = None,
    ) -> ResolvedElement:
        """
        Return the first candidate that is visible within the budget.

        Args:
            scope: Page, frame or locator the string selectors are resolved in.
            candidates: Selectors in priority order.
            per_candidate_timeout: Visibility wait for a single candidate (ms).
            overall_timeout: Budget for the whole list (ms).
            match_text: If given, a visible element must contain this text.

        Returns:
            The resolved element.

        Raises:
            InvalidConfiguration: If the candidate list is empty.
            ElementNotFound: If no candidate became visible in time.
        """
        if not candidates.selectors:
            raise InvalidConfiguration(
                f"Empty candidate list for '{candidates.name}'")

        per_candidate = (self.per_candidate_timeout
                         if per_candidate_timeout is None else per_candidate_timeout)
        overall = self.overall_timeout if overall_timeout is None else overall_timeout

        loop = asyncio.get_running_loop()
        deadline = loop.time() + overall / 1000
        attempted: list[str] = []
        count = len(candidates.selectors)

        for index, selector in enumerate(candidates.selectors):
            remaining = (deadline - loop.time()) * 1000
            if remaining <= 0 and attempted:
                break
            # no candidate may take more than its share of what is left
            wait_ms = max(min(per_candidate, remaining / (count - index)), 1)
            text = describe(selector)
            attempted.append(text)
            locator = self._locate(scope, selector)

            try:
                await locator.wait_for(state="visible", timeout=wait_ms)
            except PlaywrightError:
                logger.debug("Candidate %d for '%s' not visible: %s",
                             index, candidates.name, text)
                continue

            if match_text is not None:
                try:
                    content = await locator.text_content(timeout=wait_ms) or ""
                except PlaywrightError:
                    content = ""
                if match_text not in content:
                    logger.debug("Candidate %d for '%s' lacks text %r",
                                 index, candidates.name, match_text)
                    continue

            logger.debug("Resolved '%s' with candidate %d: %s",
                         candidates.name, index, text)
            return ResolvedElement(locator=locator, candidate=text,
                                   index=index, target=candidates.name)

        raise ElementNotFound(candidates.name, attempted, timeout_ms=overall)

    async def try_resolve(
        self,
        scope: Scope,
        candidates: Candidates,
        per_candidate_timeout: Optional[float] = None,
        overall_timeout: Optional[float] = None,
        match_text: Optional[str] = None,
    ) -> Optional[ResolvedElement]:
        """Like :meth:`resolve` but returns None for UI that may be absent."""
        try:
            return await self.resolve(scope, candidates, per_candidate_timeout,
                                      overall_timeout, match_text)
        except ElementNotFound:
            return None

    async def is_visible(self, scope: Scope, candidates: Candidates,
                         timeout: Optional[float] = None) -> bool:
        """Probe whether any candidate is visible within ``timeout`` ms."""
        resolved = await self.try_resolve(
            scope, candidates,
            per_candidate_timeout=timeout, overall_timeout=timeout,
        )
        return resolved is not None
