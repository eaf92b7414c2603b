"""
Completion detection by racing independent signals.

After an action that may navigate, open a popup, or just re-render, several
outcomes are possible and none is guaranteed. Each outcome is a ``Signal``;
the detector arms them all, runs the trigger, and returns whichever fires
first.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Pattern, Sequence, Union
from urllib.parse import urlparse

from playwright.async_api import BrowserContext, Locator, Page

from ..exceptions import CompletionTimeout, InvalidConfiguration

logger = logging.getLogger(__name__)

SignalWaiter = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class Signal:
    """A named awaitable condition; ``wait(timeout_ms)`` resolves when it holds."""

    name: str
    wait: SignalWaiter


@dataclass(frozen=True)
class CompletionResult:
    signal: str
    value: Any = None


class CompletionDetector:
    """Races completion signals and reports the single winner."""

    def __init__(self, timeout: float = 15000,
                 fallback_probe: float = 1000) -> None:
        self.timeout = timeout
        self.fallback_probe = fallback_probe

    async def race(
        self,
        signals: Sequence[Signal],
        timeout: Optional[float] = None,
        trigger: Optional[Callable[[], Awaitable[Any]]] = None,
        fallback: Optional[Signal] = None,
    ) -> CompletionResult:
        """
        Arm ``signals``, run ``trigger``, and return the first signal to fire.

        When several signals are done at the same moment the one declared first
        wins. A signal that raises is treated as not having fired.

        Args:
            signals: Candidate outcomes in priority order.
            timeout: Race budget in ms.
            trigger: Coroutine function performing the action being observed.
            fallback: Checked once after the budget runs out.

        Raises:
            InvalidConfiguration: If no signals are given.
            CompletionTimeout: If nothing fired and the fallback did not hold.
        """
        if not signals:
            raise InvalidConfiguration("Completion race needs at least one signal")

        # Playwright treats a zero timeout as "wait forever"
        budget = max(self.timeout if timeout is None else timeout, 1)
        tasks = [asyncio.ensure_future(s.wait(budget)) for s in signals]
        order = {task: i for i, task in enumerate(tasks)}

        try:
            if trigger is not None:
                # let every waiter register its listener before acting
                await asyncio.sleep(0)
                await trigger()
            winner = await self._first_success(tasks, order, budget)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if winner is not None:
            index, value = winner
            logger.debug("Completion signal '%s' fired", signals[index].name)
            return CompletionResult(signals[index].name, value)

        if fallback is not None:
            try:
                value = await fallback.wait(self.fallback_probe)
            except Exception as e:
                logger.debug("Fallback '%s' did not hold: %s", fallback.name, e)
            else:
                logger.info("No signal fired, fallback '%s' holds", fallback.name)
                return CompletionResult(fallback.name, value)

        raise CompletionTimeout([s.name for s in signals], budget)

    @staticmethod
    async def _first_success(tasks, order, budget):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + budget / 1000
        pending = set(tasks)

        while pending:
            remaining = deadline - loop.time()
            if remaining <= 0:
                return None
            done, pending = await asyncio.wait(
                pending, timeout=remaining, return_when=asyncio.FIRST_COMPLETED)
            if not done:
                return None
            for task in sorted(done, key=order.__getitem__):
                if task.cancelled() or task.exception() is not None:
                    continue
                return order[task], task.result()
        return None


# Signal factories

def url_matches(page: Page, pattern: Union[str, Pattern[str], Callable[[str], bool]],
                name: Optional[str] = None) -> Signal:
    """Page URL matches a glob, regex or predicate."""

    async def wait(timeout: float) -> str:
        await page.wait_for_url(pattern, timeout=timeout, wait_until="commit")
        return page.url

    return Signal(name or f"url:{pattern}", wait)


def url_host_contains(page: Page, host: str, name: Optional[str] = None) -> Signal:
    """Page URL hostname contains ``host``."""

    def predicate(url: str) -> bool:
        return host in (urlparse(url).hostname or "")

    async def wait(timeout: float) -> str:
        if predicate(page.url):
            return page.url
        await page.wait_for_url(predicate, timeout=timeout, wait_until="commit")
        return page.url

    return Signal(name or f"host:{host}", wait)


def new_page(context: BrowserContext, name: str = "new_page") -> Signal:
    """A new page opens anywhere in the browser context."""

    async def wait(timeout: float) -> Page:
        return await context.wait_for_event("page", timeout=timeout)

    return Signal(name, wait)


def popup(page: Page, name: str = "popup") -> Signal:
    """The page opens a popup window."""

    async def wait(timeout: float) -> Page:
        return await page.wait_for_event("popup", timeout=timeout)

    return Signal(name, wait)


def element_visible(locator: Locator, name: Optional[str] = None) -> Signal:
    """A locator becomes visible."""

    async def wait(timeout: float) -> Locator:
        await locator.first.wait_for(state="visible", timeout=max(timeout, 1))
        return locator.first

    return Signal(name or f"visible:{locator}", wait)


def load_state(page: Page, state: str = "domcontentloaded",
               name: Optional[str] = None) -> Signal:
    """The page reaches a load state."""

    async def wait(timeout: float) -> str:
        await page.wait_for_load_state(state, timeout=timeout)
        return state

    return Signal(name or f"load:{state}", wait)


def page_closed(page: Page, name: str = "page_closed") -> Signal:
    """The page is closed, e.g. a sign-in popup finishing."""

    async def wait(timeout: float) -> Page:
        if not page.is_closed():
            await page.wait_for_event("close", timeout=timeout)
        return page

    return Signal(name, wait)
