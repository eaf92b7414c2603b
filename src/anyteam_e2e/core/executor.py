"""
Interaction execution with a gentle-then-forced fallback.

Overlays, animations and focus traps in the Google UIs regularly make a normal
click fail even though the element is there. Every interaction is tried once
normally and, on a Playwright error, exactly once more bypassing actionability
checks.
"""

import enum
import logging
from typing import Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from ..exceptions import InteractionFailed
from .resolver import ResolvedElement

logger = logging.getLogger(__name__)

Element = Union[ResolvedElement, Locator]


class Action(enum.Enum):
    CLICK = "click"
    FILL = "fill"
    TYPE = "type"
    RIGHT_CLICK = "right_click"


class InteractionExecutor:
    """Performs clicks and text entry on resolved elements."""

    def __init__(self, action_timeout: float = 10000,
                 typing_delay: float = 100) -> None:
        self.action_timeout = action_timeout
        self.typing_delay = typing_delay

    @staticmethod
    def _unwrap(element: Element) -> tuple[Locator, str]:
        if isinstance(element, ResolvedElement):
            return element.locator, element.target
        return element, repr(element)

    async def _scroll(self, locator: Locator) -> None:
        try:
            await locator.scroll_into_view_if_needed(timeout=self.action_timeout)
        except PlaywrightError:
            logger.debug("Scroll into view failed, continuing")

    async def _attempt(self, locator: Locator, action: Action,
                       value: Optional[str], forced: bool,
                       clear_first: bool) -> None:
        timeout = self.action_timeout
        if action is Action.CLICK:
            await locator.click(force=forced, timeout=timeout)
        elif action is Action.RIGHT_CLICK:
            await locator.click(button="right", force=forced, timeout=timeout)
        elif action is Action.FILL:
            if clear_first:
                await locator.clear(force=forced, timeout=timeout)
            await locator.fill(value or "", force=forced, timeout=timeout)
        elif action is Action.TYPE:
            if forced:
                if clear_first:
                    await locator.clear(force=True, timeout=timeout)
                await locator.focus(timeout=timeout)
                await locator.page.keyboard.type(value or "", delay=self.typing_delay)
            else:
                await locator.click(timeout=timeout)
                if clear_first:
                    await locator.clear(timeout=timeout)
                await locator.press_sequentially(
                    value or "", delay=self.typing_delay, timeout=timeout)

    async def perform(
        self,
        element: Element,
        action: Action,
        value: Optional[str] = None,
        clear_first: bool = True,
        force: bool = False,
    ) -> None:
        """
        Perform an action, retrying once in forced mode.

        Args:
            element: Resolved element or locator to act on.
            action: The interaction to perform.
            value: Text for FILL and TYPE.
            clear_first: Clear the field before FILL or TYPE.
            force: Skip the gentle attempt and go straight to forced mode.

        Raises:
            InteractionFailed: If the forced attempt also failed.
        """
        locator, target = self._unwrap(element)
        await self._scroll(locator)

        if not force:
            try:
                await self._attempt(locator, action, value, False, clear_first)
                return
            except PlaywrightError as e:
                logger.info("Gentle %s on '%s' failed, forcing: %s",
                            action.value, target, (str(e).splitlines() or [""])[0])

        try:
            await self._attempt(locator, action, value, True, clear_first)
        except PlaywrightError as e:
            raise InteractionFailed(action.value, target, cause=e) from e
        logger.debug("Forced %s on '%s' succeeded", action.value, target)

    async def click(self, element: Element, force: bool = False) -> None:
        await self.perform(element, Action.CLICK, force=force)

    async def right_click(self, element: Element) -> None:
        await self.perform(element, Action.RIGHT_CLICK)

    async def fill(self, element: Element, value: str,
                   clear_first: bool = True) -> None:
        await self.perform(element, Action.FILL, value, clear_first=clear_first)

    async def type_text(self, element: Element, value: str,
                        clear_first: bool = True) -> None:
        """Type ``value`` key by key; the value itself is never logged."""
        await self.perform(element, Action.TYPE, value, clear_first=clear_first)
