"""
Actions for the notifications panel.
"""

import logging
from dataclasses import dataclass

from playwright.async_api import Error as PlaywrightError

from ..core.resolver import Candidates
from ..diagnostics import capture_failure
from ..exceptions import ElementNotFound
from ..pages.notifications_page import NotificationsPage
from .base_actions import BaseActions

logger = logging.getLogger(__name__)

# A notification reads as "read" when it is dimmed or carries a check mark
_IS_READ_JS = """
(el) => parseFloat(getComputedStyle(el).opacity) < 1
    || String(el.className).includes("opacity")
    || el.querySelector('svg.lucide-check, [class*="read"], [data-read="true"]') !== null
"""


@dataclass
class ReadStatus:
    all_marked_as_read: bool
    notification_count: int
    read_count: int


class NotificationsActions(BaseActions[NotificationsPage]):
    """Notifications panel interactions."""

    page_class = NotificationsPage

    async def click_notifications_heading(self) -> None:
        """
        Open the notifications panel from the sidebar.

        Does nothing when the panel is already open.

        Raises:
            ElementNotFound: If the sidebar entry is missing; a screenshot is
                saved first.
        """
        panel = self.page_object
        if await panel.is_panel_open(self.settings.timeouts.candidate):
            logger.info("Notifications panel already open")
            return

        if not await panel.is_home_page_displayed(self.settings.timeouts.candidate):
            await panel.wait_for_loading_complete()
        try:
            await self.click(NotificationsPage.sidebar_button)
        except ElementNotFound:
            await capture_failure("notifications-button-not-found", self.page, self.settings)
            raise
        await self.wait_for_notifications_panel()

    async def wait_for_notifications_panel(self) -> None:
        await self.resolve(NotificationsPage.heading, timeout=self.settings.timeouts.navigation)

    async def click_notification_item(self, title: str = "") -> None:
        """Click the first notification, or the one mentioning ``title``."""
        if title:
            await self.click(NotificationsPage.meeting_notification(title))
        else:
            await self.click(NotificationsPage.notification_item)

    async def click_view_meeting_insights(self) -> None:
        await self.click(NotificationsPage.view_meeting_insights)

    async def click_view_meeting_pre_read(self) -> None:
        await self.click(NotificationsPage.view_meeting_pre_read)

    # Filter dropdown
    async def click_filter_button(self) -> None:
        """
        Open the Read/Unread filter.

        Open menus swallow the first click, so they are dismissed first; the
        filter is clicked a second time if its options did not show.

        Raises:
            ElementNotFound: If the options never show; a screenshot is saved first.
        """
        await self.page.keyboard.press("Escape")
        try:
            await self.page.locator("main").first.click(
                position={"x": 10, "y": 10}, timeout=self.settings.timeouts.candidate)
        except PlaywrightError:
            logger.debug("No main area to click before opening the filter")

        for attempt in (1, 2):
            await self.click(NotificationsPage.filter_button)
            if await self.is_visible(NotificationsPage.filter_labels):
                return
            logger.info("Filter options not shown after click %d", attempt)

        await capture_failure("notifications-filter-not-opened", self.page, self.settings)
        raise ElementNotFound(NotificationsPage.filter_labels.name,
                              NotificationsPage.filter_labels.describe())

    async def _is_checked(self, checkbox: Candidates) -> bool:
        element = await self.resolve(checkbox)
        state = await element.locator.get_attribute(
            "aria-checked", timeout=self.settings.timeouts.action)
        return state == "true"

    async def _set_checked(self, checkbox: Candidates, checked: bool) -> None:
        if await self._is_checked(checkbox) != checked:
            await self.click(checkbox)

    async def check_read_checkbox(self) -> None:
        await self._set_checked(NotificationsPage.read_checkbox, True)

    async def uncheck_read_checkbox(self) -> None:
        await self._set_checked(NotificationsPage.read_checkbox, False)

    async def is_read_checkbox_checked(self) -> bool:
        return await self._is_checked(NotificationsPage.read_checkbox)

    async def check_unread_checkbox(self) -> None:
        await self._set_checked(NotificationsPage.unread_checkbox, True)

    async def uncheck_unread_checkbox(self) -> None:
        await self._set_checked(NotificationsPage.unread_checkbox, False)

    async def is_unread_checkbox_checked(self) -> bool:
        return await self._is_checked(NotificationsPage.unread_checkbox)

    async def click_apply_filters(self) -> None:
        await self.click(NotificationsPage.apply_filters_button)

    async def click_clear_all(self) -> None:
        await self.click(NotificationsPage.clear_all_button)

    # Read state
    async def click_three_dotted_menu(self) -> None:
        await self.click(NotificationsPage.three_dot_menu)

    async def click_mark_all_as_read(self) -> None:
        await self.click(NotificationsPage.mark_all_as_read_button)

    async def verify_all_notifications_marked_as_read(self) -> ReadStatus:
        """Count the listed notifications and how many of them look read."""
        items = self.page_object.items
        count = await items.count()
        read = 0
        for index in range(count):
            if await items.nth(index).evaluate(_IS_READ_JS):
                read += 1
        logger.info("%d of %d notifications read", read, count)
        return ReadStatus(all_marked_as_read=read == count,
                          notification_count=count, read_count=read)

    async def right_click_notification(self, index: int = 0) -> None:
        item = self.page_object.items.nth(index)
        await item.wait_for(state="visible", timeout=self.settings.timeouts.overall)
        await self.executor.right_click(item)

    async def click_mark_as_read(self) -> None:
        await self.click(NotificationsPage.mark_as_read_button)

    async def click_mark_as_unread(self) -> None:
        await self.click(NotificationsPage.mark_as_unread_button)

    # Visibility probes
    async def verify_notifications_panel_displayed(self) -> bool:
        return await self.page_object.is_displayed()

    async def verify_notification_item_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.notification_item)

    async def verify_view_meeting_insights_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.view_meeting_insights)

    async def verify_filter_button_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.filter_button)

    async def verify_read_checkbox_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.read_checkbox)

    async def verify_unread_checkbox_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.unread_checkbox)

    async def verify_three_dotted_menu_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.three_dot_menu)

    async def verify_mark_all_as_read_button_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.mark_all_as_read_button)

    async def verify_mark_as_read_button_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.mark_as_read_button)

    async def verify_mark_as_unread_button_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.mark_as_unread_button)

    async def verify_apply_filters_button_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.apply_filters_button)

    async def verify_clear_all_button_visible(self) -> bool:
        return await self.is_visible(NotificationsPage.clear_all_button)
