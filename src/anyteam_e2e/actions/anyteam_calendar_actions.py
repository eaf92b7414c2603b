"""
Actions for the calendar panel of the Anyteam home page.
"""

import logging
from datetime import date
from typing import Optional, Sequence, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from ..core.detector import new_page, url_host_contains
from ..exceptions import ElementNotFound
from ..pages.anyteam_calendar_page import AnyteamCalendarPage
from ..scenario_data import is_tomorrow
from .base_actions import BaseActions

logger = logging.getLogger(__name__)

GOOGLE_CALENDAR_HOST = "calendar.google.com"


class AnyteamCalendarActions(BaseActions[AnyteamCalendarPage]):
    """Anyteam calendar interactions."""

    page_class = AnyteamCalendarPage

    async def navigate_to_anyteam_calendar(self) -> None:
        calendar = self.page_object
        await calendar.goto()
        await calendar.wait_for_loading_complete()

    async def click_calendar_icon(self) -> None:
        await self.click(AnyteamCalendarPage.calendar_icon)

    async def find_and_click_meeting(self, title: str) -> None:
        """
        Click the meeting whose visible text contains ``title``.

        Raises:
            ElementNotFound: If no meeting with that title is shown.
        """
        await self.executor.click(await self.resolve(
            AnyteamCalendarPage.meeting_by_title(title), match_text=title))

    async def find_and_click_meeting_by_time(self, *time_slots: str) -> None:
        """Click the meeting card showing one of ``time_slots``."""
        slot = await self.resolve(AnyteamCalendarPage.time_slot(*time_slots))
        await self.executor.click(AnyteamCalendarPage.meeting_card(slot.locator))

    async def _open_external_link(self) -> Tuple[Page, bool]:
        """
        Click the external-link icon, which opens Google Calendar.

        Returns:
            The Google Calendar page and whether it opened in a new tab.

        Raises:
            CompletionTimeout: If Google Calendar opened neither way.
        """
        icon = await self.resolve(AnyteamCalendarPage.external_link_icon)
        page = self.page
        result = await self.detector.race(
            [new_page(page.context),
             url_host_contains(page, GOOGLE_CALENDAR_HOST, "in_place")],
            trigger=lambda: self.executor.click(icon),
        )
        if result.signal == "new_page":
            calendar_page = result.value
            try:
                await calendar_page.wait_for_load_state(
                    "domcontentloaded", timeout=self.settings.timeouts.navigation)
            except PlaywrightError:
                logger.debug("Google Calendar tab still loading: %s", calendar_page.url)
            return calendar_page, True
        return page, False

    async def click_external_link_to_google_calendar(self) -> Optional[Page]:
        """
        Open Google Calendar in a new tab, which becomes the active page.

        Returns:
            The new tab, or None when the icon is not shown or Google Calendar
            replaced the Anyteam page instead.
        """
        if not await self.is_visible(AnyteamCalendarPage.external_link_icon):
            return None
        calendar_page, new_tab = await self._open_external_link()
        if not new_tab:
            return None
        return self.session.on_new_page_detected(calendar_page, expected=True)

    async def open_meeting_in_google_calendar(self, title: str) -> Page:
        """
        Open ``title`` in Google Calendar through the Anyteam calendar.

        Returns:
            The Google Calendar page, now the active page.
        """
        await self.click_calendar_icon()
        calendar_page, new_tab = await self._open_external_link()
        if new_tab:
            self.session.on_new_page_detected(calendar_page, expected=True)

        event = await self.resolve(AnyteamCalendarPage.google_event_by_title(title),
                                   timeout=self.settings.timeouts.navigation,
                                   match_text=title)
        await self.executor.click(event)
        return calendar_page

    async def _return_to_anyteam(self, new_tab: bool) -> None:
        if new_tab:
            # the calendar tab only triggers the sync; stay on Anyteam
            await self.page.bring_to_front()
        else:
            logger.info("Google Calendar replaced the Anyteam page, going back home")
            await self.page_object.goto()

    async def _show_day(self, meeting_date: Optional[date]) -> None:
        if meeting_date is None or not is_tomorrow(meeting_date):
            return
        timeout = self.settings.timeouts.candidate
        if not await self.click_if_visible(AnyteamCalendarPage.tomorrow_button, timeout):
            await self.click_if_visible(AnyteamCalendarPage.next_day_button, timeout)

    async def _locate_meeting(self, title: str,
                              time_slots: Sequence[str]) -> Optional[Locator]:
        by_title = await self.try_resolve(
            AnyteamCalendarPage.meeting_by_title(title),
            self.settings.timeouts.overall, match_text=title)
        if by_title is not None:
            return by_title.locator
        if time_slots:
            slot = await self.try_resolve(AnyteamCalendarPage.time_slot(*time_slots))
            if slot is not None:
                logger.info("Meeting '%s' found by time slot %s", title, slot.candidate)
                return AnyteamCalendarPage.meeting_card(slot.locator)
        return None

    async def find_and_join_meeting_from_anyteam(
        self,
        title: str,
        time_slots: Sequence[str] = (),
        meeting_date: Optional[date] = None,
    ) -> Page:
        """
        Find a meeting in the Anyteam calendar and join it.

        Opening Google Calendar through the external link makes Anyteam sync
        the calendar. The meeting is looked up by title, then by time slot;
        if neither shows up the page is reloaded once and the lookup repeated.

        Args:
            title: Meeting title.
            time_slots: Time-slot renderings, see ``time_slot_variants``.
            meeting_date: Date of the meeting; tomorrow's meetings need the
                calendar moved one day ahead.

        Returns:
            The Google Meet page, now the active page.

        Raises:
            ElementNotFound: If the meeting or its Join button is not found.
            CompletionTimeout: If joining did not open a tab.
        """
        await self.click_calendar_icon()
        _, new_tab = await self._open_external_link()
        await self._return_to_anyteam(new_tab)
        await self._show_day(meeting_date)
        await self.page_object.wait_for_loading_complete()

        meeting = await self._locate_meeting(title, time_slots)
        if meeting is None:
            logger.info("Meeting '%s' not listed yet, reloading once", title)
            await self.page.reload(wait_until="networkidle",
                                   timeout=self.settings.timeouts.navigation)
            await self.page_object.wait_for_loading_complete()
            meeting = await self._locate_meeting(title, time_slots)
        if meeting is None:
            raise ElementNotFound(
                f"meeting {title}",
                AnyteamCalendarPage.meeting_by_title(title).describe()
                + AnyteamCalendarPage.time_slot(*time_slots).describe(),
                details={"reloaded": True},
            )

        await self.executor.click(meeting)
        join = await self.resolve(AnyteamCalendarPage.join_button)
        meet_page = await self.session.expect_new_page(
            lambda: self.executor.click(join), self.settings.timeouts.completion)
        logger.info("Joined '%s' in %s", title, meet_page.url)
        return meet_page
