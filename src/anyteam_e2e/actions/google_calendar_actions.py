"""
Actions for Google Calendar: creating a meeting and joining it in Google Meet.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from playwright.async_api import Page

from ..core.flow import Flow, FlowContext, FlowStep
from ..core.resolver import Candidates
from ..diagnostics import failure_hook
from ..pages.google_calendar_page import GoogleCalendarPage
from ..scenario_data import MeetingDetails, format_event_date
from .base_actions import BaseActions

logger = logging.getLogger(__name__)

# Google shows Send instead of Save once the event has guests
SEND_OR_SAVE = Candidates.of(
    "Send or Save",
    *GoogleCalendarPage.send_button.selectors,
    *GoogleCalendarPage.save_button.selectors,
)


@dataclass
class SaveOutcome:
    """What ``save_event`` clicked and saw."""

    clicked: str
    invitation_sent: bool = False
    invited_all_guests: bool = False
    event_visible: Optional[bool] = None
    dialog_closed: bool = False


class GoogleCalendarActions(BaseActions[GoogleCalendarPage]):
    """Google Calendar interactions."""

    page_class = GoogleCalendarPage

    async def navigate_to_calendar(self) -> None:
        calendar = self.page_object
        await calendar.goto()
        await calendar.wait_for_calendar_load()

    async def create_event(self) -> None:
        """Open the event editor through Create → Event."""
        await self.click(GoogleCalendarPage.create_button)
        await self.click(GoogleCalendarPage.event_option)
        await self.resolve(GoogleCalendarPage.title_input)

    async def fill_event_title(self, title: str) -> None:
        await self.fill(GoogleCalendarPage.title_input, title)

    async def set_event_date(self, value: date) -> None:
        """Type the date into the start-date field, e.g. ``Tuesday, October 20``."""
        await self.click(GoogleCalendarPage.start_date)
        await self.page.keyboard.type(format_event_date(value))
        await self.page.keyboard.press("Enter")

    async def _set_time(self, candidates: Candidates, value: str) -> None:
        element = await self.click(candidates)
        await self.executor.fill(element, value)
        await self.page.keyboard.press("Enter")

    async def set_start_time(self, value: str) -> None:
        await self._set_time(GoogleCalendarPage.start_time_input, value)

    async def set_end_time(self, value: str) -> None:
        await self._set_time(GoogleCalendarPage.end_time_input, value)

    async def add_guests(self, guests: List[str]) -> None:
        """
        Add guests one by one.

        Each address is typed key by key so the autocomplete reacts; the
        matching suggestion is picked when it shows up, otherwise Enter
        accepts the typed address.
        """
        if not guests:
            return

        await self.click_if_visible(GoogleCalendarPage.add_guests_button,
                                    self.settings.timeouts.candidate)
        for guest in guests:
            await self.type_text(GoogleCalendarPage.guest_input, guest)
            picked = await self.click_if_visible(
                GoogleCalendarPage.guest_suggestion(guest),
                self.settings.timeouts.candidate)
            if not picked:
                await self.page.keyboard.press("Enter")
            logger.info("Added guest %s", guest)

    async def save_event(self, event_title: Optional[str] = None) -> SaveOutcome:
        """
        Save the event and get through the dialogs that may follow.

        Send is tried before Save. Afterwards an invitation prompt and an
        "Invite all guests" prompt are answered when they appear. Back on the
        calendar view the new event is looked up by title; elsewhere a
        leftover dialog is closed.

        Raises:
            ElementNotFound: If neither a Send nor a Save button is visible.
            InteractionFailed: If the button could not be clicked.
        """
        per_candidate = self.settings.timeouts.candidate
        button = await self.resolver.resolve(
            self.page, SEND_OR_SAVE,
            per_candidate_timeout=per_candidate,
            overall_timeout=per_candidate * len(SEND_OR_SAVE),
        )
        await self.executor.click(button, force=True)
        logger.info("Saved event with %s", button.candidate)
        outcome = SaveOutcome(clicked=button.candidate)

        outcome.invitation_sent = await self.click_if_visible(
            GoogleCalendarPage.send_invitation_button, per_candidate)
        outcome.invited_all_guests = await self.click_if_visible(
            GoogleCalendarPage.invite_all_guests_button, per_candidate)

        calendar = self.page_object
        if calendar.is_calendar_view():
            if event_title:
                outcome.event_visible = await self.is_visible(
                    GoogleCalendarPage.event_in_calendar(event_title),
                    self.settings.timeouts.overall)
                if not outcome.event_visible:
                    logger.warning("Event '%s' not visible in the calendar after saving",
                                   event_title)
        else:
            outcome.dialog_closed = await self.click_if_visible(
                GoogleCalendarPage.close_dialog_button, per_candidate)
        return outcome

    async def create_meeting(self, details: MeetingDetails) -> SaveOutcome:
        """
        Create ``details`` as an event, step by step.

        Raises:
            FlowStepFailed: If a step failed; a screenshot is saved first.
        """

        async def create(ctx: FlowContext) -> None:
            await self.create_event()

        async def title(ctx: FlowContext) -> None:
            await self.fill_event_title(details.title)

        async def event_date(ctx: FlowContext) -> None:
            await self.set_event_date(details.date)

        async def start(ctx: FlowContext) -> None:
            await self.set_start_time(details.start_time)

        async def end(ctx: FlowContext) -> None:
            await self.set_end_time(details.end_time)

        async def guests(ctx: FlowContext) -> None:
            await self.add_guests(details.guests)

        async def save(ctx: FlowContext) -> SaveOutcome:
            return await self.save_event(details.title)

        flow = Flow(
            "create_meeting",
            [
                FlowStep("create_event", create),
                FlowStep("fill_title", title),
                FlowStep("set_date", event_date),
                FlowStep("set_start_time", start),
                FlowStep("set_end_time", end),
                FlowStep("add_guests", guests, when=lambda ctx: bool(details.guests)),
                FlowStep("save_event", save, output="save_outcome"),
            ],
            self.session,
            timeout=self.settings.timeouts.flow,
            settle=self.settings.timeouts.settle,
            on_failure=failure_hook(self.settings),
        )
        result = await flow.run()
        logger.info("Meeting '%s' created for %s", details.title, details.date)
        return result.state["save_outcome"]

    async def join_google_meet(self) -> Optional[Page]:
        """
        Click "Join with Google Meet" and hand the session to the Meet tab.

        Returns:
            The Meet page, or None when the event has no Meet link.
        """
        join = await self.try_resolve(GoogleCalendarPage.join_meet_button,
                                      self.settings.timeouts.overall)
        if join is None:
            logger.info("No Google Meet link on this event")
            return None
        return await self.session.expect_new_page(
            lambda: self.executor.click(join), self.settings.timeouts.completion)
