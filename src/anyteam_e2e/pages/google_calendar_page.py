"""
Google Calendar Page Object.
"""

from typing import Optional

from ..core.resolver import Candidates
from .base_page import BasePage


class GoogleCalendarPage(BasePage):
    """Page Object for Google Calendar's week view and event editor."""

    create_button = Candidates.of(
        "Create",
        'button[jsname="todz4c"]:has-text("Create")',
        'button:has-text("Create")',
        'button:has-text("+ Create")',
    )
    event_option = Candidates.of(
        "Event option",
        "text=Event",
        '[role="menuitem"]:has-text("Event")',
    )

    # Event editor
    title_input = Candidates.of("title input", 'input[aria-label="Add title"]')
    start_date = Candidates.of("start date", 'span[data-key="startDate"]')
    start_time_input = Candidates.of("start time", 'input[aria-label="Start time"]')
    end_time_input = Candidates.of("end time", 'input[aria-label="End time"]')
    add_guests_button = Candidates.of("Add guests", 'button:has-text("Add guests")')
    guest_input = Candidates.of("guest input", 'input[aria-label="Guests"]')

    # Send appears instead of Save once the event has guests
    send_button = Candidates.of(
        "Send",
        'button:has-text("Send")',
        'span[jsname="V67aGc"]:has-text("Send")',
        'span.UywwFc-vQzf8d:has-text("Send")',
        'span.VfPpkd-vQzf8d:has-text("Send")',
    )
    save_button = Candidates.of(
        "Save",
        'button:has-text("Save")',
        'span[jsname="V67aGc"]:has-text("Save")',
        'span.UywwFc-vQzf8d:has-text("Save")',
        'span.VfPpkd-vQzf8d:has-text("Save")',
    )
    send_invitation_button = Candidates.of(
        "Send invitation", 'button:has-text("Send") >> nth=-1')
    invite_all_guests_button = Candidates.of(
        "Invite all guests",
        'span[jsname="V67aGc"]:has-text("Invite all guests")',
        'span.mUIrbf-vQzf8d:has-text("Invite all guests")',
        'span.VfPpkd-vQzf8d:has-text("Invite all guests")',
        'button:has-text("Invite all guests")',
    )
    close_dialog_button = Candidates.of("Close", 'button[aria-label="Close"]')

    join_meet_button = Candidates.of(
        "Join with Google Meet",
        'button:has-text("Join with Google Meet")',
        'a:has-text("Join with Google Meet")',
    )

    @staticmethod
    def guest_suggestion(guest: str) -> Candidates:
        return Candidates.of(f"guest suggestion {guest}",
                             f'div[role="option"]:has-text("{guest}")')

    @staticmethod
    def event_in_calendar(title: str) -> Candidates:
        return Candidates.of(f"event {title}", f'text="{title}"')

    @property
    def url(self) -> str:
        return self.settings.google_calendar_url

    def is_calendar_view(self) -> bool:
        return "calendar.google.com/calendar" in self.page.url

    async def goto(self) -> None:
        await self.navigate_to(self.url)

    async def wait_for_calendar_load(self, timeout: Optional[int] = None) -> None:
        await self.resolver.resolve(
            self.page, self.create_button,
            overall_timeout=timeout or self.settings.timeouts.navigation)
