"""
Anyteam calendar (scheduler) Page Object.
"""

from playwright.async_api import Locator

from ..core.resolver import Candidates
from .base_page import BasePage

# Meeting cards are the nearest padded div around the title or time line
MEETING_CARD_XPATH = 'xpath=ancestor::div[contains(@class, "py-3")][1]'


class AnyteamCalendarPage(BasePage):
    """Page Object for the calendar panel on the Anyteam home page."""

    calendar_icon = Candidates.of(
        "calendar icon",
        'svg.lucide-calendar[class*="size-[24px]"]',
        "button:has(svg.lucide-calendar)",
        "svg.lucide-calendar",
    )
    external_link_icon = Candidates.of(
        "external link icon", "svg.lucide-external-link")

    tomorrow_button = Candidates.of(
        "Tomorrow",
        'button:has-text("Tomorrow")',
        'button[aria-label*="Tomorrow" i]',
    )
    next_day_button = Candidates.of(
        "next day",
        'button[aria-label*="Next" i]',
        "button:has(svg.lucide-chevron-right)",
    )

    join_button = Candidates.of(
        "Join",
        'button:has-text("Join")',
        'button:has-text("Join Meeting")',
        'a:has-text("Join")',
        '[aria-label*="Join" i]',
        'button:has-text("Join with Google Meet")',
    )

    @staticmethod
    def meeting_by_title(title: str) -> Candidates:
        """Meeting entry in the Anyteam calendar; match on text as well."""
        return Candidates.of(
            f"meeting {title}",
            f'span:has-text("{title}")',
            f'text="{title}"',
            f'span.capitalize:has-text("{title}")',
            f'[aria-label*="{title}"]',
            f'div:has-text("{title}")',
        )

    @staticmethod
    def google_event_by_title(title: str) -> Candidates:
        """The same meeting once opened in Google Calendar."""
        return Candidates.of(
            f"google event {title}",
            f'span.I0UMhf:has-text("{title}")',
            "span.I0UMhf",
            f'span:has-text("{title}")',
            f'text="{title}"',
            f'[aria-label*="{title}"]',
        )

    @staticmethod
    def time_slot(*slots: str) -> Candidates:
        """Time line of a meeting card, e.g. ``14:00 - 15:00``."""
        return Candidates.of(
            f"time slot {' / '.join(slots)}",
            *(f'p:has-text("{slot}")' for slot in slots),
        )

    @staticmethod
    def meeting_card(inner: Locator) -> Locator:
        return inner.locator(MEETING_CARD_XPATH).first

    async def goto(self) -> None:
        await self.navigate_to(self.settings.home_path)
