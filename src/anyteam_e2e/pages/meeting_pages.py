"""
Meeting Page Objects: meeting form, live meeting, in-meeting guidance and
post-meeting insights.
"""

from typing import Optional

from ..core.resolver import Candidates
from .base_page import BasePage

CLOSE_BUTTON = Candidates.of(
    "close",
    'button[aria-label*="close" i]',
    'button:has(svg[class*="x"])',
    'button:has(svg[class*="close"])',
)


class BaseMeetingPage(BasePage):
    """Meeting create/edit form."""

    title = Candidates.of(
        "meeting title",
        'input[name="title"]',
        'input[placeholder*="title" i]',
        '[data-testid="meeting-title"]',
    )
    date = Candidates.of(
        "meeting date",
        'input[type="date"]',
        'input[placeholder*="date" i]',
        '[data-testid="meeting-date"]',
    )
    time = Candidates.of(
        "meeting time",
        'input[type="time"]',
        'input[placeholder*="time" i]',
        '[data-testid="meeting-time"]',
    )
    participants = Candidates.of(
        "meeting participants",
        'input[placeholder*="participant" i]',
        'input[placeholder*="guest" i]',
        '[data-testid="meeting-participants"]',
    )
    description = Candidates.of(
        "meeting description",
        'textarea[placeholder*="description" i]',
        'textarea[name="description"]',
        '[data-testid="meeting-description"]',
    )
    join_button = Candidates.of(
        "Join",
        'button:has-text("Join")',
        'button:has-text("Join Meeting")',
        'a:has-text("Join")',
    )
    cancel_button = Candidates.of(
        "Cancel",
        'button:has-text("Cancel")',
        'button[aria-label*="cancel" i]',
    )
    save_button = Candidates.of(
        "Save",
        'button:has-text("Save")',
        'button:has-text("Create")',
        'button[type="submit"]',
    )

    async def goto(self) -> None:
        await self.navigate_to(self.settings.home_path)


class LiveMeetingPage(BasePage):
    """Controls of a meeting in progress."""

    mute_button = Candidates.of(
        "microphone",
        'button[aria-label*="microphone" i]',
        'button[aria-label*="mute" i]',
        'button:has(svg[class*="mic"])',
    )
    video_button = Candidates.of(
        "camera",
        'button[aria-label*="camera" i]',
        'button[aria-label*="video" i]',
        'button:has(svg[class*="video"])',
    )
    share_screen_button = Candidates.of(
        "share screen",
        'button[aria-label*="screen" i]',
        'button[aria-label*="share" i]',
        'button:has(svg[class*="screen"])',
    )
    chat_button = Candidates.of(
        "chat",
        'button[aria-label*="chat" i]',
        'button:has(svg[class*="message"])',
    )
    participants_button = Candidates.of(
        "participants",
        'button[aria-label*="participant" i]',
        'button:has(svg[class*="user"])',
    )
    leave_button = Candidates.of(
        "Leave",
        'button:has-text("Leave")',
        'button:has-text("Leave meeting")',
        'button[aria-label*="leave" i]',
    )
    end_meeting_button = Candidates.of(
        "End meeting",
        'button:has-text("End")',
        'button:has-text("End meeting")',
        'button[aria-label*="end" i]',
    )
    timer = Candidates.of(
        "meeting timer",
        '[data-testid="meeting-timer"]',
        '[class*="timer"]',
        'span:has-text(":")',
    )
    title = Candidates.of(
        "meeting title",
        '[data-testid="meeting-title"]',
        '[class*="meeting-title"]',
        "h1",
        "h2",
    )

    async def is_meeting_active(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.timer, timeout)


class LiveMeetingGuidancePage(BasePage):
    """Tips panel shown during a live meeting."""

    panel = Candidates.of(
        "guidance panel",
        '[data-testid="guidance-panel"]',
        '[class*="guidance"]',
        '[class*="tip-panel"]',
    )
    title = Candidates.of(
        "guidance title",
        '[data-testid="guidance-title"]',
        'h3:has-text("Tip")',
        'h3:has-text("Guidance")',
    )
    content = Candidates.of(
        "guidance content",
        '[data-testid="guidance-content"]',
        '[class*="guidance-text"]',
        '[class*="tip-content"]',
    )
    close_button = CLOSE_BUTTON
    next_tip_button = Candidates.of(
        "next tip",
        'button:has-text("Next")',
        'button[aria-label*="next" i]',
        'button:has(svg[class*="chevron-right"])',
    )
    previous_tip_button = Candidates.of(
        "previous tip",
        'button:has-text("Previous")',
        'button[aria-label*="previous" i]',
        'button:has(svg[class*="chevron-left"])',
    )
    skip_button = Candidates.of(
        "skip tips",
        'button:has-text("Skip")',
        'button:has-text("Skip tips")',
        'button[aria-label*="skip" i]',
    )
    indicator = Candidates.of(
        "tip indicator",
        '[data-testid="guidance-indicator"]',
        '[class*="tip-indicator"]',
        'span:has-text("of")',
    )

    async def is_guidance_visible(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.panel, timeout)


class PostMeetingInsightsPage(BasePage):
    """Insights shown after a meeting ends."""

    title = Candidates.of(
        "insights title",
        'h1:has-text("Insights")',
        'h2:has-text("Insights")',
        '[data-testid="insights-title"]',
    )
    summary = Candidates.of(
        "meeting summary",
        '[data-testid="meeting-summary"]',
        '[class*="meeting-summary"]',
        '[class*="summary"]',
    )
    key_points = Candidates.of(
        "key points",
        '[data-testid="key-points"]',
        '[class*="key-points"]',
        'ul:has-text("Key Points")',
    )
    action_items = Candidates.of(
        "action items",
        '[data-testid="action-items"]',
        '[class*="action-items"]',
        'ul:has-text("Action Items")',
    )
    participants = Candidates.of(
        "participants",
        '[data-testid="participants"]',
        '[class*="participants-list"]',
        'ul:has-text("Participants")',
    )
    duration = Candidates.of(
        "duration",
        '[data-testid="duration"]',
        '[class*="duration"]',
        'span:has-text("min")',
    )
    download_button = Candidates.of(
        "Download",
        'button:has-text("Download Report")',
        'button:has-text("Download")',
        'button[aria-label*="download" i]',
    )
    share_button = Candidates.of(
        "Share",
        'button:has-text("Share Insights")',
        'button:has-text("Share")',
        'button[aria-label*="share" i]',
    )
    view_details_button = Candidates.of(
        "View Details",
        'button:has-text("View Details")',
        'button:has-text("See More")',
        'a:has-text("View Details")',
    )
    close_button = CLOSE_BUTTON

    async def is_insights_visible(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.title, timeout)
