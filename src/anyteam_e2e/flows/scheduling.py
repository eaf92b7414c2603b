"""
Scheduling a meeting in Google Calendar and joining it from Anyteam.
"""

import logging
from typing import Optional

from playwright.async_api import Page

from ..actions.anyteam_calendar_actions import AnyteamCalendarActions
from ..actions.google_calendar_actions import GoogleCalendarActions, SaveOutcome
from ..config import Settings, get_settings
from ..core.session import SessionBridge
from ..scenario_data import MeetingDetails

logger = logging.getLogger(__name__)


async def schedule_meeting(session: SessionBridge,
                           details: Optional[MeetingDetails] = None,
                           settings: Optional[Settings] = None,
                           keep_tab: bool = False) -> SaveOutcome:
    """
    Create a meeting in Google Calendar, in a tab of its own.

    Args:
        session: Session whose browser context is signed in to Google.
        details: Meeting to create; defaults to the configured meeting.
        settings: Suite settings; defaults to the cached settings.
        keep_tab: Leave the Google Calendar tab open and active.

    Returns:
        What saving the event clicked and saw.
    """
    settings = settings or get_settings()
    details = details or MeetingDetails.from_settings(settings)
    app_page = session.current()

    calendar_page = await session.context.new_page()
    session.activate(calendar_page)
    calendar = GoogleCalendarActions(session, settings)
    await calendar.navigate_to_calendar()
    outcome = await calendar.create_meeting(details)

    if not keep_tab:
        await calendar_page.close()
        session.activate(app_page)
    logger.info("Scheduled '%s' on %s, %s-%s",
                details.title, details.date, details.start_time, details.end_time)
    return outcome


async def join_meeting_from_anyteam(session: SessionBridge,
                                    details: Optional[MeetingDetails] = None,
                                    settings: Optional[Settings] = None) -> Page:
    """
    Find a meeting in the Anyteam calendar and join it.

    Returns:
        The Google Meet page, which becomes the active page.
    """
    settings = settings or get_settings()
    details = details or MeetingDetails.from_settings(settings)
    calendar = AnyteamCalendarActions(session, settings)
    await calendar.navigate_to_anyteam_calendar()
    return await calendar.find_and_join_meeting_from_anyteam(
        details.title, details.time_slots, details.date)
