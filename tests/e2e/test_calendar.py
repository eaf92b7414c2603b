"""
Live tests for scheduling in Google Calendar and joining from Anyteam.

Tests cover:
- Creating a meeting in Google Calendar
- Finding the meeting in the Anyteam calendar and joining it
"""

from urllib.parse import urlparse

import pytest

from anyteam_e2e.config import Settings
from anyteam_e2e.core.session import SessionBridge
from anyteam_e2e.flows import join_meeting_from_anyteam, schedule_meeting
from anyteam_e2e.scenario_data import MeetingDetails

pytestmark = pytest.mark.live


@pytest.fixture
def meeting(settings: Settings) -> MeetingDetails:
    return MeetingDetails.from_settings(settings)


class TestScheduling:
    """Tests for creating and joining a meeting."""

    @pytest.mark.asyncio
    async def test_schedule_meeting(self, session: SessionBridge, meeting: MeetingDetails,
                                    settings: Settings):
        """Test that saving the event is confirmed by the calendar view."""
        app_page = session.current()

        outcome = await schedule_meeting(session, meeting, settings)

        assert outcome.clicked
        assert outcome.event_visible is not False
        assert session.current() is app_page

    @pytest.mark.asyncio
    async def test_join_meeting_from_anyteam(self, session: SessionBridge,
                                             meeting: MeetingDetails, settings: Settings):
        """Test that Join on the Anyteam meeting card opens Google Meet."""
        await schedule_meeting(session, meeting, settings)

        meet_page = await join_meeting_from_anyteam(session, meeting, settings)

        assert urlparse(meet_page.url).hostname == "meet.google.com"
        assert session.current() is meet_page
