"""
Page Object Model classes for the Anyteam end-to-end suite.

Page objects hold prioritized selector lists (``Candidates``) for every
element of a screen plus small ``is_*`` visibility checks.
"""

from .base_page import BasePage
from .login_page import LoginPage
from .google_oauth_page import GoogleOAuthPage
from .google_calendar_page import GoogleCalendarPage
from .anyteam_calendar_page import AnyteamCalendarPage
from .settings_page import SettingsPage, ProfileInfoPage, LinkedInPage
from .notifications_page import NotificationsPage
from .meeting_pages import (
    BaseMeetingPage,
    LiveMeetingPage,
    LiveMeetingGuidancePage,
    PostMeetingInsightsPage,
)

__all__ = [
    "BasePage",
    "LoginPage",
    "GoogleOAuthPage",
    "GoogleCalendarPage",
    "AnyteamCalendarPage",
    "SettingsPage",
    "ProfileInfoPage",
    "LinkedInPage",
    "NotificationsPage",
    "BaseMeetingPage",
    "LiveMeetingPage",
    "LiveMeetingGuidancePage",
    "PostMeetingInsightsPage",
]
