"""
Action classes: user-level interactions built on the page objects.

Every action class takes a page or a SessionBridge plus optional settings and
routes all interaction through the resolver, executor and detector.
"""

from .base_actions import BaseActions
from .login_actions import LoginActions
from .google_oauth_actions import GoogleOAuthActions
from .google_calendar_actions import GoogleCalendarActions, SaveOutcome
from .anyteam_calendar_actions import AnyteamCalendarActions
from .settings_actions import LinkedInActions, ProfileInfoActions, SettingsActions
from .notifications_actions import NotificationsActions, ReadStatus
from .meeting_actions import (
    BaseMeetingActions,
    LiveMeetingActions,
    LiveMeetingGuidanceActions,
    PostMeetingInsightsActions,
)

__all__ = [
    "BaseActions",
    "LoginActions",
    "GoogleOAuthActions",
    "GoogleCalendarActions",
    "SaveOutcome",
    "AnyteamCalendarActions",
    "SettingsActions",
    "ProfileInfoActions",
    "LinkedInActions",
    "NotificationsActions",
    "ReadStatus",
    "BaseMeetingActions",
    "LiveMeetingActions",
    "LiveMeetingGuidanceActions",
    "PostMeetingInsightsActions",
]
