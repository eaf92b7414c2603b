"""
Business flows composed from the action classes.
"""

from .auth_setup import manual_auth_setup
from .login import perform_login
from .notifications import open_meeting_insights
from .profile import update_profile
from .scheduling import join_meeting_from_anyteam, schedule_meeting

__all__ = [
    "join_meeting_from_anyteam",
    "manual_auth_setup",
    "open_meeting_insights",
    "perform_login",
    "schedule_meeting",
    "update_profile",
]
