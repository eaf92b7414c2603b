"""
Actions for the meeting form, the live meeting, its guidance panel and the
post-meeting insights.
"""

from typing import Optional

from ..pages.meeting_pages import (
    BaseMeetingPage,
    LiveMeetingGuidancePage,
    LiveMeetingPage,
    PostMeetingInsightsPage,
)
from .base_actions import BaseActions


class BaseMeetingActions(BaseActions[BaseMeetingPage]):
    page_class = BaseMeetingPage

    async def navigate_to_base_meeting(self) -> None:
        await self.page_object.goto()

    async def fill_meeting_title(self, title: str) -> None:
        await self.fill(BaseMeetingPage.title, title)

    async def fill_meeting_date(self, value: str) -> None:
        await self.fill(BaseMeetingPage.date, value)

    async def fill_meeting_time(self, value: str) -> None:
        await self.fill(BaseMeetingPage.time, value)

    async def fill_meeting_participants(self, participants: str) -> None:
        await self.fill(BaseMeetingPage.participants, participants)

    async def fill_meeting_description(self, description: str) -> None:
        await self.fill(BaseMeetingPage.description, description)

    async def click_join_button(self) -> None:
        await self.click(BaseMeetingPage.join_button)

    async def click_cancel_button(self) -> None:
        await self.click(BaseMeetingPage.cancel_button)

    async def click_save_button(self) -> None:
        await self.click(BaseMeetingPage.save_button)

    async def verify_meeting_title_visible(self) -> bool:
        return await self.is_visible(BaseMeetingPage.title)

    async def verify_join_button_visible(self) -> bool:
        return await self.is_visible(BaseMeetingPage.join_button)


class LiveMeetingActions(BaseActions[LiveMeetingPage]):
    page_class = LiveMeetingPage

    async def wait_for_meeting_load(self) -> None:
        await self.resolve(LiveMeetingPage.timer, timeout=self.settings.timeouts.navigation)

    async def toggle_mute(self) -> None:
        await self.click(LiveMeetingPage.mute_button)

    async def toggle_video(self) -> None:
        await self.click(LiveMeetingPage.video_button)

    async def click_share_screen(self) -> None:
        await self.click(LiveMeetingPage.share_screen_button)

    async def click_chat_button(self) -> None:
        await self.click(LiveMeetingPage.chat_button)

    async def click_participants_button(self) -> None:
        await self.click(LiveMeetingPage.participants_button)

    async def click_leave_meeting(self) -> None:
        await self.click(LiveMeetingPage.leave_button)

    async def click_end_meeting(self) -> None:
        await self.click(LiveMeetingPage.end_meeting_button)

    async def verify_meeting_active(self) -> bool:
        return await self.page_object.is_meeting_active()

    async def verify_meeting_timer_visible(self) -> bool:
        return await self.is_visible(LiveMeetingPage.timer)

    async def verify_mute_button_visible(self) -> bool:
        return await self.is_visible(LiveMeetingPage.mute_button)


class LiveMeetingGuidanceActions(BaseActions[LiveMeetingGuidancePage]):
    page_class = LiveMeetingGuidancePage

    async def wait_for_guidance_panel(self) -> None:
        await self.resolve(LiveMeetingGuidancePage.panel,
                           timeout=self.settings.timeouts.navigation)

    async def verify_guidance_visible(self) -> bool:
        return await self.page_object.is_guidance_visible()

    async def click_next_tip(self) -> None:
        await self.click(LiveMeetingGuidancePage.next_tip_button)

    async def click_previous_tip(self) -> None:
        await self.click(LiveMeetingGuidancePage.previous_tip_button)

    async def click_skip_guidance(self) -> None:
        await self.click(LiveMeetingGuidancePage.skip_button)

    async def close_guidance(self) -> None:
        await self.click(LiveMeetingGuidancePage.close_button)

    async def verify_guidance_title_visible(self) -> bool:
        return await self.is_visible(LiveMeetingGuidancePage.title)

    async def verify_guidance_content_visible(self) -> bool:
        return await self.is_visible(LiveMeetingGuidancePage.content)

    async def get_guidance_text(self) -> Optional[str]:
        return await self.text_of(LiveMeetingGuidancePage.content)


class PostMeetingInsightsActions(BaseActions[PostMeetingInsightsPage]):
    page_class = PostMeetingInsightsPage

    async def wait_for_insights_load(self) -> None:
        await self.resolve(PostMeetingInsightsPage.title,
                           timeout=self.settings.timeouts.navigation)

    async def verify_insights_visible(self) -> bool:
        return await self.page_object.is_insights_visible()

    async def click_download_report(self) -> None:
        await self.click(PostMeetingInsightsPage.download_button)

    async def click_share_insights(self) -> None:
        await self.click(PostMeetingInsightsPage.share_button)

    async def click_view_details(self) -> None:
        await self.click(PostMeetingInsightsPage.view_details_button)

    async def click_close_insights(self) -> None:
        await self.click(PostMeetingInsightsPage.close_button)

    async def verify_meeting_summary_visible(self) -> bool:
        return await self.is_visible(PostMeetingInsightsPage.summary)

    async def verify_key_points_visible(self) -> bool:
        return await self.is_visible(PostMeetingInsightsPage.key_points)

    async def verify_action_items_visible(self) -> bool:
        return await self.is_visible(PostMeetingInsightsPage.action_items)

    async def get_meeting_summary(self) -> Optional[str]:
        return await self.text_of(PostMeetingInsightsPage.summary)
