"""
Actions for the settings screen and its Profile Info and LinkedIn tabs.
"""

import logging

from ..pages.settings_page import LinkedInPage, ProfileInfoPage, SettingsPage
from .base_actions import BaseActions

logger = logging.getLogger(__name__)


class SettingsActions(BaseActions[SettingsPage]):
    """Settings screen interactions."""

    page_class = SettingsPage

    async def navigate_to_settings_page(self) -> None:
        """Open settings from the sidebar and wait for its tabs."""
        await self.click(SettingsPage.settings_button)
        await self.resolve(SettingsPage.any_tab, timeout=self.settings.timeouts.navigation)
        await self.page_object.wait_for_page_load()

    async def click_profile_info_tab(self) -> None:
        await self.click(SettingsPage.profile_info_tab)

    async def verify_settings_page_displayed(self) -> bool:
        return await self.page_object.is_displayed()

    async def verify_settings_button_visible(self) -> bool:
        return await self.page_object.is_settings_button_visible()

    async def verify_profile_info_tab_active(self) -> bool:
        return await self.page_object.is_tab_active(SettingsPage.profile_info_tab)


class ProfileInfoActions(BaseActions[ProfileInfoPage]):
    """Profile Info tab interactions."""

    page_class = ProfileInfoPage

    async def click_profile_info_tab(self) -> None:
        await self.click(ProfileInfoPage.profile_info_tab)
        await self.resolve(ProfileInfoPage.content)

    async def verify_profile_info_tab_active(self) -> bool:
        return await self.page_object.is_tab_selected()

    async def verify_profile_info_content_displayed(self) -> bool:
        return await self.page_object.is_content_displayed()

    async def click_about_yourself_edit_icon(self) -> None:
        # the pencil sits below the fold on small viewports
        await self.page.mouse.wheel(0, 300)
        await self.click(ProfileInfoPage.about_yourself_edit_icon)

    async def edit_about_yourself(self, text: str) -> None:
        """Replace the About yourself text, opening the editor if needed."""
        field = await self.try_resolve(ProfileInfoPage.about_yourself_field,
                                       self.settings.timeouts.candidate)
        if field is None:
            await self.click_about_yourself_edit_icon()
            field = await self.resolve(ProfileInfoPage.about_yourself_field)
        await self.executor.fill(field, text)
        logger.info("About yourself set (%d characters)", len(text))

    async def save_profile_info(self) -> None:
        await self.click(ProfileInfoPage.save_button)


class LinkedInActions(BaseActions[LinkedInPage]):
    """LinkedIn tab interactions."""

    page_class = LinkedInPage

    async def click_linkedin_tab(self) -> None:
        await self.click(LinkedInPage.linkedin_tab)
        await self.resolve(LinkedInPage.content)

    async def click_linkedin_edit_icon(self) -> None:
        await self.click(LinkedInPage.linkedin_edit_icon)

    async def edit_linkedin_info(self, value: str) -> None:
        """
        Replace the LinkedIn value.

        Some accounts have no editable LinkedIn field; callers that can live
        without it run this as an optional flow step.
        """
        await self.click_linkedin_edit_icon()
        await self.fill(LinkedInPage.linkedin_field, value)

    async def save_linkedin_info(self) -> None:
        await self.click(LinkedInPage.save_button)

    async def verify_linkedin_tab_active(self) -> bool:
        return await self.page_object.is_tab_selected()

    async def verify_linkedin_content_displayed(self) -> bool:
        return await self.page_object.is_content_displayed()
