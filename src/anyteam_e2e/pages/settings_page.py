"""
Settings Page Objects: the settings screen and its Profile Info and LinkedIn tabs.
"""

from typing import Optional

from playwright.async_api import Error as PlaywrightError

from ..core.resolver import Candidates
from .base_page import BasePage

SAVE_LINK = 'button.text-sm.flex.items-center.underline.underline-offset-2:has-text("Save")'


class SettingsPage(BasePage):
    """Page Object for the settings screen."""

    settings_button = Candidates.of(
        "Settings",
        'button[data-sidebar="menu-button"]:has(h5:has-text("Settings"))',
    )
    any_tab = Candidates.of("settings tab", 'button[role="tab"]')
    profile_info_tab = Candidates.of(
        "Profile Info tab",
        'button[role="tab"][id*="trigger-profile_info"]:has-text("Profile Info")',
    )

    async def is_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.any_tab, timeout)

    async def is_settings_button_visible(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.settings_button, timeout)

    async def is_tab_active(self, tab: Candidates,
                            timeout: Optional[int] = None) -> bool:
        """Tabs carry ``data-state="active"`` when selected."""
        resolved = await self.resolver.try_resolve(
            self.page, tab, per_candidate_timeout=timeout, overall_timeout=timeout)
        if resolved is None:
            return False
        try:
            state = await resolved.locator.get_attribute(
                "data-state", timeout=self.settings.timeouts.action)
        except PlaywrightError:
            return False
        return state == "active"


class ProfileInfoPage(SettingsPage):
    """Page Object for the Profile Info tab."""

    content = Candidates.of("Profile Info content", '[id*="content-profile_info"]')
    # The About yourself pencil is the last pencil button on the tab
    about_yourself_edit_icon = Candidates.of(
        "About yourself edit", "button:has(svg.lucide-pencil) >> nth=-1")
    about_yourself_field = Candidates.of(
        "About yourself", 'textarea[name="about"]')
    save_button = Candidates.of("Save", SAVE_LINK)

    async def is_tab_selected(self, timeout: Optional[int] = None) -> bool:
        return await self.is_tab_active(self.profile_info_tab, timeout)

    async def is_content_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.content, timeout)


class LinkedInPage(SettingsPage):
    """Page Object for the LinkedIn tab."""

    linkedin_tab = Candidates.of(
        "LinkedIn tab",
        'button[role="tab"][id*="trigger-linked"]',
        'button[role="tab"]:has-text("Linked")',
        'button[role="tab"]:has-text("LinkedIn")',
    )
    content = Candidates.of(
        "LinkedIn content",
        '[id*="content-linked"]',
        '[id*="content-linkedin"]',
    )
    linkedin_edit_icon = Candidates.of(
        "LinkedIn edit",
        "button:has(svg.lucide-pencil)",
        "svg.lucide-pencil",
    )
    linkedin_field = Candidates.of("LinkedIn", 'input[name="linkedIn"]')
    save_button = Candidates.of("Save", SAVE_LINK)

    async def is_tab_selected(self, timeout: Optional[int] = None) -> bool:
        return await self.is_tab_active(self.linkedin_tab, timeout)

    async def is_content_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.content, timeout)
