"""
Updating the profile from the settings screen.
"""

from typing import Optional

from ..actions.settings_actions import LinkedInActions, ProfileInfoActions, SettingsActions
from ..config import Settings, get_settings
from ..core.flow import Flow, FlowContext, FlowResult, FlowStep
from ..core.session import SessionBridge
from ..diagnostics import failure_hook
from ..exceptions import ElementNotFound
from ..pages.settings_page import ProfileInfoPage


async def update_profile(session: SessionBridge,
                         about: Optional[str] = None,
                         linkedin: Optional[str] = None,
                         settings: Optional[Settings] = None) -> FlowResult:
    """
    Set About yourself and the LinkedIn value, saving each tab.

    The LinkedIn edit is optional: a failure there is logged and the flow
    still completes with ``linkedin_edited`` recorded as absent and the
    LinkedIn save skipped.

    Args:
        session: Session on a signed-in Anyteam page.
        about: About yourself text; defaults to the configured profile.
        linkedin: LinkedIn value; defaults to the configured profile.
        settings: Suite settings; defaults to the cached settings.

    Raises:
        FlowStepFailed: If a mandatory step failed.
    """
    settings = settings or get_settings()
    about = settings.profile.about_yourself if about is None else about
    linkedin = settings.profile.linkedin_url if linkedin is None else linkedin

    settings_actions = SettingsActions(session, settings)
    profile = ProfileInfoActions(session, settings)
    linkedin_actions = LinkedInActions(session, settings)

    async def open_settings(ctx: FlowContext) -> None:
        await settings_actions.navigate_to_settings_page()

    async def open_profile_tab(ctx: FlowContext) -> None:
        await profile.click_profile_info_tab()

    async def edit_about(ctx: FlowContext) -> None:
        await profile.edit_about_yourself(about)

    async def save_profile(ctx: FlowContext) -> bool:
        await profile.save_profile_info()
        return True

    async def verify_profile_tab(ctx: FlowContext) -> bool:
        if not await profile.verify_profile_info_tab_active():
            tab = ProfileInfoPage.profile_info_tab
            raise ElementNotFound(tab.name, tab.describe(),
                                  details={"expected": 'data-state="active"'})
        return True

    async def open_linkedin_tab(ctx: FlowContext) -> None:
        await linkedin_actions.click_linkedin_tab()

    async def edit_linkedin(ctx: FlowContext) -> None:
        await linkedin_actions.edit_linkedin_info(linkedin)

    async def save_linkedin(ctx: FlowContext) -> bool:
        await linkedin_actions.save_linkedin_info()
        return True

    flow = Flow(
        "update_profile",
        [
            FlowStep("open_settings", open_settings),
            FlowStep("open_profile_info_tab", open_profile_tab),
            FlowStep("verify_profile_info_tab", verify_profile_tab,
                     output="profile_tab_active"),
            FlowStep("edit_about_yourself", edit_about),
            FlowStep("save_profile_info", save_profile, output="profile_saved"),
            FlowStep("open_linkedin_tab", open_linkedin_tab, optional=True),
            FlowStep("edit_linkedin", edit_linkedin, optional=True,
                     output="linkedin_edited"),
            FlowStep("save_linkedin", save_linkedin, optional=True,
                     output="linkedin_saved",
                     when=lambda ctx: not ctx.state.is_absent("linkedin_edited")),
        ],
        session,
        timeout=settings.timeouts.flow,
        settle=settings.timeouts.settle,
        on_failure=failure_hook(settings),
    )
    return await flow.run()
