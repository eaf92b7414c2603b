"""
Opening meeting insights from the notifications panel.
"""

import logging
from typing import Optional

from playwright.async_api import Page

from ..actions.notifications_actions import NotificationsActions
from ..config import Settings, get_settings
from ..core.detector import new_page, url_matches
from ..core.flow import Flow, FlowContext, FlowStep
from ..core.session import SessionBridge
from ..diagnostics import failure_hook
from ..pages.notifications_page import NotificationsPage

logger = logging.getLogger(__name__)


async def open_meeting_insights(session: SessionBridge, title: str = "",
                                settings: Optional[Settings] = None) -> Page:
    """
    Notifications panel → notification → View Meeting Insights.

    Args:
        session: Session on a signed-in Anyteam page.
        title: Open the notification mentioning this meeting; the first
            notification when empty.
        settings: Suite settings; defaults to the cached settings.

    Returns:
        The page showing the insights; a new tab becomes the active page.

    Raises:
        FlowStepFailed: If a step failed.
    """
    settings = settings or get_settings()
    notifications = NotificationsActions(session, settings)

    async def open_panel(ctx: FlowContext) -> None:
        await notifications.click_notifications_heading()

    async def open_item(ctx: FlowContext) -> None:
        await notifications.click_notification_item(title)

    async def view_insights(ctx: FlowContext) -> Page:
        page = ctx.page
        start_url = page.url
        button = await notifications.resolve(NotificationsPage.view_meeting_insights)
        result = await notifications.detector.race(
            [new_page(page.context), url_matches(page, lambda url: url != start_url, "navigated")],
            trigger=lambda: notifications.executor.click(button),
        )
        if result.signal == "new_page":
            return session.on_new_page_detected(result.value, expected=True)
        return page

    flow = Flow(
        "open_meeting_insights",
        [
            FlowStep("open_notifications", open_panel),
            FlowStep("open_notification", open_item),
            FlowStep("view_meeting_insights", view_insights, output="insights_page"),
        ],
        session,
        timeout=settings.timeouts.flow,
        settle=settings.timeouts.settle,
        on_failure=failure_hook(settings),
    )
    result = await flow.run()
    insights_page = result.state["insights_page"]
    logger.info("Meeting insights open on %s", insights_page.url)
    return insights_page
