"""
Automated login to Anyteam through Google OAuth.

Usage:
    page = await perform_login(page, context, settings)

The returned page is the Anyteam tab showing the home page; depending on how
Google sign-in ran, it may not be the page that was passed in.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlparse

from playwright.async_api import BrowserContext, Page
from playwright.async_api import Error as PlaywrightError

from ..actions.google_oauth_actions import GoogleOAuthActions
from ..actions.login_actions import LoginActions
from ..config import Settings, get_settings
from ..core.flow import Flow, FlowContext, FlowStep
from ..core.session import SessionBridge
from ..diagnostics import failure_hook
from ..exceptions import ElementNotFound, SessionLostError
from ..pages.base_page import BasePage

logger = logging.getLogger(__name__)

_STORE_AUTH_JS = """
([jwt, userId]) => {
    localStorage.setItem("jwt", jwt);
    localStorage.setItem("userId", userId);
    localStorage.setItem("auth_status", "SUCCESS");
}
"""


def _left_onboarding(url: str) -> bool:
    return "/onboarding" not in url and "/Login" not in url


async def clear_app_session(context: BrowserContext, settings: Settings) -> None:
    """
    Drop Anyteam cookies (app and auth host) but keep the Google session.

    Signing in again with a live Google session skips most OAuth screens.
    """
    app_host = settings.app_host
    for domain in (app_host, app_host.replace("app.", "auth.", 1)):
        await context.clear_cookies(domain=domain)
    logger.info("Cleared Anyteam cookies for %s", app_host)


async def store_auth_from_url(page: Page) -> bool:
    """
    Copy ``jwt`` and ``userId`` from the onboarding URL into localStorage.

    Returns:
        Whether the URL carried both values.
    """
    query = parse_qs(urlparse(page.url).query)
    jwt = query.get("jwt", [None])[0]
    user_id = query.get("userId", [None])[0]
    if not (jwt and user_id):
        return False
    await page.evaluate(_STORE_AUTH_JS, [jwt, user_id])
    logger.info("Stored JWT from the onboarding URL")
    return True


async def complete_onboarding(page: Page, settings: Settings) -> None:
    """
    Get from the onboarding screen to the home page.

    The app normally moves on by itself once its spinners are gone. When it
    does not, the home page content may already be rendered in place; if not,
    the browser is sent to the home path.
    """
    if "/onboarding" not in page.url:
        return

    home = BasePage(page, settings)
    await store_auth_from_url(page)
    await home.wait_for_loading_complete()
    await home.wait_for_page_load()

    try:
        await page.wait_for_url(_left_onboarding, timeout=settings.timeouts.redirect)
        logger.info("App left onboarding for %s", page.url)
        return
    except PlaywrightError:
        logger.info("No navigation away from onboarding, checking page state")

    if await home.is_home_page_displayed(settings.timeouts.candidate):
        logger.info("Home content already rendered on %s", page.url)
        return

    logger.info("Navigating to %s manually", settings.home_path)
    await home.navigate_to(settings.home_path)


async def recover_session(page: Page, settings: Settings) -> None:
    """
    Retry the home page once if the app fell back to the login screen.

    Raises:
        SessionLostError: If the app still shows the login screen.
    """
    if "/Login" not in page.url:
        return
    logger.warning("Session lost, app shows %s; retrying %s", page.url, settings.home_path)
    await page.goto(settings.home_url, wait_until="domcontentloaded",
                    timeout=settings.timeouts.navigation)
    if "/Login" in page.url:
        raise SessionLostError(
            "Session was lost and could not be recovered; the app redirected back to login",
            details={"url": page.url},
        )


async def ensure_home(page: Page, settings: Settings) -> None:
    """
    Open the home page unless its content already shows.

    Raises:
        ElementNotFound: If the app shell (sidebar) never renders.
    """
    home = BasePage(page, settings)
    if not await home.is_home_page_displayed(settings.timeouts.candidate):
        if settings.home_path not in page.url:
            await home.navigate_to(settings.home_path)
    timeout = settings.timeouts.overall
    if not await home.is_visible(BasePage.sidebar, timeout):
        raise ElementNotFound(BasePage.sidebar.name, BasePage.sidebar.describe(), timeout,
                              details={"url": page.url})


async def perform_login(page: Page, context: Optional[BrowserContext] = None,
                        settings: Optional[Settings] = None) -> Page:
    """
    Log in to Anyteam with the configured Google account.

    Args:
        page: Page to start from.
        context: Browser context of ``page``; defaults to ``page.context``.
        settings: Suite settings; defaults to the cached settings.

    Returns:
        The Anyteam page showing the home page.

    Raises:
        MissingConfigError: If no Google credentials are configured.
        FlowStepFailed: If a login step failed; the cause is chained.
    """
    settings = settings or get_settings()
    settings.require_credentials()
    context = context or page.context
    session = SessionBridge(page)
    login = LoginActions(session, settings)
    oauth = GoogleOAuthActions(session, settings)

    async def clear_cookies(ctx: FlowContext) -> None:
        await clear_app_session(context, settings)

    async def open_login_page(ctx: FlowContext) -> None:
        await login.navigate_to_login_page()

    async def continue_with_google(ctx: FlowContext) -> str:
        return (await login.click_continue_with_google()).signal

    async def google_sign_in(ctx: FlowContext) -> None:
        await oauth.complete_oauth_flow(
            settings.account.email,
            settings.account.password.get_secret_value(),
            await_redirect=False,
        )

    async def await_app(ctx: FlowContext) -> Page:
        return await oauth.wait_for_app_page()

    async def onboarding(ctx: FlowContext) -> None:
        await complete_onboarding(ctx.page, settings)

    async def session_check(ctx: FlowContext) -> None:
        await recover_session(ctx.page, settings)

    async def verify_home(ctx: FlowContext) -> None:
        await ensure_home(ctx.page, settings)

    flow = Flow(
        "login",
        [
            FlowStep("clear_app_session", clear_cookies),
            FlowStep("open_login_page", open_login_page),
            FlowStep("continue_with_google", continue_with_google, output="entry"),
            FlowStep("google_sign_in", google_sign_in,
                     when=lambda ctx: ctx.state.get("entry") != "already_signed_in"),
            FlowStep("await_app_redirect", await_app, output="app_page"),
            FlowStep("complete_onboarding", onboarding),
            FlowStep("recover_session", session_check),
            FlowStep("verify_home", verify_home),
        ],
        session,
        timeout=settings.timeouts.flow,
        settle=settings.timeouts.settle,
        on_failure=failure_hook(settings),
    )
    result = await flow.run()
    app_page = session.current()
    logger.info("Login complete on %s after %d steps", app_page.url, len(result.executed))
    return app_page
