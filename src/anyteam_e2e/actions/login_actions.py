"""
Actions for the Anyteam login page and the first Google sign-in screen.
"""

import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError

from ..core.detector import (
    CompletionResult,
    element_visible,
    new_page,
    popup,
    url_host_contains,
    url_matches,
)
from ..exceptions import InteractionFailed
from ..pages.base_page import APP_DOMAIN, is_app_host
from ..pages.google_oauth_page import GOOGLE_ACCOUNTS_HOST, GoogleOAuthPage
from ..pages.login_page import LoginPage
from .base_actions import BaseActions

logger = logging.getLogger(__name__)


def is_app_url(url: str, domain: str = APP_DOMAIN) -> bool:
    """True for Anyteam app URLs that are not the login screen."""
    return is_app_host(url, domain) and "/Login" not in url


class LoginActions(BaseActions[LoginPage]):
    """Login page interactions."""

    page_class = LoginPage

    @property
    def oauth_page(self) -> GoogleOAuthPage:
        return GoogleOAuthPage(self.page, self.settings, self.resolver)

    async def navigate_to_login_page(self) -> None:
        await self.page_object.goto()

    async def click_continue_with_google(self) -> CompletionResult:
        """
        Click "Continue with Google" and wait for Google sign-in to show up.

        Sign-in may open as a popup, as a new tab, or in place; an existing
        Google session may also send the browser straight back to the app.
        A popup or tab becomes the session's active page.

        Returns:
            The winning completion signal.
        """
        button = await self.resolve(LoginPage.continue_with_google)
        page = self.page
        signals = [
            popup(page),
            new_page(page.context),
            element_visible(page.locator(GoogleOAuthPage.choose_account_heading.selectors[0]),
                            "choose_account"),
            element_visible(page.locator(GoogleOAuthPage.email_input.selectors[0]),
                            "email_input"),
            url_host_contains(page, GOOGLE_ACCOUNTS_HOST, "google_accounts"),
            url_matches(page, lambda url: is_app_url(url, self.settings.app_domain),
                        "already_signed_in"),
        ]
        result = await self.detector.race(
            signals, trigger=lambda: self.executor.click(button))
        logger.info("Continue with Google -> %s", result.signal)

        if result.signal in ("popup", "new_page"):
            auth_page = self.session.on_new_page_detected(result.value, expected=True)
            try:
                await auth_page.wait_for_load_state(
                    "domcontentloaded", timeout=self.settings.timeouts.navigation)
            except PlaywrightError:
                logger.debug("Sign-in popup still loading: %s", auth_page.url)
        return result

    async def enter_email(self, email: str) -> None:
        await self.fill(GoogleOAuthPage.email_input, email)

    async def enter_password(self, password: str) -> None:
        await self.fill(GoogleOAuthPage.password_input, password)

    async def click_next(self) -> None:
        """
        Click Next on the Google e-mail screen.

        Raises:
            InteractionFailed: If the button is disabled (no valid e-mail yet).
        """
        element = await self.resolve(GoogleOAuthPage.next_button)
        if await element.locator.is_disabled():
            raise InteractionFailed(
                "click", element.target,
                details={"reason": "Next button is disabled; enter a valid email first"})
        await self.executor.click(element)

    async def is_next_button_enabled(self) -> bool:
        element = await self.try_resolve(GoogleOAuthPage.next_button)
        if element is None:
            return False
        try:
            return not await element.locator.is_disabled()
        except PlaywrightError:
            return False

    async def click_use_another_account(self) -> None:
        await self.click(GoogleOAuthPage.use_another_account)
        await self.resolve(GoogleOAuthPage.email_input)

    async def click_create_account(self) -> None:
        await self.click(GoogleOAuthPage.create_account_button)

    async def click_forgot_email(self) -> None:
        await self.click(GoogleOAuthPage.forgot_email_button)

    async def login_with_google(self, email: str) -> None:
        """Open Google sign-in and submit ``email``."""
        await self.click_continue_with_google()
        if await self.oauth_page.is_use_another_account_visible():
            await self.click_use_another_account()
        await self.enter_email(email)
        await self.click_next()

    async def click_terms_of_service(self) -> None:
        await self.click(LoginPage.terms_of_service_link)

    async def click_privacy_policy(self) -> None:
        await self.click(LoginPage.privacy_policy_link)

    async def get_business_email_hint_text(self) -> Optional[str]:
        return await self.text_of(LoginPage.business_email_hint)

    async def is_business_email_hint_visible(self) -> bool:
        return await self.is_visible(LoginPage.business_email_hint)

    # Verification probes
    async def verify_login_page_displayed(self) -> bool:
        return await self.page_object.is_displayed()

    async def verify_google_oauth_form_displayed(self) -> bool:
        oauth = self.oauth_page
        return (await oauth.is_choose_account_page_displayed()
                or await oauth.is_email_input_page_displayed())

    async def verify_choose_account_page_displayed(self) -> bool:
        return await self.oauth_page.is_choose_account_page_displayed()

    async def is_use_another_account_visible(self) -> bool:
        return await self.oauth_page.is_use_another_account_visible()
