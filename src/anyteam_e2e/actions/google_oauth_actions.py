"""
Actions for the Google sign-in screens.

The whole sign-in is available as a flow through
``GoogleOAuthActions.complete_oauth_flow``; its steps are the single
interactions defined here.
"""

import logging
from typing import Optional

from playwright.async_api import Page

from ..core.detector import Signal, element_visible, page_closed, url_matches
from ..core.flow import Flow, FlowContext, FlowResult, FlowStep
from ..diagnostics import failure_hook
from ..exceptions import CompletionTimeout, InteractionFailed, SignInBlocked
from ..pages.base_page import is_app_host
from ..pages.google_oauth_page import GoogleOAuthPage
from .base_actions import BaseActions

logger = logging.getLogger(__name__)


class GoogleOAuthActions(BaseActions[GoogleOAuthPage]):
    """Google sign-in interactions."""

    page_class = GoogleOAuthPage

    def _visible(self, candidates, name: str) -> Signal:
        return element_visible(self.page.locator(candidates.selectors[0]), name)

    def _app_redirect(self, page: Page) -> Signal:
        domain = self.settings.app_domain
        return url_matches(page, lambda url: is_app_host(url, domain), "app_redirect")

    async def click_use_another_account(self) -> None:
        await self.click(GoogleOAuthPage.use_another_account)
        await self.resolve(GoogleOAuthPage.email_input,
                           timeout=self.settings.timeouts.navigation)

    async def enter_email(self, email: str) -> None:
        await self.fill(GoogleOAuthPage.email_input, email,
                        timeout=self.settings.timeouts.navigation)

    async def enter_password(self, password: str) -> None:
        """Type the password key by key; Google ignores a pasted value."""
        await self.type_text(GoogleOAuthPage.password_input, password,
                             timeout=self.settings.timeouts.navigation)

    async def click_next_after_email(self) -> None:
        """
        Submit the e-mail and wait for the password screen.

        Raises:
            InteractionFailed: If Next is disabled.
            SignInBlocked: If Google answers with a captcha.
        """
        element = await self.resolve(GoogleOAuthPage.next_button)
        if await element.locator.is_disabled():
            raise InteractionFailed(
                "click", element.target,
                details={"reason": "Next button is disabled; enter a valid email first"})

        result = await self.detector.race(
            [
                self._visible(GoogleOAuthPage.password_input, "password_input"),
                self._visible(GoogleOAuthPage.captcha_image, "captcha"),
            ],
            trigger=lambda: self.executor.click(element),
        )
        if result.signal == "captcha":
            raise SignInBlocked("Google asked for a captcha after the e-mail step",
                                details={"url": self.page.url})

    async def click_next_after_password(self) -> str:
        """
        Submit the password and wait for what Google shows next.

        Returns:
            ``consent``, ``permissions``, ``app_redirect`` or ``page_closed``.
        """
        element = await self.resolve(GoogleOAuthPage.next_button)
        page = self.page
        result = await self.detector.race(
            [
                self._visible(GoogleOAuthPage.continue_button, "consent"),
                self._visible(GoogleOAuthPage.allow_button, "permissions"),
                self._app_redirect(page),
                page_closed(page),
            ],
            timeout=self.settings.timeouts.redirect,
            trigger=lambda: self.executor.click(element),
        )
        logger.info("Password accepted -> %s", result.signal)
        return result.signal

    async def click_continue_on_consent_page(self) -> None:
        """Continue on "You're signing back in"; this button needs a forced click."""
        await self.click(GoogleOAuthPage.continue_button, force=True)

    async def click_allow_on_permissions_page(self) -> None:
        await self.click(GoogleOAuthPage.allow_button)

    async def wait_for_app_page(self, timeout: Optional[float] = None) -> Page:
        """
        Wait until sign-in hands control back to the Anyteam app.

        The app may load in the sign-in tab itself, or the sign-in popup may
        close and leave the app in another tab, so every open tab is scanned
        once the redirect is observed (or its budget runs out).

        Returns:
            The app page, now the session's active page.

        Raises:
            CompletionTimeout: If no tab shows the app.
        """
        timeout = timeout or self.settings.timeouts.redirect
        page = self.page
        domain = self.settings.app_domain

        async def scan(_timeout: float) -> Page:
            found = self.session.find_page(lambda p: is_app_host(p.url, domain))
            if found is None:
                raise LookupError("no open tab on the app host")
            return found

        await self.detector.race(
            [self._app_redirect(page), page_closed(page)],
            timeout=timeout,
            fallback=Signal("tab_scan", scan),
        )
        app_page = self.session.find_page(lambda p: is_app_host(p.url, domain))
        if app_page is None:
            raise CompletionTimeout(["app_redirect", "page_closed", "tab_scan"], timeout)
        logger.info("Signed in, app page: %s", app_page.url)
        return self.session.activate(app_page)

    async def complete_oauth_flow(self, email: str, password: str,
                                  await_redirect: bool = True) -> FlowResult:
        """
        Run the full Google sign-in.

        "Use another account" is clicked only when Google shows the account
        chooser. The consent and permissions screens are skipped by Google for
        accounts that already granted access: those steps run only when the
        password step landed on them, and a failure there is not fatal.

        Args:
            email: Google account e-mail.
            password: Google account password; never logged.
            await_redirect: Also wait for the app page to take over.

        Raises:
            FlowStepFailed: If a mandatory step failed.
        """
        use_another = await self.page_object.is_use_another_account_visible(
            self.settings.timeouts.candidate)

        async def use_another_account(ctx: FlowContext) -> None:
            await self.click_use_another_account()

        async def fill_email(ctx: FlowContext) -> None:
            await self.enter_email(email)

        async def next_after_email(ctx: FlowContext) -> None:
            await self.click_next_after_email()

        async def fill_password(ctx: FlowContext) -> None:
            await self.enter_password(password)

        async def next_after_password(ctx: FlowContext) -> str:
            return await self.click_next_after_password()

        async def continue_consent(ctx: FlowContext) -> None:
            await self.click_continue_on_consent_page()

        async def allow_permissions(ctx: FlowContext) -> None:
            await self.click_allow_on_permissions_page()

        flow = Flow(
            "google_oauth",
            [
                FlowStep("use_another_account", use_another_account,
                         when=lambda ctx: use_another),
                FlowStep("enter_email", fill_email),
                FlowStep("click_next_after_email", next_after_email),
                FlowStep("enter_password", fill_password),
                FlowStep("click_next_after_password", next_after_password,
                         output="password_outcome"),
                FlowStep("click_continue", continue_consent, optional=True,
                         when=lambda ctx: ctx.state.get("password_outcome") == "consent"),
                FlowStep("click_allow", allow_permissions, optional=True,
                         when=lambda ctx: ctx.state.get("password_outcome")
                         in ("consent", "permissions")),
            ],
            self.session,
            timeout=self.settings.timeouts.flow,
            settle=self.settings.timeouts.settle,
            on_failure=failure_hook(self.settings),
        )
        result = await flow.run()
        if await_redirect:
            await self.wait_for_app_page()
        return result

    # Verification probes
    async def verify_choose_account_page_displayed(self) -> bool:
        return await self.page_object.is_choose_account_page_displayed()

    async def verify_email_input_page_displayed(self) -> bool:
        return await self.page_object.is_email_input_page_displayed()

    async def is_use_another_account_visible(self) -> bool:
        return await self.page_object.is_use_another_account_visible()
