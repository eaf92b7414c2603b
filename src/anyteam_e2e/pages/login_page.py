"""
Login Page Object for the Anyteam sign-in screen (/onboarding/Login).
"""

from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from ..core.resolver import Candidates
from .base_page import BasePage


class LoginPage(BasePage):
    """Page Object for the Anyteam login page."""

    # The header logo carries the "absolute" class; the form logo does not
    anyteam_logo = Candidates.of(
        "Anyteam logo", 'img[alt="anyteam-logo"]:not(.absolute)')

    # The <p> inside the black button is the clickable element
    continue_with_google = Candidates.of(
        "Continue with Google",
        'p:has-text("Continue with Google")',
        'button:has(img[alt="logo-google"])',
        'button:has-text("Continue with Google")',
    )
    business_email_hint = Candidates.of(
        "business email hint",
        'h6:has-text("Use business email to unlock more features")',
    )
    terms_of_service_link = Candidates.of(
        "terms of service", 'span:has-text("terms of service")')
    privacy_policy_link = Candidates.of(
        "privacy policy", 'span:has-text("privacy policy")')

    captcha_image = Candidates.of("captcha image", "img#captchaimg")
    captcha_input = Candidates.of("captcha input", 'input[name="ca"]')
    captcha_audio_button = Candidates.of(
        "captcha audio",
        'button[aria-label="Listen and type the numbers you hear"]',
    )

    @property
    def continue_with_google_button(self) -> Locator:
        """Parent <button> of the Continue with Google text, for styling checks."""
        return self.page.locator('p:has-text("Continue with Google")').first.locator("..")

    @property
    def url(self) -> str:
        return self.settings.login_url

    async def goto(self) -> None:
        """Navigate to the login page."""
        await self.navigate_to(self.settings.login_path)

    async def is_displayed(self, timeout: Optional[int] = None) -> bool:
        """Check that both the logo and the Continue with Google button show."""
        return (await self.is_visible(self.anyteam_logo, timeout)
                and await self.is_visible(self.continue_with_google, timeout))

    async def is_captcha_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.captcha_image, timeout)

    async def get_button_text(self) -> Optional[str]:
        try:
            text = await self.continue_with_google_button.text_content(
                timeout=self.settings.timeouts.action)
        except PlaywrightError:
            return None
        return text.strip() if text else text
