"""
Google OAuth Page Object.

Covers every screen of Google sign-in that the Anyteam login passes through:
account chooser, e-mail, password, "signing back in" consent and the
permissions grant.
"""

from typing import Optional

from ..core.resolver import Candidates
from .base_page import BasePage

GOOGLE_ACCOUNTS_HOST = "accounts.google.com"


class GoogleOAuthPage(BasePage):
    """Page Object for the Google sign-in screens."""

    # Account chooser
    choose_account_heading = Candidates.of(
        "Choose an account heading",
        'h1:has-text("Choose an account")',
        'span:has-text("Choose an account")',
    )
    saved_account_option = Candidates.of(
        "saved account", 'div[role="link"][jsname="MBVUVe"]')
    use_another_account = Candidates.of(
        "Use another account",
        'div[role="link"][jsname="rwl3qc"]:has-text("Use another account")',
        'div.riDSKb:has-text("Use another account")',
        'li:has-text("Use another account") div[role="link"]',
    )

    # E-mail screen
    email_input = Candidates.of(
        "email input",
        'input[type="email"][name="identifier"]',
        "input#identifierId",
        'input[aria-label="Email or phone"]',
    )
    next_button = Candidates.of(
        "Next",
        'button[jsname="LgbsSe"]:has(span[jsname="V67aGc"]:has-text("Next"))',
        'button:has(span[jsname="V67aGc"]:has-text("Next"))',
        'button:has-text("Next")',
    )
    create_account_button = Candidates.of(
        "Create account",
        'button[jsname="LgbsSe"]:has(span[jsname="V67aGc"]:has-text("Create account"))',
        'button[type="button"]:has(span:has-text("Create account"))',
    )
    forgot_email_button = Candidates.of(
        "Forgot email", 'button[jsname="Cuz2Ue"]:has-text("Forgot email?")')

    # Password screen
    password_input = Candidates.of(
        "password input",
        'input[type="password"][name="Passwd"]',
        'input[aria-label="Enter your password"]',
    )

    # Consent screens; the visible button is the last matching span
    consent_heading = Candidates.of(
        "signing back in heading", "text=/You.*re signing back in/")
    continue_button = Candidates.of(
        "Continue",
        'span[jsname="V67aGc"].VfPpkd-vQzf8d:has-text("Continue") >> nth=-1',
        'button:has-text("Continue") >> nth=-1',
    )
    permissions_heading = Candidates.of(
        "permissions heading", "text=/wants to access your Google Account/")
    allow_button = Candidates.of(
        "Allow",
        'span[jsname="V67aGc"].VfPpkd-vQzf8d:has-text("Allow") >> nth=-1',
        'button:has-text("Allow") >> nth=-1',
    )

    captcha_image = Candidates.of("captcha image", "img#captchaimg")
    captcha_input = Candidates.of("captcha input", 'input[name="ca"]')

    def is_google_accounts(self) -> bool:
        return GOOGLE_ACCOUNTS_HOST in self.page.url

    async def is_choose_account_page_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.choose_account_heading, timeout)

    async def is_email_input_page_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.email_input, timeout)

    async def is_password_page_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.password_input, timeout)

    async def is_use_another_account_visible(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.use_another_account, timeout)

    async def is_captcha_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.captcha_image, timeout)
