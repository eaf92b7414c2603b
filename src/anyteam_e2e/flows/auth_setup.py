"""
One-off manual login that saves the browser storage state.

A visible browser opens the login page; a person signs in with Google by
hand. Once the app reaches the home page the cookies and localStorage are
written to ``auth_state_path`` (``auth.json``), which the live scenarios
start from.
"""

import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import async_playwright

from ..browser import launch_browser, new_context
from ..config import Settings, get_settings
from ..pages.login_page import LoginPage

logger = logging.getLogger(__name__)

MANUAL_LOGIN_TIMEOUT = 120000


async def manual_auth_setup(settings: Optional[Settings] = None,
                            timeout: float = MANUAL_LOGIN_TIMEOUT) -> Path:
    """
    Wait for a manual login and save the resulting storage state.

    Args:
        settings: Suite settings; defaults to the cached settings.
        timeout: How long to wait for the home page (ms).

    Returns:
        Path of the saved storage state.
    """
    settings = settings or get_settings()
    path = settings.auth_state_path

    async with async_playwright() as pw:
        browser = await launch_browser(pw, settings, headless=False)
        try:
            context = await new_context(browser, settings)
            page = await context.new_page()
            await LoginPage(page, settings).goto()

            logger.info("Sign in with Google in the opened browser; waiting up to %ds "
                        "for %s", timeout // 1000, settings.home_path)
            await page.wait_for_url(f"**{settings.home_path}", timeout=timeout,
                                    wait_until="domcontentloaded")
            logger.info("Home page reached: %s", page.url)

            path.parent.mkdir(parents=True, exist_ok=True)
            await context.storage_state(path=str(path))
            logger.info("Authentication state saved to %s", path)
        finally:
            await browser.close()
    return path
