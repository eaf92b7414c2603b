"""
Browser and context construction from suite settings.

Usage:
    async with async_playwright() as pw:
        browser = await launch_browser(pw, settings)
        context = await new_context(browser, settings)
"""

from pathlib import Path
from typing import Any, Dict, Optional

from playwright.async_api import Browser, BrowserContext, Playwright

from .config import Settings


def to_launch_options(settings: Settings, headless: Optional[bool] = None) -> Dict[str, Any]:
    """Convert settings to Playwright browser launch options."""
    options: Dict[str, Any] = {
        "headless": settings.browser.headless if headless is None else headless,
        "slow_mo": settings.browser.slow_mo,
    }
    if settings.browser.channel:
        options["channel"] = settings.browser.channel
    return options


def to_context_options(
    settings: Settings,
    storage_state: Optional[Path] = None,
) -> Dict[str, Any]:
    """Convert settings to Playwright browser context options."""
    options: Dict[str, Any] = {
        "viewport": {
            "width": settings.browser.viewport_width,
            "height": settings.browser.viewport_height,
        },
        "locale": settings.browser.locale,
        "base_url": settings.base_url,
    }

    if settings.browser.timezone_id:
        options["timezone_id"] = settings.browser.timezone_id
    if settings.browser.record_video:
        options["record_video_dir"] = str(settings.videos_dir)
    if storage_state is not None:
        options["storage_state"] = str(storage_state)

    return options


async def launch_browser(playwright: Playwright, settings: Settings,
                         headless: Optional[bool] = None) -> Browser:
    """Launch the configured browser engine."""
    browser_type = getattr(playwright, settings.browser.name)
    return await browser_type.launch(**to_launch_options(settings, headless))


async def new_context(
    browser: Browser,
    settings: Settings,
    storage_state: Optional[Path] = None,
) -> BrowserContext:
    """
    Create an isolated browser context with the suite's default timeouts.

    Args:
        browser: Launched browser.
        settings: Suite settings.
        storage_state: Saved cookies/localStorage to start from (auth.json).
    """
    context = await browser.new_context(**to_context_options(settings, storage_state))
    context.set_default_timeout(settings.timeouts.action)
    context.set_default_navigation_timeout(settings.timeouts.navigation)
    return context
