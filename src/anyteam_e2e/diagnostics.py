"""
Failure screenshots.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


def safe_name(name: str) -> str:
    """Sanitize a test or step name for the filesystem."""
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in name)


def screenshot_path(name: str, settings: Optional[Settings] = None,
                    timestamp: Optional[datetime] = None) -> Path:
    """
    Get the screenshot path for a failed test or flow step.

    Args:
        name: Test or step name.
        settings: Suite settings; defaults to the cached settings.
        timestamp: Time to stamp the file with; defaults to now.

    Returns:
        Path where the screenshot should be saved.
    """
    settings = settings or get_settings()
    stamp = (timestamp or datetime.now()).strftime("%Y%m%d-%H%M%S")
    return settings.screenshots_dir / f"{safe_name(name)}-{stamp}.png"


async def capture_failure(name: str, page: Page,
                          settings: Optional[Settings] = None) -> Optional[Path]:
    """
    Save a full-page screenshot of ``page``.

    Returns the written path, or None when screenshots are disabled or the page
    could not be captured.
    """
    settings = settings or get_settings()
    if not settings.screenshot_on_failure:
        return None

    path = screenshot_path(name, settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        await page.screenshot(path=str(path), full_page=True)
    except PlaywrightError as e:
        logger.warning("Could not capture screenshot %s: %s", path, e)
        return None
    logger.info("Screenshot saved: %s", path)
    return path


def failure_hook(settings: Optional[Settings] = None):
    """Return a Flow ``on_failure`` callback writing screenshots."""

    async def hook(name: str, page: Page) -> Optional[Path]:
        return await capture_failure(name, page, settings)

    return hook
