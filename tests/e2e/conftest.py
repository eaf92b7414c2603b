"""
Pytest fixtures for the live Anyteam scenarios.

These tests drive the real application and Google with the configured
account. They only run when ``E2E_LIVE=true`` (or ``live = true`` in the TOML
configuration); the signed-in tests also need the ``auth.json`` written by
``anyteam-e2e auth-setup``.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from anyteam_e2e.browser import launch_browser, new_context
from anyteam_e2e.config import Settings, get_settings
from anyteam_e2e.core.session import SessionBridge
from anyteam_e2e.diagnostics import capture_failure
from anyteam_e2e.exceptions import SessionLostError


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="session")
def settings() -> Settings:
    """Settings from the environment, .env and E2E_CONFIG_FILE."""
    return get_settings()


@pytest.fixture(autouse=True)
def require_live(request, settings: Settings) -> None:
    """Skip live scenarios unless they were switched on."""
    if request.node.get_closest_marker("live") and not settings.live:
        pytest.skip("live scenarios disabled (set E2E_LIVE=true)")


# =============================================================================
# Playwright Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def playwright() -> AsyncGenerator[Playwright, None]:
    """Create a Playwright instance for the test."""
    async with async_playwright() as pw:
        yield pw


@pytest_asyncio.fixture
async def browser(playwright: Playwright, settings: Settings) -> AsyncGenerator[Browser, None]:
    """Launch the configured browser."""
    browser = await launch_browser(playwright, settings)
    yield browser
    await browser.close()


@pytest_asyncio.fixture
async def context(browser: Browser, settings: Settings) -> AsyncGenerator[BrowserContext, None]:
    """
    Create a fresh, signed-out browser context for each test.

    Used by the login scenarios, which must start without a session.
    """
    context = await new_context(browser, settings)
    yield context
    await context.close()


@pytest_asyncio.fixture
async def page(request, context: BrowserContext,
               settings: Settings) -> AsyncGenerator[Page, None]:
    page = await context.new_page()
    yield page
    await capture_if_failed(request, page, settings)
    await page.close()


# =============================================================================
# Authentication Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def auth_context(browser: Browser,
                       settings: Settings) -> AsyncGenerator[BrowserContext, None]:
    """
    Browser context restored from the saved authentication state.

    Skips the test when ``auth.json`` has not been written yet.
    """
    if not settings.auth_state_path.exists():
        pytest.skip(f"no saved authentication state at {settings.auth_state_path}; "
                    "run 'anyteam-e2e auth-setup'")
    context = await new_context(browser, settings, settings.auth_state_path)
    yield context
    await context.close()


@pytest_asyncio.fixture
async def authenticated_page(request, auth_context: BrowserContext,
                             settings: Settings) -> AsyncGenerator[Page, None]:
    """Signed-in page on the Anyteam home screen."""
    page = await auth_context.new_page()
    await page.goto(settings.home_url, wait_until="domcontentloaded")
    yield page
    if "session" not in request.fixturenames:
        await capture_if_failed(request, page, settings)


@pytest_asyncio.fixture
async def session(request, authenticated_page: Page,
                  settings: Settings) -> AsyncGenerator[SessionBridge, None]:
    """Session that starts on the signed-in home page."""
    session = SessionBridge(authenticated_page)
    yield session
    try:
        page = session.current()
    except SessionLostError:
        return
    await capture_if_failed(request, page, settings)


# =============================================================================
# Screenshot on Failure
# =============================================================================

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Make the test outcome available to fixtures as ``rep_setup``/``rep_call``."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


async def capture_if_failed(request, page: Page, settings: Settings) -> None:
    """Screenshot ``page`` when the test body failed."""
    report = getattr(request.node, "rep_call", None)
    if report is None or not report.failed or page.is_closed():
        return
    await capture_failure(request.node.name, page, settings)
