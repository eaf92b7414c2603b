"""
Anyteam live E2E tests.

This package drives the real Anyteam application and Google with the
configured test account.

Test Modules:
    - test_login: Google sign-in through onboarding to the home page
    - test_calendar: Scheduling in Google Calendar, joining from Anyteam
    - test_meetings: Google Meet hand-off from a calendar event
    - test_notifications: Notifications panel, filters, meeting insights
    - test_settings: Settings navigation and profile updates

Configuration:
    - conftest.py: Pytest fixtures (browser, auth.json context, screenshots)

Running Tests:
    # Save a signed-in state once
    anyteam-e2e auth-setup

    # Run all live tests
    E2E_LIVE=true pytest tests/e2e/

    # Run with a visible browser
    E2E_LIVE=true E2E_BROWSER_HEADLESS=false pytest tests/e2e/test_login.py

Environment Variables:
    E2E_LIVE: Run the live tests (default: false)
    E2E_BASE_URL: Anyteam application URL
    E2E_BROWSER_NAME: chromium, firefox or webkit (default: chromium)
    E2E_BROWSER_SLOW_MO: Slow motion delay in ms (default: 0)
    TEST_EMAIL: Google account e-mail
    TEST_PASSWORD: Google account password
"""
