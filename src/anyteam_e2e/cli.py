#!/usr/bin/env python3
"""
Command-line interface for the Anyteam end-to-end suite.

This module provides the ``anyteam-e2e`` entry point installed with the
package (via `pip install -e .`).

Usage:
    anyteam-e2e [OPTIONS] COMMAND [ARGS]

Commands:
    auth-setup      Sign in by hand and save auth.json
    login           Run the automated Google login
    schedule        Schedule the configured meeting in Google Calendar
    show-config     Print the effective settings (password masked)

Options:
    --debug         Enable debug logging
    --config PATH   TOML configuration file
    --version       Show version and exit
    --help          Show this message and exit
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Optional

from playwright.async_api import async_playwright

from anyteam_e2e import __version__
from anyteam_e2e.browser import launch_browser, new_context
from anyteam_e2e.config import Settings, get_settings
from anyteam_e2e.core.session import SessionBridge
from anyteam_e2e.exceptions import AnyteamE2EError
from anyteam_e2e.flows import manual_auth_setup, perform_login, schedule_meeting
from anyteam_e2e.scenario_data import MeetingDetails, meeting_date


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the command-line tools.

    Args:
        debug: Enable debug logging.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    if not debug:
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per tool."""
    parser = argparse.ArgumentParser(
        prog="anyteam-e2e",
        description="Anyteam end-to-end suite tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Save a signed-in browser state for the live scenarios:
        anyteam-e2e auth-setup

    Run the automated login with a visible browser:
        anyteam-e2e login --headed --save-state

    Schedule a meeting three days from now:
        anyteam-e2e schedule --title "Design Review" --days-ahead 3

Environment Variables:
    E2E_DEBUG               Enable debug mode (true/false)
    E2E_CONFIG_FILE         TOML configuration file
    E2E_BASE_URL            Anyteam application URL
    TEST_EMAIL              Google account e-mail
    TEST_PASSWORD           Google account password
        """,
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )

    parser.add_argument(
        "--no-debug",
        action="store_true",
        help="Explicitly disable debug mode",
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="TOML configuration file (overrides E2E_CONFIG_FILE)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"anyteam-e2e {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    auth = subparsers.add_parser("auth-setup", help="Sign in by hand and save auth.json")
    auth.add_argument(
        "--timeout",
        type=int,
        default=120,
        help="Seconds to wait for the home page (default: 120)",
    )

    login = subparsers.add_parser("login", help="Run the automated Google login")
    login.add_argument("--headed", action="store_true", help="Show the browser window")
    login.add_argument(
        "--save-state",
        action="store_true",
        help="Save the signed-in storage state to auth.json",
    )

    schedule = subparsers.add_parser("schedule", help="Schedule a meeting in Google Calendar")
    schedule.add_argument("--headed", action="store_true", help="Show the browser window")
    schedule.add_argument("--title", help="Meeting title")
    schedule.add_argument("--days-ahead", type=int, help="Meeting date offset from today")
    schedule.add_argument("--guest", action="append", default=None,
                          help="Guest e-mail (repeatable)")

    subparsers.add_parser("show-config", help="Print the effective settings")

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    return build_parser().parse_args(argv)


def show_config(settings: Settings) -> str:
    """Render the settings as JSON; secrets stay masked."""
    return json.dumps(settings.model_dump(mode="json"), indent=2)


async def run_login(settings: Settings, headed: bool, save_state: bool) -> str:
    """Log in with the configured account; return the final URL."""
    async with async_playwright() as pw:
        browser = await launch_browser(pw, settings, headless=not headed)
        try:
            context = await new_context(browser, settings)
            page = await perform_login(await context.new_page(), context, settings)
            if save_state:
                settings.auth_state_path.parent.mkdir(parents=True, exist_ok=True)
                await context.storage_state(path=str(settings.auth_state_path))
                logging.getLogger(__name__).info(
                    "Storage state saved to %s", settings.auth_state_path)
            return page.url
        finally:
            await browser.close()


async def run_schedule(settings: Settings, details: MeetingDetails, headed: bool) -> dict:
    """Schedule a meeting from the saved storage state; return the save outcome."""
    if not settings.auth_state_path.exists():
        raise AnyteamE2EError(
            f"No saved authentication state at {settings.auth_state_path}; "
            "run 'anyteam-e2e auth-setup' first")

    async with async_playwright() as pw:
        browser = await launch_browser(pw, settings, headless=not headed)
        try:
            context = await new_context(browser, settings, settings.auth_state_path)
            session = SessionBridge(await context.new_page())
            outcome = await schedule_meeting(session, details, settings)
            return asdict(outcome)
        finally:
            await browser.close()


def meeting_from_args(args: argparse.Namespace, settings: Settings) -> MeetingDetails:
    """Configured meeting with command-line overrides applied."""
    details = MeetingDetails.from_settings(settings)
    if args.title:
        details.title = args.title
    if args.days_ahead is not None:
        details.date = meeting_date(args.days_ahead)
    if args.guest:
        details.guests = list(args.guest)
    return details


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the suite tools.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)

    # Determine debug mode
    if args.no_debug:
        debug = False
    elif args.debug:
        debug = True
    else:
        debug = os.getenv("E2E_DEBUG", "").lower() in ("true", "1", "yes")

    setup_logging(debug)
    logger = logging.getLogger(__name__)

    logger.debug("anyteam-e2e v%s, command %s", __version__, args.command)

    try:
        settings = Settings.from_toml(args.config) if args.config else get_settings()

        if args.command == "show-config":
            print(show_config(settings))
        elif args.command == "auth-setup":
            path = asyncio.run(manual_auth_setup(settings, timeout=args.timeout * 1000))
            print(path)
        elif args.command == "login":
            url = asyncio.run(run_login(settings, args.headed, args.save_state))
            logger.info("Logged in, now on %s", url)
        elif args.command == "schedule":
            details = meeting_from_args(args, settings)
            outcome = asyncio.run(run_schedule(settings, details, args.headed))
            print(json.dumps(outcome, indent=2))
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except AnyteamE2EError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    except Exception as e:
        logger.exception("%s failed unexpectedly: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
