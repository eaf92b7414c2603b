"""
Configuration management for the Anyteam end-to-end suite.

Settings are loaded from environment variables (and a ``.env`` file in the
working directory), optionally from a TOML file named by ``E2E_CONFIG_FILE``.
All timeouts are in milliseconds, the unit Playwright uses.
"""

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConfigError, MissingConfigError


class BrowserSettings(BaseSettings):
    """Browser launch and context settings."""

    model_config = SettingsConfigDict(
        env_prefix="E2E_BROWSER_",
        env_file=".env",
        extra="ignore",
    )

    name: str = Field(default="chromium", description="chromium, firefox or webkit")
    channel: Optional[str] = Field(None, description="Browser channel, e.g. chrome")
    headless: bool = Field(default=True, description="Run without a visible window")
    slow_mo: int = Field(default=0, ge=0, description="Delay between operations (ms)")
    viewport_width: int = Field(default=1280, ge=320)
    viewport_height: int = Field(default=720, ge=240)
    locale: str = Field(default="en-US")
    timezone_id: Optional[str] = Field(None, description="Emulated timezone")
    record_video: bool = Field(default=False, description="Record a video per context")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate browser engine name."""
        valid = ["chromium", "firefox", "webkit"]
        v_lower = v.lower()
        if v_lower not in valid:
            raise ValueError(f"Browser must be one of: {', '.join(valid)}")
        return v_lower


class TimeoutSettings(BaseSettings):
    """Timeouts and delays used by resolver, executor, detector and flows."""

    model_config = SettingsConfigDict(
        env_prefix="E2E_TIMEOUT_",
        env_file=".env",
        extra="ignore",
    )

    action: int = Field(default=10000, ge=0, description="Gentle interaction timeout")
    navigation: int = Field(default=30000, ge=0, description="Page navigation timeout")
    candidate: int = Field(default=2000, ge=0, description="Per-candidate visibility wait")
    overall: int = Field(default=10000, ge=0, description="Per-resolve overall budget")
    completion: int = Field(default=15000, ge=0, description="Completion signal race budget")
    redirect: int = Field(default=30000, ge=0, description="OAuth redirect budget")
    flow: int = Field(default=360000, ge=0, description="Whole-flow budget")
    settle: int = Field(default=1000, ge=0, description="Delay between flow steps")
    typing_delay: int = Field(default=100, ge=0, description="Delay between typed keys")


class AccountSettings(BaseSettings):
    """Credentials for the Google account used by the automated login."""

    model_config = SettingsConfigDict(
        env_prefix="TEST_",
        env_file=".env",
        extra="ignore",
    )

    email: str = Field(default="", description="Google account e-mail")
    password: SecretStr = Field(default=SecretStr(""), description="Google account password")
    name: str = Field(default="", description="Display name of the test user")


class ProfileSettings(BaseSettings):
    """Profile values written by the settings scenarios."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    about_yourself: str = Field(default="AI Automation Engineer")
    linkedin_url: str = Field(default="linkedin.com/in/anyteam-e2e")


class MeetingSettings(BaseSettings):
    """Meeting scheduled by the calendar scenarios."""

    model_config = SettingsConfigDict(
        env_prefix="MEETING_",
        env_file=".env",
        extra="ignore",
    )

    title: str = Field(default="Team Standup Meeting")
    guest_email: str = Field(default="")
    start_time: str = Field(default="2:00pm", description="Google Calendar time text")
    end_time: str = Field(default="3:00pm", description="Google Calendar time text")
    days_ahead: int = Field(default=1, ge=0, description="Meeting date offset from today")


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_prefix="E2E_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    base_url: str = Field(
        default="https://app.dev.anyteam.com",
        validation_alias=AliasChoices("E2E_BASE_URL", "BASE_URL", "base_url"),
        description="Anyteam application URL",
    )
    login_path: str = Field(default="/onboarding/Login")
    home_path: str = Field(default="/home")
    google_calendar_url: str = Field(default="https://calendar.google.com/calendar/u/0/r")
    results_dir: Path = Field(default=Path("test-results"))
    auth_state_path: Path = Field(default=Path("auth.json"))
    screenshot_on_failure: bool = Field(default=True)
    live: bool = Field(default=False, description="Run the live scenarios in tests/e2e")

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    account: AccountSettings = Field(default_factory=AccountSettings)
    profile: ProfileSettings = Field(default_factory=ProfileSettings)
    meeting: MeetingSettings = Field(default_factory=MeetingSettings)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate application URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def app_host(self) -> str:
        """Hostname of the Anyteam application."""
        return urlparse(self.base_url).hostname or ""

    @property
    def app_domain(self) -> str:
        """Domain shared by the app and its auth host (``app.`` prefix dropped)."""
        host = self.app_host
        return host[len("app."):] if host.startswith("app.") else host

    @property
    def login_url(self) -> str:
        return f"{self.base_url}{self.login_path}"

    @property
    def home_url(self) -> str:
        return f"{self.base_url}{self.home_path}"

    @property
    def screenshots_dir(self) -> Path:
        return self.results_dir / "screenshots"

    @property
    def videos_dir(self) -> Path:
        return self.results_dir / "videos"

    @classmethod
    def from_toml(cls, path: str | Path) -> "Settings":
        """
        Load settings from a TOML configuration file.

        Args:
            path: Path to the TOML configuration file.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            MissingConfigError: If the file does not exist.
            InvalidConfigError: If the file cannot be parsed.
        """
        path = Path(path)
        if not path.exists():
            raise MissingConfigError("E2E_CONFIG_FILE", details={"path": str(path)})

        try:
            with open(path, "rb") as f:
                config_data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise InvalidConfigError(
                config_key="config_file",
                value=str(path),
                reason=f"Failed to parse TOML: {e}",
            ) from e

        return cls._from_dict(config_data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Create settings from a dictionary of TOML sections."""
        sections = {
            "browser": BrowserSettings,
            "timeouts": TimeoutSettings,
            "account": AccountSettings,
            "profile": ProfileSettings,
            "meeting": MeetingSettings,
        }
        settings_kwargs: dict[str, Any] = {}

        if "app" in data:
            settings_kwargs.update(data["app"])

        try:
            for key, section_cls in sections.items():
                if key in data:
                    settings_kwargs[key] = section_cls(**data[key])
            return cls(**settings_kwargs)
        except ValidationError as e:
            raise InvalidConfigError(
                config_key="config_file",
                value=sorted(settings_kwargs),
                reason=str(e),
            ) from e

    def require_credentials(self) -> None:
        """
        Validate that the automated login has credentials to use.

        Raises:
            MissingConfigError: If the e-mail or password is missing.
        """
        if not self.account.email:
            raise MissingConfigError("TEST_EMAIL")
        if not self.account.password.get_secret_value():
            raise MissingConfigError("TEST_PASSWORD")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached suite settings.

    Settings come from ``E2E_CONFIG_FILE`` when it points at an existing TOML
    file, otherwise from the environment.

    Returns:
        Settings instance.
    """
    config_file = os.getenv("E2E_CONFIG_FILE")

    if config_file and Path(config_file).exists():
        return Settings.from_toml(config_file)

    try:
        return Settings()
    except ValidationError as e:
        raise InvalidConfigError(
            config_key="environment", value="(env)", reason=str(e)
        ) from e


def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings instance.
    """
    get_settings.cache_clear()
    return get_settings()
