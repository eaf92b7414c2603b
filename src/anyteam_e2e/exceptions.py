"""
Custom exceptions for the Anyteam end-to-end suite.

Resolver, executor and detector failures are raised as these types with the
underlying Playwright error chained as ``__cause__``. Messages always name the
selectors or signals that were attempted so a failed run can be diagnosed from
the log alone.
"""

from typing import Any, Optional, Sequence


class AnyteamE2EError(Exception):
    """Base exception for all suite errors."""

    def __init__(self, message: str,
                 details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Interaction Exceptions
class ElementNotFound(AnyteamE2EError):
    """Raised when no candidate selector became visible in time."""

    def __init__(
        self,
        target: str,
        attempted: Sequence[str],
        timeout_ms: Optional[float] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize element not found error.

        Args:
            target: Logical name of the UI element.
            attempted: Descriptions of every candidate that was probed.
            timeout_ms: The overall budget that was exhausted.
            details: Optional dictionary with additional error details.
        """
        message = f"Element '{target}' not found; tried {list(attempted)}"
        if timeout_ms is not None:
            message += f" within {timeout_ms:.0f}ms"
        super().__init__(message, details)
        self.target = target
        self.attempted = list(attempted)
        self.timeout_ms = timeout_ms


class InteractionFailed(AnyteamE2EError):
    """Raised when an action failed in both gentle and forced mode."""

    def __init__(
        self,
        action: str,
        target: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"Could not {action} '{target}' even with forced interaction"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, details)
        self.action = action
        self.target = target
        self.cause = cause


class CompletionTimeout(AnyteamE2EError):
    """Raised when none of the raced completion signals fired."""

    def __init__(
        self,
        signals: Sequence[str],
        timeout_ms: float,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"None of the signals {list(signals)} fired within {timeout_ms:.0f}ms",
            details,
        )
        self.signals = list(signals)
        self.timeout_ms = timeout_ms


class SessionLostError(AnyteamE2EError):
    """Raised when the app keeps redirecting back to the login page."""


class SignInBlocked(AnyteamE2EError):
    """Raised when Google interrupts sign-in with a captcha challenge."""


# Flow Exceptions
class FlowStepFailed(AnyteamE2EError):
    """Raised when a mandatory flow step failed."""

    def __init__(
        self,
        step_name: str,
        cause: Optional[BaseException] = None,
        flow_name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize flow step failure.

        Args:
            step_name: Name of the step that failed.
            cause: The error raised by the step.
            flow_name: Name of the flow the step belongs to.
            details: Optional dictionary with additional error details.
        """
        prefix = f"Flow '{flow_name}' " if flow_name else ""
        message = f"{prefix}failed at step '{step_name}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, details)
        self.step_name = step_name
        self.cause = cause
        self.flow_name = flow_name


class InvalidConfiguration(AnyteamE2EError):
    """Raised on programming errors such as an empty candidate list."""


# Configuration Exceptions
class ConfigurationError(AnyteamE2EError):
    """Base exception for configuration-related errors."""


class MissingConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    def __init__(
        self, config_key: str, details: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            f"Missing required configuration: '{config_key}'", details)
        self.config_key = config_key


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(
        self,
        config_key: str,
        value: Any,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"Invalid configuration value for '{config_key}': {value}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, details)
        self.config_key = config_key
        self.value = value
        self.reason = reason
