"""Version information for anyteam-e2e."""

__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Release information
__title__ = "anyteam-e2e"
__description__ = "End-to-end UI suite for Anyteam with Google sign-in and Calendar flows"
__author__ = "Anyteam QA"
__license__ = "MIT"


def get_version() -> str:
    """Return the current version string."""
    return __version__


def get_version_info() -> tuple[int, ...]:
    """Return the version as a tuple of integers."""
    return __version_info__
