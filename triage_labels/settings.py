"""Settings for how the labeler should behave."""

import os
from typing import List, Optional

from triage_labels.exceptions import ConfigurationError


def read_list_setting(setting_name: str) -> Optional[List[str]]:
    """Read a comma-separated list from a setting.

    Returns:
        A list of the non-empty, stripped items if the setting is present.
        None if the setting is missing or blank.
    """
    value = os.environ.get(setting_name, "")
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def parse_numbers(setting_name: str, value: Optional[str]) -> Optional[List[int]]:
    """Parse a setting with a comma-separated list of numbers, like "12, #34".

    Returns None if the setting is missing or blank.
    """
    items = [item.strip() for item in (value or "").split(",") if item.strip()]
    if not items:
        return None
    try:
        return [int(item.lstrip("#")) for item in items]
    except ValueError:
        raise ConfigurationError(f"Setting {setting_name} should be a list of numbers, not {value!r}") from None


def parse_seconds(setting_name: str, value: str) -> float:
    """Parse a setting with a positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        seconds = 0
    if not seconds > 0:
        raise ConfigurationError(f"Setting {setting_name} should be a number of seconds, not {value!r}")
    return seconds


GITHUB_PERSONAL_TOKEN = os.environ.get("GITHUB_PERSONAL_TOKEN") or os.environ.get("GITHUB_TOKEN")

# The REST API server, and the web server that issue URLs point to.
GITHUB_API_URL = os.environ.get("GITHUB_API_URL", "https://api.github.com")
GITHUB_SERVER_URL = os.environ.get("GITHUB_SERVER_URL", "https://github.com")

# Set by GitHub Actions: "owner/repo", and the path of the triggering event's JSON.
GITHUB_REPOSITORY = os.environ.get("GITHUB_REPOSITORY")
GITHUB_EVENT_PATH = os.environ.get("GITHUB_EVENT_PATH")

# Candidate labels for each category. None means use the built-in defaults.
PRIORITY_LABELS = read_list_setting("PRIORITY_LABELS")
CLASSIFICATION_LABELS = read_list_setting("CLASSIFICATION_LABELS")
EFFORT_LABELS = read_list_setting("EFFORT_LABELS")

# These two are kept as text, and parsed when the labeler is configured.

# Pull requests to process, like "12, 34". Unset means the one that triggered the run.
PULL_NUMBERS = os.environ.get("PULL_NUMBERS")

# Seconds to wait for GitHub before giving up on a request.
GITHUB_TIMEOUT = os.environ.get("GITHUB_TIMEOUT", "30")
