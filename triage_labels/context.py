"""
What triggered this run: the repository, and maybe a pull request.

This is read once at startup and passed to the labeler explicitly.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Optional

from triage_labels import logger, settings
from triage_labels.exceptions import ConfigurationError
from triage_labels.types import RepoId


def pull_number_from_event(event: Dict) -> Optional[int]:
    """
    Get the pull request number from a GitHub event payload, if there is one.
    """
    pull_request = event.get("pull_request")
    if pull_request and pull_request.get("number") is not None:
        return int(pull_request["number"])
    return None


@dataclass(frozen=True)
class ActionContext:
    repo: RepoId
    # The pull request of the triggering event, if it was a pull request event.
    pull_number: Optional[int] = None

    @classmethod
    def from_environment(cls, repo_name: Optional[str] = None) -> ActionContext:
        """
        Read the context from the GitHub Actions settings.

        Arguments:
            repo_name: "owner/repo" to use instead of GITHUB_REPOSITORY.
        """
        repo_name = repo_name or settings.GITHUB_REPOSITORY
        if not repo_name:
            raise ConfigurationError("No repository: set GITHUB_REPOSITORY or use --repo")
        try:
            repo = RepoId.from_full_name(repo_name)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        pull_number = None
        if settings.GITHUB_EVENT_PATH:
            try:
                with open(settings.GITHUB_EVENT_PATH) as event_file:
                    event = json.load(event_file)
            except (OSError, ValueError) as exc:
                raise ConfigurationError(f"Couldn't read the event in {settings.GITHUB_EVENT_PATH}: {exc}") from exc
            pull_number = pull_number_from_event(event)
            logger.debug(f"Event in {settings.GITHUB_EVENT_PATH} has pull request {pull_number}")
        return cls(repo=repo, pull_number=pull_number)
