"""
Exceptions raised by triage_labels.
"""

from typing import Dict, List, Optional


class TriageLabelsError(Exception):
    pass


class ConfigurationError(TriageLabelsError):
    """The labeler was configured in a way that can't work."""


class RequestFailed(TriageLabelsError):
    pass


class NotFound(RequestFailed):
    """The pull request or issue asked for doesn't exist."""


class LabelUpdateFailed(TriageLabelsError):
    """
    Some labels couldn't be removed from a pull request.

    The other removals were still attempted.
    """
    def __init__(self, number: int, failures: Dict[str, Exception]):
        self.number = number
        self.failures = failures
        labels = ", ".join(sorted(failures))
        super().__init__(f"Couldn't remove labels from #{number}: {labels}")


class ReconciliationFailed(TriageLabelsError):
    """
    One or more pull requests couldn't be reconciled.

    `results` has the label changes for the pull requests that succeeded.
    """
    def __init__(self, failures: Dict[int, Exception], results: Optional[Dict] = None):
        self.failures = failures
        self.results = results or {}
        numbers = ", ".join(f"#{num}" for num in sorted(failures))
        super().__init__(f"Couldn't copy issue labels to {numbers}")

    @property
    def pull_numbers(self) -> List[int]:
        return sorted(self.failures)
