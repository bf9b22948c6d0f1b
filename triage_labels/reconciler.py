"""
Copying triage labels from issues onto the pull requests that close them.
"""

from __future__ import annotations

import itertools
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence, Set

import requests
import sentry_sdk

from triage_labels import logger, settings
from triage_labels.config import LabelerConfig
from triage_labels.context import ActionContext
from triage_labels.exceptions import LabelUpdateFailed, ReconciliationFailed, RequestFailed
from triage_labels.gateway import GitHubGateway
from triage_labels.labels import LabelDiff, highest_priority_label, reconcile_labels, set_diff
from triage_labels.references import find_referenced_issues
from triage_labels.types import LabelSet, PrId
from triage_labels.utils import sentry_extra_context, text_summary


def select_pull_numbers(pull_numbers: Sequence[int], context_pull_number: Optional[int]) -> List[int]:
    """
    Decide which pull requests to work on.

    If pull numbers are supplied, we copy labels to each of them. If not, we
    use the pull request that triggered the run, if there is one.
    """
    if pull_numbers:
        return list(dict.fromkeys(pull_numbers))
    if context_pull_number is not None:
        return [context_pull_number]
    return []


class DryRunLabelActions:
    """
    Implementation of label actions for dry runs.

    Nothing is changed, the calls are recorded in `action_calls`.
    """
    def __init__(self):
        self.action_calls = []

    def __getattr__(self, name):
        def fn(**kwargs):
            self.action_calls.append((name, kwargs))
        return fn


class LabelActions:
    """
    Implementation of the actions that change labels on GitHub.
    """
    def __init__(self, gateway: GitHubGateway):
        self.gateway = gateway

    def add_labels(self, *, number: int, labels: List[str]) -> None:
        self.gateway.add_labels(number, labels)

    def remove_label(self, *, number: int, label: str) -> None:
        self.gateway.remove_label(number, label)


class PullRequestLabelManager:
    """
    Keeps the triage labels on pull requests in step with the issues they close.

    Arguments:
        gateway: how to read and write GitHub data for one repository.
        config: the label categories, and maybe explicit pull numbers.
        context: the triggering event, used when `config` has no pull numbers.
        actions: what makes the label changes. Defaults to `LabelActions`,
            use `DryRunLabelActions` to change nothing.
    """

    # Issues are fetched at the same time, up to this many at once.
    max_workers = 8

    def __init__(
        self,
        gateway: GitHubGateway,
        config: LabelerConfig,
        context: Optional[ActionContext] = None,
        actions=None,
    ):
        self.gateway = gateway
        self.config = config
        self.actions = actions if actions is not None else LabelActions(gateway)
        self.server_url = settings.GITHUB_SERVER_URL
        context_pull_number = context.pull_number if context else None
        self.pull_numbers = select_pull_numbers(config.pull_numbers, context_pull_number)

    @property
    def full_name(self) -> str:
        return self.gateway.repo.full_name

    def do_pulls(self) -> Dict[int, LabelDiff]:
        """
        Copy labels to each of our pull requests.

        A failure on one pull request doesn't stop the others. If any failed,
        ReconciliationFailed is raised once all have been tried.

        Returns:
            A dict mapping pull request numbers to the changes made.
        """
        if not self.pull_numbers:
            logger.warning(f"No pull requests to label in {self.full_name}")
        results: Dict[int, LabelDiff] = {}
        failures: Dict[int, Exception] = {}
        for pull_number in self.pull_numbers:
            try:
                results[pull_number] = self.copy_labels_from_referenced_issues(pull_number)
            except Exception as exc:    # pylint: disable=broad-exception-caught
                logger.exception(f"Couldn't copy issue labels to {PrId(self.full_name, pull_number)}")
                sentry_sdk.capture_exception(exc)
                failures[pull_number] = exc
        if failures:
            raise ReconciliationFailed(failures, results)
        return results

    def copy_labels_from_referenced_issues(self, pull_number: int) -> LabelDiff:
        """
        Give a pull request the triage labels of the issues it closes.

        Returns:
            The changes made (or for a dry run, that would be made).
        """
        prid = PrId(self.full_name, pull_number)
        logger.info(f"Copying issue labels to {prid}")
        # Nothing from the previous pull request can be left in the context.
        sentry_extra_context({"pull_request": str(prid), "references": None})

        pull = self.gateway.get_pull_request(pull_number)
        logger.debug(f"{prid} body: {text_summary(pull.body, 90)!r}")
        references = self.find_referenced_issues(pull.body)
        logger.info(f"{prid} references these issues: {references}")
        sentry_extra_context({"references": references})

        issue_labels = self.issue_labels(references)
        new_labels = self.new_labels(issue_labels, pull.labels)
        diff = set_diff(pull.labels, new_labels)
        logger.info(f"Adding these labels to {prid}: {diff.adds}")
        logger.info(f"Removing these labels from {prid}: {diff.removes}")

        if diff.is_empty():
            return diff

        logger.info(f"{prid} (references {references}) {diff}")
        self.apply_diff(pull_number, diff)
        return diff

    def find_referenced_issues(self, text: Optional[str]) -> List[int]:
        return find_referenced_issues(text, self.full_name, self.server_url)

    def issue_labels(self, references: Iterable[int]) -> LabelSet:
        """
        Get all the labels on all of the `references` issues.
        """
        numbers = list(dict.fromkeys(references))
        if not numbers:
            return set()
        workers = min(len(numbers), self.max_workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            issues = list(executor.map(self.gateway.get_issue, numbers))
        return set(itertools.chain.from_iterable(issue.labels for issue in issues))

    def new_labels(self, issue_labels: Set[str], pull_labels: List[str]) -> List[str]:
        """
        Compute the labels the pull request should have.
        """
        config = self.config
        priority = highest_priority_label(config.priority_labels, issue_labels, pull_labels)
        return reconcile_labels(pull_labels, [
            (config.priority, priority),
            (config.classification, config.classification.first_present(issue_labels)),
            (config.effort, config.effort.first_present(issue_labels)),
        ])

    def apply_diff(self, pull_number: int, diff: LabelDiff) -> None:
        """
        Make the label changes on GitHub.

        Labels are added first. If that fails, nothing is removed. Then every
        removal is tried, and any that failed are reported together.
        """
        if diff.adds:
            self.actions.add_labels(number=pull_number, labels=diff.adds)

        failures: Dict[str, Exception] = {}
        for label in diff.removes:
            try:
                self.actions.remove_label(number=pull_number, label=label)
            except (RequestFailed, requests.RequestException) as exc:
                logger.warning(f"Couldn't remove {label!r} from {PrId(self.full_name, pull_number)}: {exc}")
                failures[label] = exc
        if failures:
            raise LabelUpdateFailed(pull_number, failures)
