"""
Reading and writing pull request and issue labels on GitHub.

The rest of the package only talks to GitHub through a gateway, and only sees
plain label names, never the JSON shapes GitHub uses for them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List
from urllib.parse import quote

from triage_labels import logger
from triage_labels.auth import get_github_session, github_timeout
from triage_labels.exceptions import NotFound
from triage_labels.types import IssueDict, LabelSet, PrDict, PrId, RepoId
from triage_labels.utils import log_check_response


def normalize_labels(labels: Iterable[Any]) -> List[str]:
    """
    Get the names of labels, in their original order, without duplicates.

    GitHub describes a label either as a plain string or as an object with a
    "name". Labels without a name are dropped.
    """
    names: Dict[str, None] = {}
    for label in labels or ():
        if isinstance(label, str):
            name = label
        else:
            name = label.get("name") or ""
        if name:
            names[name] = None
    return list(names)


@dataclass(frozen=True)
class PullRequestInfo:
    number: int
    body: str = ""
    # Label names in the order GitHub listed them.
    labels: List[str] = field(default_factory=list)

    @classmethod
    def from_pr_dict(cls, pr: PrDict) -> PullRequestInfo:
        return cls(
            number=pr["number"],
            body=pr.get("body") or "",
            labels=normalize_labels(pr.get("labels")),
        )

    @property
    def label_set(self) -> LabelSet:
        return set(self.labels)


@dataclass(frozen=True)
class IssueInfo:
    number: int
    labels: List[str] = field(default_factory=list)

    @classmethod
    def from_issue_dict(cls, issue: IssueDict) -> IssueInfo:
        return cls(number=issue["number"], labels=normalize_labels(issue.get("labels")))


class GitHubGateway:
    """
    Pull request and issue operations against one GitHub repository.

    Every call makes its own session, so a gateway can be used from several
    threads at once.
    """

    def __init__(self, repo: RepoId):
        self.repo = repo
        # A bad timeout setting is reported now, before any request is made.
        github_timeout()

    def _prid(self, number: int) -> PrId:
        return PrId(self.repo.full_name, number)

    def get_pull_request(self, number: int) -> PullRequestInfo:
        """
        Get the body and labels of a pull request.

        Raises NotFound if there is no such pull request.
        """
        url = f"/repos/{self.repo.full_name}/pulls/{number}"
        resp = get_github_session().get(url)
        log_check_response(resp)
        return PullRequestInfo.from_pr_dict(resp.json())

    def get_issue(self, number: int) -> IssueInfo:
        """
        Get the labels of an issue.

        Raises NotFound if there is no such issue.
        """
        url = f"/repos/{self.repo.full_name}/issues/{number}"
        resp = get_github_session().get(url)
        log_check_response(resp)
        return IssueInfo.from_issue_dict(resp.json())

    def add_labels(self, number: int, labels: List[str]) -> None:
        """
        Add labels to an issue or pull request.

        Labels already there are left alone by GitHub.
        """
        if not labels:
            raise ValueError("add_labels needs at least one label")
        url = f"/repos/{self.repo.full_name}/issues/{number}/labels"
        logger.info(f"Adding labels to {self._prid(number)}: {labels}")
        resp = get_github_session().post(url, json={"labels": labels})
        log_check_response(resp)

    def remove_label(self, number: int, label: str) -> None:
        """
        Remove one label from an issue or pull request.

        A label that is already gone isn't an error.
        """
        url = f"/repos/{self.repo.full_name}/issues/{number}/labels/{quote(label, safe='')}"
        logger.info(f"Removing label from {self._prid(number)}: {label!r}")
        resp = get_github_session().delete(url)
        try:
            log_check_response(resp)
        except NotFound:
            logger.debug(f"Label {label!r} was not on {self._prid(number)}")
