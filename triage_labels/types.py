"""Types specific to triage_labels."""

from __future__ import annotations

import dataclasses
from typing import Dict, Set

# A pull request as described by a JSON object.
PrDict = Dict

# An issue as described by a JSON object.
IssueDict = Dict

# A set of label names.
LabelSet = Set[str]


@dataclasses.dataclass(frozen=True)
class RepoId:
    """A GitHub repository, by owner and name."""
    owner: str
    repo: str

    @classmethod
    def from_full_name(cls, full_name: str) -> RepoId:
        owner, slash, repo = full_name.partition("/")
        if not (owner and slash and repo) or "/" in repo:
            raise ValueError(f"Repository should be 'owner/repo', not {full_name!r}")
        return cls(owner, repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self):
        return self.full_name


@dataclasses.dataclass(frozen=True)
class PrId:
    """An id of a pull request, with a repo full_name and a number."""
    full_name: str
    number: int

    def __str__(self):
        return f"{self.full_name}#{self.number}"
