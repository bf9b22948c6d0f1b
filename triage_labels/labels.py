"""
To properly manipulate labels, we need to know which labels belong to which
category. Within a category, only one label should be used at a time.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

# Ordered from most to least severe. The last one is the default.
DEFAULT_PRIORITY_LABELS = ["p0", "p1", "p2"]

DEFAULT_CLASSIFICATION_LABELS = ["bug", "feature-request"]

# Ordered from largest to smallest.
DEFAULT_EFFORT_LABELS = ["effort/large", "effort/medium", "effort/small"]


@dataclass(frozen=True)
class LabelCategory:
    """
    One axis of triage, like priority, with its mutually exclusive labels.

    The order of `labels` is the order of preference when more than one of
    them is found.
    """
    name: str
    labels: Sequence[str]
    # A mandatory category always gets a label on the pull request.
    mandatory: bool = False

    def first_present(self, label_set: Iterable[str]) -> Optional[str]:
        """The first of our labels that is in `label_set`, or None."""
        present = set(label_set)
        return next((lbl for lbl in self.labels if lbl in present), None)


def highest_priority_label(
    priority_labels: Sequence[str],
    issue_labels: Iterable[str],
    pull_labels: Iterable[str],
) -> str:
    """
    Choose the priority label for a pull request.

    We mandate priority labels even if there are no priorities found in
    linked issues. In the absence of a known priority, we keep the priority
    the pull request was originally labeled with. In the absence of that, we
    use the lowest priority available.
    """
    category = LabelCategory("priority", priority_labels, mandatory=True)
    return (
        category.first_present(issue_labels)
        or category.first_present(pull_labels)
        or priority_labels[-1]
    )


def replace_labels(labels: Dict[str, None], remove: Iterable[str], replace: Optional[str]) -> None:
    """
    Replace any of the `remove` labels with `replace`, in place.

    `labels` is an insertion-ordered set of label names (a dict with None
    values). If `replace` is None, nothing changes: the category has no
    opinion, so labels already there stay.
    """
    if replace is not None:
        for r in remove:
            labels.pop(r, None)
        labels[replace] = None


@dataclass
class LabelDiff:
    """The labels to add to and remove from a pull request."""
    adds: List[str] = field(default_factory=list)
    removes: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.adds) + len(self.removes) == 0

    def __str__(self):
        return f"{json.dumps(self.removes)} -> {json.dumps(self.adds)}"


def set_diff(old: Iterable[str], new: Iterable[str]) -> LabelDiff:
    """
    Compute the changes needed to turn the `old` labels into the `new` ones.

    Order is kept: adds are in `new` order, removes in `old` order.
    """
    old = list(dict.fromkeys(old))
    new = list(dict.fromkeys(new))
    old_set = set(old)
    new_set = set(new)
    return LabelDiff(
        adds=[y for y in new if y not in old_set],
        removes=[x for x in old if x not in new_set],
    )


def reconcile_labels(
    pull_labels: Iterable[str],
    resolutions: Iterable[Tuple[LabelCategory, Optional[str]]],
) -> List[str]:
    """
    Apply each category's resolved label to the pull request's labels.

    Returns the new labels, in order.
    """
    new_labels = dict.fromkeys(pull_labels)
    for category, resolved in resolutions:
        replace_labels(new_labels, category.labels, resolved)
    return list(new_labels)
