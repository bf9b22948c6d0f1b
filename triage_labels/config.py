"""
The configuration a labeler is built with.

It's read once, when the labeler is made, and never changes after that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from triage_labels import settings
from triage_labels.exceptions import ConfigurationError
from triage_labels.labels import (
    DEFAULT_CLASSIFICATION_LABELS,
    DEFAULT_EFFORT_LABELS,
    DEFAULT_PRIORITY_LABELS,
    LabelCategory,
)


@dataclass(frozen=True)
class LabelerConfig:
    priority_labels: Sequence[str] = tuple(DEFAULT_PRIORITY_LABELS)
    classification_labels: Sequence[str] = tuple(DEFAULT_CLASSIFICATION_LABELS)
    effort_labels: Sequence[str] = tuple(DEFAULT_EFFORT_LABELS)
    # Empty means: the pull request that triggered the run.
    pull_numbers: Sequence[int] = field(default_factory=tuple)

    def __post_init__(self):
        # Freeze the lists we were given, so no one can change them later.
        for name in ["priority_labels", "classification_labels", "effort_labels", "pull_numbers"]:
            object.__setattr__(self, name, tuple(getattr(self, name)))

        if not self.priority_labels:
            raise ConfigurationError("At least one priority label is needed")

        seen = {}
        for category in self.categories:
            for label in category.labels:
                if not label.strip():
                    raise ConfigurationError(f"The {category.name} labels can't include a blank label")
                if label in seen and seen[label] != category.name:
                    raise ConfigurationError(
                        f"Label {label!r} can't be both a {seen[label]} label and a {category.name} label"
                    )
                seen[label] = category.name

    @property
    def priority(self) -> LabelCategory:
        return LabelCategory("priority", self.priority_labels, mandatory=True)

    @property
    def classification(self) -> LabelCategory:
        return LabelCategory("classification", self.classification_labels)

    @property
    def effort(self) -> LabelCategory:
        return LabelCategory("effort", self.effort_labels)

    @property
    def categories(self) -> List[LabelCategory]:
        return [self.priority, self.classification, self.effort]

    @classmethod
    def from_settings(
        cls,
        priority_labels: Optional[Sequence[str]] = None,
        classification_labels: Optional[Sequence[str]] = None,
        effort_labels: Optional[Sequence[str]] = None,
        pull_numbers: Optional[Sequence[int]] = None,
    ) -> LabelerConfig:
        """
        Make a config from explicit values, falling back to settings, then defaults.
        """
        def choose(explicit, setting, default):
            if explicit is not None:
                return explicit
            if setting is not None:
                return setting
            return default

        if pull_numbers is None:
            pull_numbers = settings.parse_numbers("PULL_NUMBERS", settings.PULL_NUMBERS)

        return cls(
            priority_labels=choose(priority_labels, settings.PRIORITY_LABELS, DEFAULT_PRIORITY_LABELS),
            classification_labels=choose(
                classification_labels, settings.CLASSIFICATION_LABELS, DEFAULT_CLASSIFICATION_LABELS
            ),
            effort_labels=choose(effort_labels, settings.EFFORT_LABELS, DEFAULT_EFFORT_LABELS),
            pull_numbers=pull_numbers or (),
        )
