"""Tests of reading the triggering context."""

import pytest

from triage_labels.context import ActionContext, pull_number_from_event
from triage_labels.exceptions import ConfigurationError
from triage_labels.types import RepoId


@pytest.mark.parametrize("event, number", [
    ({"action": "opened", "number": 17, "pull_request": {"number": 17}}, 17),
    ({"action": "edited", "pull_request": {"number": "23"}}, 23),
    ({"action": "opened", "issue": {"number": 5}}, None),
    ({}, None),
])
def test_pull_number_from_event(event, number):
    assert pull_number_from_event(event) == number


def test_from_environment(mocker, event_file):
    mocker.patch("triage_labels.settings.GITHUB_REPOSITORY", "an-org/a-repo")
    event_file({"action": "synchronize", "pull_request": {"number": 42}})
    context = ActionContext.from_environment()
    assert context == ActionContext(repo=RepoId("an-org", "a-repo"), pull_number=42)


def test_repo_argument_overrides_setting(mocker):
    mocker.patch("triage_labels.settings.GITHUB_REPOSITORY", "an-org/a-repo")
    context = ActionContext.from_environment("other-org/other-repo")
    assert context.repo.full_name == "other-org/other-repo"
    assert context.pull_number is None


def test_no_pull_request_in_event(mocker, event_file):
    mocker.patch("triage_labels.settings.GITHUB_REPOSITORY", "an-org/a-repo")
    event_file({"action": "workflow_dispatch"})
    assert ActionContext.from_environment().pull_number is None


def test_no_repository():
    with pytest.raises(ConfigurationError, match="No repository"):
        ActionContext.from_environment()


@pytest.mark.parametrize("repo_name", ["just-a-name", "/a-repo", "an-org/", "a/b/c"])
def test_bad_repository(repo_name):
    with pytest.raises(ConfigurationError, match="Repository should be 'owner/repo'"):
        ActionContext.from_environment(repo_name)


def test_unreadable_event(mocker, tmp_path):
    mocker.patch("triage_labels.settings.GITHUB_EVENT_PATH", str(tmp_path / "missing.json"))
    with pytest.raises(ConfigurationError, match="Couldn't read the event"):
        ActionContext.from_environment("an-org/a-repo")


def test_bad_event_json(mocker, tmp_path):
    path = tmp_path / "event.json"
    path.write_text("{not json")
    mocker.patch("triage_labels.settings.GITHUB_EVENT_PATH", str(path))
    with pytest.raises(ConfigurationError, match="Couldn't read the event"):
        ActionContext.from_environment("an-org/a-repo")
