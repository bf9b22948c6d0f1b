"""Automatically run by pytest to set up test infrastructure."""

import json

import pytest
import requests_mock

from triage_labels.config import LabelerConfig
from triage_labels.gateway import GitHubGateway
from triage_labels.types import RepoId

from . import settings as test_settings
from .fake_github import FakeGitHub


@pytest.fixture
def requests_mocker():
    """Make requests_mock available as a fixture."""
    mocker = requests_mock.Mocker(real_http=False, case_sensitive=True)
    mocker.start()
    try:
        yield mocker
    finally:
        mocker.stop()


@pytest.fixture(autouse=True)
def settings_for_tests(mocker):
    for name, value in vars(test_settings).items():
        if name.isupper():
            mocker.patch(f"triage_labels.settings.{name}", value)


@pytest.fixture
def fake_github(requests_mocker):
    the_fake_github = FakeGitHub(login="label-bot")
    the_fake_github.install_mocks(requests_mocker)
    return the_fake_github


@pytest.fixture
def repo(fake_github):
    """The repo most tests work in."""
    return fake_github.make_repo("an-org", "a-repo")


@pytest.fixture
def gateway(repo):
    return GitHubGateway(RepoId(repo.owner, repo.repo))


@pytest.fixture
def config():
    """The default label configuration."""
    return LabelerConfig()


@pytest.fixture
def event_file(tmp_path, mocker):
    """
    Write a GitHub event payload to a file, and point the settings at it.

    Call it with the payload dict. Returns the path.
    """
    def _write_event(payload):
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload))
        mocker.patch("triage_labels.settings.GITHUB_EVENT_PATH", str(path))
        return path
    return _write_event
