"""Tests of the GitHub gateway."""

import pytest

from triage_labels.exceptions import NotFound, RequestFailed
from triage_labels.gateway import IssueInfo, PullRequestInfo, normalize_labels


@pytest.mark.parametrize("labels, names", [
    ([], []),
    (None, []),
    (["bug", "p0"], ["bug", "p0"]),
    ([{"name": "bug", "color": "d73a4a"}, {"name": "p0"}], ["bug", "p0"]),
    (["bug", {"name": "p0"}], ["bug", "p0"]),
    (["bug", {"name": "bug"}, "p0"], ["bug", "p0"]),
    ([{"name": None}, {"color": "ffffff"}, "", "p1"], ["p1"]),
])
def test_normalize_labels(labels, names):
    assert normalize_labels(labels) == names


def test_pull_request_info_from_dict():
    pr = PullRequestInfo.from_pr_dict({"number": 3, "body": None, "labels": [{"name": "p2"}]})
    assert pr == PullRequestInfo(number=3, body="", labels=["p2"])
    assert pr.label_set == {"p2"}


def test_get_pull_request(repo, gateway):
    pr = repo.make_pull_request(body="Fixes #1", labels=["p2", "bug"])
    info = gateway.get_pull_request(pr.number)
    assert info.number == pr.number
    assert info.body == "Fixes #1"
    assert info.label_set == {"p2", "bug"}


def test_get_missing_pull_request(repo, gateway):
    issue = repo.make_issue()
    with pytest.raises(NotFound):
        gateway.get_pull_request(999)
    with pytest.raises(NotFound):
        gateway.get_pull_request(issue.number)


def test_get_issue(repo, gateway):
    issue = repo.make_issue(labels=["p0", "effort/small"])
    assert gateway.get_issue(issue.number) == IssueInfo(issue.number, ["effort/small", "p0"])


def test_get_missing_issue(repo, gateway):
    with pytest.raises(NotFound, match="/repos/an-org/a-repo/issues/999"):
        gateway.get_issue(999)


def test_server_error(fake_github, repo, gateway):
    issue = repo.make_issue()
    fake_github.fail_requests("GET", r"/issues/", 502)
    with pytest.raises(RequestFailed) as exc_info:
        gateway.get_issue(issue.number)
    assert not isinstance(exc_info.value, NotFound)


def test_add_labels(fake_github, repo, gateway):
    pr = repo.make_pull_request(labels=["p2"])
    gateway.add_labels(pr.number, ["p0", "effort/large"])
    assert pr.labels == {"p0", "p2", "effort/large"}
    assert fake_github.requests_made(method="POST") == [
        (f"/repos/an-org/a-repo/issues/{pr.number}/labels", "POST"),
    ]


def test_add_no_labels(fake_github, repo, gateway):
    pr = repo.make_pull_request()
    with pytest.raises(ValueError):
        gateway.add_labels(pr.number, [])
    fake_github.assert_readonly()


def test_remove_label(fake_github, repo, gateway):
    pr = repo.make_pull_request(labels=["p2", "effort/large"])
    gateway.remove_label(pr.number, "effort/large")
    assert pr.labels == {"p2"}
    assert fake_github.requests_made(method="DELETE") == [
        (f"/repos/an-org/a-repo/issues/{pr.number}/labels/effort%2Flarge", "DELETE"),
    ]


def test_remove_absent_label(repo, gateway):
    pr = repo.make_pull_request(labels=["p2"])
    gateway.remove_label(pr.number, "bug")
    assert pr.labels == {"p2"}


def test_remove_label_fails(fake_github, repo, gateway):
    pr = repo.make_pull_request(labels=["p2"])
    fake_github.fail_requests("DELETE", r"/labels/", 500)
    with pytest.raises(RequestFailed):
        gateway.remove_label(pr.number, "p2")
    assert pr.labels == {"p2"}
