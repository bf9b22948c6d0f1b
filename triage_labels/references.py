"""
Finding the issues a pull request description says it closes.
"""

import re
from typing import List, Optional

# see: https://docs.github.com/en/issues/tracking-your-work-with-issues/linking-a-pull-request-to-an-issue#linking-a-pull-request-to-an-issue-using-a-keyword
GITHUB_CLOSE_ISSUE_KEYWORDS = {
    "close",
    "closes",
    "closed",
    "fix",
    "fixes",
    "fixed",
    "resolve",
    "resolves",
    "resolved",
}

# More references can follow the first one: "Fixes #1, #2 and #3".
LIST_SEPARATOR = r"(?:\s*,\s*|\s+and\s+|\s*&\s*)"


def url_prefix(full_name: str, server_url: str = "https://github.com") -> str:
    """The regex for the part of an issue URL before the number."""
    server_url = server_url.rstrip("/")
    return re.escape(f"{server_url}/{full_name}/issues/")


def _closed_reference_lists(text: str, url_regex: str) -> List[str]:
    """
    Find the lists of references that follow a closing keyword.

    A list can mix "#12" and issue URL references.
    """
    one_reference = rf"(?:#|{url_regex})\d+"
    regex = re.compile(
        rf"(\w+)\s+({one_reference}(?:{LIST_SEPARATOR}{one_reference})*)",
        flags=re.IGNORECASE,
    )
    return [
        match[2] for match in regex.finditer(text)
        if match[1].lower() in GITHUB_CLOSE_ISSUE_KEYWORDS
    ]


def _numbers(reference_lists: List[str], prefix: str) -> List[int]:
    numbers = []
    for references in reference_lists:
        found = re.findall(rf"{prefix}(\d+)", references, flags=re.IGNORECASE)
        numbers.extend(int(num, 10) for num in found)
    return numbers


def find_referenced_issues(
    text: Optional[str],
    full_name: str,
    server_url: str = "https://github.com",
) -> List[int]:
    """
    Get the numbers of issues that `text` closes with a closing keyword.

    Both "Fixes #12" and "Fixes https://github.com/owner/repo/issues/12" are
    understood, also in lists like "Fixes #12 and #13". Short references come
    first, then URL references. Numbers are not de-duplicated.

    Arguments:
        text: the body of a pull request, possibly empty or None.
        full_name: the "owner/repo" name of the pull request's repository.
        server_url: the GitHub web server that issue URLs point to.
    """
    if not text:
        return []
    url_regex = url_prefix(full_name, server_url)
    reference_lists = _closed_reference_lists(text, url_regex)
    return _numbers(reference_lists, "#") + _numbers(reference_lists, url_regex)
