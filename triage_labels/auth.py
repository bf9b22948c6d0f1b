"""
Create authenticated sessions for access to GitHub.
"""

import requests
from urlobject import URLObject

from triage_labels import settings


class BaseUrlSession(requests.Session):
    """
    A requests Session class that applies a base URL to the requested URL.
    """
    def __init__(self, base_url, timeout=None):
        super().__init__()
        self.base_url = URLObject(base_url)
        self.timeout = timeout

    def full_url(self, url):
        """
        Make `url` absolute.

        A path starting with a slash goes after the path of the base URL:
        GitHub Enterprise serves its API under "/api/v3".
        """
        if url.startswith("/"):
            return URLObject(self.base_url.rstrip("/") + url)
        return self.base_url.relative(url)

    def request(self, method, url, data=None, headers=None, **kwargs):
        kwargs.setdefault("timeout", self.timeout)
        return super().request(
            method=method,
            url=self.full_url(url),
            data=data,
            headers=headers,
            **kwargs
        )


def github_timeout():
    """
    How many seconds to wait for GitHub, from the GITHUB_TIMEOUT setting.

    Raises ConfigurationError if the setting isn't a positive number.
    """
    return settings.parse_seconds("GITHUB_TIMEOUT", settings.GITHUB_TIMEOUT)


def get_github_session():
    """
    Get the GitHub session to use.
    """
    session = BaseUrlSession(base_url=settings.GITHUB_API_URL, timeout=github_timeout())
    session.headers["Accept"] = "application/vnd.github+json"
    if settings.GITHUB_PERSONAL_TOKEN:
        session.headers["Authorization"] = f"token {settings.GITHUB_PERSONAL_TOKEN}"
    session.trust_env = False   # prevent reading the local .netrc
    return session
