"""
Generic utilities.
"""

from sentry_sdk import get_current_scope

from triage_labels import logger
from triage_labels.exceptions import NotFound, RequestFailed


def log_check_response(response, raise_for_status=True):
    """
    Logs HTTP request and response at debug level and checks if it succeeded.

    Arguments:
        response (requests.Response)
        raise_for_status (bool): if True, call raise_for_status on the response
            also.

    Raises:
        NotFound: for a 404 response.
        RequestFailed: for any other unsuccessful response.
    """
    msg = "Request: {0.method} {0.url}: {0.body!r}".format(response.request)
    logger.debug(msg)
    msg = "Response: {0.status_code} {0.reason!r} for {0.url}: {0.content!r}".format(response)
    logger.debug(msg)
    if raise_for_status:
        try:
            response.raise_for_status()
        except Exception as exc:
            req = response.request
            exc_class = NotFound if response.status_code == 404 else RequestFailed
            raise exc_class(f"HTTP request failed: {req.method} {req.url}. Response body: {response.content}") from exc


def text_summary(text, length=40):
    """
    Make a summary of `text`, at most `length` chars long.

    The middle will be elided if needed.
    """
    if len(text) <= length:
        return text
    else:
        start = (length - 3) // 2
        end = length - 3 - start
        return text[:start] + "..." + text[-end:]


def sentry_extra_context(data_dict):
    """Apply the keys and values from data_dict to the Sentry extra context."""
    scope = get_current_scope()
    for key, value in data_dict.items():
        scope.set_extra(key, value)
