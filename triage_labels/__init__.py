import logging
import os
import sys

import sentry_sdk

__version__ = "0.1.0"

log_level = os.environ.get('LOGLEVEL', 'INFO').upper()
logger = logging.getLogger(__name__)
handler = logging.StreamHandler(sys.stderr)
handler.setLevel(log_level)
logger.addHandler(handler)
logger.setLevel(log_level)

# urllib3 is chatty on debug-level, quiet it.
logging.getLogger("urllib3").setLevel("WARN")


def set_log_level(level):
    """Change the level of the package logger and its handler."""
    handler.setLevel(level)
    logger.setLevel(level)


def init_sentry():
    """
    Start reporting errors to Sentry, if a DSN has been configured.

    Returns True if Sentry was initialized.
    """
    if not os.environ.get("SENTRY_DSN", ""):
        return False
    sentry_sdk.init(release=f"triage_labels@{__version__}")
    return True
