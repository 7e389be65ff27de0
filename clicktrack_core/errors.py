"""
Error taxonomy for the scraper.

Strategy- and probe-local failures never surface here: the extractor and the
orchestrator swallow them and report absence. Only failures that stop a request
from being attempted at all are raised to the caller.
"""

from typing import Dict
import logging

logger = logging.getLogger(__name__)


class ScrapeError(Exception):
    """Base class for request-level failures"""
    pass


class ConfigurationError(ScrapeError):
    """Invalid configuration (e.g. unknown browser mode)"""
    pass


class BrowserLaunchError(ScrapeError):
    """Browser process could not be started"""
    pass


class NavigationError(ScrapeError):
    """Top-level page failed to load within its bound"""
    pass


def get_error_category(error: Exception) -> str:
    """
    Categorize error type.

    Returns:
        Category name: "config", "launch", "navigation", "unknown"
    """
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, BrowserLaunchError):
        return "launch"
    if isinstance(error, NavigationError):
        return "navigation"

    error_str = str(error).lower()
    if any(k in error_str for k in ["executable doesn't exist", "failed to launch", "browsertype.launch"]):
        return "launch"
    if any(k in error_str for k in ["timeout", "net::err", "navigation", "page.goto"]):
        return "navigation"
    return "unknown"


def error_message(error: BaseException) -> str:
    """Message of the error, falling back to its type name when empty."""
    msg = str(error).strip()
    return msg or error.__class__.__name__


def create_error_response(error: Exception) -> Dict:
    """
    Create the JSON body returned for a failed request.

    The message is taken from the chained cause when there is one, so a
    wrapped navigation or launch failure reports the underlying error text.

    Args:
        error: The exception

    Returns:
        {"error": <message>}
    """
    root = error.__cause__ or error
    logger.debug(f"Error response ({get_error_category(error)}): {error_message(error)}")
    return {"error": error_message(root)}
