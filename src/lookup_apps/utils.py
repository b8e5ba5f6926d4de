"""Utility functions for the lookup apps."""

from urllib.parse import quote, urljoin, urlparse


def build_url(base: str, path: str) -> str:
    """Safely join a base URL with a path."""
    return urljoin(base.rstrip("/") + "/", path.lstrip("/"))


def user_path(username: str) -> str:
    """Path of a user resource, with the username percent-encoded."""
    return f"/users/{quote(username, safe='')}"


def strip_query(url: str) -> str:
    """Drop the query string and fragment, e.g. before logging a URL."""
    return urlparse(url)._replace(query="", fragment="").geturl()


def truncate_string(text: str, max_length: int = 100) -> str:
    """Truncate a string to a maximum length with ellipsis."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
