"""HTTP clients for the GitHub Users API and WeatherAPI."""

import logging
from typing import Any, Optional

import requests

from .errors import (
    AppError,
    NetworkUnreachable,
    NotFound,
    RateLimited,
    ServiceUnavailable,
    Unauthorized,
    UnknownError,
    ValidationFailed,
    error_context,
)
from .models import Coordinates, UserProfile, WeatherReading
from .utils import build_url, strip_query, user_path


logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."


class HttpClient:
    """A thin JSON-over-HTTP client that turns failures into AppErrors."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

        if headers:
            self.session.headers.update(headers)

    def url_for(self, path: str) -> str:
        """Absolute URL for a path; an empty path is the base URL itself."""
        return build_url(self.base_url, path) if path else self.base_url

    def get_json(self, path: str = "", params: Optional[dict[str, str]] = None) -> dict[str, Any]:
        """Make a GET request and parse the JSON response."""
        url = self.url_for(path)

        logger.info("Fetching JSON from %s", strip_query(url))
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("Transport failure for %s: %s", strip_query(url), e)
            raise NetworkUnreachable(NETWORK_ERROR_MESSAGE) from e
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", strip_query(url), e)
            raise NetworkUnreachable(NETWORK_ERROR_MESSAGE) from e

        if not response.ok:
            error = self.error_for_status(response)
            logger.warning("%s returned %s: %s", strip_query(url),
                           response.status_code, error.message)
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise UnknownError(
                f"Invalid JSON in response from {strip_query(url)}",
                status=response.status_code,
            ) from e

    def error_for_status(self, response: requests.Response) -> AppError:
        """Classify a non-2xx response. Subclasses refine the mapping."""
        return UnknownError(
            f"Request failed with status {response.status_code}",
            status=response.status_code,
        )

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class GitHubClient(HttpClient):
    """Client for ``GET /users/{username}``."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        user_agent: str = "GitHub-User-Finder",
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        if token:
            headers["Authorization"] = f"token {token}"
        super().__init__(base_url, timeout=timeout, headers=headers, session=session)

    def fetch_user(self, username: str) -> UserProfile:
        """Fetch a user's public profile."""
        data = self.get_json(user_path(username))
        with error_context("parsing GitHub user", logger):
            return UserProfile.model_validate(data)

    def error_for_status(self, response: requests.Response) -> AppError:
        status = response.status_code
        if status == 404:
            return NotFound("User not found. Please check the username and try again.")
        if status == 403:
            return RateLimited("API rate limit exceeded. Please try again later.")
        if status in (500, 502, 503):
            return ServiceUnavailable(
                "GitHub servers are temporarily unavailable. Please try again later.")

        try:
            message = response.json().get("message")
        except (ValueError, AttributeError):
            message = None
        if isinstance(message, str) and message:
            return UnknownError(message, status=status)
        return super().error_for_status(response)


class WeatherClient(HttpClient):
    """Client for the WeatherAPI current conditions endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.weatherapi.com/v1/current.json",
        session: Optional[requests.Session] = None,
    ):
        super().__init__(base_url, timeout=None, session=session)
        self._api_key = api_key

    def __repr__(self) -> str:
        return f"WeatherClient(base_url={self.base_url!r})"

    def fetch_current(self, coordinates: Coordinates) -> WeatherReading:
        """Fetch current conditions at the given coordinates."""
        if not self._api_key:
            raise Unauthorized(
                "Please set your WeatherAPI key (WEATHER_API_KEY). "
                "Get your free key from weatherapi.com"
            )

        data = self.get_json(params={
            "key": self._api_key,
            "q": coordinates.query,
            "aqi": "no",
        })
        with error_context("parsing weather data", logger):
            return WeatherReading.model_validate(data)

    def error_for_status(self, response: requests.Response) -> AppError:
        status = response.status_code
        if status == 401:
            return Unauthorized("Invalid API key. Please check your WeatherAPI key.")
        if status == 400:
            return ValidationFailed("Invalid location coordinates.")
        return UnknownError(f"Weather service error: {status}", status=status)
