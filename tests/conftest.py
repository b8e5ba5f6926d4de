"""Shared fixtures for the test suite."""

from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from lookup_apps.state import SearchState, ViewPorts


class RecordingView(ViewPorts):
    """ViewPorts implementation that records every call."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []
        self.trigger_enabled = True
        self.error: Optional[str] = None
        self.result: Any = None

    def show_state(self, state: SearchState) -> None:
        self.events.append(("state", state))

    def set_trigger_enabled(self, enabled: bool) -> None:
        self.trigger_enabled = enabled
        self.events.append(("trigger", enabled))

    def show_error(self, message: str) -> None:
        self.error = message
        self.events.append(("error", message))

    def show_result(self, view_model: Any) -> None:
        self.result = view_model
        self.events.append(("result", view_model))

    @property
    def states(self) -> list[SearchState]:
        return [value for kind, value in self.events if kind == "state"]


def make_response(status_code: int = 200, body: Any = None) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if body is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body
    return response


def make_session(response: Any = None, side_effect: Any = None) -> MagicMock:
    """Build a stand-in for requests.Session returning ``response``."""
    session = MagicMock()
    session.headers = {}
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    return session


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def github_user() -> dict[str, Any]:
    return {
        "login": "octocat",
        "id": 583231,
        "name": "The Octocat",
        "bio": None,
        "location": "San Francisco",
        "company": "@github",
        "blog": "https://github.blog",
        "twitter_username": None,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "html_url": "https://github.com/octocat",
        "public_repos": 8,
        "followers": 21500,
        "following": 9,
        "created_at": "2011-01-25T18:44:36Z",
    }


@pytest.fixture
def weather_payload() -> dict[str, Any]:
    return {
        "location": {
            "name": "London",
            "region": "City of London, Greater London",
            "country": "United Kingdom",
            "lat": 51.52,
            "lon": -0.11,
        },
        "current": {
            "temp_c": 22.4,
            "feelslike_c": 23.5,
            "condition": {"text": "Partly cloudy", "code": 1003},
            "humidity": 65,
            "wind_kph": 15.0,
            "vis_km": 10.0,
        },
    }
