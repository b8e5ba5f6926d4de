"""Tests for the weather app."""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from conftest import RecordingView, make_response, make_session
from lookup_apps.client import WeatherClient
from lookup_apps.config import PositionOptions
from lookup_apps.errors import Unauthorized
from lookup_apps.geolocation import FixedLocator, IpLocator, LocationError, LocationFailure
from lookup_apps.models import WeatherReading
from lookup_apps.presenter import WeatherView
from lookup_apps.state import SearchState
from lookup_apps.weather import WeatherApp


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=WeatherClient)


class TestWeatherApp:
    """Tests for WeatherApp."""

    def test_success(self, view: RecordingView, weather_payload: dict[str, Any]) -> None:
        """Position, fetch and render happen in order."""
        session = make_session(make_response(200, weather_payload))
        app = WeatherApp(WeatherClient("k3y", session=session), FixedLocator(51.5074, -0.1278), view)

        assert app.get_weather() is SearchState.SUCCESS
        assert view.states == [SearchState.INITIAL, SearchState.LOADING, SearchState.SUCCESS]
        assert isinstance(view.result, WeatherView)
        assert view.result.coordinates == "51.5074, -0.1278"
        assert session.get.call_args.kwargs["params"]["q"] == "51.5074,-0.1278"

    def test_denied_location_makes_no_http_call(self, view: RecordingView) -> None:
        """Denied geolocation errors without any request."""
        geo_session = make_session()
        weather_session = make_session()
        locator = IpLocator(ask_permission=lambda: False, session=geo_session)
        app = WeatherApp(WeatherClient("k3y", session=weather_session), locator, view)

        assert app.get_weather() is SearchState.ERROR
        assert view.error == "Location access denied by user."
        geo_session.get.assert_not_called()
        weather_session.get.assert_not_called()

    def test_missing_capability_short_circuits(self, client: MagicMock, view: RecordingView) -> None:
        """Without a locator the app errors before loading."""
        app = WeatherApp(client, None, view)

        assert app.get_weather() is SearchState.ERROR
        assert SearchState.LOADING not in view.states
        assert view.error == "Geolocation is not supported on this host."
        client.fetch_current.assert_not_called()

    def test_location_timeout(self, client: MagicMock, view: RecordingView) -> None:
        """A geolocation timeout is reported after loading."""
        locator = IpLocator(session=make_session(side_effect=requests.Timeout("slow")))
        app = WeatherApp(client, locator, view)

        assert app.get_weather() is SearchState.ERROR
        assert view.states[-2:] == [SearchState.LOADING, SearchState.ERROR]
        assert view.error == "Location request timed out."
        client.fetch_current.assert_not_called()

    def test_fetch_failure(self, client: MagicMock, view: RecordingView) -> None:
        """Weather API failures are rendered."""
        client.fetch_current.side_effect = Unauthorized(
            "Invalid API key. Please check your WeatherAPI key.")
        app = WeatherApp(client, FixedLocator(1.0, 2.0), view)

        assert app.get_weather() is SearchState.ERROR
        assert view.error == "Invalid API key. Please check your WeatherAPI key."

    def test_options_reach_locator(self, client: MagicMock, view: RecordingView, weather_payload: dict[str, Any]) -> None:
        """The configured position options are used."""
        locator = MagicMock(spec=FixedLocator)
        locator.current_position.return_value = FixedLocator(1.0, 2.0).current_position()
        client.fetch_current.return_value = WeatherReading.model_validate(weather_payload)
        options = PositionOptions(timeout_seconds=3.0)

        WeatherApp(client, locator, view, options).get_weather()

        locator.current_position.assert_called_once_with(options)

    def test_retry_after_error(self, client: MagicMock, view: RecordingView, weather_payload: dict[str, Any]) -> None:
        """retry() re-enters LOADING from ERROR."""
        client.fetch_current.side_effect = [
            LocationError(LocationFailure.POSITION_UNAVAILABLE),
            WeatherReading.model_validate(weather_payload),
        ]
        app = WeatherApp(client, FixedLocator(1.0, 2.0), view)

        assert app.get_weather() is SearchState.ERROR
        assert app.retry() is SearchState.SUCCESS
        assert view.states[-2:] == [SearchState.LOADING, SearchState.SUCCESS]

    def test_ignored_while_busy(self, client: MagicMock, view: RecordingView) -> None:
        """A second request during LOADING is not accepted."""
        app = WeatherApp(client, FixedLocator(1.0, 2.0), view)
        app.controller.begin()

        assert app.get_weather() is SearchState.LOADING
        client.fetch_current.assert_not_called()

    def test_broken_transfer_recovers(self, view: RecordingView, weather_payload: dict[str, Any]) -> None:
        """A transport failure ends in ERROR and a retry can still succeed."""
        session = make_session(side_effect=[
            requests.exceptions.ChunkedEncodingError("truncated"),
            make_response(200, weather_payload),
        ])
        app = WeatherApp(WeatherClient("k3y", session=session), FixedLocator(51.5074, -0.1278), view)

        assert app.get_weather() is SearchState.ERROR
        assert view.error == "Network error. Please check your internet connection."
        assert app.retry() is SearchState.SUCCESS

    def test_unexpected_error_leaves_loading(self, client: MagicMock, view: RecordingView) -> None:
        """An unexpected exception is raised after the state moves to ERROR."""
        client.fetch_current.side_effect = RuntimeError("boom")
        app = WeatherApp(client, FixedLocator(1.0, 2.0), view)

        with pytest.raises(RuntimeError):
            app.get_weather()

        assert app.state is SearchState.ERROR
        assert app.controller.busy is False
