"""Weather app: host position in, rendered current conditions out."""

import logging
from typing import Optional

from .client import WeatherClient
from .config import PositionOptions
from .errors import AppError, UnknownError
from .geolocation import Locator
from .presenter import present_weather
from .state import SearchState, StateController, ViewPorts
from .validators import require_capability


logger = logging.getLogger(__name__)


class WeatherApp:
    """Fetches the weather at the host's current position."""

    def __init__(
        self,
        client: WeatherClient,
        locator: Optional[Locator],
        view: ViewPorts,
        options: Optional[PositionOptions] = None,
    ):
        self.client = client
        self.locator = locator
        self.options = options or PositionOptions()
        self.controller = StateController(view)

    @property
    def state(self) -> SearchState:
        return self.controller.state

    def get_weather(self) -> SearchState:
        """Locate the host, then fetch and render its current weather."""
        if self.controller.busy:
            logger.debug("Ignoring request while a lookup is in flight")
            return self.state

        try:
            require_capability(self.locator)
        except AppError as e:
            self.controller.reject(e)
            return self.state

        self.controller.begin()
        try:
            position = self.locator.current_position(self.options)
            reading = self.client.fetch_current(position.coords)
        except AppError as e:
            logger.warning("Weather lookup failed: %s", e.message)
            self.controller.fail(e)
            return self.state
        except Exception as e:
            self.controller.fail(UnknownError(f"Unexpected error fetching weather: {e}"))
            raise

        self.controller.succeed(present_weather(reading, position.coords))
        return self.state

    def retry(self) -> SearchState:
        """Try again after an error."""
        return self.get_weather()
