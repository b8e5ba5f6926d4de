"""GitHub user finder and current weather lookups."""

from lookup_apps.errors import AppError, ErrorCause
from lookup_apps.finder import GitHubUserFinder
from lookup_apps.state import SearchState, StateController, ViewPorts
from lookup_apps.weather import WeatherApp

__all__ = ["AppError", "ErrorCause", "GitHubUserFinder",
           "SearchState", "StateController", "ViewPorts", "WeatherApp"]
