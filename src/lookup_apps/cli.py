"""Command-line interface for the lookup apps."""

import logging
import pathlib
from typing import Any, Callable, Optional

import click

from .client import GitHubClient, WeatherClient
from .config import AppConfig, load_config
from .errors import log_exceptions, setup_logging
from .finder import GitHubUserFinder
from .geolocation import FixedLocator, IpLocator, Locator
from .presenter import DetailRow, ProfileView, WeatherView
from .state import SearchState, ViewPorts
from .utils import truncate_string
from .weather import WeatherApp


logger = logging.getLogger(__name__)

FALLBACK_NOTICE = "Oops! Something went wrong. Please try again."


class ConsoleView(ViewPorts):
    """Renders lookup states to the terminal."""

    def __init__(self, loading_text: str = "Searching...") -> None:
        self.loading_text = loading_text
        self.trigger_enabled = True

    def show_state(self, state: SearchState) -> None:
        if state is SearchState.LOADING:
            click.echo(self.loading_text, err=True)

    def set_trigger_enabled(self, enabled: bool) -> None:
        self.trigger_enabled = enabled

    def show_error(self, message: str) -> None:
        click.secho(f"Error: {message}", fg="red", err=True)

    def show_result(self, view_model: Any) -> None:
        if isinstance(view_model, ProfileView):
            self._show_profile(view_model)
        elif isinstance(view_model, WeatherView):
            self._show_weather(view_model)
        else:
            click.echo(str(view_model))

    def _show_profile(self, view: ProfileView) -> None:
        click.secho(f"{view.name} ({view.login})", bold=True)
        click.echo(truncate_string(view.bio, 80))
        click.echo(f"Repos: {view.repos}  Followers: {view.followers}  Following: {view.following}")
        self._row("Location", view.location)
        self._row("Website", view.website)
        self._row("Twitter", view.twitter)
        self._row("Company", view.company)
        if view.joined:
            click.echo(f"Joined: {view.joined}")
        click.echo(f"Profile: {view.profile_url}")

    def _show_weather(self, view: WeatherView) -> None:
        click.secho(view.location_name, bold=True)
        click.echo(view.location_details)
        click.echo(f"{view.temperature}°C  {view.condition}")
        click.echo(f"Feels like: {view.feels_like}")
        click.echo(f"Humidity: {view.humidity}")
        click.echo(f"Wind: {view.wind_speed}")
        click.echo(f"Visibility: {view.visibility}")
        click.echo(f"Coordinates: {view.coordinates}")

    @staticmethod
    def _row(label: str, row: Optional[DetailRow]) -> None:
        if row is None:
            return
        if row.href and row.href != row.text:
            click.echo(f"{label}: {row.text} ({row.href})")
        else:
            click.echo(f"{label}: {row.text}")


def _run(action: Callable[[], SearchState]) -> None:
    """Run one lookup action and exit non-zero unless it succeeded."""
    ctx = click.get_current_context()
    try:
        state = log_exceptions(logger)(action)()
    except (click.ClickException, click.Abort):
        raise
    except Exception:
        click.secho(FALLBACK_NOTICE, fg="red", err=True)
        ctx.exit(2)
    if state is SearchState.ERROR:
        ctx.exit(1)


def _ask_location_permission() -> bool:
    return click.confirm("Allow lookup-apps to use your location?", default=False, err=True)


@click.group()
@click.version_option(package_name="lookup-apps")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    default=None,
    help="Path to a JSON config file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[pathlib.Path], verbose: bool) -> None:
    """Look up GitHub users and the weather where you are."""
    config = load_config(config_path)
    if verbose:
        config = config.model_copy(update={"debug": True, "log_level": "DEBUG"})
    setup_logging(config)
    ctx.obj = config


@main.command()
@click.argument("username")
@click.pass_obj
def user(config: AppConfig, username: str) -> None:
    """Fetch a GitHub user's profile."""
    client = GitHubClient(
        base_url=config.github_api_url,
        user_agent=config.github_user_agent,
        token=config.github_token,
        timeout=config.github_timeout,
    )
    with client:
        finder = GitHubUserFinder(client, ConsoleView("Searching..."))
        _run(lambda: finder.search(username))


@main.command()
@click.option("--lat", type=click.FloatRange(-90, 90), default=None, help="Latitude to use instead of locating")
@click.option("--lon", type=click.FloatRange(-180, 180), default=None, help="Longitude to use instead of locating")
@click.option("--yes", "-y", is_flag=True, help="Allow location access without asking")
@click.pass_obj
def weather(config: AppConfig, lat: Optional[float], lon: Optional[float], yes: bool) -> None:
    """Show the current weather at your location."""
    if (lat is None) != (lon is None):
        raise click.UsageError("--lat and --lon must be given together")

    locator: Locator
    if lat is not None and lon is not None:
        locator = FixedLocator(lat, lon)
    else:
        locator = IpLocator(
            config.geolocation_url,
            ask_permission=(lambda: True) if yes else _ask_location_permission,
        )

    client = WeatherClient(api_key=config.weather_api_key, base_url=config.weather_api_url)
    with client:
        app = WeatherApp(client, locator, ConsoleView("Getting weather..."), config.geolocation)
        _run(app.get_weather)


if __name__ == "__main__":
    main()
