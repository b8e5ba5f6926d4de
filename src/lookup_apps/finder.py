"""GitHub user finder: username in, rendered profile out."""

import logging
from typing import Optional

from .client import GitHubClient
from .errors import AppError, UnknownError
from .models import UserProfile
from .presenter import present_profile
from .state import SearchState, StateController, ViewPorts
from .validators import validate_username


logger = logging.getLogger(__name__)


class GitHubUserFinder:
    """Looks up one GitHub user per action and drives the view through it."""

    def __init__(self, client: GitHubClient, view: ViewPorts):
        self.client = client
        self.controller = StateController(view)
        self.current_user: Optional[UserProfile] = None
        self._last_input: Optional[str] = None

    @property
    def state(self) -> SearchState:
        return self.controller.state

    def search(self, raw_username: Optional[str]) -> SearchState:
        """Validate the input, fetch the user and render the outcome."""
        if self.controller.busy:
            logger.debug("Ignoring search while a lookup is in flight")
            return self.state

        self._last_input = raw_username
        try:
            username = validate_username(raw_username).unwrap()
        except AppError as e:
            self.controller.reject(e)
            return self.state

        self.controller.begin()
        try:
            user = self.client.fetch_user(username)
        except AppError as e:
            logger.warning("Lookup of %s failed: %s", username, e.message)
            self.controller.fail(e)
            return self.state
        except Exception as e:
            self.controller.fail(UnknownError(f"Unexpected error looking up {username}: {e}"))
            raise

        self.current_user = user
        self.controller.succeed(present_profile(user))
        return self.state

    def retry(self) -> SearchState:
        """Repeat the last search."""
        return self.search(self._last_input)

    def reset(self) -> SearchState:
        """Clear the input and go back to the initial state."""
        self._last_input = None
        self.current_user = None
        self.controller.reset()
        return self.state
