"""Search state machine and the view it drives."""

import abc
import enum
import logging
from typing import Any, Optional

from .errors import AppError


logger = logging.getLogger(__name__)


class SearchState(enum.Enum):
    """UI states of a lookup; exactly one is active at a time."""

    INITIAL = "initial"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class IllegalTransition(AppError):
    """Raised when a transition is not allowed from the current state."""

    def __init__(self, current: SearchState, target: SearchState):
        super().__init__(
            message=f"Cannot move from {current.name} to {target.name}",
            details={"from": current.name, "to": target.name},
        )


class ViewPorts(abc.ABC):
    """Rendering capabilities the state controller writes to."""

    @abc.abstractmethod
    def show_state(self, state: SearchState) -> None:
        """Make the given state the only visible one."""
        ...

    @abc.abstractmethod
    def set_trigger_enabled(self, enabled: bool) -> None:
        """Enable or disable the control that starts a lookup."""
        ...

    @abc.abstractmethod
    def show_error(self, message: str) -> None:
        """Render the error message of the ERROR state."""
        ...

    @abc.abstractmethod
    def show_result(self, view_model: Any) -> None:
        """Render a presenter view model, one slot per attribute."""
        ...


_IDLE = frozenset({SearchState.INITIAL, SearchState.SUCCESS, SearchState.ERROR})


class StateController:
    """Owns the current SearchState and is the only code that changes it."""

    def __init__(self, view: ViewPorts):
        self.view = view
        self.state = SearchState.INITIAL
        self.result: Optional[Any] = None
        self.error: Optional[AppError] = None
        self._enter(SearchState.INITIAL)

    @property
    def busy(self) -> bool:
        """True while a lookup is in flight."""
        return self.state is SearchState.LOADING

    def begin(self) -> None:
        """Enter LOADING for a validated user action."""
        self._check(_IDLE, SearchState.LOADING)
        self.result = None
        self.error = None
        self._enter(SearchState.LOADING)

    def succeed(self, view_model: Any) -> None:
        """Leave LOADING with a rendered result."""
        self._check({SearchState.LOADING}, SearchState.SUCCESS)
        self.result = view_model
        self._enter(SearchState.SUCCESS)

    def fail(self, error: AppError) -> None:
        """Leave LOADING with an error."""
        self._check({SearchState.LOADING}, SearchState.ERROR)
        self.error = error
        self._enter(SearchState.ERROR)

    def reject(self, error: AppError) -> None:
        """Go straight to ERROR when an action is rejected before loading."""
        self._check(_IDLE, SearchState.ERROR)
        self.result = None
        self.error = error
        self._enter(SearchState.ERROR)

    def reset(self) -> None:
        """Return to INITIAL, discarding any result or error."""
        self.result = None
        self.error = None
        self._enter(SearchState.INITIAL)

    def _check(self, allowed: frozenset | set, target: SearchState) -> None:
        if self.state not in allowed:
            raise IllegalTransition(self.state, target)

    def _enter(self, state: SearchState) -> None:
        logger.debug("State %s -> %s", self.state.name, state.name)
        self.state = state
        self.view.show_state(state)
        self.view.set_trigger_enabled(state is not SearchState.LOADING)

        if state is SearchState.SUCCESS:
            self.view.show_result(self.result)
        elif state is SearchState.ERROR and self.error is not None:
            self.view.show_error(self.error.message)
