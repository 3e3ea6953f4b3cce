"""Session state and the commands that move it between states.

The state is an immutable value; apply() computes the next one for a
command. Requests are tagged with a token so that only the outcome of the
latest request is allowed to change what is displayed.
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

import weather_cache
from weather_cache import WeatherCache
from weather_data import Units, WeatherSnapshot, normalize_place
from weather_provider import ErrorInfo
from weather_service import Failed, Fetched, Hit, Outcome


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class SessionState:
    current_snapshot: Optional[WeatherSnapshot] = None
    status: Status = Status.IDLE
    last_error: Optional[ErrorInfo] = None
    unit: Units = Units.METRIC
    cache: WeatherCache = field(default_factory=WeatherCache)
    request_token: int = 0  # latest token handed out by RequestStarted
    cache_size: int = weather_cache.MAX_SIZE


@dataclass(frozen=True)
class RequestStarted:
    token: int


@dataclass(frozen=True)
class RequestResolved:
    token: int
    outcome: Outcome
    now: float


@dataclass(frozen=True)
class ClearError:
    pass


@dataclass(frozen=True)
class ToggleUnit:
    pass


@dataclass(frozen=True)
class EvictOne:
    key: str


@dataclass(frozen=True)
class ClearCache:
    pass


@dataclass(frozen=True)
class ClearWeather:
    """Drop the displayed snapshot and error, e.g. when leaving the result screen."""
    pass


Command = Union[
    RequestStarted, RequestResolved, ClearError, ToggleUnit, EvictOne, ClearCache, ClearWeather
]


def apply(state: SessionState, command: Command) -> SessionState:
    """Return the state that results from applying command to state."""
    if isinstance(command, RequestStarted):
        return replace(
            state,
            status=Status.LOADING,
            last_error=None,
            request_token=max(state.request_token, command.token),
        )

    if isinstance(command, RequestResolved):
        return _resolve(state, command)

    if isinstance(command, ClearError):
        return replace(state, last_error=None)

    if isinstance(command, ToggleUnit):
        return replace(state, unit=state.unit.toggled())

    if isinstance(command, EvictOne):
        return replace(state, cache=weather_cache.remove(state.cache, normalize_place(command.key)))

    if isinstance(command, ClearCache):
        return replace(state, cache=weather_cache.clear())

    if isinstance(command, ClearWeather):
        status = Status.IDLE if state.status is Status.ERROR else state.status
        return replace(state, current_snapshot=None, last_error=None, status=status)

    raise TypeError(f"Unknown command: {command!r}")


def _resolve(state: SessionState, command: RequestResolved) -> SessionState:
    if command.token != state.request_token:
        logging.debug(f"Discarding outcome of superseded request {command.token} (latest: {state.request_token})")
        return state

    outcome = command.outcome
    if isinstance(outcome, Failed):
        return replace(
            state,
            current_snapshot=None,
            status=Status.ERROR,
            last_error=outcome.error,
        )

    cache = state.cache
    if isinstance(outcome, Fetched):
        cache = weather_cache.upsert(cache, outcome.key, outcome.snapshot, command.now, state.cache_size)
    elif not isinstance(outcome, Hit):
        raise TypeError(f"Unknown outcome: {outcome!r}")

    return replace(
        state,
        current_snapshot=outcome.snapshot,
        status=Status.IDLE,
        last_error=None,
        cache=cache,
    )
