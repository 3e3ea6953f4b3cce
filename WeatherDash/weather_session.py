"""Session object a view layer talks to."""
import itertools
import logging
import time
from typing import Callable, Optional

from config import DashConfig
from mock_provider import MockWeatherProvider
from openweather_provider import OpenWeatherProvider
from weather_service import Outcome, WeatherService
from weather_state import (
    ClearCache,
    ClearError,
    ClearWeather,
    Command,
    EvictOne,
    RequestResolved,
    RequestStarted,
    SessionState,
    ToggleUnit,
    apply,
)
from weather_view import build_view


class WeatherSession:
    """
    Owns the session state for one running dashboard.

    All state changes go through dispatch(); the view only reads `state` or
    the dictionary returned by view(). request_weather() is the one coroutine:
    it may be awaited while other commands (including further requests) are
    dispatched, and only the latest request's outcome is kept.
    """

    def __init__(
        self,
        service: WeatherService,
        state: Optional[SessionState] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.service = service
        self.clock = clock
        self._state = state or SessionState()
        self._tokens = itertools.count(self._state.request_token + 1)

    @classmethod
    def from_config(cls, config: DashConfig, clock: Callable[[], float] = time.time) -> "WeatherSession":
        if config.api_key:
            provider = OpenWeatherProvider(api_key=config.api_key, lang=config.lang, timeout=config.timeout)
        else:
            provider = MockWeatherProvider()
        service = WeatherService(provider, cache_ttl_seconds=config.cache_ttl, clock=clock)
        state = SessionState(unit=config.units, cache_size=config.cache_size)
        logging.info(f"Weather session ready (provider={type(provider).__name__}, cache ttl={config.cache_ttl}s)")
        return cls(service, state=state, clock=clock)

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, command: Command) -> SessionState:
        self._state = apply(self._state, command)
        return self._state

    async def request_weather(self, query: str) -> Outcome:
        token = next(self._tokens)
        self.dispatch(RequestStarted(token))
        logging.debug(f"Request {token} started for {query!r}")

        # Snapshot the cache at dispatch time; the service never mutates it.
        outcome = await self.service.fetch_weather(query, self._state.cache)

        self.dispatch(RequestResolved(token, outcome, self.clock()))
        return outcome

    def toggle_unit(self) -> SessionState:
        return self.dispatch(ToggleUnit())

    def clear_error(self) -> SessionState:
        return self.dispatch(ClearError())

    def evict_one(self, key: str) -> SessionState:
        return self.dispatch(EvictOne(key))

    def clear_cache(self) -> SessionState:
        return self.dispatch(ClearCache())

    def clear_weather(self) -> SessionState:
        return self.dispatch(ClearWeather())

    def view(self, recent_limit: int = 6) -> dict:
        return build_view(self._state, recent_limit)
