"""Weather service: decides between the cache and a provider round-trip."""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Union

from weather_cache import CACHE_TTL_SECONDS, WeatherCache, is_valid, lookup
from weather_data import Units, WeatherSnapshot, normalize_place
from weather_provider import (
    DecodeError,
    ErrorInfo,
    ValidationError,
    WeatherProviderBase,
    WeatherProviderError,
)


@dataclass(frozen=True)
class Hit:
    """A valid cached snapshot was found; no request was made."""
    key: str
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class Fetched:
    """A fresh snapshot came back from the provider."""
    key: str
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class Failed:
    error: ErrorInfo


Outcome = Union[Hit, Fetched, Failed]


class WeatherService:
    """
    Service that puts a bounded cache in front of a weather provider.

    Prevents hammering the API by reusing cached snapshots while they are
    fresh (default: 10 minutes). The service only reports what happened as an
    Outcome; storing fetched snapshots is left to the session state.

    Snapshots are always requested in `canonical_units` so that cached values
    never depend on the display unit chosen at the time of the request.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        cache_ttl_seconds: float = CACHE_TTL_SECONDS,
        canonical_units: Units = Units.METRIC,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
            cache_ttl_seconds: How long a cached snapshot stays usable
            canonical_units: Unit system snapshots are fetched and stored in
            clock: Source of the current UNIX time
        """
        self.provider = provider
        self.cache_ttl_seconds = cache_ttl_seconds
        self.canonical_units = Units(canonical_units)
        self.clock = clock

    async def fetch_weather(self, query: str, cache: WeatherCache) -> Outcome:
        """
        Get current weather for a place, using the cache if still fresh.

        Never raises for provider failures: they are returned as Failed.
        """
        if not query or not query.strip():
            logging.warning("Rejecting blank place query")
            return Failed(ErrorInfo.from_exception(ValidationError("Please enter a place name")))

        key = normalize_place(query)
        entry = lookup(cache, key)
        if entry is not None:
            now = self.clock()
            cache_age = now - entry.fetched_at
            if is_valid(entry, now, self.cache_ttl_seconds):
                logging.debug(f"Using cached weather for {key!r} (age: {cache_age:.1f}s, TTL: {self.cache_ttl_seconds}s)")
                return Hit(key, entry.snapshot)
            logging.info(f"Cache expired for {key!r} (age: {cache_age:.1f}s >= TTL: {self.cache_ttl_seconds}s), fetching new data")

        logging.info(f"Fetching weather for {query.strip()!r} from provider...")
        try:
            snapshot = await asyncio.to_thread(
                self.provider.get_current, query.strip(), self.canonical_units
            )
        except WeatherProviderError as e:
            logging.warning(f"Weather fetch for {key!r} failed ({e.kind.value}): {e.message}")
            return Failed(ErrorInfo.from_exception(e))
        except Exception as e:
            logging.error(f"Provider returned unusable data for {key!r}: {e}", exc_info=True)
            return Failed(ErrorInfo.from_exception(DecodeError()))

        logging.info(f"Weather fetch successful: {snapshot.name} {snapshot.temp} ({snapshot.units.value}), {snapshot.condition_main}")
        return Fetched(key, snapshot)
