"""Environment-driven configuration and logging setup."""
import logging
import math
import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from weather_cache import CACHE_TTL_SECONDS, MAX_SIZE
from weather_data import Units


class ConfigError(ValueError):
    """Raised when an environment setting cannot be used."""


@dataclass(frozen=True)
class DashConfig:
    api_key: Optional[str] = None  # no key means the offline provider is used
    lang: str = "en"
    timeout: int = 10
    cache_ttl: float = CACHE_TTL_SECONDS
    cache_size: int = MAX_SIZE
    units: Units = Units.METRIC


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def _positive_number(name: str, raw: str, cast):
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {name}: {exc}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"Invalid {name}: must be a positive finite number, got {raw}")
    return value


def load_config(dotenv_path: Optional[str] = None) -> DashConfig:
    load_dotenv(dotenv_path)
    api_key = os.getenv("WEATHER_API_KEY") or None
    lang = os.getenv("WEATHER_LANG", "en")

    timeout = _positive_number("WEATHER_TIMEOUT", os.getenv("WEATHER_TIMEOUT", "10"), int)
    cache_ttl = _positive_number("WEATHER_CACHE_TTL", os.getenv("WEATHER_CACHE_TTL", str(CACHE_TTL_SECONDS)), float)
    cache_size = _positive_number("WEATHER_CACHE_SIZE", os.getenv("WEATHER_CACHE_SIZE", str(MAX_SIZE)), int)

    units_raw = os.getenv("WEATHER_UNITS", Units.METRIC.value).strip().lower()
    try:
        units = Units(units_raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid WEATHER_UNITS: {units_raw!r} (expected metric or imperial)") from exc

    if not api_key:
        logging.warning("WEATHER_API_KEY not set, using offline sample data")

    logging.info(
        "Configuration loaded: lang=%s units=%s timeout=%ss cache_ttl=%ss cache_size=%s",
        lang,
        units.value,
        timeout,
        cache_ttl,
        cache_size,
    )
    return DashConfig(
        api_key=api_key,
        lang=lang,
        timeout=timeout,
        cache_ttl=cache_ttl,
        cache_size=cache_size,
        units=units,
    )
