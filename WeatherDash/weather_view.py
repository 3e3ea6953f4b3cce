"""Presentation boundary - pure functions turning session state into display values."""
from typing import TYPE_CHECKING, List, Optional

import weather_cache
from weather_data import Units, WeatherSnapshot
from weather_provider import ErrorInfo

if TYPE_CHECKING:
    from weather_state import SessionState

UNIT_SYMBOLS = {
    Units.METRIC: ("°C", "m/s"),
    Units.IMPERIAL: ("°F", "mph"),
}


def format_temperature(value: float, units: Units) -> str:
    return f"{round(value)}{UNIT_SYMBOLS[Units(units)][0]}"


def format_wind(speed: float, units: Units) -> str:
    return f"{speed:.1f} {UNIT_SYMBOLS[Units(units)][1]}"


def condition_text(snapshot: WeatherSnapshot) -> str:
    """
    Get short text representation of weather condition.

    Args:
        snapshot: Weather snapshot

    Returns:
        Short condition string (e.g., "Cloudy", "Rain", "Clear")
    """
    main = snapshot.condition_main.lower()

    # Map common conditions to short display strings
    condition_map = {
        "clear": "Clear",
        "clouds": "Cloudy",
        "rain": "Rain",
        "drizzle": "Drizzle",
        "thunderstorm": "Storm",
        "snow": "Snow",
        "mist": "Mist",
        "fog": "Fog",
        "haze": "Haze",
    }

    return condition_map.get(main, snapshot.condition_main.capitalize())


def snapshot_view(snapshot: WeatherSnapshot, units: Units) -> dict:
    """
    Display values for one snapshot in the requested unit system.

    Stored snapshots keep the unit system they were fetched in; conversion
    happens only here.
    """
    shown = snapshot.converted(units)
    return {
        "name": shown.name,
        "country": shown.country,
        "coordinates": (shown.lat, shown.lon),
        "condition": condition_text(shown),
        "description": shown.condition_description,
        "condition_id": shown.condition_id,
        "icon": shown.condition_icon,
        "temp": format_temperature(shown.temp, units),
        "feels_like": format_temperature(shown.feels_like, units),
        "temp_min": format_temperature(shown.temp_min, units),
        "temp_max": format_temperature(shown.temp_max, units),
        "humidity": f"{round(shown.humidity)}%",
        "pressure": f"{round(shown.pressure)} hPa",
        "visibility": f"{shown.visibility / 1000:.1f} km",
        "wind": format_wind(shown.wind_speed, units),
        "wind_deg": shown.wind_deg,
    }


def recent_places(state: "SessionState", limit: int = 6) -> List[dict]:
    """Most recently searched places, newest first, for a "recent" panel."""
    places = []
    for key, entry in zip(state.cache.order, weather_cache.recent(state.cache, limit)):
        shown = entry.snapshot.converted(state.unit)
        places.append({
            "key": key,
            "name": shown.name,
            "temp": format_temperature(shown.temp, state.unit),
            "fetched_at": entry.fetched_at,
        })
    return places


def error_view(error: Optional[ErrorInfo]) -> Optional[dict]:
    if error is None:
        return None
    return {"kind": error.kind.value, "message": error.message, "status": error.status}


def build_view(state: "SessionState", recent_limit: int = 6) -> dict:
    """
    Read-only surface a view renders from (never fed back into the state).

    `entries` covers every cached place, keyed by place key; `recent` is the
    truncated panel built from the same order.
    """
    current = state.current_snapshot
    return {
        "status": state.status.value,
        "unit": state.unit.value,
        "current": snapshot_view(current, state.unit) if current is not None else None,
        "error": error_view(state.last_error),
        "cache_order": list(state.cache.order),
        "entries": {
            key: {
                "fetched_at": state.cache.entries[key].fetched_at,
                **snapshot_view(state.cache.entries[key].snapshot, state.unit),
            }
            for key in state.cache.order
        },
        "recent": recent_places(state, recent_limit),
        "more_cached": max(0, len(state.cache.order) - recent_limit),
    }
