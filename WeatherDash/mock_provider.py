"""Offline weather provider serving a fixed set of places (demo and tests)."""
import logging
from typing import Dict, Optional

from weather_data import Units, WeatherSnapshot, normalize_place
from weather_provider import NotFoundError, WeatherProviderBase


def _snapshot(name, country, lat, lon, condition, temps, pressure, humidity, visibility, wind):
    condition_id, main, description, icon = condition
    temp, feels_like, temp_min, temp_max = temps
    speed, deg = wind
    return WeatherSnapshot(
        lat=lat,
        lon=lon,
        condition_id=condition_id,
        condition_main=main,
        condition_description=description,
        condition_icon=icon,
        temp=temp,
        feels_like=feels_like,
        temp_min=temp_min,
        temp_max=temp_max,
        pressure=pressure,
        humidity=humidity,
        visibility=visibility,
        wind_speed=speed,
        wind_deg=deg,
        country=country,
        name=name,
        units=Units.METRIC,
    )


SAMPLE_PLACES: Dict[str, WeatherSnapshot] = {
    "london": _snapshot(
        "London", "GB", 51.5085, -0.1257,
        (800, "Clear", "clear sky", "01d"), (22, 24, 18, 26), 1013, 65, 10000, (3.5, 230),
    ),
    "new york": _snapshot(
        "New York", "US", 40.7143, -74.006,
        (801, "Clouds", "few clouds", "02d"), (18, 20, 15, 22), 1015, 72, 8000, (4.2, 180),
    ),
    "tokyo": _snapshot(
        "Tokyo", "JP", 35.6895, 139.6917,
        (500, "Rain", "light rain", "10d"), (25, 28, 22, 28), 1008, 85, 6000, (2.8, 90),
    ),
    "paris": _snapshot(
        "Paris", "FR", 48.8534, 2.3488,
        (803, "Clouds", "broken clouds", "04d"), (19, 21, 16, 23), 1012, 68, 9000, (3.1, 270),
    ),
    "sydney": _snapshot(
        "Sydney", "AU", -33.8678, 151.2073,
        (800, "Clear", "clear sky", "01d"), (24, 26, 20, 28), 1018, 60, 10000, (4.5, 120),
    ),
}


class MockWeatherProvider(WeatherProviderBase):
    """
    Provider backed by an in-memory table instead of the network.

    Used when no API key is configured so the dashboard still has something
    to show. Every call is counted, which the tests rely on.
    """

    def __init__(self, places: Optional[Dict[str, WeatherSnapshot]] = None):
        self.places = dict(SAMPLE_PLACES if places is None else places)
        self.call_count = 0

    def get_current(self, place: str, units: Units = Units.METRIC) -> WeatherSnapshot:
        self.call_count += 1
        snapshot = self.places.get(normalize_place(place))
        if snapshot is None:
            known = ", ".join(s.name for s in self.places.values())
            logging.warning(f"Mock provider has no data for {place!r}")
            raise NotFoundError(f'Weather data not found for "{place}". Try: {known}')
        logging.debug(f"Mock provider serving {snapshot.name} in {Units(units).value}")
        return snapshot.converted(units)
