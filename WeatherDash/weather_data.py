"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, replace
from enum import Enum


class Units(str, Enum):
    """Unit systems understood by the provider (values are its wire tokens)."""
    METRIC = "metric"  # Celsius, m/s
    IMPERIAL = "imperial"  # Fahrenheit, mph

    def toggled(self) -> "Units":
        return Units.IMPERIAL if self is Units.METRIC else Units.METRIC


MPS_TO_MPH = 2.2369362920544


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9.0 / 5.0 + 32.0


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32.0) * 5.0 / 9.0


def normalize_place(query: str) -> str:
    """Return the cache key for a place query (trimmed, lower-cased)."""
    return query.strip().lower()


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for one place at one fetch time."""
    lat: float
    lon: float
    condition_id: int
    condition_main: str  # e.g., "Clouds", "Rain", "Clear"
    condition_description: str  # e.g., "broken clouds", "light rain"
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: float  # hPa
    humidity: float  # percentage
    visibility: int  # meters
    wind_speed: float
    wind_deg: float
    country: str
    name: str
    condition_icon: str = ""
    units: Units = Units.METRIC

    def converted(self, units: Units) -> "WeatherSnapshot":
        """
        Express temperatures and wind speed in another unit system.

        Pressure, humidity and visibility are reported identically by the
        provider in both systems and are left as they are.
        """
        units = Units(units)
        if units is self.units:
            return self

        if units is Units.IMPERIAL:
            convert = celsius_to_fahrenheit
            wind = self.wind_speed * MPS_TO_MPH
        else:
            convert = fahrenheit_to_celsius
            wind = self.wind_speed / MPS_TO_MPH

        return replace(
            self,
            temp=convert(self.temp),
            feels_like=convert(self.feels_like),
            temp_min=convert(self.temp_min),
            temp_max=convert(self.temp_max),
            wind_speed=wind,
            units=units,
        )


@dataclass(frozen=True)
class CacheEntry:
    """A snapshot together with the time it was fetched (UNIX seconds)."""
    snapshot: WeatherSnapshot
    fetched_at: float
