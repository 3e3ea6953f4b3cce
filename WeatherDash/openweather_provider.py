"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from weather_data import Units, WeatherSnapshot
from weather_provider import (
    DecodeError,
    HttpError,
    NetworkError,
    NotFoundError,
    WeatherProviderBase,
    WeatherProviderError,
)


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    Places are looked up by name through the `q` parameter.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str, lang: str = "en", timeout: int = 10):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.lang = lang
        self.timeout = timeout

    def get_current(self, place: str, units: Units = Units.METRIC) -> WeatherSnapshot:
        """
        Fetch current weather for a place from OpenWeather.

        Raises:
            NotFoundError: The place is unknown to OpenWeather
            HttpError: Any other non-success response
            DecodeError: A success response that could not be parsed
            NetworkError: No response was received
        """
        units = Units(units)
        params = {
            "q": place,
            "appid": self.api_key,
            "units": units.value,
            "lang": self.lang,
        }

        try:
            logging.info(f"Making OpenWeather API request: {self.BASE_URL}")
            logging.debug(f"Request parameters: q={place!r}, units={units.value}, lang={self.lang}")
            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise NetworkError(f"Network error: {e}")

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            snapshot = self._parse(data, units)
        except WeatherProviderError:
            raise
        except (KeyError, ValueError, TypeError, IndexError, AttributeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise DecodeError(status=response.status_code)

        logging.info(f"Successfully parsed weather data: {snapshot.name} {snapshot.temp} ({units.value}), {snapshot.condition_main}")
        return snapshot

    def _parse(self, data: dict, units: Units) -> WeatherSnapshot:
        """Map a Current Weather API body onto a WeatherSnapshot."""
        weather_array = data.get("weather") or []
        if not weather_array:
            logging.error("Response missing 'weather' array")
            raise DecodeError()
        weather = weather_array[0]

        main_data = data.get("main")
        if not main_data:
            logging.error("Response missing 'main' block")
            raise DecodeError()

        coord = data.get("coord") or {}
        wind_data = data.get("wind") or {}
        sys_data = data.get("sys") or {}

        return WeatherSnapshot(
            lat=float(coord["lat"]),
            lon=float(coord["lon"]),
            condition_id=int(weather.get("id", 0)),
            condition_main=weather.get("main", "Unknown"),
            condition_description=weather.get("description", ""),
            condition_icon=weather.get("icon", ""),
            temp=float(main_data["temp"]),
            feels_like=float(main_data["feels_like"]),
            temp_min=float(main_data["temp_min"]),
            temp_max=float(main_data["temp_max"]),
            pressure=float(main_data["pressure"]),
            humidity=float(main_data["humidity"]),
            visibility=int(data.get("visibility", 0)),
            wind_speed=float(wind_data.get("speed", 0.0)),
            wind_deg=float(wind_data.get("deg", 0.0)),
            country=sys_data.get("country", ""),
            name=data["name"],
            units=units,
        )

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        status = response.status_code
        try:
            error_data = response.json()
            logging.error(f"OpenWeather API error response: {error_data}")
            message = error_data.get("message") if isinstance(error_data, dict) else None
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {status}, body: {response.text[:500]}")
            message = None

        if not message:
            message = f"HTTP {status}: {response.reason or 'request failed'}"

        if status == 404:
            raise NotFoundError(message, status)
        raise HttpError(message, status)
