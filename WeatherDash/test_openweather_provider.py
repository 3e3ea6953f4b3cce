"""Tests for OpenWeather provider."""
import pytest
import requests
from unittest.mock import Mock, patch
from openweather_provider import OpenWeatherProvider
from weather_data import Units, WeatherSnapshot
from weather_provider import (
    DecodeError,
    ErrorKind,
    HttpError,
    NetworkError,
    NotFoundError,
    WeatherProviderError,
)


@pytest.fixture
def sample_openweather_response():
    """Sample OpenWeather API response."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [
            {
                "id": 500,
                "main": "Rain",
                "description": "light rain",
                "icon": "10d"
            }
        ],
        "base": "stations",
        "main": {
            "temp": 22,
            "feels_like": 24,
            "temp_min": 18,
            "temp_max": 26,
            "pressure": 1013,
            "humidity": 65
        },
        "visibility": 10000,
        "wind": {"speed": 3.5, "deg": 230},
        "rain": {"1h": 2.93},
        "clouds": {"all": 53},
        "dt": 1684929490,
        "sys": {"country": "GB"},
        "timezone": 3600,
        "name": "London",
        "id": 2643743,
        "cod": 200
    }


@pytest.fixture
def provider():
    """Create OpenWeather provider instance."""
    return OpenWeatherProvider(api_key="test_key", lang="en", timeout=5)


def ok_response(body):
    mock_response = Mock()
    mock_response.ok = True
    mock_response.status_code = 200
    mock_response.json.return_value = body
    return mock_response


def error_response(status, body=None, reason="Error", text=""):
    mock_response = Mock()
    mock_response.ok = False
    mock_response.status_code = status
    mock_response.reason = reason
    mock_response.text = text
    if body is None:
        mock_response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        mock_response.json.return_value = body
    return mock_response


def test_openweather_provider_success(provider, sample_openweather_response):
    """Test successful API call and parsing."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = ok_response(sample_openweather_response)

        weather = provider.get_current("London", Units.METRIC)

        assert isinstance(weather, WeatherSnapshot)
        assert weather.name == "London"
        assert weather.country == "GB"
        assert weather.lat == 51.5085
        assert weather.lon == -0.1257
        assert weather.condition_id == 500
        assert weather.condition_main == "Rain"
        assert weather.condition_description == "light rain"
        assert weather.condition_icon == "10d"
        assert weather.temp == 22.0
        assert weather.feels_like == 24.0
        assert weather.temp_min == 18.0
        assert weather.temp_max == 26.0
        assert weather.pressure == 1013
        assert weather.humidity == 65.0
        assert weather.visibility == 10000
        assert weather.wind_speed == 3.5
        assert weather.wind_deg == 230
        assert weather.units is Units.METRIC


def test_openweather_provider_request_parameters(provider, sample_openweather_response):
    """Test that place, key and unit token end up on the wire."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = ok_response(sample_openweather_response)

        weather = provider.get_current("New York", Units.IMPERIAL)

        args, kwargs = mock_get.call_args
        assert args[0] == OpenWeatherProvider.BASE_URL
        assert kwargs["params"] == {
            "q": "New York",
            "appid": "test_key",
            "units": "imperial",
            "lang": "en",
        }
        assert kwargs["timeout"] == 5
        assert weather.units is Units.IMPERIAL


def test_openweather_provider_not_found(provider):
    """Test that a 404 surfaces the provider's message verbatim."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = error_response(404, {"cod": "404", "message": "city not found"})

        with pytest.raises(NotFoundError) as exc_info:
            provider.get_current("Atlantis")

        assert exc_info.value.message == "city not found"
        assert exc_info.value.status == 404
        assert exc_info.value.kind is ErrorKind.HTTP


def test_openweather_provider_http_error(provider):
    """Test handling of HTTP errors."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = error_response(401, {"cod": 401, "message": "Invalid API key"})

        with pytest.raises(HttpError) as exc_info:
            provider.get_current("London")

        assert not isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status == 401
        assert "Invalid API key" in str(exc_info.value)


def test_openweather_provider_error_without_json_body(provider):
    """Test that a message is synthesized from the status when the body is not JSON."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = error_response(502, reason="Bad Gateway", text="<html>bad gateway</html>")

        with pytest.raises(HttpError) as exc_info:
            provider.get_current("London")

        assert exc_info.value.message == "HTTP 502: Bad Gateway"
        assert exc_info.value.status == 502


def test_openweather_provider_error_without_message_field(provider):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = error_response(500, {"cod": 500}, reason="Internal Server Error")

        with pytest.raises(HttpError) as exc_info:
            provider.get_current("London")

        assert exc_info.value.message == "HTTP 500: Internal Server Error"


def test_openweather_provider_network_error(provider):
    """Test handling of network errors."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(NetworkError) as exc_info:
            provider.get_current("London")

        assert "Network error" in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.NETWORK


def test_openweather_provider_timeout_is_network_error(provider):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.side_effect = requests.exceptions.Timeout("Read timed out")

        with pytest.raises(NetworkError):
            provider.get_current("London")


def test_openweather_provider_missing_main(provider, sample_openweather_response):
    """Test handling of missing main block."""
    del sample_openweather_response["main"]

    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = ok_response(sample_openweather_response)

        with pytest.raises(DecodeError) as exc_info:
            provider.get_current("London")

        assert exc_info.value.message == "malformed response"
        assert exc_info.value.kind is ErrorKind.HTTP


def test_openweather_provider_missing_weather(provider, sample_openweather_response):
    """Test handling of empty 'weather' array."""
    sample_openweather_response["weather"] = []

    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = ok_response(sample_openweather_response)

        with pytest.raises(DecodeError):
            provider.get_current("London")


def test_openweather_provider_missing_temperature_field(provider, sample_openweather_response):
    del sample_openweather_response["main"]["temp_max"]

    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = ok_response(sample_openweather_response)

        with pytest.raises(DecodeError):
            provider.get_current("London")


def test_openweather_provider_invalid_json(provider):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_response = ok_response(None)
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = mock_response

        with pytest.raises(WeatherProviderError) as exc_info:
            provider.get_current("London")

        assert isinstance(exc_info.value, DecodeError)
        assert exc_info.value.message == "malformed response"
