"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from weather_data import Units, WeatherSnapshot


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, place: str, units: Units = Units.METRIC) -> WeatherSnapshot:
        """
        Fetch current weather for a place.

        Args:
            place: Place name as typed by the user
            units: Unit system the provider should report in

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    HTTP = "http"
    NETWORK = "network"


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    kind = ErrorKind.HTTP

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class ValidationError(WeatherProviderError):
    """The place query was blank; never reaches the network."""
    kind = ErrorKind.VALIDATION


class HttpError(WeatherProviderError):
    """The provider answered with a non-success status."""
    kind = ErrorKind.HTTP


class NotFoundError(HttpError):
    """The provider does not know the requested place."""

    def __init__(self, message: str, status: int = 404):
        super().__init__(message, status)


class DecodeError(HttpError):
    """A success response that does not have the expected shape."""

    def __init__(self, message: str = "malformed response", status: Optional[int] = None):
        super().__init__(message, status)


class NetworkError(WeatherProviderError):
    """Transport failure: no response was received."""
    kind = ErrorKind.NETWORK


@dataclass(frozen=True)
class ErrorInfo:
    """Failure description stored in the session state."""
    kind: ErrorKind
    message: str
    status: Optional[int] = None

    @classmethod
    def from_exception(cls, error: WeatherProviderError) -> "ErrorInfo":
        return cls(kind=error.kind, message=error.message, status=error.status)
