"""
Feeds module exceptions.

Every provider failure maps to a 500 for that endpoint only; other widgets
are unaffected.
"""

from typing import Optional

from shared.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class MissingApiKeyError(ConfigurationError):
    """Raised when a provider's API key is not configured."""

    def __init__(self, provider: str):
        super().__init__(
            f"Missing {provider} API key",
            code="MISSING_API_KEY",
            details={"provider": provider},
        )


class ProviderRequestError(ExternalServiceError):
    """Raised when a provider call fails or returns an unusable payload."""

    def __init__(
        self,
        provider: str,
        message: str,
        original_error: Optional[str] = None,
    ):
        super().__init__(
            message,
            service=provider,
            code="PROVIDER_ERROR",
            details={"original_error": original_error},
        )


class MissingCoordinatesError(ValidationError):
    """Raised when lat/lon (or a city) are required but missing."""

    def __init__(self, message: str = "Missing coordinates"):
        super().__init__(message, code="MISSING_COORDINATES")


class CountryNotFoundError(NotFoundError):
    """Raised when reverse geocoding yields no country."""

    def __init__(self, lat: str, lon: str):
        super().__init__(
            "Country not found",
            code="COUNTRY_NOT_FOUND",
            details={"lat": lat, "lon": lon},
        )
