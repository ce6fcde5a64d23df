"""Service-layer exceptions."""


class TripCoreError(Exception):
    """Base exception for all tripcore service errors."""


class DirectionsError(TripCoreError):
    """Raised when the directions provider fails or returns a malformed payload."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class GeocodingError(TripCoreError):
    """Raised when the geocoding provider fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
