"""Custom exceptions for country catalog errors."""


class CountriesAPIError(Exception):
    """Base exception for country catalog errors."""
    pass


class NetworkError(CountriesAPIError):
    """Network connectivity issues or request timeout."""
    pass


class InvalidResponseError(CountriesAPIError):
    """API returned a non-success status or an unexpected body."""
    pass
