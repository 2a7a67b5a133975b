"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
Storage failures other than short code collisions are not wrapped: they reach
callers as ``RepositoryError``.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class InvalidInputError(URLError):
    """Caller input failed validation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidURLError(InvalidInputError):
    """The long URL is malformed or uses a disallowed scheme."""
    pass


class InvalidShortCodeError(InvalidInputError):
    """The short code does not have the expected shape."""
    pass


class URLNotFoundError(URLError):
    """URL with the specified short code was not found."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"URL not found for short code: {short_code}")


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class ShortCodeGenerationError(URLCreationError):
    """Every attempt to store a generated short code collided."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Failed to generate unique short code after {attempts} attempts"
        )
