"""Custom exceptions for the lookup domain."""


class LookupToolError(Exception):
    """Base exception for this project."""


class ConfigurationError(LookupToolError):
    """Raised when a locator, poll policy or runtime configuration is invalid."""


class SurfaceError(LookupToolError):
    """Raised when the queried surface fails for a reason other than "nothing matched"."""
