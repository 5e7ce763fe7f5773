"""Custom exceptions for the template helper."""

from typing import Optional


class TemplateHelperError(Exception):
    """Base exception for template helper errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class UnsupportedOperationError(TemplateHelperError):
    """Exception raised when writing to a nested (dotted) key."""

    pass


class ConfigurationError(TemplateHelperError):
    """Exception raised for invalid helper configuration."""

    pass


class MediaError(TemplateHelperError):
    """Exception raised when registering an invalid attachment."""

    pass
