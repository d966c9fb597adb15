"""Tracelet error hierarchy and exceptions."""

from __future__ import annotations


class TraceletError(Exception):
    """Base exception for all Tracelet errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(TraceletError):
    """Raised when configuration is invalid."""
    pass
