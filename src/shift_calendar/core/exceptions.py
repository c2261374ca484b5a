from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    `errors` maps a form field key (e.g. ``def-0-name``) to a message so the
    template editor can show it next to the offending field.
    """

    def __init__(self, message: str, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class ConfigurationError(ValidationError):
    """Raised when a shift template cannot be resolved (overlapping shifts)."""


class InputError(DomainError):
    """Raised when run-state intervals are missing, unsorted or overlapping."""


class NotFoundError(DomainError):
    """Raised when a referenced template, calendar or machine does not exist."""
