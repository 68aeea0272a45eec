"""Common exceptions for the content engine."""
from __future__ import annotations


class TemplateContractError(ValueError):
    """Raised when a tenant naming template is missing a required field."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
