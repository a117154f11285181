"""Validation diagnostics shared by the AppSpec validator and loader."""

from .errors import ValidationError, ValidationResult

__all__ = ["ValidationError", "ValidationResult"]
