"""markup_scout.validator: document classification and markup validation."""

from markup_scout.validator.classifier import Classification, DocumentKind, classify
from markup_scout.validator.dispatcher import ValidationResult, Validator, validate

__all__ = [
    "Classification",
    "DocumentKind",
    "ValidationResult",
    "Validator",
    "classify",
    "validate",
]
