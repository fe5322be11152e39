from .validator import validate, validate_or_raise, ValidationResult, FieldError
from .schema import NormalizedCustomer
from .types import ColorPreference, Record
from .rules import strip_mask, is_valid_tax_id, format_tax_id, generate_tax_id

__all__ = [
    "validate",
    "validate_or_raise",
    "ValidationResult",
    "FieldError",
    "NormalizedCustomer",
    "ColorPreference",
    "Record",
    "strip_mask",
    "is_valid_tax_id",
    "format_tax_id",
    "generate_tax_id",
]
