# app/validation/validator.py
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.errors import ValidationFailed
from app.i18n import FALLBACK_LOCALE, t
from .schema import NormalizedCustomer
from .types import FIELD_ALIASES

# codes raised by NormalizedCustomer's validators, passed through as is
_CUSTOM_CODES = {"too_short", "too_long", "wrong_length", "invalid"}


@dataclass(frozen=True)
class FieldError:
    field: str      # wire name, or "request" for a malformed payload
    code: str       # stable token: required | too_short | too_long | wrong_length | invalid
    message: str    # localized

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ValidationResult:
    value: Optional[NormalizedCustomer] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[FieldError]:
        return self.errors[0] if self.errors else None


def _to_field_error(err: Dict[str, Any], locale: str) -> FieldError:
    """Map one pydantic error dict onto our field/code vocabulary."""
    loc = err.get("loc") or ()
    name = FIELD_ALIASES.get(str(loc[0])) if loc else None
    kind = err.get("type", "")

    if name is None:
        name, code = "request", "invalid"
    elif kind in _CUSTOM_CODES:
        code = kind
    elif kind in ("missing", "string_type") and name != "notes":
        code = "required"
    else:
        code = "invalid"
    return FieldError(field=name, code=code, message=t(f"{name}.{code}", locale))


def validate(data: Any, locale: str = FALLBACK_LOCALE) -> ValidationResult:
    """
    Validate and normalize an untrusted registration payload.

    Never raises for bad input: every field is checked independently and
    all failures come back in `errors`, in field order. Callers that need
    a single message use `result.first_error`.
    """
    try:
        value = NormalizedCustomer.model_validate(data)
    except ValidationError as exc:
        return ValidationResult(errors=[_to_field_error(e, locale) for e in exc.errors()])
    return ValidationResult(value=value)


def validate_or_raise(data: Any, locale: str = FALLBACK_LOCALE) -> NormalizedCustomer:
    """Like `validate`, but raises ValidationFailed with every field error."""
    result = validate(data, locale)
    if not result.ok:
        raise ValidationFailed(result.errors)
    return result.value
