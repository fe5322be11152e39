# app/validation/schema.py
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from .rules import (
    EMAIL_MAX,
    FULL_NAME_MAX,
    FULL_NAME_MIN,
    NOTES_MAX,
    TAX_ID_LENGTH,
    has_whitespace,
    is_valid_tax_id,
    norm_email,
    norm_notes,
    strip_mask,
)
from .types import ColorPreference


class NormalizedCustomer(BaseModel):
    """
    A registration payload after validation.

    Built from untrusted input with `model_validate`; every field is
    normalized by its validator, so an instance is always storable as is.
    Input accepts camelCase wire names and the legacy aliases
    (`cpf`, `favoriteColor`, `observations`).
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    full_name: str = Field(
        validation_alias=AliasChoices("fullName", "full_name"),
        serialization_alias="fullName",
    )
    tax_id: str = Field(
        validation_alias=AliasChoices("taxId", "cpf", "tax_id"),
        serialization_alias="taxId",
    )
    email: str = Field(validation_alias=AliasChoices("email"))
    color_preference: ColorPreference = Field(
        validation_alias=AliasChoices("colorPreference", "favoriteColor", "color_preference"),
        serialization_alias="colorPreference",
    )
    notes: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("notes", "observations"),
    )

    @field_validator("full_name")
    @classmethod
    def clean_full_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < FULL_NAME_MIN:
            raise PydanticCustomError("too_short", "must be at least {min} characters", {"min": FULL_NAME_MIN})
        if len(v) > FULL_NAME_MAX:
            raise PydanticCustomError("too_long", "must be at most {max} characters", {"max": FULL_NAME_MAX})
        return v

    @field_validator("tax_id")
    @classmethod
    def check_tax_id(cls, v: str) -> str:
        digits = strip_mask(v)
        if len(digits) != TAX_ID_LENGTH:
            raise PydanticCustomError("wrong_length", "must have exactly {n} digits", {"n": TAX_ID_LENGTH})
        if not is_valid_tax_id(digits):
            raise PydanticCustomError("invalid", "check digits do not match")
        return digits

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        # whitespace is rejected, not repaired
        if has_whitespace(v):
            raise PydanticCustomError("invalid", "email must not contain whitespace")
        if len(v) > EMAIL_MAX:
            raise PydanticCustomError("too_long", "must be at most {max} characters", {"max": EMAIL_MAX})
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise PydanticCustomError("invalid", "{reason}", {"reason": str(e)}) from e
        return norm_email(v)

    @field_validator("notes")
    @classmethod
    def clean_notes(cls, v: Optional[str]) -> Optional[str]:
        v = norm_notes(v)
        if v is not None and len(v) > NOTES_MAX:
            raise PydanticCustomError("too_long", "must be at most {max} characters", {"max": NOTES_MAX})
        return v
