import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.i18n import t
from app.errors import InternalError, RegistrationError, ValidationFailed
from app.registration import RegistrationService
from app.routers.deps import get_locale, get_registration_service
from app.validation import FieldError, validate

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/api/customers", tags=["customers"])


def _error(err: RegistrationError, locale: str, **extra) -> JSONResponse:
    """Uniform error envelope: {success: false, error: CODE, message}."""
    body: Dict[str, Any] = {"success": False, "error": err.code, "message": err.message(locale)}
    body.update(extra)
    return JSONResponse(body, status_code=err.status_code)


async def _read_json(request: Request) -> Any:
    """Request body as JSON; an unparsable body is a validation failure."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationFailed([]) from None


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: Request,
    locale: str = Depends(get_locale),
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register a new customer.

    Flow:
        raw JSON -> validate (first error wins) -> duplicate pre-check -> insert.

    Returns:
        201 {"success": true, "data": {id, fullName, email, colorPreference, createdAt}}
        400 VALIDATION_ERROR | 409 DUPLICATE_ENTRY
        503 SERVICE_UNAVAILABLE | 500 INTERNAL_ERROR
    """
    try:
        payload = await _read_json(request)
        result = validate(payload, locale)
        if not result.ok:
            log.info("registration rejected: %s %s", result.first_error.field, result.first_error.code)
            raise ValidationFailed(result.errors)

        stored = await run_in_threadpool(service.register, result.value)
        return JSONResponse(
            {"success": True, "data": stored.to_public()},
            status_code=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------
    # Global error handling
    # ------------------------------------------------------------
    except RegistrationError as e:
        return _error(e, locale)
    except Exception:
        log.exception("customer creation error")
        return _error(InternalError(), locale)


@router.post("/validate")
async def validate_customer(request: Request, locale: str = Depends(get_locale)):
    """
    Dry-run validation reporting every field error at once (form feedback).
    Nothing is persisted.
    """
    try:
        payload = await _read_json(request)
    except ValidationFailed as e:
        bad = FieldError("request", "invalid", t("request.invalid", locale))
        return _error(e, locale, errors=[bad.to_dict()])

    result = validate(payload, locale)
    if not result.ok:
        errors = [fe.to_dict() for fe in result.errors]
        return _error(ValidationFailed(result.errors), locale, errors=errors)
    return {"success": True, "data": result.value.model_dump(mode="json", by_alias=True)}
