from fastapi import Request

from app.i18n import resolve_locale
from app.registration import RegistrationService
from app.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registration_service(request: Request) -> RegistrationService:
    return request.app.state.registration


def get_locale(request: Request) -> str:
    """Accept-Language first, then the configured default."""
    return resolve_locale(request.headers.get("accept-language"), get_settings(request).default_locale)
