# app/i18n.py
"""
User-facing message catalogs.

Error codes are stable tokens; only the text attached to them varies by
locale. Keys are `<field>.<code>` for validation errors and plain names for
everything else.
"""
from typing import Dict, Optional

SUPPORTED_LOCALES = ("en", "pt-BR")
FALLBACK_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "fullName.required": "Full name is required",
        "fullName.too_short": "Full name must be at least 2 characters",
        "fullName.too_long": "Full name must be at most 255 characters",
        "taxId.required": "CPF is required",
        "taxId.wrong_length": "CPF must have exactly 11 digits",
        "taxId.invalid": "CPF is invalid: check digits do not match",
        "email.required": "Email is required",
        "email.invalid": "Please provide a valid email address",
        "email.too_long": "Email must be at most 255 characters",
        "colorPreference.required": "Please select a valid color",
        "colorPreference.invalid": "Please select a valid color",
        "notes.invalid": "Notes must be text",
        "notes.too_long": "Notes must be at most 1000 characters",
        "request.invalid": "Invalid request data",
        "duplicate": "A customer with this {field} already exists",
        "duplicate.taxId": "tax ID (CPF)",
        "duplicate.email": "email",
        "service_unavailable": "The service is temporarily unavailable. Please try again shortly.",
        "internal_error": "An unexpected error occurred. Please try again later.",
        "color.RED": "Red",
        "color.ORANGE": "Orange",
        "color.YELLOW": "Yellow",
        "color.GREEN": "Green",
        "color.BLUE": "Blue",
        "color.INDIGO": "Indigo",
        "color.VIOLET": "Violet",
    },
    "pt-BR": {
        "fullName.required": "O nome completo é obrigatório",
        "fullName.too_short": "O nome completo deve ter no mínimo 2 caracteres",
        "fullName.too_long": "O nome completo deve ter no máximo 255 caracteres",
        "taxId.required": "O CPF é obrigatório",
        "taxId.wrong_length": "O CPF deve ter exatamente 11 dígitos",
        "taxId.invalid": "CPF inválido",
        "email.required": "O email é obrigatório",
        "email.invalid": "Informe um email válido",
        "email.too_long": "O email deve ter no máximo 255 caracteres",
        "colorPreference.required": "Selecione uma cor válida",
        "colorPreference.invalid": "Selecione uma cor válida",
        "notes.invalid": "As observações devem ser texto",
        "notes.too_long": "As observações devem ter no máximo 1000 caracteres",
        "request.invalid": "Dados de solicitação inválidos",
        "duplicate": "Um cliente com este {field} já existe",
        "duplicate.taxId": "CPF",
        "duplicate.email": "email",
        "service_unavailable": "O serviço está temporariamente indisponível. Tente novamente em instantes.",
        "internal_error": "Ocorreu um erro inesperado. Tente novamente mais tarde.",
        "color.RED": "Vermelho",
        "color.ORANGE": "Laranja",
        "color.YELLOW": "Amarelo",
        "color.GREEN": "Verde",
        "color.BLUE": "Azul",
        "color.INDIGO": "Índigo",
        "color.VIOLET": "Violeta",
    },
}


def resolve_locale(accept_language: Optional[str], default: str = FALLBACK_LOCALE) -> str:
    """
    Pick a supported locale from an Accept-Language header.
    Only the language part is compared ('pt', 'pt-PT' -> 'pt-BR').
    """
    if accept_language:
        for part in accept_language.split(","):
            lang = part.split(";")[0].strip().lower()
            if lang.startswith("pt"):
                return "pt-BR"
            if lang.startswith("en"):
                return "en"
    return default if default in MESSAGES else FALLBACK_LOCALE


def t(key: str, locale: str = FALLBACK_LOCALE, **params) -> str:
    """Translate `key`, falling back to English and then to the key itself."""
    catalog = MESSAGES.get(locale) or MESSAGES[FALLBACK_LOCALE]
    text = catalog.get(key) or MESSAGES[FALLBACK_LOCALE].get(key, key)
    return text.format(**params) if params else text
