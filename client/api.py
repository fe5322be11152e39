import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:8000")
S = requests.Session(); S.headers.update({"Content-Type": "application/json"})


class ApiError(Exception):
    """Error answer (or no answer) from the registration API."""
    def __init__(self, message: str, status_code: int, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


def _call(method: str, path: str, locale: str, **kw):
    try:
        r = S.request(method, f"{API}{path}", headers={"Accept-Language": locale}, **kw)
    except requests.RequestException as e:
        raise ApiError(f"Network error: {e}", 503, "NETWORK_ERROR") from e
    try:
        data = r.json()
    except ValueError:
        data = {}
    if not r.ok:
        if data.get("success") is False:
            raise ApiError(data.get("message", ""), r.status_code, data.get("error"))
        raise ApiError("An unexpected error occurred", r.status_code)
    return data


def healthz():
    r = S.get(f"{API}/api/health", timeout=5)
    return r.json()

def create_customer(payload: dict, locale: str = "en"):
    return _call("POST", "/api/customers", locale, json=payload, timeout=15)

def validate_customer(payload: dict, locale: str = "en"):
    return _call("POST", "/api/customers/validate", locale, json=payload, timeout=10)


FRIENDLY = {
    "en": {
        400: "Invalid data. Check the fields and try again.",
        409: "CPF or email already registered.",
        429: "Too many attempts. Wait a moment and try again.",
        500: "Server error. Please try again later.",
        503: "Service temporarily unavailable. Please try again later.",
        None: "An unexpected error occurred. Please try again.",
    },
    "pt-BR": {
        400: "Dados inválidos. Verifique os campos e tente novamente.",
        409: "CPF ou email já cadastrado.",
        429: "Muitas tentativas. Aguarde um momento e tente novamente.",
        500: "Erro no servidor. Tente novamente mais tarde.",
        503: "Serviço temporariamente indisponível. Tente novamente mais tarde.",
        None: "Ocorreu um erro inesperado. Tente novamente.",
    },
}

def error_message(err: ApiError, locale: str = "en") -> str:
    """Server message for 400/409, a canned message per status otherwise."""
    table = FRIENDLY.get(locale, FRIENDLY["en"])
    if err.status_code in (400, 409) and err.message:
        return err.message
    return table.get(err.status_code, table[None])
