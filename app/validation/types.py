# app/validation/types.py
import enum
from typing import Any, Dict


Record = Dict[str, Any]


class ColorPreference(str, enum.Enum):
    """The seven colors a registrant can pick."""
    RED = "RED"
    ORANGE = "ORANGE"
    YELLOW = "YELLOW"
    GREEN = "GREEN"
    BLUE = "BLUE"
    INDIGO = "INDIGO"
    VIOLET = "VIOLET"


# Wire name of each field, keyed by every name accepted on input.
FIELD_ALIASES: Dict[str, str] = {
    "fullName": "fullName",
    "full_name": "fullName",
    "taxId": "taxId",
    "tax_id": "taxId",
    "cpf": "taxId",
    "email": "email",
    "colorPreference": "colorPreference",
    "color_preference": "colorPreference",
    "favoriteColor": "colorPreference",
    "notes": "notes",
    "observations": "notes",
}
