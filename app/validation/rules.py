import random
import re
from typing import Optional

TAX_ID_LENGTH = 11
FULL_NAME_MIN = 2
FULL_NAME_MAX = 255
EMAIL_MAX = 255
NOTES_MAX = 1000

_NON_DIGIT = re.compile(r"\D")


# --- Tax ID (CPF) helpers ---

def strip_mask(value: str) -> str:
    """Drop every non-digit, e.g. '529.982.247-25' -> '52998224725'."""
    return _NON_DIGIT.sub("", value)


def _check_digit(digits: list[int]) -> int:
    """Weighted mod-11 check digit; weights run from len+1 down to 2."""
    weight = len(digits) + 1
    total = sum(d * (weight - i) for i, d in enumerate(digits))
    r = total % 11
    return 0 if r < 2 else 11 - r


def is_valid_tax_id(digits: str) -> bool:
    """
    True when `digits` is 11 digits whose last two match the two check
    digit passes over the first 9 and first 10 digits. A single repeated
    digit ('11111111111') always fails even though its arithmetic holds.
    """
    if len(digits) != TAX_ID_LENGTH or not digits.isdigit():
        return False
    if digits == digits[0] * TAX_ID_LENGTH:
        return False
    nums = [int(c) for c in digits]
    if nums[9] != _check_digit(nums[:9]):
        return False
    return nums[10] == _check_digit(nums[:10])


def format_tax_id(digits: str) -> str:
    """Apply the display mask: 000.000.000-00."""
    return f"{digits[0:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:11]}"


def generate_tax_id(rng: Optional[random.Random] = None) -> str:
    """Random valid tax ID (digits only). Used by demo data and tests."""
    rng = rng or random
    while True:
        nums = [rng.randint(0, 9) for _ in range(9)]
        if len(set(nums)) > 1:
            break
    nums.append(_check_digit(nums))
    nums.append(_check_digit(nums))
    return "".join(str(n) for n in nums)


# --- Text helpers ---

def has_whitespace(value: str) -> bool:
    return any(c.isspace() for c in value)


def norm_email(value: str) -> str:
    """Lower-case and trim. Idempotent."""
    return value.strip().lower()


def norm_notes(value: Optional[str]) -> Optional[str]:
    """Trim; empty or whitespace-only collapses to None."""
    if value is None:
        return None
    return value.strip() or None
