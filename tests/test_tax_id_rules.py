import random

import pytest

from app.validation.rules import (
    format_tax_id,
    generate_tax_id,
    is_valid_tax_id,
    norm_email,
    norm_notes,
    strip_mask,
)


def test_strip_mask_matches_unmasked():
    assert strip_mask("529.982.247-25") == "52998224725"
    assert strip_mask("529 982 247 25") == strip_mask("52998224725")


def test_known_valid_tax_ids():
    assert is_valid_tax_id("52998224725")
    assert is_valid_tax_id("11144477735")


def test_wrong_check_digits():
    assert not is_valid_tax_id("12345678901")
    assert not is_valid_tax_id("52998224726")


@pytest.mark.parametrize("d", "0123456789")
def test_repeated_digits_always_rejected(d):
    assert not is_valid_tax_id(d * 11)


def test_wrong_length_is_invalid():
    assert not is_valid_tax_id("5299822472")
    assert not is_valid_tax_id("529982247250")


def test_generated_tax_ids_are_valid():
    rng = random.Random(42)
    for _ in range(50):
        tid = generate_tax_id(rng)
        assert len(tid) == 11
        assert is_valid_tax_id(tid)


def test_format_tax_id():
    assert format_tax_id("52998224725") == "529.982.247-25"


def test_norm_email_idempotent():
    once = norm_email("JOHN@EXAMPLE.COM")
    assert once == "john@example.com"
    assert norm_email(once) == once


def test_norm_notes():
    assert norm_notes("  notes  ") == "notes"
    assert norm_notes("   ") is None
    assert norm_notes("") is None
    assert norm_notes(None) is None
