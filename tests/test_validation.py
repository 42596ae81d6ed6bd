import pytest

from app.core.errors import ValidationError
from app.core.validation import (
    normalize_mob_num,
    validate_create,
    validate_update_payload,
)


def test_validate_create_normalizes_mob_and_pan():
    """Mobile keeps its last 10 digits and PAN is uppercased"""
    out = validate_create("Asha Verma", "+91-98765-43210", "abcde1234f")
    assert out.full_name == "Asha Verma"
    assert out.mob_num == "9876543210"
    assert out.pan_num == "ABCDE1234F"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_validate_create_rejects_empty_name(name):
    with pytest.raises(ValidationError) as exc:
        validate_create(name, "9876543210", "ABCDE1234F")
    assert "Full name" in exc.value.message


def test_validate_create_rejects_short_mobile():
    with pytest.raises(ValidationError) as exc:
        validate_create("Asha", "98765-4321", "ABCDE1234F")
    assert "10-digit" in exc.value.message


@pytest.mark.parametrize("pan", ["ABCD1234F", "ABCDE12345", "1BCDE1234F", "ABCDE1234FF"])
def test_validate_create_rejects_bad_pan(pan):
    with pytest.raises(ValidationError):
        validate_create("Asha", "9876543210", pan)


def test_normalize_mob_num_keeps_partial_digits():
    """Filters may pass a short suffix; normalization does not pad or reject"""
    assert normalize_mob_num("(32) 10") == "3210"
    assert normalize_mob_num("no digits") == ""


def test_validate_update_payload_returns_normalized_subset():
    out = validate_update_payload({"mob_num": "091 98765 43210", "pan_num": "pqrsx5678k"})
    assert out == {"mob_num": "9876543210", "pan_num": "PQRSX5678K"}


def test_validate_update_payload_rejects_unknown_keys():
    with pytest.raises(ValidationError) as exc:
        validate_update_payload({"full_name": "X", "email": "x@test.com"})
    assert "email" in exc.value.message


def test_validate_update_payload_rejects_empty():
    with pytest.raises(ValidationError) as exc:
        validate_update_payload({})
    assert exc.value.message == "No valid fields provided for update."


def test_validate_update_payload_rejects_blank_manager_id():
    with pytest.raises(ValidationError):
        validate_update_payload({"manager_id": ""})


def test_validate_update_payload_rejects_non_string_mobile():
    with pytest.raises(ValidationError):
        validate_update_payload({"mob_num": 9876543210})
