from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from app.core.errors import ValidationError

PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
MOB_NUM_LENGTH = 10

UPDATABLE_FIELDS = ("full_name", "mob_num", "pan_num", "manager_id")


@dataclass(frozen=True)
class NormalizedUser:
    full_name: str
    mob_num: str
    pan_num: str


def normalize_mob_num(value: Any) -> str:
    """
    Keep digits only and take the last 10, so "+91-98765-43210" -> "9876543210".
    May return fewer than 10 digits; callers decide whether that is acceptable.
    """
    if not isinstance(value, str):
        raise ValidationError("Mobile number must be a string.")
    return re.sub(r"\D", "", value)[-MOB_NUM_LENGTH:]


def validate_full_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Full name must not be empty.")
    return value


def validate_mob_num(value: Any) -> str:
    formatted = normalize_mob_num(value)
    if len(formatted) != MOB_NUM_LENGTH:
        raise ValidationError("Mobile number must be a valid 10-digit number.")
    return formatted


def validate_pan_num(value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError("PAN number is not a valid format.")
    formatted = value.upper()
    if not PAN_PATTERN.match(formatted):
        raise ValidationError("PAN number is not a valid format.")
    return formatted


def validate_manager_id(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Manager ID must not be empty.")
    return value


_FIELD_VALIDATORS = {
    "full_name": validate_full_name,
    "mob_num": validate_mob_num,
    "pan_num": validate_pan_num,
    "manager_id": validate_manager_id,
}


def validate_create(full_name: Any, mob_num: Any, pan_num: Any) -> NormalizedUser:
    return NormalizedUser(
        full_name=validate_full_name(full_name),
        mob_num=validate_mob_num(mob_num),
        pan_num=validate_pan_num(pan_num),
    )


def validate_update_payload(fields: dict[str, Any]) -> dict[str, str]:
    """
    Check an update_data map and return its normalized subset.

    Unknown keys are rejected outright rather than ignored.
    """
    invalid = [key for key in fields if key not in UPDATABLE_FIELDS]
    if invalid:
        raise ValidationError(f"Invalid keys in update_data: {', '.join(invalid)}")

    validated: dict[str, str] = {}
    for key, value in fields.items():
        validated[key] = _FIELD_VALIDATORS[key](value)

    if not validated:
        raise ValidationError("No valid fields provided for update.")
    return validated
