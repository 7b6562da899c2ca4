from __future__ import annotations

import re

from ..core.exceptions import ValidationError

CHECKIN_CODE_RE = re.compile(r"^[A-Z]{2}\d{4}$")
LEGACY_CHECKIN_CODE_RE = re.compile(r"^\d{6}$")


def normalize_checkin_code(value) -> str:
    if not isinstance(value, str):
        return ""
    return re.sub(r"[^A-Z0-9]", "", value.strip().upper())


def is_valid_checkin_code(value) -> bool:
    code = normalize_checkin_code(value)
    return bool(CHECKIN_CODE_RE.match(code) or LEGACY_CHECKIN_CODE_RE.match(code))


def require_checkin_code(value) -> str:
    """Normalize a check-in code or raise ValidationError("Invalid code format")."""
    code = normalize_checkin_code(value)
    if not is_valid_checkin_code(code):
        raise ValidationError("Invalid code format")
    return code
