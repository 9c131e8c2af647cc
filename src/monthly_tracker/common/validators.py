from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def clean_name(value: Optional[str]) -> Optional[str]:
    """Trimmed name, or None when nothing but whitespace is left."""
    if value is None:
        return None
    return value.strip() or None


def parse_member_id(value) -> int:
    try:
        member_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid member id")
    if member_id <= 0:
        raise ValidationError("Invalid member id")
    return member_id


def parse_date_field(value: Optional[str], field_name: str = "Date") -> date:
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
