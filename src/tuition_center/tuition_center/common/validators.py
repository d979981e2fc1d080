from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_month(value: int) -> int:
    if not 1 <= int(value) <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {value}")
    return int(value)


def require_year(value: int) -> int:
    if int(value) <= 0:
        raise ValidationError(f"year must be positive, got {value}")
    return int(value)


def optional_int(value: Any, field_name: str) -> Optional[int]:
    """Coerce query/body values ("3", 3, "", None) into an optional int."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is invalid")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
