from typing import Any, Optional

from .exceptions import ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_text(value: Optional[str], message: str) -> str:
    """Return ``value`` stripped, or raise ValidationError when it is missing or blank."""
    if is_blank(value):
        raise ValidationError(message)
    return str(value).strip()


def require_id(value: Optional[int], message: str) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(message)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
