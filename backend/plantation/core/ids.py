# backend/plantation/core/ids.py

import uuid
from typing import Optional

from plantation.core.exceptions import InvalidRequestError


def normalize_uuid(value) -> Optional[str]:
    """Canonical string form of a UUID, or None if `value` is not one."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        return None


def require_uuid(value, field: str) -> str:
    parsed = normalize_uuid(value)
    if parsed is None:
        raise InvalidRequestError(f"Invalid {field} format")
    return parsed
