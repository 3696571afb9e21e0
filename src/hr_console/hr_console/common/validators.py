from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_selection(ids: Iterable[str]) -> list[str]:
    """Normalize a submitted selection; at least one id is required."""
    out = [str(i).strip() for i in ids if str(i).strip()]
    if not out:
        raise ValidationError("Vui lòng chọn ít nhất 1 bản ghi")
    # keep submission order, drop duplicates
    return list(dict.fromkeys(out))


def parse_positive_int(value: object, default: int) -> int:
    try:
        n = int(str(value))
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default
