# listing_wizard/core/transform/coerce.py
"""
Small, total converters shared by to_form and to_wire.

None of these raise: bad input degrades to the type's empty value.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

_INT_RE = re.compile(r"[-+]?\d+")
# 1.000.000 (dot as thousands separator, at least two groups)
_DOT_THOUSANDS_RE = re.compile(r"[-+]?\d{1,3}(?:\.\d{3}){2,}")
# Leading/trailing currency marks and units ("$", "₫", " VND", "đ")
_EDGE_NOISE_RE = re.compile(r"^[^\d+\-.]+|[^\d.]+$")


def clean_num(value: Any) -> int | float:
    """
    Best-effort numeric coercion for form inputs.

      "1,000,000"   → 1000000
      "$2,500.50"   → 2500.5
      "1.000.000"   → 1000000
      "12 VND"      → 12
      "abc" / None  → 0
    Integral results come back as int.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value) if value.is_integer() else value
    if not isinstance(value, str):
        return 0

    s = value.replace("\u00a0", "").replace(" ", "").replace(",", "")
    s = _EDGE_NOISE_RE.sub("", s)
    if not s:
        return 0
    if _DOT_THOUSANDS_RE.fullmatch(s):
        s = s.replace(".", "")
    if _INT_RE.fullmatch(s):
        return int(s)
    try:
        f = float(s)
    except ValueError:
        return 0
    if not math.isfinite(f):
        return 0
    return int(f) if f.is_integer() else f


def as_text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return str(clean_num(value))
    return default


def cut_date(value: Any) -> str:
    """ISO timestamp → date part ("2024-05-01T00:00:00Z" → "2024-05-01")."""
    return as_text(value).split("T", 1)[0]


def as_str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, Iterable) or isinstance(value, Mapping):
        return []
    return [v for v in value if isinstance(v, str) and v]


def section(raw: Any, key: str) -> Mapping[str, Any]:
    """raw[key] when it is a mapping, else an empty mapping."""
    if not isinstance(raw, Mapping):
        return {}
    val = raw.get(key)
    return val if isinstance(val, Mapping) else {}


def as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(value, (int, float)):
        return value != 0
    return default
