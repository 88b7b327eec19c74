from __future__ import annotations

import math
from typing import Any, Iterable, Optional

NAN = float("nan")


def to_number(raw: Any) -> float:
    # Follows the browser's Number(): None -> NaN, "" -> 0, 0x/0o/0b prefixes, junk -> NaN.
    if raw is None:
        return NAN
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            return math.inf if raw > 0 else -math.inf
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return 0.0
        if "_" in s:
            return NAN
        if s[:2].lower() in ("0x", "0o", "0b"):
            try:
                return float(int(s, 0))
            except (ValueError, OverflowError):
                return NAN
        try:
            return float(s)
        except ValueError:
            return NAN
    return NAN


def finite_or_none(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    n = to_number(raw)
    return n if math.isfinite(n) else None


def finite_or_default(raw: Any, fallback: float) -> float:
    n = to_number(raw)
    return n if math.isfinite(n) else fallback


def coerce_enum(raw: Any, allowed: Iterable[str], default: str) -> str:
    value = str(raw or "").strip().lower()
    return value if value in set(allowed) else default


def coerce_bool(raw: Any) -> bool:
    return raw if isinstance(raw, bool) else False


def coerce_str(raw: Any, strip: bool = True) -> str:
    # Series text keeps its spaces, identifiers and colors do not.
    value = str(raw or "")
    return value.strip() if strip else value


def positive_finite_list(raw: Any) -> Optional[list[float]]:
    if not isinstance(raw, (list, tuple)):
        return None
    out: list[float] = []
    for v in raw:
        n = to_number(v)
        if math.isfinite(n) and n > 0:
            out.append(n)
    return out


def whole_number(value: float) -> int | float:
    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return value
