from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

DIGITS = "0123456789"


@dataclass(frozen=True)
class SeriesPattern:
    prefix: str
    digits: str
    # Trailing numeric run as typed, including spaces between digits ("0 01").
    numeric_part: str


def parse_series_pattern(value: str) -> Optional[SeriesPattern]:
    s = str(value or "")
    end = len(s) - 1
    while end >= 0 and s[end] == " ":
        end -= 1
    if end < 0 or s[end] not in DIGITS:
        return None

    i = end
    while i >= 0:
        ch = s[i]
        if ch in DIGITS:
            i -= 1
            continue
        if ch == " " and i > 0 and s[i - 1] in DIGITS:
            i -= 1
            continue
        break

    numeric_part = s[i + 1 : end + 1]
    digits = "".join(numeric_part.split())
    if not digits:
        return None
    return SeriesPattern(prefix=s[: i + 1], digits=digits, numeric_part=numeric_part)


def _fit_width(raw: str, width: int) -> str:
    # Overflowing counters wrap to the rightmost ``width`` digits.
    padded = raw.rjust(width, "0")
    return padded[len(padded) - width :] if len(padded) > width else padded


def format_series_value(prefix: str, number: float, width: int) -> str:
    raw = str(math.trunc(number))
    if width > 0:
        return f"{prefix}{_fit_width(raw, width)}"
    return f"{prefix}{raw}"


def apply_numeric_template(template: str, digits: str) -> str:
    out: list[str] = []
    j = 0
    for ch in template:
        if ch in DIGITS:
            out.append(digits[j] if j < len(digits) else "0")
            j += 1
        else:
            out.append(ch)
    return "".join(out)


def increment_series(value: str, increment: float) -> str:
    # Prefix, zero padding and spacing inside the number are kept: "A 0 09" + 1 -> "A 0 10".
    parsed = parse_series_pattern(value)
    if parsed is None:
        return value

    width = len(parsed.digits)
    try:
        number = int(parsed.digits) + increment
        raw = str(math.trunc(number))
    except (ValueError, OverflowError):
        # Counters too long for int/str conversion are left as typed.
        return value
    if any(ch.isspace() for ch in parsed.numeric_part):
        return f"{parsed.prefix}{apply_numeric_template(parsed.numeric_part, _fit_width(raw, width))}"
    return format_series_value(parsed.prefix, number, width)


def ending_series(start: str, count: int, step: float = 1) -> str:
    if count <= 1:
        return start
    return increment_series(start, (count - 1) * step)
