# expense_tracker/amounts.py
"""
Amount normalization for loosely formatted monetary input.

Parsing policy is strict-prefix: after lexical cleanup the longest leading
numeric prefix is parsed and anything after it is ignored, so "1.2.3"
yields 1.2 and "12abc" yields 12.
"""

import math
import re
from typing import Any

_EURO_WORD_RE = re.compile(r"\beuros?\b", re.ASCII)
_EUR_WORD_RE = re.compile(r"\beur\b", re.ASCII)
_SYMBOL_OR_SPACE_RE = re.compile(r"€|\s")
_LETTER_RE = re.compile(r"[a-z]", re.IGNORECASE)
_NUMERIC_PREFIX_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def as_text(value: Any) -> str:
    """Render a JSON scalar the way it would appear in a text field."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        # 5.0 renders as "5", like a JSON number typed into a form.
        return str(int(value))
    return str(value)


def normalize_amount(raw: Any) -> float:
    """
    Convert text such as "12,50 EUR" or "€12.50" into a float.

    Returns NaN when the input is None, has no numeric prefix, or parses
    to an infinite value.
    """
    if raw is None:
        return math.nan

    text = as_text(raw).lower()
    text = _EURO_WORD_RE.sub("", text)
    text = _EUR_WORD_RE.sub("", text)
    text = _SYMBOL_OR_SPACE_RE.sub("", text)
    text = text.replace(",", ".")
    text = _LETTER_RE.sub("", text)

    match = _NUMERIC_PREFIX_RE.match(text)
    if match is None:
        return math.nan

    value = float(match.group())
    return value if math.isfinite(value) else math.nan


def finite_number(value: Any):
    """Return value as a float if it is a finite JSON number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None
