"""Free-text normalization for job and candidate fields.

Job posts and candidate profiles arrive with years of experience and salary
ranges typed as free text ("5+ years", "12-18 LPA"). The parsing lives here, at
the model boundary, so the matching engine only ever sees integers.
"""

from __future__ import annotations

import math
import re
from fractions import Fraction
from typing import Any, Iterable, Optional, Tuple, Union

# Salary ranges are quoted in lakhs per annum.
SALARY_UNIT = 100_000

_int_re = re.compile(r"(\d+)")
_salary_re = re.compile(r"(\d+)(?:\s*-\s*(\d+))?")


def first_int(text: Any) -> int:
    """Return the first integer appearing in ``text``, or 0 if there is none."""
    if text is None or isinstance(text, bool):
        return 0
    if isinstance(text, int):
        return max(0, text)
    if isinstance(text, float):
        return max(0, int(text))
    match = _int_re.search(str(text))
    return int(match.group(1)) if match else 0


def parse_salary_range(text: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Parse ``"<min>-<max>"`` (or a single ``"<min>"``) into annual bounds.

    Each number is scaled by SALARY_UNIT. ``max`` defaults to ``min`` when only
    one number is given. Returns None when no number can be found.
    """
    if not text:
        return None
    match = _salary_re.search(text)
    if not match:
        return None
    low = int(match.group(1)) * SALARY_UNIT
    high = int(match.group(2)) * SALARY_UNIT if match.group(2) else low
    return low, high


def round_half_up(value: Union[int, float, Fraction]) -> int:
    """Round to the nearest integer, halves upward."""
    return math.floor(Fraction(value) + Fraction(1, 2))


def clean_terms(items: Iterable[str] | None) -> frozenset[str]:
    """Strip whitespace and drop empty entries. A plain string is read as comma separated."""
    if isinstance(items, str):
        items = items.split(",")
    out = set()
    for item in items or []:
        if item is None:
            continue
        term = str(item).strip()
        if term:
            out.add(term)
    return frozenset(out)


def percent(numerator: int, denominator: int) -> int:
    """``round_half_up(numerator / denominator * 100)`` without float error."""
    return round_half_up(Fraction(numerator * 100, denominator))
