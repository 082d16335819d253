# src/chrsurvey/positivity.py
from __future__ import annotations

from .cleaning import normalize_code
from .constants import DEFAULT, RULES

_DEFAULT_POSITIVE = frozenset({"3", "4", "5"})
_ANYPOS_NEGATIVE = frozenset({"0", "NA/SKIP", ""})


def validate_rule(rule: str) -> str:
    if rule not in RULES:
        raise ValueError(f"Unknown positivity rule {rule!r}; expected one of {', '.join(RULES)}.")
    return rule


def is_positive(code, rule: str) -> bool:
    """
    DEFAULT: code is one of '3', '4', '5' (string compare, never numeric).
    ANYPOS:  any selected value other than '0' or NA/Skip, for count-style questions.
    A blank or missing code is never positive.
    """
    validate_rule(rule)
    s = normalize_code(code)
    if rule == DEFAULT:
        return s in _DEFAULT_POSITIVE
    return s.upper() not in _ANYPOS_NEGATIVE
