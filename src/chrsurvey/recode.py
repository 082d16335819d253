# src/chrsurvey/recode.py
"""
Record-level harmonization: raw survey fields -> canonical categories.

Every function here is total. Unrecognized or malformed input resolves to an explicit
sentinel ("Unknown", "Other/Unknown", "NA/Skip") instead of raising.
"""
from __future__ import annotations
import logging
import math
from typing import Iterable, Mapping

import pandas as pd

from .cleaning import is_missing, normalize_code, norm_key, normalized
from .constants import (
    COUNT_FAMILY, LABEL_FAMILIES, NA_SKIP, OTHER_UNKNOWN, QUESTIONS, RAW_FIELDS,
    SITE_CODES, SITE_REGIONS, UNKNOWN,
)
from .types import Question

log = logging.getLogger("chrsurvey")

_ORDINAL_CODES = ("1", "2", "3", "4", "5")


def label_column(question: Question) -> str:
    return f"{question.qid}_label"


def age_group(age) -> str:
    if is_missing(age):
        return UNKNOWN
    try:
        a = float(age)
    except (TypeError, ValueError):
        return UNKNOWN
    if not math.isfinite(a) or a < 18:
        return UNKNOWN
    if a < 35:
        return "18-34"
    if a < 45:
        return "35-44"
    return "45+"


def _flag_set(x) -> bool:
    return not is_missing(x) and norm_key(str(x)) == "yes"


def race_ethnicity(ethn_hisp, race_white, race_black, race_bi_multi) -> str:
    # first match wins
    for flag, label in (
        (ethn_hisp, "Hispanic"),
        (race_white, "NH-White"),
        (race_black, "NH-Black"),
        (race_bi_multi, "NH-Bi/Multi"),
    ):
        if _flag_set(flag):
            return label
    return OTHER_UNKNOWN


def site_code(site_location) -> str:
    if is_missing(site_location):
        return UNKNOWN
    return SITE_CODES.get(normalized(str(site_location)), UNKNOWN)


def region(code: str) -> str:
    return SITE_REGIONS.get(code, UNKNOWN)


def gender_level(gender) -> str:
    return UNKNOWN if is_missing(gender) else normalized(str(gender))


def question_label(question: Question, code) -> str:
    s = normalize_code(code)
    if question.family == COUNT_FAMILY:
        return s or NA_SKIP
    phrases = LABEL_FAMILIES.get(question.family)
    if phrases is None or s not in _ORDINAL_CODES:
        return NA_SKIP
    return phrases[int(s) - 1]


def recode_record(record: Mapping, questions: Iterable[Question] = QUESTIONS) -> dict:
    """Return a new dict holding the raw fields plus every derived field."""
    out = dict(record)
    out["age_group"] = age_group(record.get("age"))
    out["race_ethnicity"] = race_ethnicity(
        record.get("ethn_hisp"), record.get("race_white"),
        record.get("race_black"), record.get("race_bi_multi"),
    )
    out["site_code"] = site_code(record.get("site_location"))
    out["region"] = region(out["site_code"])
    out["gender"] = gender_level(record.get("gender"))
    for q in questions:
        out[label_column(q)] = question_label(q, record.get(q.qid))
    return out


def recode_frame(df: pd.DataFrame, questions: Iterable[Question] = QUESTIONS) -> pd.DataFrame:
    """
    Vectorized counterpart of `recode_record` for a whole extract. Works on a copy; raw
    columns absent from the extract are added as all-missing so every record still gets
    a derived value.
    """
    questions = list(questions)
    out = df.copy()
    missing = [c for c in list(RAW_FIELDS) + [q.qid for q in questions] if c not in out.columns]
    if missing:
        log.warning("Input is missing columns (treated as blank): %s", ", ".join(missing))
        for c in missing:
            out[c] = None

    out["age_group"] = out["age"].map(age_group)
    out["race_ethnicity"] = [
        race_ethnicity(h, w, b, m)
        for h, w, b, m in zip(out["ethn_hisp"], out["race_white"], out["race_black"], out["race_bi_multi"])
    ]
    out["site_code"] = out["site_location"].map(site_code)
    out["region"] = out["site_code"].map(region)
    out["gender"] = out["gender"].map(gender_level)
    for q in questions:
        out[label_column(q)] = out[q.qid].map(lambda c, q=q: question_label(q, c))
    return out
