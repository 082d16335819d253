# src/chrsurvey/synthetic.py
"""Synthetic extract with the same raw schema as the restricted real survey."""
from __future__ import annotations
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .constants import COUNT_FAMILY, QUESTIONS, SITE_CODES
from .types import Question

_GENDERS = ["Male", "Female", "Transgender", "Non-binary", ""]
_FLAG_VALUES = ["Yes", "No", ""]
_COUNT_CODES = ["0", "1", "2", "3", "4", "5+", ""]
_ORDINAL_CODES = ["1", "2", "3", "4", "5", ""]


def make_synthetic(n: int = 500, seed: Optional[int] = None,
                   questions: Iterable[Question] = QUESTIONS) -> pd.DataFrame:
    """
    Build `n` raw survey records. Values cover every recoding branch: blank and under-18
    ages, blank demographic flags, an unrecognized site and skipped responses.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    rng = np.random.default_rng(seed)

    ages = rng.integers(15, 80, size=n).astype(object)
    ages[rng.random(n) < 0.05] = ""

    sites = list(SITE_CODES) + ["Mobile outreach (unlisted)"]
    site_p = np.array([0.2, 0.1, 0.1, 0.15, 0.1, 0.1, 0.1, 0.1, 0.05])

    df = pd.DataFrame({
        "age": [str(a) for a in ages],
        "gender": rng.choice(_GENDERS, size=n, p=[0.48, 0.4, 0.04, 0.04, 0.04]),
        "ethn_hisp": rng.choice(_FLAG_VALUES, size=n, p=[0.1, 0.85, 0.05]),
        "race_white": rng.choice(_FLAG_VALUES, size=n, p=[0.6, 0.35, 0.05]),
        "race_black": rng.choice(_FLAG_VALUES, size=n, p=[0.3, 0.65, 0.05]),
        "race_bi_multi": rng.choice(_FLAG_VALUES, size=n, p=[0.05, 0.9, 0.05]),
        "site_location": rng.choice(sites, size=n, p=site_p),
    })
    for q in questions:
        if q.family == COUNT_FAMILY:
            df[q.qid] = rng.choice(_COUNT_CODES, size=n, p=[0.4, 0.2, 0.1, 0.08, 0.05, 0.07, 0.1])
        else:
            df[q.qid] = rng.choice(_ORDINAL_CODES, size=n, p=[0.08, 0.12, 0.2, 0.3, 0.22, 0.08])
    # blanks behave like a CSV read: missing, not empty string
    return df.replace("", np.nan)
