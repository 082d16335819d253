# src/chrsurvey/questions.py
from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd

from .constants import COUNT_FAMILY, LABEL_FAMILIES, QUESTIONS
from .positivity import validate_rule
from .types import Question

QUESTION_COLUMNS = ["qid", "label", "rule", "family"]


def validate_questions(questions: Iterable[Question]) -> List[Question]:
    """Raise ValueError on an unknown rule/family or a repeated question id or label."""
    out: List[Question] = []
    seen_ids: set[str] = set()
    seen_labels: set[str] = set()
    for q in questions:
        validate_rule(q.rule)
        if q.family != COUNT_FAMILY and q.family not in LABEL_FAMILIES:
            raise ValueError(f"Unknown label family {q.family!r} for question {q.qid}.")
        if q.qid in seen_ids:
            raise ValueError(f"Duplicate question id {q.qid!r}.")
        if q.label in seen_labels:
            raise ValueError(f"Duplicate question label {q.label!r}.")
        seen_ids.add(q.qid)
        seen_labels.add(q.label)
        out.append(q)
    if not out:
        raise ValueError("Question battery is empty.")
    return out


def load_questions(path: Union[str, Path]) -> List[Question]:
    """
    Read an alternate battery from CSV with columns qid,label,rule,family.
    Rules are upper-cased before validation so 'anypos' is accepted.
    """
    df = pd.read_csv(path, dtype=str).fillna("")
    missing = [c for c in QUESTION_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Question file {path} is missing columns: {', '.join(missing)}")
    return validate_questions(
        Question(r.qid.strip(), r.label.strip(), r.rule.strip().upper(), r.family.strip().lower())
        for r in df[QUESTION_COLUMNS].itertuples(index=False)
    )


def default_questions() -> List[Question]:
    return validate_questions(QUESTIONS)
