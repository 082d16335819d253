# src/chrsurvey/types.py
from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class SummaryConfig:
    decimals: int = 1
    include_overall: bool = False
    legacy_headers: bool = False
    rows_per_page: int = 28  # table rows per PDF page


@dataclass(frozen=True)
class Question:
    qid: str
    label: str
    rule: str
    family: str  # key of LABEL_FAMILIES, or "count"


@dataclass(frozen=True)
class SummaryRow:
    question_id: str
    question_label: str
    subgroup_dimension: str
    subgroup_level: str
    total_n: int
    positive_n: int
    percent_positive: Optional[float]

    def to_dict(self) -> dict:
        return asdict(self)
