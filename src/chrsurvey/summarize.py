# src/chrsurvey/summarize.py
from __future__ import annotations
import logging
from typing import Iterable, List, Optional

import pandas as pd

from .cleaning import is_missing
from .constants import OVERALL_DIMENSION, OVERALL_LEVEL, QUESTIONS, SUBGROUP_DIMENSIONS, UNKNOWN
from .positivity import is_positive
from .questions import validate_questions
from .types import Question, SummaryConfig, SummaryRow

log = logging.getLogger("chrsurvey")


def percent_positive(positive_n: int, total_n: int, decimals: int = 1) -> Optional[float]:
    """100 * positive/total rounded with Python's round(); None when there is no denominator."""
    if total_n <= 0:
        return None
    return round(100.0 * positive_n / total_n, decimals)


class SubgroupAggregator:
    """
    Percent-positive cross-tabulation over a recoded survey frame.

    Every (question, subgroup dimension) pair is grouped by level. `total_n` counts all
    records in the level, including blank or unrecognized responses; `positive_n` counts
    those whose code satisfies the question's positivity rule. Configuration problems
    (unknown rule, unknown dimension, absent column) raise ValueError here, before any
    record is counted.
    """
    def __init__(self, df: pd.DataFrame,
                 questions: Iterable[Question] = QUESTIONS,
                 subgroup_dims: Iterable[str] = SUBGROUP_DIMENSIONS,
                 config: Optional[SummaryConfig] = None):
        self.df = df
        self.questions = validate_questions(questions)
        self.subgroup_dims = list(subgroup_dims)
        self.config = config or SummaryConfig()
        self.rows: Optional[List[SummaryRow]] = None
        self._validate_columns()

    # ---------- setup ----------
    def _validate_columns(self) -> None:
        for d in self.subgroup_dims:
            if d not in SUBGROUP_DIMENSIONS:
                raise ValueError(
                    f"Unknown subgroup dimension {d!r}; expected one of {', '.join(SUBGROUP_DIMENSIONS)}."
                )
            if d not in self.df.columns:
                raise ValueError(f"Dataset has no {d!r} column; recode it with recode_frame first.")
        if len(set(self.subgroup_dims)) != len(self.subgroup_dims):
            raise ValueError("Subgroup dimensions must not repeat.")
        absent = [q.qid for q in self.questions if q.qid not in self.df.columns]
        if absent:
            raise ValueError(f"Dataset has no column for question(s): {', '.join(absent)}")

    def dimensions(self) -> List[str]:
        dims = list(self.subgroup_dims)
        if self.config.include_overall:
            dims.append(OVERALL_DIMENSION)
        return dims

    # ---------- helpers ----------
    def _levels(self, dim: str) -> pd.Series:
        if dim == OVERALL_DIMENSION:
            return pd.Series(OVERALL_LEVEL, index=self.df.index, dtype=object)
        return self.df[dim].map(lambda v: UNKNOWN if is_missing(v) else str(v))

    def _positive_flags(self, question: Question) -> pd.Series:
        return self.df[question.qid].map(lambda c: is_positive(c, question.rule)).astype(bool)

    # ---------- main ----------
    def aggregate(self) -> List[SummaryRow]:
        dims = self.dimensions()
        levels = {d: self._levels(d) for d in dims}
        flags = {q.qid: self._positive_flags(q) for q in self.questions}

        rows: List[SummaryRow] = []
        for dim in dims:
            for q in self.questions:
                counts = (
                    pd.DataFrame({"level": levels[dim], "pos": flags[q.qid]})
                    .groupby("level")["pos"]
                    .agg(["size", "sum"])
                )
                for level, total_n, positive_n in counts.itertuples(name=None):
                    total_n, positive_n = int(total_n), int(positive_n)
                    rows.append(SummaryRow(
                        question_id=q.qid,
                        question_label=q.label,
                        subgroup_dimension=dim,
                        subgroup_level=str(level),
                        total_n=total_n,
                        positive_n=positive_n,
                        percent_positive=percent_positive(positive_n, total_n, self.config.decimals),
                    ))

        rows.sort(key=lambda r: (r.subgroup_dimension, r.question_label, r.subgroup_level))
        log.debug("Aggregated %d records into %d summary rows", len(self.df), len(rows))
        self.rows = rows
        return rows


def aggregate(df: pd.DataFrame,
              questions: Iterable[Question] = QUESTIONS,
              subgroup_dims: Iterable[str] = SUBGROUP_DIMENSIONS,
              config: Optional[SummaryConfig] = None) -> List[SummaryRow]:
    return SubgroupAggregator(df, questions, subgroup_dims, config).aggregate()
