# src/chrsurvey/assemble.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from .constants import LEGACY_CSV_HEADERS
from .types import SummaryRow

log = logging.getLogger("chrsurvey")

SUMMARY_COLUMNS = [
    "question_id", "question_label", "subgroup_dimension", "subgroup_level",
    "total_n", "positive_n", "percent_positive",
]
REPORT_COLUMNS = ["question_label", "subgroup_level", "percent_positive", "total_n", "positive_n"]
SORT_KEYS = ["subgroup_dimension", "question_label", "subgroup_level"]


def assemble(rows: Iterable[SummaryRow]) -> pd.DataFrame:
    """Long-form summary table: one row per (question, dimension, level), export order."""
    table = pd.DataFrame([r.to_dict() for r in rows], columns=SUMMARY_COLUMNS)
    table["total_n"] = table["total_n"].astype(int)
    table["positive_n"] = table["positive_n"].astype(int)
    table["percent_positive"] = table["percent_positive"].astype(float)
    return table.sort_values(SORT_KEYS, kind="mergesort").reset_index(drop=True)


def by_dimension(table: pd.DataFrame, dimension: str) -> pd.DataFrame:
    """Report view of one subgroup dimension."""
    sub = table[table["subgroup_dimension"] == dimension]
    return sub[REPORT_COLUMNS].reset_index(drop=True)


def export_csv(table: pd.DataFrame, path: Union[str, Path], legacy_headers: bool = False) -> Path:
    """
    Write the long-form table. Legacy consumers expect
    question, subgroup, level, total_n, high_n, percent_positive.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    out = table[SUMMARY_COLUMNS]
    if legacy_headers:
        out = out.drop(columns=["question_id"]).rename(columns=LEGACY_CSV_HEADERS)
    out.to_csv(path, index=False)
    log.info("Wrote %d summary rows to %s", len(out), path)
    return path


def export_excel(table: pd.DataFrame, path: Union[str, Path]) -> Path:
    """One sheet per subgroup dimension plus 'All'; always a fresh workbook."""
    if table is None:
        raise RuntimeError("No summary table to export.")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as w:
        table[SUMMARY_COLUMNS].to_excel(w, index=False, sheet_name="All")
        for dim in table["subgroup_dimension"].drop_duplicates():
            # Excel sheet names: max 31 chars
            by_dimension(table, dim).to_excel(w, index=False, sheet_name=str(dim)[:31])
    log.info("Wrote Excel: %s", path)
    return path
