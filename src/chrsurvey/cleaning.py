# src/chrsurvey/cleaning.py
from __future__ import annotations
import re
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from ftfy import fix_text


def fix_df_text(df: pd.DataFrame) -> pd.DataFrame:
    """Idempotent: fixes encoding in headers and string cells."""
    df = df.copy()
    df.columns = [fix_text(str(c)) for c in df.columns]
    for c in df.select_dtypes(include=["object", "string"]).columns:
        df[c] = df[c].apply(lambda x: fix_text(x) if isinstance(x, str) else x)
    return df


def read_survey(path: Union[str, Path], sheet: Optional[Union[str, int]] = None) -> pd.DataFrame:
    """
    Read a raw survey extract. CSV cells are kept as strings so response codes are never
    coerced to numbers; Excel cells keep their native types and are normalized later by
    `normalize_code`.
    """
    path = Path(path)
    if path.suffix.lower() in {".xlsx", ".xls"}:
        return pd.read_excel(path, sheet_name=sheet if sheet is not None else 0)
    return pd.read_csv(path, dtype=str)


def is_missing(x) -> bool:
    if x is None:
        return True
    if isinstance(x, str):
        return x.strip() == ""
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def normalize_code(x) -> str:
    """String form of a response code: 3, 3.0 and ' 3 ' -> '3'; missing -> ''."""
    if is_missing(x):
        return ""
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return str(x).strip()


def norm_key(x: str) -> str:
    """Lowercase + collapse whitespace (for matching labels)."""
    return re.sub(r"\s+", " ", (x or "").strip().lower())


def normalized(x: str) -> str:
    """Basic strip to keep original case but remove leading/trailing spaces."""
    return (x or "").strip()
