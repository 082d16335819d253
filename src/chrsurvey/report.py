# src/chrsurvey/report.py
from __future__ import annotations
from pathlib import Path
from typing import Iterator, Optional, Union

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from .assemble import by_dimension
from .cleaning import is_missing
from .constants import SUBGROUP_DIMENSIONS, UNKNOWN
from .types import SummaryConfig

TABLE_HEADERS = ["Question", "Level", "% positive", "N", "Positive n"]


# ------------------------------ drawing helpers ------------------------------

def _plot_dimension(ax, table: pd.DataFrame, dimension: str) -> None:
    view = by_dimension(table, dimension)
    if view.empty:
        ax.text(0.5, 0.5, "No data", ha="center", va="center")
        ax.axis("off")
        return
    pivot = view.pivot(index="question_label", columns="subgroup_level", values="percent_positive")
    pivot = pivot.sort_index(ascending=False)
    levels = list(pivot.columns)
    height = 0.8 / len(levels)
    y = np.arange(len(pivot))
    for i, level in enumerate(levels):
        ax.barh(y + i * height, pivot[level].fillna(0).to_numpy(), height=height, label=str(level))
    ax.set_yticks(y + height * (len(levels) - 1) / 2)
    ax.set_yticklabels(list(pivot.index), fontsize=7)
    ax.set_xlim(0, 100)
    ax.set_xlabel("% positive")
    ax.set_title(f"Percent positive by {dimension}")
    ax.legend(fontsize=7, loc="lower right")


def _plot_composition(ax, df: pd.DataFrame, dimension: str) -> None:
    counts = df[dimension].map(lambda v: UNKNOWN if is_missing(v) else str(v)).value_counts().sort_index()
    if counts.empty:
        ax.axis("off")
        return
    ax.pie(counts.to_numpy(), labels=list(counts.index), autopct="%1.0f%%", textprops={"fontsize": 7})
    ax.set_title(dimension, fontsize=9)


def _fmt_pct(v) -> str:
    return "NA" if v is None or pd.isna(v) else f"{v:.1f}"


def _table_pages(view: pd.DataFrame, rows_per_page: int) -> Iterator[pd.DataFrame]:
    step = max(int(rows_per_page), 1)
    for start in range(0, len(view), step):
        yield view.iloc[start:start + step]


# ------------------------------ headless outputs ------------------------------

def save_dimension_chart(table: pd.DataFrame, dimension: str, *, path: Union[str, Path]) -> str:
    """Grouped horizontal bars: percent positive per question, one bar per level."""
    fig, ax = plt.subplots(figsize=(8, 9))
    _plot_dimension(ax, table, dimension)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return str(path)


def save_composition_pie(df: pd.DataFrame, dimension: str, *, path: Union[str, Path]) -> str:
    """Pie of how the recoded sample splits across one subgroup dimension."""
    fig, ax = plt.subplots(figsize=(5, 5))
    _plot_composition(ax, df, dimension)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return str(path)


def write_pdf_report(table: pd.DataFrame, df: pd.DataFrame, path: Union[str, Path],
                     config: Optional[SummaryConfig] = None,
                     title: str = "CHR Client Survey Summary") -> str:
    """
    Print-ready report: cover page, sample composition, then for each subgroup dimension a
    chart page followed by the paginated table (question, level, % positive, N, positive n).
    """
    cfg = config or SummaryConfig()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with PdfPages(path) as pdf:
        fig = plt.figure(figsize=(8.5, 11))
        fig.text(0.5, 0.62, title, ha="center", fontsize=20)
        fig.text(0.5, 0.56, f"{len(df)} respondents", ha="center", fontsize=12)
        fig.text(0.5, 0.52, pd.Timestamp.today().strftime("Generated %B %d, %Y"), ha="center", fontsize=10)
        pdf.savefig(fig)
        plt.close(fig)

        dims = [d for d in SUBGROUP_DIMENSIONS if d in df.columns]
        if dims:
            fig, axes = plt.subplots(3, 2, figsize=(8.5, 11))
            axes = list(axes.flat)
            for ax, dim in zip(axes, dims):
                _plot_composition(ax, df, dim)
            for ax in axes[len(dims):]:
                ax.axis("off")
            fig.suptitle("Sample composition")
            pdf.savefig(fig)
            plt.close(fig)

        for dim in table["subgroup_dimension"].drop_duplicates():
            fig, ax = plt.subplots(figsize=(8.5, 11))
            _plot_dimension(ax, table, dim)
            fig.tight_layout()
            pdf.savefig(fig)
            plt.close(fig)

            view = by_dimension(table, dim)
            pages = list(_table_pages(view, cfg.rows_per_page))
            for i, page in enumerate(pages, start=1):
                cells = [
                    [r.question_label, r.subgroup_level, _fmt_pct(r.percent_positive), r.total_n, r.positive_n]
                    for r in page.itertuples(index=False)
                ]
                fig, ax = plt.subplots(figsize=(8.5, 11))
                ax.axis("off")
                tbl = ax.table(cellText=cells, colLabels=TABLE_HEADERS, loc="upper center",
                               colWidths=[0.5, 0.18, 0.12, 0.08, 0.12])
                tbl.auto_set_font_size(False)
                tbl.set_fontsize(7)
                ax.set_title(f"{dim} ({i}/{len(pages)})")
                pdf.savefig(fig)
                plt.close(fig)
    return str(path)
