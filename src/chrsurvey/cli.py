# file: src/chrsurvey/cli.py
from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List

from .assemble import assemble, export_csv, export_excel
from .cleaning import fix_df_text, read_survey
from .constants import SUBGROUP_DIMENSIONS
from .questions import default_questions, load_questions
from .recode import recode_frame
from .summarize import SubgroupAggregator
from .synthetic import make_synthetic
from .types import SummaryConfig


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="chrsurvey",
        description="CHR client survey summarizer: survey extract → percent-positive summary (+optional reports)"
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", type=str, help="Real survey extract (.csv or .xlsx).")
    src.add_argument("--synthetic", type=int, metavar="N", help="Generate N synthetic records instead of reading a file.")
    p.add_argument("--sheet", type=str, help="Excel sheet name/index if input is Excel.")
    p.add_argument("--seed", type=int, help="Random seed for --synthetic.")
    p.add_argument("--output", type=str, required=True, help="Output long-form summary .csv path.")
    p.add_argument("--excel", type=str, help="Optional .xlsx copy of the summary (one sheet per subgroup).")
    p.add_argument("--report-pdf", type=str, help="Optional print-ready PDF report.")
    p.add_argument("--charts-dir", type=str, help="Optional directory for per-subgroup PNG charts.")
    p.add_argument("--questions", type=str, help="CSV with qid,label,rule,family to replace the built-in battery.")
    p.add_argument("--groups", nargs="*", default=list(SUBGROUP_DIMENSIONS), help="Subgroup dimensions to break out by.")
    p.add_argument("--include-overall", action="store_true", help="Add an Overall row per question.")
    p.add_argument("--legacy-headers", action="store_true", help="Write question,subgroup,level,total_n,high_n,percent_positive.")
    p.add_argument("--decimals", type=int, default=1, help="Decimal places for percent positive.")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--quiet", action="store_true")
    return p.parse_args(argv)


def _sheet_arg(sheet: str | None):
    if sheet is not None and sheet.isdigit():
        return int(sheet)
    return sheet


def main(argv: List[str] | None = None) -> int:
    a = parse_args(argv)
    lvl = logging.WARNING if a.quiet else (logging.DEBUG if a.verbose else logging.INFO)
    logging.basicConfig(level=lvl, format="%(message)s")
    log = logging.getLogger("chrsurvey")

    out_csv = Path(a.output)
    if out_csv.suffix.lower() != ".csv":
        print("Only .csv outputs are supported for --output.", file=sys.stderr); return 2
    if a.excel and Path(a.excel).suffix.lower() != ".xlsx":
        print("--excel must end in .xlsx.", file=sys.stderr); return 2

    # Question battery + config errors fail before any data is read
    if not a.groups:
        print("--groups needs at least one subgroup dimension.", file=sys.stderr); return 3
    unknown_groups = [g for g in a.groups if g not in SUBGROUP_DIMENSIONS]
    if unknown_groups:
        print(f"Unknown subgroup dimension(s): {', '.join(unknown_groups)}", file=sys.stderr); return 3
    try:
        questions = load_questions(a.questions) if a.questions else default_questions()
    except (OSError, ValueError) as e:
        print(f"Bad question configuration: {e}", file=sys.stderr); return 3
    cfg = SummaryConfig(decimals=a.decimals, include_overall=a.include_overall, legacy_headers=a.legacy_headers)

    # Read input
    if a.input:
        in_local = Path(a.input)
        if not in_local.exists():
            print(f"Input not found: {a.input}", file=sys.stderr); return 2
        try:
            raw = read_survey(in_local, _sheet_arg(a.sheet))
        except Exception as e:
            print(f"Failed to read input: {e}", file=sys.stderr); return 2
        raw = fix_df_text(raw)
        log.info("Read %d records from %s", len(raw), in_local)
    else:
        if a.synthetic < 0:
            print("--synthetic must be non-negative.", file=sys.stderr); return 2
        raw = make_synthetic(a.synthetic, seed=a.seed, questions=questions)
        log.info("Generated %d synthetic records", len(raw))

    df = recode_frame(raw, questions)

    try:
        summ = SubgroupAggregator(df, questions, a.groups, cfg)
    except ValueError as e:
        print(f"Bad configuration: {e}", file=sys.stderr); return 3

    table = assemble(summ.aggregate())
    if table.empty:
        print("No summary rows were produced (empty input?).", file=sys.stderr); return 4

    export_csv(table, out_csv, legacy_headers=cfg.legacy_headers)
    if a.excel:
        export_excel(table, a.excel)

    if a.charts_dir or a.report_pdf:
        from .report import save_dimension_chart, write_pdf_report
        if a.charts_dir:
            charts_local = Path(a.charts_dir)
            charts_local.mkdir(parents=True, exist_ok=True)
            for dim in table["subgroup_dimension"].drop_duplicates():
                png_name = re.sub(r"[^A-Za-z0-9_.-]", "_", str(dim)) + ".png"
                save_dimension_chart(table, dim, path=charts_local / png_name)
            log.info("Charts dir: %s", charts_local)
        if a.report_pdf:
            write_pdf_report(table, df, a.report_pdf, config=cfg)
            log.info("Wrote report: %s", a.report_pdf)

    print(f"Wrote summary: {out_csv}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
