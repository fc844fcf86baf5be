"""Generate the Excel catalog report: one tab per query plus a QA summary.

Usage:
    python catalog/build_report_workbook.py            # Report on data/raw/netflix_titles.csv
    python catalog/build_report_workbook.py --sample   # Report on data/sample/netflix_titles.csv
"""

import sys
from datetime import date
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from catalog.config import EXCEL_DIR
from catalog.run_queries import parse_args, resolve_input, open_catalog, run_all

# Conditional fills
GREEN_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
RED_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
BOLD_FONT = Font(bold=True)


def auto_width(ws):
    """Approximate auto-width for all columns."""
    for col_cells in ws.columns:
        max_len = 0
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            val = str(cell.value) if cell.value is not None else ""
            max_len = max(max_len, len(val))
        ws.column_dimensions[col_letter].width = min(max_len + 3, 50)


def freeze_and_bold_header(ws):
    """Bold header row and freeze top row."""
    ws.freeze_panes = "A2"
    for cell in ws[1]:
        cell.font = BOLD_FONT


def cell_value(value):
    """Convert a DataFrame value into something openpyxl can store."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item"):
        return value.item()
    return value


def write_result_tab(ws, df):
    """Write one query result as a table."""
    ws.append(list(df.columns))
    for row in df.itertuples(index=False):
        ws.append([cell_value(v) for v in row])

    freeze_and_bold_header(ws)
    auto_width(ws)


# ─── Reconciliation checks ──────────────────────────────────────


def build_reconciliation_checks(titles, results, country):
    """Returns list of (check_name, result, detail)."""
    checks = []

    by_type = results["count_by_type"]
    total = int(by_type["title_count"].sum())
    checks.append((
        "CountByTypeTotal",
        "PASS" if total == len(titles) else "FAIL",
        f"{total} counted, {len(titles)} rows",
    ))

    counts = titles.groupby(["type", "rating"], dropna=False).size()
    modal = results["modal_rating_by_type"]
    bad_types = [
        t for t, group in modal.groupby("type")
        if not (group["rating_count"] == counts.loc[t].max()).all()
    ]
    checks.append((
        "ModalRatingTies",
        "PASS" if not bad_types else "FAIL",
        f"{len(modal)} modal rating(s)" if not bad_types else f"mismatch for {bad_types}",
    ))

    shares = results["top_years_by_country_share"]
    years = pd.to_numeric(titles.loc[titles["country"] == country, "release_year"])
    n_fail = 0
    for _, row in shares.iterrows():
        expected = round((years == row["release_year"]).sum() / len(years) * 100, 2)
        if abs(row["share_pct"] - expected) >= 0.006:
            n_fail += 1
    checks.append((
        "CountryShareRecompute",
        "PASS" if n_fail == 0 else "FAIL",
        f"{len(shares) - n_fail} matched, {n_fail} mismatched ({country})",
    ))

    docs = results["documentaries_only"]
    non_docs = (~docs["listed_in"].str.endswith("Documentaries")).sum()
    checks.append((
        "DocumentariesSuffix",
        "PASS" if non_docs == 0 else "FAIL",
        f"{len(docs)} rows, {non_docs} without suffix",
    ))

    no_director = results["content_without_director"]
    with_director = no_director["director"].notna().sum()
    checks.append((
        "WithoutDirectorAbsent",
        "PASS" if with_director == 0 else "FAIL",
        f"{len(no_director)} rows, {with_director} with a director",
    ))

    return checks


# ─── Tab 1: QA_Summary ──────────────────────────────────────────


def write_qa_summary(ws, checks):
    """Write QA_Summary tab. checks is list of (check_name, result, detail)."""
    headers = ["check_name", "result", "detail"]
    ws.append(headers)

    for check_name, result, detail in checks:
        ws.append([check_name, result, detail])

    # Conditional fills
    result_col = 2
    for row_idx in range(2, len(checks) + 2):
        cell = ws.cell(row=row_idx, column=result_col)
        fill = GREEN_FILL if cell.value == "PASS" else RED_FILL
        for col_idx in range(1, len(headers) + 1):
            ws.cell(row=row_idx, column=col_idx).fill = fill

    freeze_and_bold_header(ws)
    auto_width(ws)


def build_workbook(results, checks):
    wb = Workbook()

    for name, df in results.items():
        # Excel caps sheet titles at 31 characters
        write_result_tab(wb.create_sheet(name[:31]), df)

    write_qa_summary(wb.create_sheet("QA_Summary", 0), checks)

    # Remove default "Sheet"
    if "Sheet" in wb.sheetnames:
        del wb["Sheet"]
    return wb


# ─── Main ────────────────────────────────────────────────────────


def main(argv=None):
    args = parse_args(argv)
    mode = "sample" if args.sample else "full"
    input_path = resolve_input(args)

    print(f"=== Catalog Report Workbook (mode: {mode}) ===\n")

    titles, con = open_catalog(input_path)
    if args.now is None:
        args.now = date.today()
    results = run_all(con, args)
    con.close()

    checks = build_reconciliation_checks(titles, results, args.country)
    wb = build_workbook(results, checks)

    EXCEL_DIR.mkdir(parents=True, exist_ok=True)
    filename = "catalog_report_sample.xlsx" if args.sample else "catalog_report.xlsx"
    output_path = EXCEL_DIR / filename
    wb.save(str(output_path))

    # ── STDOUT summary ────────────────────────────────────────
    n_pass = sum(1 for _, r, _ in checks if r == "PASS")
    print(f"Tab 1 (QA_Summary): {len(checks)} rows, "
          f"{n_pass} passed, {len(checks) - n_pass} failed")
    for tab_idx, (name, df) in enumerate(results.items(), start=2):
        print(f"Tab {tab_idx} ({name}): {len(df)} rows")
    print(f"\nReport workbook written to: {output_path}")


if __name__ == "__main__":
    main()
