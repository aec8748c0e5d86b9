"""
Renderers for inventory reports.

- Console table with summary block
- CSV (one row per deployment)
- XLSX workbook with a deployments sheet and a summary sheet
- JSON (full report)
"""

import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from config.settings import EXPORT_DISCLAIMER
from inventory.deployment import COLUMN_LABELS, NOT_AVAILABLE
from report.assembler import Report, deployment_key

EXPORT_EXTENSIONS = {"csv": "csv", "xlsx": "xlsx", "json": "json"}

# Columns shown in the console table (the full set is too wide for a terminal)
CONSOLE_COLUMNS = (
    ("subscription_name", 20),
    ("resource_group", 20),
    ("resource_name", 22),
    ("deployment_name", 22),
    ("model", 24),
    ("version", 12),
    ("sku", 14),
    ("capacity", 8),
)
CONSOLE_ENRICHED_COLUMNS = (("retirement_date", 14), ("replacement_model", 24))

HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
BANNER_FONT = Font(italic=True, color="9C0006")
RETIRING_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")


def default_export_path(output_dir, fmt: str, now: Optional[datetime] = None) -> Path:
    """``<output_dir>/ai_deployments_<YYYYmmdd_HHMMSS>.<ext>``."""
    if fmt not in EXPORT_EXTENSIONS:
        raise ValueError(f"Unknown export format: {fmt}")
    ts = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(output_dir) / f"ai_deployments_{ts}.{EXPORT_EXTENSIONS[fmt]}"


def _cell(value) -> str:
    if value is None:
        return ""
    return str(value)


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "~"


def format_table(report: Report) -> str:
    """Human-readable deployment table followed by the summary."""
    columns = CONSOLE_COLUMNS + (CONSOLE_ENRICHED_COLUMNS if report.enriched else ())
    header = " ".join(f"{COLUMN_LABELS[name]:{width}s}" for name, width in columns)
    lines = ["", header, "-" * len(header)]

    for record in report.records:
        lines.append(" ".join(
            f"{_clip(_cell(getattr(record, name, '')), width):{width}s}"
            for name, width in columns
        ))

    lines.append("")
    lines.append(format_summary(report))
    return "\n".join(lines)


def format_summary(report: Report) -> str:
    summary = report.summary
    lines = [
        "=" * 60,
        "  AI MODEL DEPLOYMENT INVENTORY",
        f"  Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M UTC')}",
        "=" * 60,
        f"  Total Deployments:  {summary.get('total', 0)}",
    ]
    if report.model_filter:
        lines.append(f"  Model Filter:       {report.model_filter}")

    for title, key in (
        ("BY SUBSCRIPTION", "by_subscription"),
        ("BY MODEL", "by_model"),
        ("TOP RESOURCE GROUPS", "top_resource_groups"),
    ):
        lines.extend(["", f"  --- {title} ---"])
        for label, count in summary.get(key, []):
            lines.append(f"    {label or '(none)':30s}: {count}")

    if report.enriched:
        lines.extend([
            "",
            "  --- RETIREMENT ---",
            f"  With retirement date: {summary.get('with_retirement_date', 0)}",
        ])
        for item in summary.get("retiring_soon", [])[:10]:
            lines.append(
                f"    [{item['days_remaining']:5d}d] {item['deployment_name']} "
                f"({item['model']} {item['version']}) -> {item['replacement_model']}"
            )
    else:
        lines.extend(["", "  Retirement data not included."])

    lines.append("=" * 60)
    return "\n".join(lines)


def render_csv(report: Report) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([COLUMN_LABELS[c] for c in report.columns])
    for row in report.rows():
        writer.writerow([_cell(row[c]) for c in report.columns])
    return output.getvalue()


def export_csv(report: Report, path) -> Path:
    """Write the deployments to CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_csv(report), newline="")
    return path


def build_workbook(report: Report) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Deployments"
    columns = report.columns

    ws.cell(row=1, column=1, value=EXPORT_DISCLAIMER).font = BANNER_FONT
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(columns))
    ws.cell(row=1, column=1).alignment = Alignment(wrap_text=True, vertical="top")
    ws.row_dimensions[1].height = 30

    header_row = 2
    for col, name in enumerate(columns, start=1):
        cell = ws.cell(row=header_row, column=col, value=COLUMN_LABELS[name])
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    soon = {deployment_key(s) for s in report.summary.get("retiring_soon", [])}
    for r, row in enumerate(report.rows(), start=header_row + 1):
        for col, name in enumerate(columns, start=1):
            value = row[name]
            ws.cell(row=r, column=col, value=value if isinstance(value, (int, float)) else _cell(value))
        if report.enriched and deployment_key(row) in soon:
            ws.cell(row=r, column=columns.index("retirement_date") + 1).fill = RETIRING_FILL

    for col, name in enumerate(columns, start=1):
        values = [COLUMN_LABELS[name]] + [_cell(row[name]) for row in report.rows()]
        ws.column_dimensions[get_column_letter(col)].width = min(max(len(v) for v in values) + 2, 60)

    ws.freeze_panes = ws.cell(row=header_row + 1, column=1)
    last = header_row + max(len(report.records), 1)
    ws.auto_filter.ref = f"A{header_row}:{get_column_letter(len(columns))}{last}"

    _add_summary_sheet(wb, report)
    return wb


def _add_summary_sheet(wb: Workbook, report: Report) -> None:
    ws = wb.create_sheet("Summary")
    summary = report.summary
    ws.append(["Generated", report.generated_at.strftime("%Y-%m-%d %H:%M UTC")])
    ws.append(["Total deployments", summary.get("total", 0)])
    if report.model_filter:
        ws.append(["Model filter", report.model_filter])
    if report.enriched:
        ws.append(["With retirement date", summary.get("with_retirement_date", 0)])

    for title, key in (
        ("Subscription", "by_subscription"),
        ("Model", "by_model"),
        ("Resource group (top)", "top_resource_groups"),
    ):
        ws.append([])
        ws.append([title, "Deployments"])
        for c in ws[ws.max_row]:
            c.font = Font(bold=True)
        for label, count in summary.get(key, []):
            ws.append([label or NOT_AVAILABLE, count])

    ws.column_dimensions["A"].width = 40
    ws.column_dimensions["B"].width = 24


def export_xlsx(report: Report, path) -> Path:
    """Write the deployments and summary to an Excel workbook."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(report).save(path)
    return path


def export_json(report: Report, path) -> Path:
    """Export the full report to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2, default=str))
    return path


EXPORTERS = {"csv": export_csv, "xlsx": export_xlsx, "json": export_json}
