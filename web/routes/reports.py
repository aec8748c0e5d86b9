"""Reports route: download the stored inventory as CSV, XLSX or JSON."""

import io
import json

from flask import Blueprint, Response, jsonify, request, send_file

from report.assembler import ReportAssembler
from report.exporters import build_workbook, default_export_path, render_csv
from web.services import get_scan_store

bp = Blueprint("reports", __name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@bp.route("/export")
def export_report():
    """Export the last scan, optionally filtered by model."""
    fmt = request.args.get("format", "csv")
    if fmt not in ("csv", "xlsx", "json"):
        return jsonify({"error": f"Unknown export format: {fmt}"}), 400

    stored = get_scan_store().load_report()
    if stored is None:
        return jsonify({"error": "No inventory scan available yet"}), 404

    report = ReportAssembler().assemble(
        stored.records,
        model_filter=request.args.get("model"),
        show_all=request.args.get("all", "").lower() in ("1", "true", "yes"),
        enriched=stored.enriched,
    )
    filename = default_export_path("", fmt, now=stored.generated_at).name

    if fmt == "xlsx":
        buffer = io.BytesIO()
        build_workbook(report).save(buffer)
        buffer.seek(0)
        return send_file(buffer, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)

    if fmt == "json":
        body, mimetype = json.dumps(report.to_dict(), indent=2, default=str), "application/json"
    else:
        body, mimetype = render_csv(report), "text/csv"

    return Response(
        body,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
