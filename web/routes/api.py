"""REST API v1: JSON endpoints for the deployment inventory."""

from flask import Blueprint, jsonify, request

from lifecycle.parser import LifecycleTableParser
from lifecycle.record import ModelType
from report.assembler import ReportAssembler
from web.services import get_fetcher, get_lifecycle_url, get_scan_store, run_and_store_scan

bp = Blueprint("api", __name__)

TRUE_VALUES = ("1", "true", "yes")


def _error(message, status=400):
    return jsonify({"error": message}), status


def _stored_report():
    return get_scan_store().load_report()


# ── Deployments ──────────────────────────────────────────────────────

@bp.route("/deployments")
def list_deployments():
    stored = _stored_report()
    if stored is None:
        return _error("No inventory scan available yet", 404)

    try:
        report = ReportAssembler().assemble(
            stored.records,
            model_filter=request.args.get("model"),
            show_all=request.args.get("all", "").lower() in TRUE_VALUES,
            sort_by=request.args.get("sort"),
            enriched=stored.enriched,
        )
    except ValueError as e:
        return _error(str(e))

    return jsonify({
        "scanned_at": stored.generated_at.isoformat(),
        "enriched": report.enriched,
        "columns": list(report.columns),
        "total": report.summary["total"],
        "deployments": report.rows(),
    })


@bp.route("/summary")
def summary():
    stored = _stored_report()
    if stored is None:
        return _error("No inventory scan available yet", 404)
    data = dict(stored.summary)
    data["scanned_at"] = stored.generated_at.isoformat()
    data["enriched"] = stored.enriched
    return jsonify(data)


@bp.route("/scan", methods=["POST"])
def scan_now():
    report = run_and_store_scan()
    return jsonify({
        "total": report.summary["total"],
        "enriched": report.enriched,
        "scanned_at": report.generated_at.isoformat(),
    }), 201


# ── Lifecycle ────────────────────────────────────────────────────────

@bp.route("/lifecycle")
def lifecycle():
    model_type = request.args.get("model_type")
    if model_type and model_type not in {t.value for t in ModelType}:
        return _error(f"Invalid model_type: {model_type}")

    result = get_fetcher().fetch(get_lifecycle_url())
    if not result.ok:
        return _error(f"Lifecycle data unavailable: {result.error}", 502)

    records = LifecycleTableParser().parse(result.text)
    if model_type:
        records = [r for r in records if r.model_type.value == model_type]
    return jsonify([r.to_dict() for r in records])
