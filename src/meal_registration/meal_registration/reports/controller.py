from __future__ import annotations

from datetime import datetime
from io import BytesIO

from flask import Flask, g, jsonify, request, send_file

from ..common.http import json_errors, require_admin
from ..container import Container
from .pdf import render_pdf, report_filename
from .service import ReportData


def _pdf_response(report: ReportData):
    generated = report.generated_at or datetime.now()
    return send_file(
        BytesIO(render_pdf(report)),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=report_filename(report.title, generated.date()),
    )


def register(app: Flask, container: Container) -> None:
    admin_required = require_admin(container.admin_sessions, container.auth_service)
    reports = container.report_service

    def _filtered_report() -> ReportData:
        args = request.args
        records = container.meal_service.list_records(
            month=args.get("month"),
            day=args.get("date"),
            group_id=args.get("group_id"),
            group_type=args.get("group"),
            user_name=args.get("user"),
        )
        parts = [f"{k}={v}" for k, v in args.items() if v]
        description = "Filtros: " + ", ".join(parts) if parts else "Todos os registros"
        return reports.filtered(records, admin_name=g.admin.name, description=description)

    @app.route("/api/admin/reports/records.pdf", endpoint="records_report_pdf")
    @json_errors
    @admin_required
    def records_report_pdf():
        return _pdf_response(_filtered_report())

    @app.route("/api/admin/reports/<kind>.pdf", endpoint="report_pdf")
    @json_errors
    @admin_required
    def report_pdf(kind: str):
        return _pdf_response(reports.build(kind, admin_name=g.admin.name))

    @app.route("/api/admin/reports/<kind>.json", endpoint="report_json")
    @json_errors
    @admin_required
    def report_json(kind: str):
        if kind == "records":
            report = _filtered_report()
        else:
            report = reports.build(kind, admin_name=g.admin.name)
        return jsonify({"success": True, "report": report.to_dict()})
