from __future__ import annotations

from datetime import datetime

from flask import Flask, g, jsonify, request

from ..common.http import json_errors, payload, require_admin
from ..core.constants import VISITOR_COMPANIES
from ..core.enums import MealType, RegistrationOutcome
from ..container import Container
from .service import RegistrationResult, parse_meal_type

_STATUS_BY_OUTCOME = {
    RegistrationOutcome.SAVED: 201,
    RegistrationOutcome.ENQUEUED: 202,
    RegistrationOutcome.FAILED: 500,
}


def _registration_response(result: RegistrationResult):
    body = result.to_dict()
    body["success"] = result.ok
    return jsonify(body), _STATUS_BY_OUTCOME[result.outcome]


def register(app: Flask, container: Container) -> None:
    admin_required = require_admin(container.admin_sessions, container.auth_service)
    meals = container.meal_service

    @app.route("/api/kiosk/status", endpoint="kiosk_status")
    @json_errors
    def kiosk_status():
        now = datetime.now()
        gate = meals.gate()
        windows = {
            m.value: {"label": m.label, "window": gate.window_label(m), "open": gate.is_open(m, now)}
            for m in MealType
        }
        return jsonify(
            {
                "success": True,
                "online": container.monitor.is_online,
                "pending_count": container.sync_scheduler.refresh_pending(),
                "now": now.isoformat(timespec="seconds"),
                "windows": windows,
            }
        )

    @app.route("/api/kiosk/companies", endpoint="kiosk_companies")
    def kiosk_companies():
        return jsonify({"success": True, "companies": list(VISITOR_COMPANIES)})

    @app.route("/api/kiosk/meals", methods=["POST"], endpoint="kiosk_register_meal")
    @json_errors
    def kiosk_register_meal():
        data = payload()
        result = meals.register_member(
            group_id=data.get("group_id", ""),
            user_id=data.get("user_id", ""),
            meal_type=parse_meal_type(data.get("meal_type")),
        )
        return _registration_response(result)

    @app.route("/api/kiosk/visitors", methods=["POST"], endpoint="kiosk_register_visitor")
    @json_errors
    def kiosk_register_visitor():
        data = payload()
        result = meals.register_visitor(
            name=data.get("name", ""),
            company=data.get("company", ""),
            custom_company=data.get("custom_company"),
            area=data.get("area", ""),
            meal_type=parse_meal_type(data.get("meal_type")),
        )
        return _registration_response(result)

    @app.route("/api/kiosk/recent", endpoint="kiosk_recent")
    @json_errors
    def kiosk_recent():
        return jsonify({"success": True, "records": [r.to_dict() for r in meals.recent()]})

    @app.route("/api/kiosk/summary", endpoint="kiosk_summary")
    @json_errors
    def kiosk_summary():
        return jsonify({"success": True, "summary": meals.today_summary()})

    @app.route("/api/kiosk/sync", methods=["POST"], endpoint="kiosk_sync")
    @json_errors
    def kiosk_sync():
        result = container.sync_scheduler.trigger_sync()
        if result is None:
            return jsonify({"success": False, "message": "Sincronização já em andamento"}), 409
        return jsonify(
            {
                "success": True,
                "synced": result.success,
                "failed": result.failed,
                "pending_count": container.sync_scheduler.pending_count,
            }
        )

    @app.route("/api/admin/records", endpoint="admin_records")
    @json_errors
    @admin_required
    def admin_records():
        records = meals.list_records(
            month=request.args.get("month"),
            day=request.args.get("date"),
            group_id=request.args.get("group_id"),
            group_type=request.args.get("group"),
            user_name=request.args.get("user"),
        )
        return jsonify({"success": True, "count": len(records), "records": [r.to_dict() for r in records]})

    @app.route("/api/admin/records/<record_id>", methods=["DELETE"], endpoint="admin_delete_record")
    @json_errors
    @admin_required
    def admin_delete_record(record_id: str):
        container.auth_service.confirm_password(g.admin.admin_id, payload().get("password", ""))
        meals.delete_record(record_id)
        return jsonify({"success": True, "message": "Registro excluído"})
