from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_errors, payload, require_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = require_admin(container.admin_sessions, container.auth_service)
    settings = container.settings_service

    @app.route("/api/admin/settings", endpoint="admin_settings")
    @json_errors
    @admin_required
    def admin_settings():
        return jsonify({"success": True, "settings": settings.to_view(settings.get())})

    @app.route("/api/admin/settings", methods=["PUT"], endpoint="update_settings")
    @json_errors
    @admin_required
    def update_settings():
        data = payload()
        updated = settings.update_times(
            breakfast_start_time=data.get("breakfast_start_time"),
            breakfast_deadline=data.get("breakfast_deadline"),
            lunch_start_time=data.get("lunch_start_time"),
            lunch_deadline=data.get("lunch_deadline"),
        )
        return jsonify({"success": True, "settings": settings.to_view(updated), "message": "Horários atualizados"})
