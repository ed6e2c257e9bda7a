from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_errors, payload, require_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = require_admin(container.admin_sessions, container.auth_service)
    groups = container.group_service

    @app.route("/api/kiosk/groups", endpoint="kiosk_groups")
    @json_errors
    def kiosk_groups():
        return jsonify({"success": True, "groups": [gr.to_dict() for gr in groups.list_active()]})

    @app.route("/api/admin/groups", endpoint="admin_groups")
    @json_errors
    @admin_required
    def admin_groups():
        return jsonify({"success": True, "groups": [gr.to_dict() for gr in groups.list_all()]})

    @app.route("/api/admin/groups", methods=["POST"], endpoint="add_group")
    @json_errors
    @admin_required
    def add_group():
        data = payload()
        group_id = groups.add_group(
            name=data.get("name", ""),
            display_name=data.get("display_name", ""),
            color=data.get("color"),
        )
        return jsonify({"success": True, "id": group_id, "message": "Grupo criado"}), 201

    @app.route("/api/admin/groups/<group_id>", methods=["PUT"], endpoint="update_group")
    @json_errors
    @admin_required
    def update_group(group_id: str):
        data = payload()
        container.auth_service.confirm_password(g.admin.admin_id, data.get("password", ""))
        groups.update_group(group_id, display_name=data.get("display_name", ""), color=data.get("color"))
        return jsonify({"success": True, "message": "Grupo atualizado"})

    @app.route("/api/admin/groups/<group_id>/deactivate", methods=["POST"], endpoint="deactivate_group")
    @json_errors
    @admin_required
    def deactivate_group(group_id: str):
        container.auth_service.confirm_password(g.admin.admin_id, payload().get("password", ""))
        groups.deactivate_group(group_id)
        return jsonify({"success": True, "message": "Grupo desativado"})

    @app.route("/api/admin/groups/<group_id>/toggle", methods=["POST"], endpoint="toggle_group")
    @json_errors
    @admin_required
    def toggle_group(group_id: str):
        container.auth_service.confirm_password(g.admin.admin_id, payload().get("password", ""))
        active = groups.toggle_group(group_id)
        return jsonify({"success": True, "active": active, "message": "Grupo ativado" if active else "Grupo desativado"})
