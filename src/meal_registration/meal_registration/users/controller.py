from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import json_errors, payload, require_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = require_admin(container.admin_sessions, container.auth_service)

    @app.route("/api/kiosk/users", endpoint="kiosk_users")
    @json_errors
    def kiosk_users():
        users = container.user_cache.fetch_with_cache(request.args.get("group_id") or None)
        return jsonify({"success": True, "users": [u.to_dict() for u in users]})

    @app.route("/api/admin/users", endpoint="admin_users")
    @json_errors
    @admin_required
    def admin_users():
        return jsonify({"success": True, "users": list(container.user_service.list_admin_view())})

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @json_errors
    @admin_required
    def add_user():
        data = payload()
        user_id = container.user_service.create_user(name=data.get("name", ""), group_id=data.get("group_id", ""))
        return jsonify({"success": True, "id": user_id, "message": "Usuário adicionado"}), 201

    @app.route("/api/admin/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @json_errors
    @admin_required
    def update_user(user_id: str):
        data = payload()
        container.auth_service.confirm_password(g.admin.admin_id, data.get("password", ""))
        container.user_service.update_user(user_id, name=data.get("name", ""), group_id=data.get("group_id", ""))
        return jsonify({"success": True, "message": "Usuário atualizado"})

    @app.route("/api/admin/users/<user_id>/deactivate", methods=["POST"], endpoint="deactivate_user")
    @json_errors
    @admin_required
    def deactivate_user(user_id: str):
        container.auth_service.confirm_password(g.admin.admin_id, payload().get("password", ""))
        container.user_service.deactivate_user(user_id)
        return jsonify({"success": True, "message": "Usuário desativado"})

    @app.route("/api/admin/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @json_errors
    @admin_required
    def delete_user(user_id: str):
        container.auth_service.confirm_password(g.admin.admin_id, payload().get("password", ""))
        container.user_service.delete_user(user_id)
        return jsonify({"success": True, "message": "Usuário excluído"})

    @app.route("/api/admin/cache", endpoint="user_cache_stats")
    @json_errors
    @admin_required
    def user_cache_stats():
        return jsonify({"success": True, "cache": container.user_cache.cache_stats().to_dict()})

    @app.route("/api/admin/cache", methods=["DELETE"], endpoint="clear_user_cache")
    @json_errors
    @admin_required
    def clear_user_cache():
        container.user_cache.clear()
        return jsonify({"success": True, "message": "Cache de usuários limpo"})
