from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_errors, payload, require_admin
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = require_admin(container.admin_sessions, container.auth_service)

    @app.route("/api/admin/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = payload()
        admin = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        s = container.admin_sessions.start(admin)
        return jsonify({"success": True, "admin": s.to_dict(), "message": f"Bem-vindo, {admin.name}!"})

    @app.route("/api/admin/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.admin_sessions.clear()
        return jsonify({"success": True, "message": "Sessão encerrada"})

    @app.route("/api/admin/me", endpoint="me")
    @json_errors
    @admin_required
    def me():
        return jsonify({"success": True, "admin": g.admin.to_dict()})

    @app.route("/api/admin/password", methods=["POST"], endpoint="change_password")
    @json_errors
    @admin_required
    def change_password():
        data = payload()
        container.auth_service.change_password(
            g.admin.admin_id,
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return jsonify({"success": True, "message": "Senha alterada com sucesso"})

    @app.route("/api/admin/admins", endpoint="admin_accounts")
    @json_errors
    @admin_required
    def admin_accounts():
        admins = container.admin_user_service.list_admins()
        return jsonify({"success": True, "admins": [a.to_public_dict() for a in admins]})

    @app.route("/api/admin/admins", methods=["POST"], endpoint="add_admin")
    @json_errors
    @admin_required
    def add_admin():
        data = payload()
        admin_id = container.admin_user_service.create_admin(
            username=data.get("username", ""),
            name=data.get("name", ""),
            password=data.get("password", ""),
        )
        return jsonify({"success": True, "id": admin_id, "message": "Administrador criado"}), 201

    @app.route("/api/admin/admins/<admin_id>/deactivate", methods=["POST"], endpoint="deactivate_admin")
    @json_errors
    @admin_required
    def deactivate_admin(admin_id: str):
        container.auth_service.confirm_password(g.admin.admin_id, payload().get("password", ""))
        container.admin_user_service.deactivate_admin(admin_id, acting_admin_id=g.admin.admin_id)
        return jsonify({"success": True, "message": "Administrador desativado"})
