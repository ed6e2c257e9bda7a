from datetime import date, datetime, time

import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from src.meal_registration.meal_registration.admins.model import AdminUser
from src.meal_registration.meal_registration.admins.service import AdminUserService, AuthService
from src.meal_registration.meal_registration.admins.session import AdminSessionManager
from src.meal_registration.meal_registration.container import Container
from src.meal_registration.meal_registration.core.enums import MealType
from src.meal_registration.meal_registration.database.connectivity import ConnectivityMonitor
from src.meal_registration.meal_registration.groups.service import GroupService
from src.meal_registration.meal_registration.main import register_routes
from src.meal_registration.meal_registration.meals.offline_queue import OfflineQueue
from src.meal_registration.meal_registration.meals.service import MealRegistrationService
from src.meal_registration.meal_registration.meals.sync import OfflineSyncScheduler
from src.meal_registration.meal_registration.reports.service import ReportService
from src.meal_registration.meal_registration.storage.flask_session_store import FlaskSessionStore
from src.meal_registration.meal_registration.storage.memory_store import InMemoryKeyValueStore
from src.meal_registration.meal_registration.system_settings.service import SystemSettingsService
from src.meal_registration.meal_registration.users.cache import UserCache
from src.meal_registration.meal_registration.users.service import UserService
from tests.fakes import (
    InMemoryAdmins,
    InMemoryGroups,
    InMemoryMeals,
    InMemorySettings,
    InMemoryUsers,
    make_record,
    make_settings,
)


class Backend:
    def __init__(self, users, groups):
        self.meals = InMemoryMeals()
        self.users = InMemoryUsers(users)
        self.groups = InMemoryGroups(groups)
        # Breakfast is open all day, lunch is never open.
        self.settings = InMemorySettings(make_settings(breakfast=(time(0, 0), time(23, 59, 59)), lunch=(None, time(0, 0))))
        self.admins = InMemoryAdmins(
            [
                AdminUser(
                    admin_id="a-1",
                    username="admin",
                    name="Administrador",
                    password_hash=generate_password_hash("segredo1", method="pbkdf2:sha256:1000"),
                )
            ]
        )


@pytest.fixture
def backend(users, groups):
    return Backend(users, groups)


@pytest.fixture
def container(backend):
    local = InMemoryKeyValueStore()
    monitor = ConnectivityMonitor()
    queue = OfflineQueue(local, backend.meals)
    user_cache = UserCache(local, backend.users, monitor=monitor)
    return Container(
        monitor=monitor,
        local_store=local,
        offline_queue=queue,
        sync_scheduler=OfflineSyncScheduler(queue, monitor),
        user_cache=user_cache,
        admin_sessions=AdminSessionManager(FlaskSessionStore()),
        auth_service=AuthService(backend.admins),
        admin_user_service=AdminUserService(backend.admins),
        user_service=UserService(backend.users, backend.groups),
        group_service=GroupService(backend.groups),
        settings_service=SystemSettingsService(backend.settings),
        meal_service=MealRegistrationService(backend.meals, backend.settings, queue, monitor, user_cache),
        report_service=ReportService(backend.meals, backend.users, backend.groups),
    )


@pytest.fixture
def client(container):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    register_routes(app, container)
    return app.test_client()


def _login(client, password="segredo1"):
    return client.post("/api/admin/login", json={"username": "admin", "password": password})


def test_register_member_then_duplicate(client, backend):
    body = {"group_id": "g-op", "user_id": "u-ana", "meal_type": "breakfast"}

    first = client.post("/api/kiosk/meals", json=body)
    second = client.post("/api/kiosk/meals", json=body)

    assert first.status_code == 201
    assert first.get_json()["outcome"] == "saved"
    assert second.status_code == 409
    assert second.get_json()["success"] is False
    assert len(backend.meals.records) == 1


def test_closed_window_is_bad_request(client):
    resp = client.post("/api/kiosk/meals", json={"group_id": "g-op", "user_id": "u-ana", "meal_type": "lunch"})

    assert resp.status_code == 400
    assert "não configurado" in resp.get_json()["message"]


def test_invalid_meal_type(client):
    resp = client.post("/api/kiosk/meals", json={"group_id": "g-op", "user_id": "u-ana", "meal_type": "dinner"})
    assert resp.status_code == 400


def test_visitor_goes_offline_when_backend_is_down(client, backend, container):
    backend.meals.down = True

    resp = client.post(
        "/api/kiosk/visitors",
        json={"name": "Rui", "company": "VALE", "area": "operacao", "meal_type": "breakfast"},
    )

    assert resp.status_code == 202
    assert resp.get_json()["record"]["user_name"] == "Rui | VALE (Visitante)"
    assert container.offline_queue.pending_count() == 1

    backend.meals.down = False
    sync = client.post("/api/kiosk/sync")
    assert sync.get_json()["synced"] == 1
    assert sync.get_json()["pending_count"] == 0


def test_status_reports_windows(client):
    data = client.get("/api/kiosk/status").get_json()

    assert data["online"] is True
    assert data["pending_count"] == 0
    assert data["windows"]["breakfast"]["open"] is True
    assert data["windows"]["lunch"]["open"] is False


def test_admin_routes_need_a_session(client):
    assert client.get("/api/admin/records").status_code == 401
    assert _login(client, password="errada").status_code == 401

    assert _login(client).status_code == 200
    assert client.get("/api/admin/me").get_json()["admin"]["username"] == "admin"

    client.post("/api/admin/logout")
    assert client.get("/api/admin/me").status_code == 401


def test_deactivated_admin_loses_access(client, backend):
    _login(client)
    assert client.get("/api/admin/me").status_code == 200

    backend.admins.set_active("a-1", active=False)

    assert client.get("/api/admin/me").status_code == 401
    backend.admins.set_active("a-1", active=True)
    assert client.get("/api/admin/me").status_code == 401


def test_delete_record_requires_password(client, backend):
    record = make_record(user_id="u-ana", user_name="Ana Souza", meal_type=MealType.BREAKFAST, meal_date=date.today())
    backend.meals.records.append(record)
    _login(client)

    denied = client.delete(f"/api/admin/records/{record.record_id}", json={"password": "errada"})
    assert denied.status_code == 401
    assert len(backend.meals.records) == 1

    ok = client.delete(f"/api/admin/records/{record.record_id}", json={"password": "segredo1"})
    assert ok.status_code == 200
    assert backend.meals.records == []


def test_admin_records_filters(client, backend):
    backend.meals.records.append(
        make_record(user_id="u-ana", user_name="Ana Souza", meal_type=MealType.LUNCH, meal_date=date(2025, 3, 10))
    )
    _login(client)

    assert client.get("/api/admin/records?month=2025-03").get_json()["count"] == 1
    assert client.get("/api/admin/records?date=2025-03-11").get_json()["count"] == 0
    assert client.get("/api/admin/records?month=2025-99").status_code == 400


def test_unexpected_errors_become_500(client, backend):
    def boom(limit):
        raise RuntimeError("boom")

    backend.meals.list_recent = boom

    resp = client.get("/api/kiosk/recent")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Erro interno do sistema"}


def test_daily_report_pdf(client, backend):
    backend.meals.records.append(
        make_record(user_id="u-ana", user_name="Ana Souza", meal_type=MealType.BREAKFAST, meal_date=datetime.now().date())
    )
    _login(client)

    resp = client.get("/api/admin/reports/daily.pdf")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")
