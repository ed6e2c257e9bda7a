import pytest
from werkzeug.security import check_password_hash, generate_password_hash

from src.meal_registration.meal_registration.admins.model import AdminUser
from src.meal_registration.meal_registration.admins.service import AdminUserService, AuthService
from src.meal_registration.meal_registration.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from tests.fakes import InMemoryAdmins


def _hash(password):
    return generate_password_hash(password, method="pbkdf2:sha256:1000")


@pytest.fixture
def admins():
    return InMemoryAdmins(
        [
            AdminUser(admin_id="a-1", username="admin", name="Administrador", password_hash=_hash("segredo1")),
            AdminUser(admin_id="a-2", username="rh", name="RH", password_hash=_hash("segredo2"), active=False),
            AdminUser(admin_id="a-3", username="legado", name="Legado", password_hash="CHANGE_ME"),
        ]
    )


def test_authenticate(admins):
    assert AuthService(admins).authenticate(" admin ", "segredo1").admin_id == "a-1"


@pytest.mark.parametrize(
    "username, password",
    [("admin", "errada"), ("ninguem", "segredo1"), ("rh", "segredo2"), ("legado", "CHANGE_ME"), ("admin", "")],
)
def test_authenticate_rejects(admins, username, password):
    with pytest.raises(AuthenticationError, match="Usuário ou senha incorretos"):
        AuthService(admins).authenticate(username, password)


def test_confirm_password(admins):
    auth = AuthService(admins)
    auth.confirm_password("a-1", "segredo1")

    with pytest.raises(AuthenticationError, match="Senha incorreta"):
        auth.confirm_password("a-1", "outra")
    with pytest.raises(AuthenticationError, match="Sessão inválida"):
        auth.confirm_password("a-2", "segredo2")


def test_change_password(admins):
    AuthService(admins).change_password(
        "a-1", current_password="segredo1", new_password="novasenha", confirm_password="novasenha"
    )

    assert check_password_hash(admins.admins["a-1"].password_hash, "novasenha")


@pytest.mark.parametrize(
    "current, new, confirm, error",
    [
        ("", "novasenha", "novasenha", ValidationError),
        ("segredo1", "novasenha", "outrasenha", ValidationError),
        ("segredo1", "abc", "abc", ValidationError),
        ("errada", "novasenha", "novasenha", AuthenticationError),
    ],
)
def test_change_password_rules(admins, current, new, confirm, error):
    with pytest.raises(error):
        AuthService(admins).change_password("a-1", current_password=current, new_password=new, confirm_password=confirm)
    assert check_password_hash(admins.admins["a-1"].password_hash, "segredo1")


def test_create_admin_hashes_password(admins):
    admin_id = AdminUserService(admins).create_admin(username="gerente", name="Gerente", password="senha123")

    created = admins.admins[admin_id]
    assert created.password_hash != "senha123"
    assert AuthService(admins).authenticate("gerente", "senha123").admin_id == admin_id


def test_create_admin_validation(admins):
    service = AdminUserService(admins)
    with pytest.raises(ValidationError, match="já existe"):
        service.create_admin(username="admin", name="Outro", password="senha123")
    with pytest.raises(ValidationError):
        service.create_admin(username="novo", name="Novo", password="123")


def test_deactivate_admin(admins):
    service = AdminUserService(admins)

    with pytest.raises(AuthorizationError):
        service.deactivate_admin("a-1", acting_admin_id="a-1")
    with pytest.raises(ValidationError):
        service.deactivate_admin("a-9", acting_admin_id="a-1")

    service.deactivate_admin("a-3", acting_admin_id="a-1")
    assert admins.admins["a-3"].active is False


def test_is_active(admins):
    auth = AuthService(admins)

    assert auth.is_active("a-1")
    assert not auth.is_active("a-2")
    assert not auth.is_active("a-9")
