from __future__ import annotations

from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import AdminUser
from .repository import AdminUserRepository


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use case: admin login, password re-confirmation and password change."""

    def __init__(self, admins: AdminUserRepository):
        self._admins = admins

    def authenticate(self, username: str, password: str) -> AdminUser:
        admin = self._admins.get_by_username((username or "").strip())
        if not admin or not admin.active or not _password_matches(admin.password_hash, password or ""):
            raise AuthenticationError("Usuário ou senha incorretos")
        return admin

    def is_active(self, admin_id: str) -> bool:
        admin = self._admins.get_by_id(admin_id)
        return bool(admin and admin.active)

    def confirm_password(self, admin_id: str, password: str) -> None:
        """Re-check the logged admin's password before a destructive action."""
        admin = self._admins.get_by_id(admin_id)
        if not admin or not admin.active:
            raise AuthenticationError("Sessão inválida")
        if not password or not _password_matches(admin.password_hash, password):
            raise AuthenticationError("Senha incorreta")

    def change_password(
        self,
        admin_id: str,
        *,
        current_password: str,
        new_password: str,
        confirm_password: str,
    ) -> None:
        if not current_password or not new_password or not confirm_password:
            raise ValidationError("Preencha todos os campos")
        if new_password != confirm_password:
            raise ValidationError("As senhas não coincidem")
        require_min_length(new_password, "A nova senha", MIN_PASSWORD_LENGTH)

        admin = self._admins.get_by_id(admin_id)
        if not admin or not _password_matches(admin.password_hash, current_password):
            raise AuthenticationError("Senha atual incorreta")

        self._admins.update_password(admin_id, password_hash=generate_password_hash(new_password))


class AdminUserService:
    """Use case: manage admin accounts."""

    def __init__(self, admins: AdminUserRepository):
        self._admins = admins

    def list_admins(self) -> Sequence[AdminUser]:
        return self._admins.list_all()

    def create_admin(self, *, username: str, name: str, password: str) -> str:
        username = require_non_empty(username, "Usuário")
        name = require_non_empty(name, "Nome")
        require_min_length(password, "A senha", MIN_PASSWORD_LENGTH)

        if self._admins.get_by_username(username):
            raise ValidationError("Nome de usuário já existe")

        return self._admins.create_admin(
            username=username,
            name=name,
            password_hash=generate_password_hash(password),
        )

    def deactivate_admin(self, admin_id: str, *, acting_admin_id: str) -> None:
        if admin_id == acting_admin_id:
            raise AuthorizationError("Você não pode desativar a própria conta")
        if not self._admins.set_active(admin_id, active=False):
            raise ValidationError("Administrador não encontrado")
