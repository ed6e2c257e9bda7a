from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..common.datetime_utils import month_end
from ..core.enums import MealType
from ..core.exceptions import ValidationError
from ..groups.repository import GroupRepository
from ..meals.model import MealRecord
from ..meals.repository import MealRepository
from ..users.repository import UserRepository

MONTH_NAMES = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

RECORD_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("Data", "data"),
    ("Nome", "nome"),
    ("Grupo", "grupo"),
    ("Refeição", "refeicao"),
    ("Horário", "horario"),
)


@dataclass(frozen=True)
class ReportData:
    """Everything the PDF renderer needs; `columns` are (header, row key) pairs."""

    title: str
    subtitle: str
    columns: Tuple[Tuple[str, str], ...]
    rows: List[Dict[str, Any]] = field(default_factory=list)
    admin_name: str = "Admin"
    generated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "columns": [{"header": h, "key": k} for h, k in self.columns],
            "rows": self.rows,
            "admin_name": self.admin_name,
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }


def _br_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


class ReportService:
    """Builds report tables from meal records, users and groups."""

    def __init__(self, meals: MealRepository, users: UserRepository, groups: GroupRepository):
        self._meals = meals
        self._users = users
        self._groups = groups

    def kinds(self) -> Dict[str, Callable[..., ReportData]]:
        return {
            "daily": self.daily,
            "monthly": self.monthly,
            "users": self.by_user,
            "groups": self.by_group,
        }

    def build(self, kind: str, *, admin_name: str, now: datetime | None = None) -> ReportData:
        builder = self.kinds().get(kind)
        if builder is None:
            raise ValidationError("Tipo de relatório inválido")
        return builder(admin_name=admin_name, now=now)

    def _group_labels(self) -> Dict[str, str]:
        return {g.name: g.display_name for g in self._groups.list_all()}

    def _record_row(self, r: MealRecord, labels: Dict[str, str]) -> Dict[str, Any]:
        return {
            "data": _br_date(r.meal_date),
            "nome": r.user_name,
            "grupo": labels.get(r.group_type, r.group_type),
            "refeicao": r.meal_type.label,
            "horario": r.meal_time.strftime("%H:%M"),
        }

    def daily(self, *, admin_name: str, now: datetime | None = None) -> ReportData:
        now = now or datetime.now()
        today = now.date()
        records = sorted(self._meals.list_filtered(start=today, end=today), key=lambda r: r.meal_time)
        labels = self._group_labels()
        return ReportData(
            title="Relatório Diário",
            subtitle=f"Refeições do dia {_br_date(today)}",
            columns=RECORD_COLUMNS[1:],
            rows=[self._record_row(r, labels) for r in records],
            admin_name=admin_name,
            generated_at=now,
        )

    def monthly(self, *, admin_name: str, now: datetime | None = None) -> ReportData:
        now = now or datetime.now()
        first = now.date().replace(day=1)
        records = self._meals.list_filtered(start=first, end=month_end(first))
        labels = self._group_labels()
        return ReportData(
            title="Relatório Mensal",
            subtitle=f"Refeições do mês {MONTH_NAMES[first.month - 1]} de {first.year}",
            columns=RECORD_COLUMNS,
            rows=[self._record_row(r, labels) for r in records],
            admin_name=admin_name,
            generated_at=now,
        )

    def by_user(self, *, admin_name: str, now: datetime | None = None) -> ReportData:
        """Every user (active or not) with this month's breakfast / lunch counts."""
        now = now or datetime.now()
        first = now.date().replace(day=1)
        records = self._meals.list_filtered(start=first, end=month_end(first))

        counts: Dict[str, Dict[MealType, int]] = {}
        for r in records:
            if r.is_visitor:
                continue
            per_user = counts.setdefault(r.user_id, {m: 0 for m in MealType})
            per_user[r.meal_type] += 1

        labels = self._group_labels()
        rows: List[Dict[str, Any]] = []
        for u in self._users.list_all():
            c = counts.get(u.user_id, {})
            breakfast = c.get(MealType.BREAKFAST, 0)
            lunch = c.get(MealType.LUNCH, 0)
            rows.append(
                {
                    "nome": u.name,
                    "grupo": labels.get(u.group_type, u.group_type),
                    "status": "Ativo" if u.active else "Inativo",
                    "cafe": breakfast,
                    "almoco": lunch,
                    "total": breakfast + lunch,
                }
            )

        return ReportData(
            title="Relatório por Usuário",
            subtitle="Usuários cadastrados e consumo do mês",
            columns=(
                ("Nome", "nome"),
                ("Grupo", "grupo"),
                ("Status", "status"),
                ("Café", "cafe"),
                ("Almoço", "almoco"),
                ("Total", "total"),
            ),
            rows=rows,
            admin_name=admin_name,
            generated_at=now,
        )

    def by_group(self, *, admin_name: str, now: datetime | None = None) -> ReportData:
        """Per group and meal: total meals this month and distinct people served."""
        now = now or datetime.now()
        first = now.date().replace(day=1)
        records = self._meals.list_filtered(start=first, end=month_end(first))
        labels = self._group_labels()

        stats: Dict[Tuple[str, MealType], Dict[str, Any]] = {}
        for r in records:
            key = (r.group_type, r.meal_type)
            s = stats.get(key)
            if s is None:
                s = {"total": 0, "people": set()}
                stats[key] = s
            s["total"] += 1
            s["people"].add(r.user_id or r.user_name)

        rows = [
            {
                "grupo": labels.get(group_type, group_type),
                "refeicao": meal_type.label,
                "total": s["total"],
                "usuarios_unicos": len(s["people"]),
            }
            for (group_type, meal_type), s in sorted(stats.items(), key=lambda kv: (kv[0][0], kv[0][1].value))
        ]

        return ReportData(
            title="Relatório por Grupo",
            subtitle="Estatísticas por grupo do mês",
            columns=(
                ("Grupo", "grupo"),
                ("Refeição", "refeicao"),
                ("Total Consumido", "total"),
                ("Usuários Únicos", "usuarios_unicos"),
            ),
            rows=rows,
            admin_name=admin_name,
            generated_at=now,
        )

    def filtered(
        self,
        records: Sequence[MealRecord],
        *,
        admin_name: str,
        description: str = "Registros filtrados",
        now: datetime | None = None,
    ) -> ReportData:
        labels = self._group_labels()
        return ReportData(
            title="Relatório de Registros",
            subtitle=f"{description} ({len(records)} registros)",
            columns=RECORD_COLUMNS,
            rows=[self._record_row(r, labels) for r in records],
            admin_name=admin_name,
            generated_at=now or datetime.now(),
        )
