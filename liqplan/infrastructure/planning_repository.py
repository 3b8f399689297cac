"""SQLAlchemy-backed, read-only repository for planning records."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import text

from liqplan.application.ports.database import DatabaseEnginePort
from liqplan.application.ports.planning_repository import (
    PlanningRepositoryPort,
)
from liqplan.domain.models import (
    Employee,
    FixedCost,
    Override,
    ProjectionIssue,
    Simulation,
    SourceKind,
    Transaction,
)
from liqplan.domain.services.records import (
    parse_employee,
    parse_fixed_cost,
    parse_override,
    parse_rows,
    parse_simulation,
    parse_transaction,
)
from liqplan.utils.decimal_utils import coerce_decimal


class SqlAlchemyPlanningRepository(PlanningRepositoryPort):
    """Repository reading the Supabase planning tables through SQLAlchemy.

    When a ``user_id`` is given, only that user's rows are read.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        user_id: str | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the planning engine.
            user_id: Optional owner filter for every query.
        """
        self._db_port = db_port
        self._user_id = user_id

    def fetch_transactions(
        self,
    ) -> tuple[list[Transaction], list[ProjectionIssue]]:
        """Return parsed ``buchungen`` rows ordered by date."""
        rows = self._fetch_rows(
            "SELECT * FROM buchungen{where} ORDER BY date, id"
        )
        return parse_rows(rows, parse_transaction, SourceKind.TRANSACTION)

    def fetch_fixed_costs(
        self,
    ) -> tuple[list[FixedCost], list[ProjectionIssue]]:
        """Return parsed ``fixkosten`` rows ordered by start date."""
        rows = self._fetch_rows(
            "SELECT * FROM fixkosten{where} ORDER BY start, id"
        )
        return parse_rows(rows, parse_fixed_cost, SourceKind.FIXED_COST)

    def fetch_overrides(
        self,
    ) -> tuple[list[Override], list[ProjectionIssue]]:
        """Return parsed ``fixkosten_overrides`` rows."""
        rows = self._fetch_rows(
            "SELECT * FROM fixkosten_overrides{where} "
            "ORDER BY fixkosten_id, original_date"
        )
        return parse_rows(rows, parse_override, SourceKind.FIXED_COST)

    def fetch_simulations(
        self,
    ) -> tuple[list[Simulation], list[ProjectionIssue]]:
        """Return parsed ``simulationen`` rows ordered by date."""
        rows = self._fetch_rows(
            "SELECT * FROM simulationen{where} ORDER BY date, id"
        )
        return parse_rows(rows, parse_simulation, SourceKind.SIMULATION)

    def fetch_employees(
        self,
    ) -> tuple[list[Employee], list[ProjectionIssue]]:
        """Return employees joined with their ``lohndaten`` periods."""
        employee_rows = self._fetch_rows(
            'SELECT * FROM mitarbeiter{where} ORDER BY "Name", id'
        )
        salary_rows = self._fetch_rows(
            'SELECT l.* FROM lohndaten l '
            'JOIN mitarbeiter m ON m.id = l.mitarbeiter_id'
            '{where} ORDER BY l.mitarbeiter_id, l."Start"',
            column="m.user_id",
        )
        salaries_by_employee: dict[str, list[Mapping[str, Any]]] = {}
        for row in salary_rows:
            salaries_by_employee.setdefault(
                str(row.get("mitarbeiter_id")),
                [],
            ).append(row)

        def parse(row: Mapping[str, Any]) -> Employee:
            return parse_employee(
                row,
                salaries_by_employee.get(str(row.get("id")), []),
            )

        return parse_rows(employee_rows, parse, SourceKind.PAYROLL)

    def fetch_current_balance(self) -> Decimal:
        """Return the stored current balance, zero when none exists."""
        if self._user_id is None:
            query = text(
                """
                SELECT balance
                FROM current_balance
                ORDER BY updated_at DESC
                LIMIT 1
                """
            )
            params: dict[str, Any] = {}
        else:
            query = text(
                """
                SELECT balance
                FROM current_balance
                WHERE user_id = :user_id
                """
            )
            params = {"user_id": self._user_id}
        engine = self._db_port.get_planning_engine()
        with engine.connect() as conn:
            row = conn.execute(query, params).first()
        if row is None or row.balance is None:
            return Decimal("0")
        return coerce_decimal(row.balance)

    def _fetch_rows(
        self,
        statement: str,
        column: str = "user_id",
    ) -> list[Mapping[str, Any]]:
        """Run a SELECT and return its rows as mappings.

        Args:
            statement: SQL with a ``{where}`` placeholder for the owner filter.
            column: Column compared with the configured user id.

        Returns:
            list[Mapping[str, Any]]: Row mappings keyed by column name.
        """
        params: dict[str, Any] = {}
        where = ""
        if self._user_id is not None:
            where = f" WHERE {column} = :user_id"
            params["user_id"] = self._user_id
        query = text(statement.format(where=where))
        engine = self._db_port.get_planning_engine()
        with engine.connect() as conn:
            return list(conn.execute(query, params).mappings().all())


__all__ = ["SqlAlchemyPlanningRepository"]
