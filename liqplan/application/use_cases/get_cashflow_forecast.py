"""Use case to project the cashflow ledger for the coming months."""

from datetime import date, timedelta

from liqplan.application.ports.planning_repository import (
    PlanningRepositoryPort,
)
from liqplan.application.use_cases.planning_inputs import (
    load_planning_inputs,
    log_issues,
)
from liqplan.domain.models import CashflowForecastView, ProjectionOptions
from liqplan.domain.services.calendar import add_months
from liqplan.domain.services.ledger import build_projection
from liqplan.domain.services.queries import monthly_cashflow
from liqplan.infrastructure.logging.logger import get_app_logger


class GetCashflowForecastUseCase:
    """Project stored planning records into a balance-annotated ledger."""

    def __init__(
        self,
        planning_repository: PlanningRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            planning_repository: Port providing planning records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._planning_repository = planning_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_date: date,
        months: int = 6,
        as_of: date | None = None,
        include_simulations: bool = True,
    ) -> CashflowForecastView:
        """Return the projected ledger from ``start_date`` on.

        The window covers ``months`` calendar months; both ends are
        inclusive. The stored current balance is the starting balance.

        Args:
            start_date: First day of the forecast.
            months: Number of months to project, at least one.
            as_of: Reference "today" for overdue invoices; defaults to
                ``start_date``.
            include_simulations: Whether simulations enter the ledger.

        Returns:
            CashflowForecastView: Entries, monthly totals and skipped records.

        Raises:
            ValueError: If ``months`` is smaller than one.
        """
        if months < 1:
            raise ValueError("months must be at least 1")
        window_end = add_months(start_date, months) - timedelta(days=1)
        inputs = load_planning_inputs(self._planning_repository, self._logger)

        projection = build_projection(
            inputs.transactions,
            inputs.fixed_costs,
            inputs.overrides_by_fixed_cost_id,
            inputs.simulations,
            inputs.current_balance,
            start_date,
            window_end,
            ProjectionOptions(
                include_simulations=include_simulations,
                as_of=as_of or start_date,
            ),
            employees=inputs.employees,
        )
        log_issues(projection.issues, self._logger)

        closing_balance = inputs.current_balance
        if projection.entries:
            closing_balance = projection.entries[-1].running_balance
        self._logger.info(
            f"Forecast {start_date} to {window_end}: "
            f"{len(projection.entries)} entries, "
            f"closing balance {closing_balance}"
        )
        return CashflowForecastView(
            window_start=start_date,
            window_end=window_end,
            starting_balance=inputs.current_balance,
            closing_balance=closing_balance,
            entries=projection.entries,
            monthly=monthly_cashflow(projection.entries),
            issues=[*inputs.issues, *projection.issues],
        )


__all__ = ["GetCashflowForecastUseCase", "CashflowForecastView"]
