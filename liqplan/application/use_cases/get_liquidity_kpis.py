"""Use case to compute the liquidity dashboard figures."""

from datetime import date, timedelta
from decimal import Decimal

from liqplan.application.ports.planning_repository import (
    PlanningRepositoryPort,
)
from liqplan.application.use_cases.planning_inputs import (
    load_planning_inputs,
    log_issues,
)
from liqplan.domain.constants import BURN_WINDOW_MONTHS
from liqplan.domain.models import (
    Direction,
    LiquidityKpis,
    ProjectionOptions,
)
from liqplan.domain.services.calendar import add_months, start_of_month
from liqplan.domain.services.ledger import build_projection
from liqplan.domain.services.queries import (
    build_alerts,
    classify_runway,
    end_of_month_forecast,
    first_negative_date,
    net,
    open_amounts,
    overdue_invoices,
    revenue_progress,
    runway_months,
    upcoming_payments,
)
from liqplan.domain.services.recurrence import (
    monthly_fixed_costs,
    monthly_payroll,
)
from liqplan.infrastructure.logging.logger import get_app_logger


class GetLiquidityKpisUseCase:
    """Compute runway, open items and alerts for a reference date."""

    def __init__(
        self,
        planning_repository: PlanningRepositoryPort,
        logger=None,
        horizon_months: int = 6,
    ) -> None:
        """Initialize the use case.

        Args:
            planning_repository: Port providing planning records.
            logger: Optional logger compatible with logging.Logger-like API.
            horizon_months: Months projected ahead for alerts.
        """
        self._planning_repository = planning_repository
        self._logger = logger or get_app_logger()
        self._horizon_months = horizon_months

    def execute(
        self,
        as_of: date,
        include_simulations: bool = True,
        revenue_target: Decimal | None = None,
    ) -> LiquidityKpis:
        """Return the dashboard KPIs as seen on ``as_of``.

        Two projections are built: a history of the full months used for
        the burn rate, and a forward ledger starting at the current balance.

        Args:
            as_of: Reference date.
            include_simulations: Whether simulations enter the ledgers.
            revenue_target: Optional yearly revenue target.

        Returns:
            LiquidityKpis: Aggregated dashboard figures.
        """
        inputs = load_planning_inputs(self._planning_repository, self._logger)
        options = ProjectionOptions(
            include_simulations=include_simulations,
            as_of=as_of,
        )
        balance = inputs.current_balance

        history = build_projection(
            inputs.transactions,
            inputs.fixed_costs,
            inputs.overrides_by_fixed_cost_id,
            inputs.simulations,
            Decimal("0"),
            add_months(start_of_month(as_of), -BURN_WINDOW_MONTHS),
            start_of_month(as_of) - timedelta(days=1),
            ProjectionOptions(
                include_simulations=include_simulations,
                shift_overdue_invoices=False,
            ),
            employees=inputs.employees,
        )
        forward = build_projection(
            inputs.transactions,
            inputs.fixed_costs,
            inputs.overrides_by_fixed_cost_id,
            inputs.simulations,
            balance,
            as_of,
            add_months(as_of, self._horizon_months) - timedelta(days=1),
            options,
            employees=inputs.employees,
        )
        # Both ledgers see the same records, so report issues once.
        log_issues(forward.issues, self._logger)

        runway = runway_months(balance, history.entries, as_of)
        revenue = None
        if revenue_target is not None:
            revenue = revenue_progress(
                inputs.transactions,
                as_of.year,
                revenue_target,
            )

        kpis = LiquidityKpis(
            as_of=as_of,
            current_balance=balance,
            net_next_30_days=net(
                forward.entries,
                as_of,
                as_of + timedelta(days=30),
            ),
            runway_months=runway,
            runway_status=classify_runway(runway),
            end_of_month_forecast=end_of_month_forecast(
                forward.entries,
                as_of,
                balance,
            ),
            open_incoming=open_amounts(
                inputs.transactions,
                Direction.INCOMING,
            ),
            open_outgoing=open_amounts(
                inputs.transactions,
                Direction.OUTGOING,
            ),
            monthly_fixed_costs=monthly_fixed_costs(
                inputs.fixed_costs,
                as_of,
            ),
            first_negative_date=first_negative_date(forward.entries),
            upcoming_payments=upcoming_payments(forward.entries, as_of),
            alerts=build_alerts(forward.entries, runway),
            revenue=revenue,
            issues=[*inputs.issues, *forward.issues],
            overdue_incoming=overdue_invoices(inputs.transactions, as_of),
            monthly_payroll=monthly_payroll(inputs.employees, as_of),
        )
        self._logger.info(
            f"KPIs for {as_of}: balance={balance}, runway={runway}, "
            f"alerts={len(kpis.alerts)}"
        )
        return kpis


__all__ = ["GetLiquidityKpisUseCase", "LiquidityKpis"]
