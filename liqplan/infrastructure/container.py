"""Composition root for wiring infrastructure adapters."""

from liqplan.application.ports.database import DatabaseEnginePort
from liqplan.application.ports.planning_repository import (
    PlanningRepositoryPort,
)
from liqplan.application.use_cases.get_cashflow_forecast import (
    GetCashflowForecastUseCase,
)
from liqplan.application.use_cases.get_liquidity_kpis import (
    GetLiquidityKpisUseCase,
)
from liqplan.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from liqplan.infrastructure.logging.logger import get_app_logger
from liqplan.infrastructure.planning_repository import (
    SqlAlchemyPlanningRepository,
)
from liqplan.infrastructure.settings import ForecastSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_planning_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: ForecastSettings | None = None,
) -> PlanningRepositoryPort:
    """Return the planning repository scoped to the configured user."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or ForecastSettings.from_env()
    return SqlAlchemyPlanningRepository(
        resolved_db,
        user_id=resolved_settings.user_id,
    )


def build_cashflow_forecast_use_case(
    repository: PlanningRepositoryPort | None = None,
) -> GetCashflowForecastUseCase:
    """Return the forecast use case wired to the planning repository."""
    return GetCashflowForecastUseCase(
        repository or build_planning_repository(),
        logger=get_app_logger(),
    )


def build_liquidity_kpis_use_case(
    repository: PlanningRepositoryPort | None = None,
    settings: ForecastSettings | None = None,
) -> GetLiquidityKpisUseCase:
    """Return the KPI use case using the configured forecast horizon."""
    resolved_settings = settings or ForecastSettings.from_env()
    return GetLiquidityKpisUseCase(
        repository or build_planning_repository(settings=resolved_settings),
        logger=get_app_logger(),
        horizon_months=resolved_settings.months,
    )


__all__ = [
    "build_database_adapter",
    "build_planning_repository",
    "build_cashflow_forecast_use_case",
    "build_liquidity_kpis_use_case",
]
