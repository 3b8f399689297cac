"""Tests for the composition root."""

from unittest.mock import MagicMock

from liqplan.application.use_cases.get_cashflow_forecast import (
    GetCashflowForecastUseCase,
)
from liqplan.application.use_cases.get_liquidity_kpis import (
    GetLiquidityKpisUseCase,
)
from liqplan.infrastructure import container
from liqplan.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from liqplan.infrastructure.planning_repository import (
    SqlAlchemyPlanningRepository,
)
from liqplan.infrastructure.settings import ForecastSettings


def test_build_database_adapter() -> None:
    """The default adapter is the SQLAlchemy one."""
    adapter = container.build_database_adapter()

    assert isinstance(adapter, SqlAlchemyDatabaseEngineAdapter)


def test_build_planning_repository_uses_settings_user() -> None:
    """The repository is scoped to the configured user."""
    db_port = MagicMock()

    repository = container.build_planning_repository(
        db_port=db_port,
        settings=ForecastSettings(user_id="user-9"),
    )

    assert isinstance(repository, SqlAlchemyPlanningRepository)
    assert repository._user_id == "user-9"
    assert repository._db_port is db_port


def test_build_use_cases(monkeypatch) -> None:
    """Use cases receive the repository and the configured horizon."""
    logger = MagicMock()
    monkeypatch.setattr(container, "get_app_logger", lambda: logger)
    repository = MagicMock()

    forecast = container.build_cashflow_forecast_use_case(repository)
    kpis = container.build_liquidity_kpis_use_case(
        repository,
        ForecastSettings(months=9),
    )

    assert isinstance(forecast, GetCashflowForecastUseCase)
    assert isinstance(kpis, GetLiquidityKpisUseCase)
    assert kpis._horizon_months == 9
    assert kpis._planning_repository is repository
    assert forecast._logger is logger
