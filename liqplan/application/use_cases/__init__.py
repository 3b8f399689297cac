"""Application use cases package."""

from .get_cashflow_forecast import (
    CashflowForecastView,
    GetCashflowForecastUseCase,
)
from .get_liquidity_kpis import GetLiquidityKpisUseCase, LiquidityKpis
from .planning_inputs import PlanningInputs, load_planning_inputs

__all__ = [
    "CashflowForecastView",
    "GetCashflowForecastUseCase",
    "GetLiquidityKpisUseCase",
    "LiquidityKpis",
    "PlanningInputs",
    "load_planning_inputs",
]
