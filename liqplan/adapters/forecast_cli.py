"""CLI adapter printing the liquidity forecast and dashboard KPIs."""

from datetime import date
from decimal import Decimal

from liqplan.domain.services.calendar import format_swiss_date
from liqplan.infrastructure.container import (
    build_cashflow_forecast_use_case,
    build_liquidity_kpis_use_case,
    build_planning_repository,
)
from liqplan.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from liqplan.infrastructure.settings import ForecastSettings


def _format_amount(amount: Decimal) -> str:
    """Format an amount with Swiss thousands separators, e.g. 1'234.50."""
    if not amount.is_finite():
        return str(amount)
    return f"{amount:,.2f}".replace(",", "'")


def _format_runway(months: Decimal) -> str:
    if not months.is_finite():
        return "unbegrenzt"
    return f"{months:.1f} Monate"


def main() -> None:
    """Print the forecast ledger, monthly totals and KPIs."""
    logger = get_app_logger()
    settings = ForecastSettings.from_env()
    start_date = settings.start_date or date.today()
    as_of = settings.as_of or start_date

    try:
        repository = build_planning_repository(settings=settings)
        forecast = build_cashflow_forecast_use_case(repository).execute(
            start_date=start_date,
            months=settings.months,
            as_of=as_of,
            include_simulations=settings.include_simulations,
        )
        kpis = build_liquidity_kpis_use_case(repository, settings).execute(
            as_of=as_of,
            include_simulations=settings.include_simulations,
        )
    except RuntimeError as exc:
        logger.error(str(exc))
        return

    get_usage_logger().info(
        f"Forecast run: start={start_date}, months={settings.months}, "
        f"simulations={settings.include_simulations}"
    )

    print(
        "Liquiditätsplanung "
        f"({format_swiss_date(forecast.window_start)} - "
        f"{format_swiss_date(forecast.window_end)})"
    )
    print(f"Startsaldo: CHF {_format_amount(forecast.starting_balance)}")
    for entry in forecast.entries:
        print(
            f"{format_swiss_date(entry.date)}  "
            f"{_format_amount(entry.amount):>14}  "
            f"{_format_amount(entry.running_balance):>14}  "
            f"{entry.category}: {entry.details}"
        )
    print(f"Endsaldo: CHF {_format_amount(forecast.closing_balance)}")

    print("Monatsübersicht:")
    for month in forecast.monthly:
        print(
            f"{month.month:%m.%Y}: in={_format_amount(month.inflow)}, "
            f"out={_format_amount(month.outflow)}, "
            f"net={_format_amount(month.net)}"
        )

    print(
        f"Kontostand: CHF {_format_amount(kpis.current_balance)}, "
        f"Netto 30 Tage: CHF {_format_amount(kpis.net_next_30_days)}, "
        f"Monatsende: CHF {_format_amount(kpis.end_of_month_forecast)}"
    )
    print(
        f"Runway: {_format_runway(kpis.runway_months)} "
        f"({kpis.runway_status}), "
        f"Fixkosten/Monat: CHF {_format_amount(kpis.monthly_fixed_costs)}, "
        f"Lohnkosten/Monat: CHF {_format_amount(kpis.monthly_payroll)}"
    )
    print(
        f"Offene Forderungen: {kpis.open_incoming.count} "
        f"(CHF {_format_amount(kpis.open_incoming.total)}), "
        f"offene Verbindlichkeiten: {kpis.open_outgoing.count} "
        f"(CHF {_format_amount(kpis.open_outgoing.total)})"
    )
    if kpis.overdue_incoming is not None and kpis.overdue_incoming.count:
        print(
            f"Überfällige Kundenrechnungen: {kpis.overdue_incoming.count} "
            f"(CHF {_format_amount(kpis.overdue_incoming.total)})"
        )
    for alert in kpis.alerts:
        print(f"[{alert.level}] {alert.message}")
    if forecast.issues:
        print(f"Übersprungene Datensätze: {len(forecast.issues)}")


if __name__ == "__main__":  # pragma: no cover
    main()
