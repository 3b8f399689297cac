"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date
import os
from typing import Optional

import dotenv

from liqplan.infrastructure.logging.logger import get_app_logger

_TRUE_VALUES = ("1", "true", "yes", "ja", "on")
_FALSE_VALUES = ("0", "false", "no", "nein", "off")


@dataclass(frozen=True)
class ForecastSettings:
    """Settings for a forecast run.

    Attributes:
        user_id: Owner of the planning records; None reads all rows.
        months: Number of months to project.
        include_simulations: Whether simulations enter the projection.
        start_date: First forecast day; None means today.
        as_of: Reference date for overdue invoices and KPIs; None means
            the start date.
    """

    user_id: Optional[str] = None
    months: int = 6
    include_simulations: bool = True
    start_date: Optional[date] = None
    as_of: Optional[date] = None

    @classmethod
    def from_env(cls) -> "ForecastSettings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by their defaults.

        Returns:
            ForecastSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        user_id = os.getenv("PLANNING_USER_ID", "").strip() or None
        return cls(
            user_id=user_id,
            months=cls._parse_months(os.getenv("FORECAST_MONTHS"), logger),
            include_simulations=cls._parse_flag(
                os.getenv("FORECAST_INCLUDE_SIMULATIONS"),
                default=True,
                logger=logger,
            ),
            start_date=cls._parse_date(
                os.getenv("FORECAST_START_DATE"),
                "FORECAST_START_DATE",
                logger,
            ),
            as_of=cls._parse_date(
                os.getenv("FORECAST_AS_OF"),
                "FORECAST_AS_OF",
                logger,
            ),
        )

    @staticmethod
    def _parse_months(raw: str | None, logger) -> int:
        if not raw:
            return 6
        try:
            months = int(raw)
        except ValueError:
            logger.warning(f"Invalid FORECAST_MONTHS '{raw}', using 6")
            return 6
        if months < 1:
            logger.warning(f"FORECAST_MONTHS must be positive, got {months}")
            return 6
        return months

    @staticmethod
    def _parse_flag(raw: str | None, default: bool, logger) -> bool:
        if raw is None or not raw.strip():
            return default
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean '{raw}', using {default}")
        return default

    @staticmethod
    def _parse_date(raw: str | None, name: str, logger) -> date | None:
        """Parse an ISO date string.

        Args:
            raw: Date string in YYYY-MM-DD format.
            name: Variable name used in warnings.
            logger: Logger used for warnings.

        Returns:
            date | None: Parsed date or None when unset or invalid.
        """
        if not raw:
            return None
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            logger.warning(
                f"Invalid {name} '{raw}'. Expected format YYYY-MM-DD."
            )
            return None


__all__ = ["ForecastSettings"]
