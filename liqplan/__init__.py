"""Liquidity planning core: recurring schedules and cashflow projection."""

__version__ = "0.1.0"
