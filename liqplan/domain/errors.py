"""Domain exceptions raised by the projection core."""


class LiqPlanError(Exception):
    """Base class for liquidity planning errors."""


class RecordValidationError(LiqPlanError, ValueError):
    """Raised when an input record cannot be turned into a domain record."""


class RecurrenceError(LiqPlanError):
    """Raised when a recurring schedule does not advance."""


__all__ = ["LiqPlanError", "RecordValidationError", "RecurrenceError"]
