"""Loading of the record sets a projection is built from."""

from dataclasses import dataclass, field
from decimal import Decimal

from liqplan.application.ports.planning_repository import (
    PlanningRepositoryPort,
)
from liqplan.domain.models import (
    Employee,
    FixedCost,
    Override,
    ProjectionIssue,
    Simulation,
    Transaction,
)
from liqplan.domain.services.records import group_overrides
from liqplan.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class PlanningInputs:
    """Parsed records plus the issues raised while loading them."""

    transactions: list[Transaction]
    fixed_costs: list[FixedCost]
    overrides_by_fixed_cost_id: dict[str, list[Override]]
    simulations: list[Simulation]
    employees: list[Employee]
    current_balance: Decimal
    issues: list[ProjectionIssue] = field(default_factory=list)


def load_planning_inputs(
    repository: PlanningRepositoryPort,
    logger,
) -> PlanningInputs:
    """Fetch every record set from the repository.

    Args:
        repository: Port providing planning records.
        logger: Logger used to report unparseable rows.

    Returns:
        PlanningInputs: Records ready for ``build_projection``.
    """
    issues: list[ProjectionIssue] = []

    transactions, found = repository.fetch_transactions()
    issues.extend(found)
    fixed_costs, found = repository.fetch_fixed_costs()
    issues.extend(found)
    overrides, found = repository.fetch_overrides()
    issues.extend(found)
    simulations, found = repository.fetch_simulations()
    issues.extend(found)
    employees, found = repository.fetch_employees()
    issues.extend(found)
    current_balance = coerce_decimal(repository.fetch_current_balance())

    logger.info(
        f"Loaded {len(transactions)} transactions, "
        f"{len(fixed_costs)} fixed costs, {len(overrides)} overrides, "
        f"{len(simulations)} simulations, {len(employees)} employees"
    )
    log_issues(issues, logger)
    return PlanningInputs(
        transactions=transactions,
        fixed_costs=fixed_costs,
        overrides_by_fixed_cost_id=group_overrides(overrides),
        simulations=simulations,
        employees=employees,
        current_balance=current_balance,
        issues=issues,
    )


def log_issues(issues: list[ProjectionIssue], logger) -> None:
    """Emit one warning per skipped record."""
    for issue in issues:
        logger.warning(
            f"Skipped {issue.source_kind.value} {issue.source_id}: "
            f"{issue.reason}"
        )


__all__ = ["PlanningInputs", "load_planning_inputs", "log_issues"]
