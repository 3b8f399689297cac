"""Tests for the ledger builder."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

from liqplan.domain.models import (
    Direction,
    Employee,
    FixedCost,
    Override,
    ProjectionOptions,
    Rhythm,
    SalaryPeriod,
    Simulation,
    SourceKind,
    Transaction,
)
from liqplan.domain.services import recurrence as recurrence_module
from liqplan.domain.services.ledger import (
    apply_running_balance,
    build_ledger,
    build_projection,
    projected_collection_date,
)

WINDOW = (date(2025, 6, 1), date(2025, 7, 31))


def _inputs() -> dict:
    return {
        "transactions": [
            Transaction(
                id="b-1",
                date=date(2025, 6, 10),
                amount=Decimal("5000"),
                direction=Direction.INCOMING,
                details="Rechnung 17",
                settled=True,
            ),
            Transaction(
                id="b-2",
                date=date(2025, 6, 30),
                amount=Decimal("1200"),
                direction=Direction.OUTGOING,
                details="Lieferant",
                category="Material",
                settled=True,
            ),
        ],
        "fixed_costs": [
            FixedCost(
                id="fk-1",
                name="Miete",
                amount=Decimal("2500"),
                rhythm=Rhythm.MONTHLY,
                start_date=date(2025, 5, 31),
            )
        ],
        "overrides_by_fixed_cost_id": {},
        "simulations": [
            Simulation(
                id="sim-1",
                name="Auftrag",
                amount=Decimal("3000"),
                direction=Direction.INCOMING,
                date=date(2025, 6, 30),
            )
        ],
        "starting_balance": Decimal("10000"),
        "window_start": WINDOW[0],
        "window_end": WINDOW[1],
        "employees": [
            Employee(
                id="m-1",
                name="Anna",
                salaries=(
                    SalaryPeriod(
                        id="l-1",
                        start_date=date(2025, 1, 1),
                        amount=Decimal("6000"),
                    ),
                ),
            )
        ],
    }


def test_running_balance_follows_every_entry() -> None:
    """Each running balance equals the previous one plus the amount."""
    inputs = _inputs()
    ledger = build_ledger(**inputs)

    previous = inputs["starting_balance"]
    for entry in ledger:
        assert entry.running_balance == previous + entry.amount
        previous = entry.running_balance
    assert [entry.running_balance for entry in ledger] == [
        Decimal("15000"),
        Decimal("9000"),
        Decimal("7800"),
        Decimal("5300"),
        Decimal("8300"),
        Decimal("2300"),
        Decimal("-200"),
    ]


def test_same_day_entries_are_ordered_by_source_kind() -> None:
    """Transactions come before fixed costs, payroll and simulations."""
    ledger = build_ledger(**_inputs())

    same_day = [e.source_kind for e in ledger if e.date == date(2025, 6, 30)]
    assert same_day == [
        SourceKind.TRANSACTION,
        SourceKind.FIXED_COST,
        SourceKind.SIMULATION,
    ]
    assert ledger[2].category == "Material"
    assert ledger[0].category == "Standard"


def test_build_ledger_is_idempotent() -> None:
    """Identical inputs produce identical ledgers."""
    assert build_ledger(**_inputs()) == build_ledger(**_inputs())


def test_simulations_can_be_excluded() -> None:
    """Simulations and simulated transactions drop out when disabled."""
    inputs = _inputs()
    inputs["transactions"].append(
        Transaction(
            id="b-sim",
            date=date(2025, 6, 12),
            amount=Decimal("700"),
            direction=Direction.OUTGOING,
            is_simulation=True,
        )
    )

    with_sims = build_ledger(**inputs)
    without = build_ledger(
        **inputs,
        options=ProjectionOptions(include_simulations=False),
    )

    assert "b-sim" in [e.source_id for e in with_sims]
    assert all(e.source_kind is not SourceKind.SIMULATION for e in without)
    assert "b-sim" not in [e.source_id for e in without]


def test_inactive_simulation_is_ignored() -> None:
    """Simulations switched off by the user never enter the ledger."""
    inputs = _inputs()
    inputs["simulations"] = [
        Simulation(
            id="sim-off",
            name="Pausiert",
            amount=Decimal("100"),
            direction=Direction.OUTGOING,
            date=date(2025, 6, 5),
            active=False,
        )
    ]

    ledger = build_ledger(**inputs)

    assert "sim-off" not in [entry.source_id for entry in ledger]


def test_skipped_override_is_applied_through_the_builder() -> None:
    """Overrides grouped by fixed cost id reach the expander."""
    inputs = _inputs()
    inputs["overrides_by_fixed_cost_id"] = {
        "fk-1": [
            Override(
                id="ov-1",
                fixed_cost_id="fk-1",
                original_date=date(2025, 6, 30),
                skipped=True,
            )
        ]
    }

    ledger = build_ledger(**inputs)

    fixed = [e for e in ledger if e.source_kind is SourceKind.FIXED_COST]
    assert [entry.original_date for entry in fixed] == [date(2025, 7, 30)]


def test_malformed_records_are_reported_and_skipped() -> None:
    """Broken records become issues while the rest is projected."""
    inputs = _inputs()
    inputs["fixed_costs"].append(
        FixedCost(
            id="fk-bad-amount",
            name="Kaputt",
            amount="viel",
            rhythm=Rhythm.MONTHLY,
            start_date=date(2025, 1, 1),
        )
    )
    inputs["fixed_costs"].append(
        FixedCost(
            id="fk-bad-rhythm",
            name="Wöchentlich",
            amount=Decimal("10"),
            rhythm="weekly",
            start_date=date(2025, 1, 1),
        )
    )
    inputs["transactions"].append(
        Transaction(
            id="b-bad-date",
            date=datetime(2025, 6, 3, 12, 0),
            amount=Decimal("10"),
            direction=Direction.OUTGOING,
        )
    )

    projection = build_projection(**inputs)

    assert sorted(issue.source_id for issue in projection.issues) == [
        "b-bad-date",
        "fk-bad-amount",
        "fk-bad-rhythm",
    ]
    assert projection.entries == build_ledger(**_inputs())


def test_build_ledger_logs_skipped_records_when_given_a_logger() -> None:
    """A passed logger receives one warning per skipped record."""
    inputs = _inputs()
    inputs["transactions"].append(
        Transaction(
            id="b-bad",
            date=date(2025, 6, 3),
            amount=float("nan"),
            direction=Direction.OUTGOING,
        )
    )
    logger = MagicMock()

    build_ledger(**inputs, logger=logger)

    logger.warning.assert_called_once()
    assert "b-bad" in logger.warning.call_args.args[0]


def test_overdue_unpaid_invoice_moves_into_the_future() -> None:
    """Unsettled past-due incoming invoices are projected after as_of."""
    invoice = Transaction(
        id="inv-1",
        date=date(2025, 4, 10),
        amount=Decimal("4000"),
        direction=Direction.INCOMING,
        is_invoice=True,
    )
    paid = Transaction(
        id="inv-2",
        date=date(2025, 4, 10),
        amount=Decimal("900"),
        direction=Direction.INCOMING,
        is_invoice=True,
        settled=True,
    )

    ledger = build_ledger(
        [invoice, paid],
        [],
        {},
        [],
        Decimal("0"),
        *WINDOW,
        ProjectionOptions(as_of=date(2025, 6, 15)),
    )

    assert len(ledger) == 1
    assert ledger[0].source_id == "inv-1"
    assert ledger[0].date == date(2025, 7, 10)
    assert ledger[0].original_date == date(2025, 4, 10)


def test_overdue_shift_can_be_disabled() -> None:
    """Without the switch the invoice keeps its booked date."""
    invoice = Transaction(
        id="inv-1",
        date=date(2025, 6, 2),
        amount=Decimal("4000"),
        direction=Direction.INCOMING,
        is_invoice=True,
    )

    ledger = build_ledger(
        [invoice],
        [],
        {},
        [],
        Decimal("0"),
        *WINDOW,
        ProjectionOptions(
            as_of=date(2025, 6, 15),
            shift_overdue_invoices=False,
        ),
    )

    assert ledger[0].date == date(2025, 6, 2)
    assert ledger[0].original_date is None


def test_projected_collection_date_skips_weekend_before_as_of() -> None:
    """A step whose Friday shift falls before as_of is not used."""
    assert projected_collection_date(
        date(2025, 4, 14),
        date(2025, 6, 14),
    ) == date(2025, 7, 14)
    assert projected_collection_date(
        date(2025, 5, 17),
        date(2025, 6, 16),
    ) == date(2025, 6, 17)


def test_empty_inputs_give_empty_ledger() -> None:
    """No records means no entries."""
    assert apply_running_balance([], Decimal("100")) == []
    assert build_ledger([], [], {}, [], Decimal("100"), *WINDOW) == []


def test_float_amounts_are_projected_as_decimals() -> None:
    """Finite float amounts are accepted and converted exactly."""
    transaction = Transaction(
        id="b-float",
        date=date(2025, 6, 10),
        amount=1500.5,
        direction=Direction.INCOMING,
        settled=True,
    )
    fixed_cost = FixedCost(
        id="fk-float",
        name="Miete",
        amount=2500.0,
        rhythm=Rhythm.MONTHLY,
        start_date=date(2025, 6, 2),
    )
    simulation = Simulation(
        id="sim-float",
        name="Werbung",
        amount=300.25,
        direction="outgoing",
        date=date(2025, 6, 20),
    )

    projection = build_projection(
        [transaction],
        [fixed_cost],
        {},
        [simulation],
        0,
        date(2025, 6, 1),
        date(2025, 6, 30),
    )

    assert projection.issues == []
    assert [(e.source_id, e.amount) for e in projection.entries] == [
        ("fk-float", Decimal("-2500.0")),
        ("b-float", Decimal("1500.5")),
        ("sim-float", Decimal("-300.25")),
    ]
    assert projection.entries[-1].running_balance == Decimal("-1299.75")


def test_boolean_amount_is_reported_as_malformed() -> None:
    """Booleans are not amounts even though they are ints."""
    transaction = Transaction(
        id="b-bool",
        date=date(2025, 6, 10),
        amount=True,
        direction=Direction.OUTGOING,
    )

    projection = build_projection([transaction], [], {}, [], 0, *WINDOW)

    assert projection.entries == []
    assert [issue.source_id for issue in projection.issues] == ["b-bool"]


def test_schedule_that_does_not_advance_skips_only_that_fixed_cost(
    monkeypatch,
) -> None:
    """A stuck rhythm becomes an issue; every other record is projected."""
    real_add_interval = recurrence_module.add_interval

    def stuck_quarterly(day, rhythm):
        if rhythm is Rhythm.QUARTERLY:
            return day
        return real_add_interval(day, rhythm)

    monkeypatch.setattr(recurrence_module, "add_interval", stuck_quarterly)
    inputs = _inputs()
    inputs["fixed_costs"].append(
        FixedCost(
            id="fk-stuck",
            name="Versicherung",
            amount=Decimal("800"),
            rhythm=Rhythm.QUARTERLY,
            start_date=date(2025, 6, 2),
        )
    )

    projection = build_projection(**inputs)

    assert [issue.source_id for issue in projection.issues] == ["fk-stuck"]
    assert projection.issues[0].source_kind is SourceKind.FIXED_COST
    assert "does not advance" in projection.issues[0].reason
    assert projection.entries == build_ledger(**_inputs())
