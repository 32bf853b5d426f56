"""
Tests for budgets and the expense ledger.
"""
import pytest
from datetime import date
from decimal import Decimal

from globetrotter.core.errors import AccessDeniedError, ConflictError, InvalidArgumentError
from globetrotter.schemas.budget import BudgetCreate, ExpenseCreate
from globetrotter.services import budget_service
from conftest import make_trip


@pytest.fixture
def budget(db, owner, trip):
    return budget_service.create_budget(owner.id, BudgetCreate(
        trip_id=trip.id,
        total_budget=Decimal("1000"),
        accommodation=Decimal("400"),
        food=Decimal("200"),
    ), db)


def spend(db, owner, budget, amount, category="FOOD", day=date(2025, 3, 2)):
    return budget_service.add_expense(budget.id, owner.id, ExpenseCreate(
        amount=Decimal(amount), category=category, date=day
    ), db)


def test_budget_defaults_to_trip_currency(budget, trip):
    assert budget.currency == trip.currency


def test_second_budget_conflicts(db, owner, trip, budget):
    with pytest.raises(ConflictError):
        budget_service.create_budget(owner.id, BudgetCreate(trip_id=trip.id, total_budget=Decimal("5")), db)


def test_negative_amounts_rejected(db, owner, trip, budget):
    with pytest.raises(InvalidArgumentError):
        spend(db, owner, budget, "-1")


def test_stranger_cannot_add_expense(db, stranger, budget):
    with pytest.raises(AccessDeniedError):
        spend(db, stranger, budget, "10")


def test_summary_arithmetic(db, owner, trip, budget):
    spend(db, owner, budget, "300")
    spend(db, owner, budget, "250", category="TRANSPORTATION")

    summary = budget_service.compute_summary(budget_service.get_trip_budget(trip.id, owner.id, db))
    assert summary.actual_spent == Decimal("550")
    assert summary.remaining == Decimal("450")
    assert summary.percent_used == pytest.approx(55.0)
    assert summary.is_over_budget is False
    assert summary.planned_total == Decimal("600")

    spend(db, owner, budget, "500")
    summary = budget_service.compute_summary(budget_service.get_trip_budget(trip.id, owner.id, db))
    assert summary.is_over_budget is True
    assert summary.remaining == Decimal("-50")


def test_zero_total_has_zero_percent(db, owner):
    trip = make_trip(db, owner, name="Free trip")
    budget = budget_service.create_budget(owner.id, BudgetCreate(trip_id=trip.id, total_budget=Decimal("0")), db)
    spend(db, owner, budget, "10")

    summary = budget_service.compute_summary(budget_service.get_trip_budget(trip.id, owner.id, db))
    assert summary.percent_used == 0.0
    assert summary.is_over_budget is True


def test_breakdown_compares_against_planned_bucket(db, owner, trip, budget):
    spend(db, owner, budget, "50", category="FOOD")
    spend(db, owner, budget, "30", category="ENTERTAINMENT")

    result = budget_service.trip_breakdown(trip.id, owner.id, db)
    assert result.planned["accommodation"].percentage == pytest.approx(40.0)

    rows = {row.category: row for row in result.comparison}
    assert rows["FOOD"].planned == Decimal("200")
    assert rows["FOOD"].difference == Decimal("150")
    assert rows["ENTERTAINMENT"].planned == Decimal("0")


def test_daily_spending(db, owner, trip, budget):
    spend(db, owner, budget, "90", day=date(2025, 3, 2))
    spend(db, owner, budget, "45", day=date(2025, 3, 1))

    result = budget_service.trip_daily_spending(trip.id, owner.id, db)
    assert result.trip_days == 9
    assert list(result.spending_by_date) == ["2025-03-01", "2025-03-02"]
    assert result.average_daily == Decimal("15")


def test_trip_without_budget(db, owner, trip):
    assert budget_service.get_trip_budget(trip.id, owner.id, db) is None
    assert budget_service.trip_breakdown(trip.id, owner.id, db) is None


def test_expense_currency_defaults_to_budget(db, owner):
    trip = make_trip(db, owner, name="Euro trip")
    budget = budget_service.create_budget(owner.id, BudgetCreate(
        trip_id=trip.id, total_budget=Decimal("500"), currency="eur"
    ), db)

    inherited = spend(db, owner, budget, "12")
    explicit = budget_service.add_expense(budget.id, owner.id, ExpenseCreate(
        amount=Decimal("5"), currency="gbp", category="FOOD", date=date(2025, 3, 2)
    ), db)

    assert budget.currency == "EUR"
    assert inherited.currency == "EUR"
    assert explicit.currency == "GBP"
