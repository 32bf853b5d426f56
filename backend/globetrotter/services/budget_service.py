"""
Budget service: planned amounts per trip and the append-only expense ledger.
"""
import logging
import math
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from globetrotter.core.errors import ConflictError, InvalidArgumentError
from globetrotter.db.session import transaction
from globetrotter.models.budget import Budget, PLANNED_CATEGORIES
from globetrotter.models.expense import Expense, ExpenseCategory
from globetrotter.models.trip import Trip
from globetrotter.schemas.budget import (
    BudgetBreakdown, BudgetCreate, BudgetSummary, BudgetUpdate, CategoryComparison,
    DailySpending, ExpenseCreate, PlannedCategoryItem
)
from globetrotter.services.ownership import Access, ResourceKind, guard

logger = logging.getLogger(__name__)

AMOUNT_FIELDS = ("total_budget",) + PLANNED_CATEGORIES


def _percentage(part: Decimal, whole: Decimal) -> float:
    """part / whole * 100, or 0 when there is nothing to divide by."""
    if not whole:
        return 0.0
    return float(Decimal(part) / Decimal(whole) * 100)


def _check_amounts(values: dict) -> None:
    for field in AMOUNT_FIELDS:
        value = values.get(field)
        if value is not None and value < 0:
            raise InvalidArgumentError(f"{field} must not be negative")


def create_budget(actor_id: int, budget_data: BudgetCreate, db: Session) -> Budget:
    """
    Create the budget of a trip.

    A trip has at most one budget: an existing one is a ConflictError, and the
    unique constraint on budgets.trip_id turns a concurrent insert into one too.
    """
    _, trip = guard(actor_id, ResourceKind.TRIP, budget_data.trip_id, Access.WRITE, db)
    values = budget_data.model_dump()
    _check_amounts(values)
    values["currency"] = (budget_data.currency or trip.currency).upper()

    with transaction(db):
        existing = db.query(Budget.id).filter(Budget.trip_id == trip.id).first()
        if existing:
            raise ConflictError("Budget already exists for this trip")
        budget = Budget(**values)
        db.add(budget)
    db.refresh(budget)

    logger.info(f"Created budget {budget.id} for trip {trip.id}")
    return budget


def get_trip_budget(trip_id: int, requester_id: Optional[int], db: Session) -> Optional[Budget]:
    """Budget of a trip with its expenses, or None when the trip has none."""
    guard(requester_id, ResourceKind.TRIP, trip_id, Access.READ, db)
    return db.query(Budget).options(selectinload(Budget.expenses)).filter(
        Budget.trip_id == trip_id
    ).first()


def update_budget(budget_id: int, actor_id: int, patch: BudgetUpdate, db: Session) -> Budget:
    """Update planned amounts, currency or notes."""
    budget, _ = guard(actor_id, ResourceKind.BUDGET, budget_id, Access.WRITE, db)
    changes = patch.model_dump(exclude_unset=True)
    _check_amounts(changes)
    if changes.get("currency"):
        changes["currency"] = changes["currency"].upper()

    with transaction(db):
        for field, value in changes.items():
            if value is None and field != "notes":
                continue
            setattr(budget, field, value)
    db.refresh(budget)
    return budget


def delete_budget(budget_id: int, actor_id: int, db: Session) -> None:
    """Delete a budget and its expenses."""
    budget, _ = guard(actor_id, ResourceKind.BUDGET, budget_id, Access.WRITE, db)
    with transaction(db):
        db.delete(budget)
    logger.info(f"User {actor_id} deleted budget {budget_id}")


def add_expense(budget_id: int, actor_id: int, expense_data: ExpenseCreate, db: Session) -> Expense:
    """Append an expense to the ledger; currency defaults to the budget's."""
    budget, _ = guard(actor_id, ResourceKind.BUDGET, budget_id, Access.WRITE, db)
    if expense_data.amount < 0:
        raise InvalidArgumentError("Expense amount must not be negative")

    expense = Expense(
        budget_id=budget.id,
        amount=expense_data.amount,
        currency=(expense_data.currency or budget.currency).upper(),
        category=expense_data.category,
        description=expense_data.description,
        date=expense_data.date,
        receipt=expense_data.receipt,
    )
    with transaction(db):
        db.add(expense)
    db.refresh(expense)
    return expense


def compute_summary(budget: Budget) -> BudgetSummary:
    """Derived spend figures. Pure: reads only the budget and its loaded expenses."""
    total = Decimal(budget.total_budget or 0)
    actual_spent = sum((Decimal(expense.amount) for expense in budget.expenses), Decimal(0))
    planned_total = sum((Decimal(amount or 0) for amount in budget.planned_amounts().values()), Decimal(0))

    return BudgetSummary(
        actual_spent=actual_spent,
        planned_total=planned_total,
        remaining=total - actual_spent,
        is_over_budget=actual_spent > total,
        percent_used=_percentage(actual_spent, total),
    )


def breakdown(budget: Budget) -> BudgetBreakdown:
    """
    Planned amounts per planned category and actual spend per expense category.

    Each actual category is compared with the planned bucket of the same
    lower-cased name; categories without a bucket compare against 0.
    """
    total = Decimal(budget.total_budget or 0)
    planned = budget.planned_amounts()

    actual: Dict[str, Decimal] = OrderedDict()
    for expense in budget.expenses:
        key = expense.category.value if isinstance(expense.category, ExpenseCategory) else str(expense.category)
        actual[key] = actual.get(key, Decimal(0)) + Decimal(expense.amount)

    comparison = []
    for category, spent in actual.items():
        planned_amount = Decimal(planned.get(category.lower()) or 0)
        comparison.append(CategoryComparison(
            category=category,
            planned=planned_amount,
            actual=spent,
            difference=planned_amount - spent,
        ))

    return BudgetBreakdown(
        planned={
            name: PlannedCategoryItem(amount=Decimal(amount or 0), percentage=_percentage(amount or 0, total))
            for name, amount in planned.items()
        },
        actual=actual,
        comparison=comparison,
    )


def trip_days(trip: Trip) -> int:
    """Whole days between start and end, never less than one."""
    seconds = (trip.end_date - trip.start_date).total_seconds()
    return max(math.ceil(seconds / 86400), 1)


def daily_spending(trip: Trip, budget: Budget) -> DailySpending:
    """Spend per calendar date against the per-day allowance."""
    days = trip_days(trip)
    summary = compute_summary(budget)

    by_date: Dict[str, Decimal] = {}
    for expense in budget.expenses:
        key = expense.date.isoformat()
        by_date[key] = by_date.get(key, Decimal(0)) + Decimal(expense.amount)

    return DailySpending(
        trip_days=days,
        daily_budget=Decimal(budget.total_budget or 0) / days,
        spending_by_date=OrderedDict(sorted(by_date.items())),
        average_daily=summary.actual_spent / days,
    )


def trip_breakdown(trip_id: int, requester_id: Optional[int], db: Session) -> Optional[BudgetBreakdown]:
    """Category breakdown of a trip's budget, or None without a budget."""
    budget = get_trip_budget(trip_id, requester_id, db)
    return breakdown(budget) if budget else None


def trip_daily_spending(trip_id: int, requester_id: Optional[int], db: Session) -> Optional[DailySpending]:
    """Daily spending of a trip's budget, or None without a budget."""
    budget = get_trip_budget(trip_id, requester_id, db)
    if not budget:
        return None
    return daily_spending(budget.trip, budget)


def expense_categories() -> List[str]:
    """All expense categories."""
    return [category.value for category in ExpenseCategory]
