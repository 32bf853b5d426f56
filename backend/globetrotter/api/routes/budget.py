"""
Budget and expense routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from globetrotter.db.session import get_db
from globetrotter.models.user import User
from globetrotter.schemas.budget import (
    BudgetCreate, BudgetUpdate, BudgetResponse, BudgetDetailResponse,
    BudgetBreakdown, DailySpending, ExpenseCreate, ExpenseResponse
)
from globetrotter.api.dependencies import get_current_user, get_optional_user, actor_id
from globetrotter.services import budget_service

router = APIRouter(prefix="/budget", tags=["budget"])


def _budget_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Budget not found"
    )


@router.get("/categories", response_model=List[str])
async def get_expense_categories():
    """All expense categories."""
    return budget_service.expense_categories()


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget_data: BudgetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create the budget of a trip."""
    return budget_service.create_budget(current_user.id, budget_data, db)


@router.get("/trip/{trip_id}", response_model=BudgetDetailResponse)
async def get_trip_budget(
    trip_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Budget of a trip with expenses and spend figures."""
    budget = budget_service.get_trip_budget(trip_id, actor_id(current_user), db)
    if not budget:
        raise _budget_not_found()

    detail = BudgetDetailResponse.model_validate(budget)
    detail.calculated = budget_service.compute_summary(budget)
    return detail


@router.get("/trip/{trip_id}/breakdown", response_model=BudgetBreakdown)
async def get_budget_breakdown(
    trip_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Planned vs actual spending per category."""
    result = budget_service.trip_breakdown(trip_id, actor_id(current_user), db)
    if result is None:
        raise _budget_not_found()
    return result


@router.get("/trip/{trip_id}/daily", response_model=DailySpending)
async def get_daily_spending(
    trip_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Spending per day against the daily allowance."""
    result = budget_service.trip_daily_spending(trip_id, actor_id(current_user), db)
    if result is None:
        raise _budget_not_found()
    return result


@router.put("/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: int,
    patch: BudgetUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update planned amounts."""
    return budget_service.update_budget(budget_id, current_user.id, patch, db)


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a budget and its expenses."""
    budget_service.delete_budget(budget_id, current_user.id, db)


@router.post("/{budget_id}/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    budget_id: int,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record an expense against a budget."""
    return budget_service.add_expense(budget_id, current_user.id, expense_data, db)
