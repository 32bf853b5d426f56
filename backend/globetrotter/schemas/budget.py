"""
Pydantic schemas for Budget and Expense entities.
"""
from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from globetrotter.models.expense import ExpenseCategory


class BudgetBase(BaseModel):
    """Base budget schema with the seven planned category amounts."""
    total_budget: Decimal
    accommodation: Decimal = Decimal(0)
    transportation: Decimal = Decimal(0)
    food: Decimal = Decimal(0)
    activities: Decimal = Decimal(0)
    shopping: Decimal = Decimal(0)
    emergency: Decimal = Decimal(0)
    other: Decimal = Decimal(0)
    notes: Optional[str] = None


class BudgetCreate(BudgetBase):
    """Schema for budget creation."""
    trip_id: int
    currency: Optional[str] = None


class BudgetUpdate(BaseModel):
    """Schema for budget update."""
    total_budget: Optional[Decimal] = None
    currency: Optional[str] = None
    accommodation: Optional[Decimal] = None
    transportation: Optional[Decimal] = None
    food: Optional[Decimal] = None
    activities: Optional[Decimal] = None
    shopping: Optional[Decimal] = None
    emergency: Optional[Decimal] = None
    other: Optional[Decimal] = None
    notes: Optional[str] = None


class ExpenseCreate(BaseModel):
    """Schema for appending an expense; currency falls back to the budget's."""
    amount: Decimal
    currency: Optional[str] = None
    category: ExpenseCategory
    description: Optional[str] = None
    date: dt_date
    receipt: Optional[str] = None


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    budget_id: int
    amount: Decimal
    currency: str
    category: ExpenseCategory
    description: Optional[str] = None
    date: dt_date
    receipt: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class BudgetSummary(BaseModel):
    """Derived spend figures for a budget."""
    actual_spent: Decimal
    planned_total: Decimal
    remaining: Decimal
    is_over_budget: bool
    percent_used: float


class BudgetResponse(BudgetBase):
    """Schema for budget response."""
    id: int
    trip_id: int
    currency: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BudgetDetailResponse(BudgetResponse):
    """Budget with its expense ledger and derived figures."""
    expenses: List[ExpenseResponse] = []
    calculated: Optional[BudgetSummary] = None


class PlannedCategoryItem(BaseModel):
    """Planned amount for one category and its share of the total."""
    amount: Decimal
    percentage: float


class CategoryComparison(BaseModel):
    """Actual spend in a category against its planned amount."""
    category: str
    planned: Decimal
    actual: Decimal
    difference: Decimal


class BudgetBreakdown(BaseModel):
    """Planned vs actual spending per category."""
    planned: Dict[str, PlannedCategoryItem]
    actual: Dict[str, Decimal]
    comparison: List[CategoryComparison] = []


class DailySpending(BaseModel):
    """Spending per calendar day against the daily allowance."""
    trip_days: int
    daily_budget: Decimal
    spending_by_date: Dict[str, Decimal]
    average_daily: Decimal
