"""
Expense model for tracking spending against a budget.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from globetrotter.db.base import BaseModel
import enum


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration."""
    ACCOMMODATION = "ACCOMMODATION"
    TRANSPORTATION = "TRANSPORTATION"
    FOOD = "FOOD"
    ACTIVITIES = "ACTIVITIES"
    SHOPPING = "SHOPPING"
    ENTERTAINMENT = "ENTERTAINMENT"
    EMERGENCY = "EMERGENCY"
    OTHER = "OTHER"


class Expense(BaseModel):
    """Single spending event, appended to a budget's ledger."""
    __tablename__ = "expenses"

    budget_id = Column(Integer, ForeignKey("budgets.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(SQLEnum(ExpenseCategory), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    receipt = Column(String(500), nullable=True)

    # Relationships
    budget = relationship("Budget", back_populates="expenses")
