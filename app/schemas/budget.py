# app/schemas/budget.py

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field

from app.models.enums import BudgetCategory
from app.schemas.base import CamelModel

# Strict: "12" or true are rejected instead of being coerced to numbers
Amount = Annotated[float, Field(ge=0, strict=True, allow_inf_nan=False)]


class BudgetItem(CamelModel):
    id: Optional[int] = None
    name: str
    amount: Amount
    category: BudgetCategory


class Budget(CamelModel):
    income: Amount
    additional_income: Amount = 0
    needs: List[BudgetItem] = Field(default_factory=list)
    wants: List[BudgetItem] = Field(default_factory=list)
    savings: List[BudgetItem] = Field(default_factory=list)
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None


class BudgetCalculations(CamelModel):
    total_income: float
    ideal_needs: float
    ideal_wants: float
    ideal_savings: float
    needs_total: float
    wants_total: float
    savings_total: float
    needs_adjustment: float
    wants_adjustment: float
    savings_adjustment: float
    # None when total income is zero
    needs_percentage: Optional[float] = None
    wants_percentage: Optional[float] = None
    savings_percentage: Optional[float] = None
    total_expenses: float
    remaining: float


class CalculatedBudget(Budget):
    calculations: BudgetCalculations


class StoredBudget(CalculatedBudget):
    id: int
    created_at: datetime


class BudgetRecommendations(CamelModel):
    calculations: BudgetCalculations
    recommendations: List[str]
