# app/models/budget.py

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

class BudgetRecord(SQLModel, table=True):
    __tablename__ = "budget"

    id: Optional[int] = Field(default=None, primary_key=True)
    income: float
    additional_income: float = Field(default=0)
    # Items are kept as the camelCase JSON the API receives
    needs: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    wants: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    savings: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    calculations: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    user_id: Optional[str] = Field(default=None, index=True)
    created_at: datetime
