# app/storage/base.py

from abc import ABC, abstractmethod
from typing import Optional

from app.models.user import User
from app.schemas.budget import Budget, CalculatedBudget, StoredBudget
from app.schemas.user import UserCreate
from app.utils.budget_calculator import calculate_budget


class UsernameTakenError(Exception):
    def __init__(self, username: str):
        super().__init__(f"Username already registered: {username}")
        self.username = username


class BudgetStorage(ABC):
    """
    Persistence for users and saved budgets.

    Lookups return None for unknown ids. Budget ids are assigned on save,
    increase monotonically and are never reused.
    """

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def create_user(self, user: UserCreate) -> User:
        """Raises UsernameTakenError when the username already exists."""

    def calculate_budget(self, budget: Budget) -> CalculatedBudget:
        return calculate_budget(budget)

    @abstractmethod
    def save_budget(self, budget: Budget) -> StoredBudget:
        ...

    @abstractmethod
    def get_budget(self, budget_id: int) -> Optional[StoredBudget]:
        ...
