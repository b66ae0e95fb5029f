import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from app.core.security import get_password_hash
from app.models.user import User
from app.schemas.budget import Budget, StoredBudget
from app.schemas.user import UserCreate
from app.storage.base import BudgetStorage, UsernameTakenError

logger = logging.getLogger(__name__)


class MemoryStorage(BudgetStorage):
    """Process-lifetime storage; everything is lost on restart."""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._budgets: Dict[int, StoredBudget] = {}
        self._user_current_id = 1
        self._budget_current_id = 1
        # Sync handlers run concurrently in the thread pool
        self._lock = threading.Lock()

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, user: UserCreate) -> User:
        hashed = get_password_hash(user.password)
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise UsernameTakenError(user.username)
            user_id = self._user_current_id
            self._user_current_id += 1
            stored = User(id=user_id, username=user.username, password=hashed)
            self._users[user_id] = stored
        logger.info("Created user %s", user_id)
        return stored

    def save_budget(self, budget: Budget) -> StoredBudget:
        calculated = self.calculate_budget(budget)
        with self._lock:
            budget_id = self._budget_current_id
            self._budget_current_id += 1
            stored = StoredBudget(
                **calculated.model_dump(exclude={"created_at"}),
                id=budget_id,
                created_at=datetime.now(timezone.utc),
            )
            self._budgets[budget_id] = stored
        logger.info("Saved budget %s", budget_id)
        return stored

    def get_budget(self, budget_id: int) -> Optional[StoredBudget]:
        with self._lock:
            return self._budgets.get(budget_id)
