# app/storage/sql.py

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.security import get_password_hash
from app.models.budget import BudgetRecord
from app.models.user import User
from app.schemas.budget import Budget, BudgetCalculations, StoredBudget
from app.schemas.user import UserCreate
from app.storage.base import BudgetStorage, UsernameTakenError

logger = logging.getLogger(__name__)


def _to_stored_budget(record: BudgetRecord) -> StoredBudget:
    created_at = record.created_at
    # SQLite devuelve datetimes naive; se guardaron en UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return StoredBudget(
        id=record.id,
        income=record.income,
        additional_income=record.additional_income,
        needs=record.needs,
        wants=record.wants,
        savings=record.savings,
        user_id=record.user_id,
        created_at=created_at,
        calculations=BudgetCalculations.model_validate(record.calculations),
    )


class SqlStorage(BudgetStorage):
    """SQLModel-backed storage; ids come from the database sequence."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get_user(self, user_id: int) -> Optional[User]:
        with Session(self.engine) as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with Session(self.engine) as session:
            return session.exec(select(User).where(User.username == username)).first()

    def create_user(self, user: UserCreate) -> User:
        db_user = User(username=user.username, password=get_password_hash(user.password))
        with Session(self.engine) as session:
            session.add(db_user)
            try:
                session.commit()
            except IntegrityError:
                # la restricción UNIQUE de username hace la inserción atómica
                session.rollback()
                raise UsernameTakenError(user.username)
            session.refresh(db_user)
        logger.info("Created user %s", db_user.id)
        return db_user

    def save_budget(self, budget: Budget) -> StoredBudget:
        calculated = self.calculate_budget(budget)
        data = calculated.model_dump(mode="json", by_alias=True)
        record = BudgetRecord(
            income=calculated.income,
            additional_income=calculated.additional_income,
            needs=data["needs"],
            wants=data["wants"],
            savings=data["savings"],
            calculations=data["calculations"],
            user_id=calculated.user_id,
            created_at=datetime.now(timezone.utc),
        )
        with Session(self.engine) as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            stored = _to_stored_budget(record)
        logger.info("Saved budget %s", stored.id)
        return stored

    def get_budget(self, budget_id: int) -> Optional[StoredBudget]:
        with Session(self.engine) as session:
            record = session.get(BudgetRecord, budget_id)
            if not record:
                return None
            return _to_stored_budget(record)
