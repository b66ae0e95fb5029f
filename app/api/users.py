from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_storage
from app.schemas.user import UserCreate, UserRead
from app.storage.base import BudgetStorage, UsernameTakenError

router = APIRouter(prefix="/api/users", tags=["users"])


# Registro
@router.post("/register", response_model=UserRead)
def register(user_create: UserCreate, storage: BudgetStorage = Depends(get_storage)):
    try:
        user = storage.create_user(user_create)
    except UsernameTakenError:
        raise HTTPException(status_code=400, detail="Username already registered")
    return UserRead(id=user.id, username=user.username)
