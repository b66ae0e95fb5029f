import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from app.api.deps import get_storage
from app.schemas.budget import Budget, BudgetRecommendations, CalculatedBudget, StoredBudget
from app.storage.base import BudgetStorage
from app.utils.recommendations import build_recommendations
from app.utils.report import render_text_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/budget", tags=["budget"])


@router.post("/calculate", response_model=CalculatedBudget)
def calculate(budget: Budget, storage: BudgetStorage = Depends(get_storage)):
    try:
        return storage.calculate_budget(budget)
    except Exception:
        logger.exception("Budget calculation failed")
        raise HTTPException(status_code=500, detail="Failed to calculate budget")


@router.post("/recommendations", response_model=BudgetRecommendations)
def recommendations(budget: Budget, storage: BudgetStorage = Depends(get_storage)):
    """Calculations plus the advisory list, in presentation order."""
    try:
        calculated = storage.calculate_budget(budget)
    except Exception:
        logger.exception("Budget calculation failed")
        raise HTTPException(status_code=500, detail="Failed to calculate budget")
    return BudgetRecommendations(
        calculations=calculated.calculations,
        recommendations=build_recommendations(calculated.calculations),
    )


@router.post("/save", response_model=StoredBudget)
def save(budget: Budget, storage: BudgetStorage = Depends(get_storage)):
    try:
        return storage.save_budget(budget)
    except Exception:
        logger.exception("Saving budget failed")
        raise HTTPException(status_code=500, detail="Failed to save budget")


def _get_or_404(storage: BudgetStorage, budget_id: int) -> StoredBudget:
    try:
        budget = storage.get_budget(budget_id)
    except Exception:
        logger.exception("Loading budget %s failed", budget_id)
        raise HTTPException(status_code=500, detail="Failed to retrieve budget")
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.get("/{budget_id}", response_model=StoredBudget)
def get_budget(budget_id: int, storage: BudgetStorage = Depends(get_storage)):
    return _get_or_404(storage, budget_id)


@router.get("/{budget_id}/report", response_class=PlainTextResponse)
def get_budget_report(budget_id: int, storage: BudgetStorage = Depends(get_storage)):
    budget = _get_or_404(storage, budget_id)
    return render_text_report(budget, budget.created_at)
