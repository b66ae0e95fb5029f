from typing import Iterable, Optional

from app.schemas.budget import Budget, BudgetCalculations, BudgetItem, CalculatedBudget

# Regla 50/30/20
NEEDS_RATIO = 0.5
WANTS_RATIO = 0.3
SAVINGS_RATIO = 0.2


def _items_total(items: Iterable[BudgetItem]) -> float:
    return sum((item.amount for item in items), 0.0)


def _percentage(part: float, total_income: float) -> Optional[float]:
    if total_income == 0:
        return None
    return part / total_income * 100


def calculate_budget(budget: Budget) -> CalculatedBudget:
    """
    Annotates a budget with its 50/30/20 figures.

    Pure: no I/O, no validation. Percentages are None when total income is 0.
    """
    total_income = budget.income + (budget.additional_income or 0)

    ideal_needs = total_income * NEEDS_RATIO
    ideal_wants = total_income * WANTS_RATIO
    ideal_savings = total_income * SAVINGS_RATIO

    needs_total = _items_total(budget.needs)
    wants_total = _items_total(budget.wants)
    savings_total = _items_total(budget.savings)

    total_expenses = needs_total + wants_total + savings_total

    calculations = BudgetCalculations(
        total_income=total_income,
        ideal_needs=ideal_needs,
        ideal_wants=ideal_wants,
        ideal_savings=ideal_savings,
        needs_total=needs_total,
        wants_total=wants_total,
        savings_total=savings_total,
        needs_adjustment=ideal_needs - needs_total,
        wants_adjustment=ideal_wants - wants_total,
        savings_adjustment=ideal_savings - savings_total,
        needs_percentage=_percentage(needs_total, total_income),
        wants_percentage=_percentage(wants_total, total_income),
        savings_percentage=_percentage(savings_total, total_income),
        total_expenses=total_expenses,
        remaining=total_income - total_expenses,
    )
    return CalculatedBudget(**budget.model_dump(), calculations=calculations)
