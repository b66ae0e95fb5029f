from typing import List

from app.schemas.budget import BudgetCalculations

# Percentage thresholds of the 50/30/20 rule
NEEDS_LIMIT = 50
WANTS_LIMIT = 30
SAVINGS_LIMIT = 20

EMERGENCY_FUND = "Build an emergency fund equal to 3-6 months of expenses"
KEEP_TRACKING = "Continue to track your spending and adjust your budget as needed"


def format_currency(amount: float) -> str:
    """US dollars, two decimals: 1234.5 -> $1,234.50, -12 -> -$12.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def build_recommendations(calculations: BudgetCalculations) -> List[str]:
    recommendations: List[str] = []

    # Percentage rules do not apply without income
    if calculations.needs_percentage is not None and calculations.needs_percentage > NEEDS_LIMIT:
        recommendations.append("Consider ways to reduce your essential expenses")

    if calculations.wants_percentage is not None and calculations.wants_percentage > WANTS_LIMIT:
        recommendations.append("Look for areas to trim your discretionary spending")

    if calculations.savings_percentage is not None and calculations.savings_percentage < SAVINGS_LIMIT:
        recommendations.append("Try to increase your savings rate to build financial security")

    if calculations.remaining > 0:
        recommendations.append(
            f"Allocate your surplus of {format_currency(calculations.remaining)} to savings or debt repayment"
        )
    elif calculations.remaining < 0:
        recommendations.append(
            f"Find ways to address your deficit of {format_currency(abs(calculations.remaining))}"
        )

    recommendations.append(EMERGENCY_FUND)
    recommendations.append(KEEP_TRACKING)
    return recommendations
