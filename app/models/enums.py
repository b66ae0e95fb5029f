from enum import Enum

class BudgetCategory(str, Enum):
    needs = "needs"
    wants = "wants"
    savings = "savings"
