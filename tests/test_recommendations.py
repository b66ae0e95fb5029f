from app.schemas.budget import Budget
from app.utils.budget_calculator import calculate_budget
from app.utils.recommendations import (
    EMERGENCY_FUND,
    KEEP_TRACKING,
    build_recommendations,
    format_currency,
)

REDUCE_NEEDS = "Consider ways to reduce your essential expenses"
TRIM_WANTS = "Look for areas to trim your discretionary spending"
MORE_SAVINGS = "Try to increase your savings rate to build financial security"


def _recommendations(payload):
    return build_recommendations(calculate_budget(Budget.model_validate(payload)).calculations)


def test_scenario_b(scenario_a):
    recs = _recommendations(scenario_a)

    assert MORE_SAVINGS in recs
    assert "Allocate your surplus of $600.00 to savings or debt repayment" in recs
    assert REDUCE_NEEDS not in recs
    assert TRIM_WANTS not in recs
    assert recs[-2:] == [EMERGENCY_FUND, KEEP_TRACKING]


def test_all_rules_fire_in_order():
    recs = _recommendations({
        "income": 1000,
        "needs": [{"name": "Rent", "amount": 600, "category": "needs"}],
        "wants": [{"name": "Travel", "amount": 500, "category": "wants"}],
        "savings": [{"name": "Fund", "amount": 100, "category": "savings"}],
    })

    assert recs == [
        REDUCE_NEEDS,
        TRIM_WANTS,
        MORE_SAVINGS,
        "Find ways to address your deficit of $200.00",
        EMERGENCY_FUND,
        KEEP_TRACKING,
    ]


def test_balanced_budget_only_generic_advice():
    recs = _recommendations({
        "income": 1000,
        "needs": [{"name": "Rent", "amount": 500, "category": "needs"}],
        "wants": [{"name": "Fun", "amount": 300, "category": "wants"}],
        "savings": [{"name": "Fund", "amount": 200, "category": "savings"}],
    })

    assert recs == [EMERGENCY_FUND, KEEP_TRACKING]


def test_zero_income_skips_percentage_rules():
    recs = _recommendations({
        "income": 0,
        "needs": [{"name": "Rent", "amount": 50, "category": "needs"}],
    })

    assert recs == ["Find ways to address your deficit of $50.00", EMERGENCY_FUND, KEEP_TRACKING]


def test_format_currency():
    assert format_currency(600) == "$600.00"
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-12) == "-$12.00"
    assert format_currency(0) == "$0.00"
