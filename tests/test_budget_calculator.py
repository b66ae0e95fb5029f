import pytest

from app.schemas.budget import Budget
from app.utils.budget_calculator import calculate_budget


def _budget(income, additional=0, needs=(), wants=(), savings=()):
    return Budget(
        income=income,
        additional_income=additional,
        needs=[{"name": f"n{i}", "amount": a, "category": "needs"} for i, a in enumerate(needs)],
        wants=[{"name": f"w{i}", "amount": a, "category": "wants"} for i, a in enumerate(wants)],
        savings=[{"name": f"s{i}", "amount": a, "category": "savings"} for i, a in enumerate(savings)],
    )


def test_scenario_a(scenario_a):
    calc = calculate_budget(Budget.model_validate(scenario_a)).calculations

    assert calc.total_income == 4000
    assert calc.ideal_needs == pytest.approx(2000)
    assert calc.ideal_wants == pytest.approx(1200)
    assert calc.ideal_savings == pytest.approx(800)
    assert calc.needs_total == 1800
    assert calc.wants_total == 1000
    assert calc.savings_total == 600
    assert calc.total_expenses == 3400
    assert calc.remaining == 600
    assert calc.needs_percentage == pytest.approx(45)
    assert calc.wants_percentage == pytest.approx(25)
    assert calc.savings_percentage == pytest.approx(15)


def test_adjustments_sign():
    calc = calculate_budget(_budget(1000, needs=[700], wants=[100], savings=[200])).calculations

    assert calc.needs_adjustment == pytest.approx(-200)  # over-allocated
    assert calc.wants_adjustment == pytest.approx(200)  # under-allocated
    assert calc.savings_adjustment == pytest.approx(0)


def test_additional_income_is_added():
    calc = calculate_budget(_budget(3000, additional=500.5)).calculations
    assert calc.total_income == 3500.5


@pytest.mark.parametrize("income, additional, needs, wants, savings", [
    (4000, 0, [1800], [1000], [600]),
    (2500.75, 120.1, [300.33, 400.1, 12.01], [99.99], [0.01, 10]),
    (1000, 0, [800], [900], [50]),
    (0.3, 0.1, [0.1, 0.2], [], [0.7]),
])
def test_totals_invariants(income, additional, needs, wants, savings):
    calc = calculate_budget(_budget(income, additional, needs, wants, savings)).calculations

    assert calc.total_expenses == calc.needs_total + calc.wants_total + calc.savings_total
    assert calc.remaining == calc.total_income - calc.total_expenses
    assert calc.needs_percentage + calc.wants_percentage + calc.savings_percentage == pytest.approx(
        calc.total_expenses / calc.total_income * 100
    )


def test_empty_lists():
    calc = calculate_budget(Budget(income=2000)).calculations

    assert calc.needs_total == calc.wants_total == calc.savings_total == 0
    assert calc.total_expenses == 0
    assert calc.remaining == calc.total_income == 2000


def test_zero_income_gives_null_percentages():
    calc = calculate_budget(_budget(0, needs=[100], wants=[50])).calculations

    assert calc.total_income == 0
    assert calc.needs_percentage is None
    assert calc.wants_percentage is None
    assert calc.savings_percentage is None
    assert calc.total_expenses == 150
    assert calc.remaining == -150
    assert calc.ideal_needs == 0


def test_calculation_is_idempotent(scenario_a):
    budget = Budget.model_validate(scenario_a)
    first = calculate_budget(budget)
    second = calculate_budget(budget)

    assert first.calculations == second.calculations
    assert first == second


def test_input_budget_is_preserved(scenario_a):
    budget = Budget.model_validate(scenario_a)
    calculated = calculate_budget(budget)

    assert calculated.income == budget.income
    assert calculated.needs == budget.needs
    assert calculated.wants == budget.wants
    assert calculated.savings == budget.savings
