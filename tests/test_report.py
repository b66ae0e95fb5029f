from datetime import datetime

from app.schemas.budget import Budget
from app.utils.budget_calculator import calculate_budget
from app.utils.report import render_email_html, render_text_report, report_filename

NOW = datetime(2024, 3, 5, 14, 30, 0)


def test_report_filename():
    assert report_filename(NOW) == "My_College_Finance_Budget_2024-03-05.txt"


def test_text_report(scenario_a):
    text = render_text_report(calculate_budget(Budget.model_validate(scenario_a)), NOW)

    assert "Date: 03/05/2024" in text
    assert "INCOME:                 $4,000.00" in text
    assert "NEEDS (50%):           $1,800.00 (45.0%)" in text
    assert "WANTS (30%):           $1,000.00 (25.0%)" in text
    assert "SAVINGS (20%):         $600.00 (15.0%)" in text
    assert "TOTAL EXPENSES:        $3,400.00" in text
    assert "REMAINING:             $600.00" in text
    assert "• Try to increase your savings rate to build financial security" in text
    assert text.index("increase your savings") < text.index("surplus of $600.00")


def test_text_report_zero_income():
    text = render_text_report(calculate_budget(Budget(income=0)), NOW)

    assert "NEEDS (50%):           $0.00 (n/a)" in text


def test_email_html_escapes_and_rounds(scenario_a):
    html = render_email_html(calculate_budget(Budget.model_validate(scenario_a)))

    assert "<strong>Needs (50%):</strong> $1,800.00 (45%)" in html
    assert "Savings &amp; Debt (20%)" in html
    assert "<li>Allocate your surplus of $600.00 to savings or debt repayment</li>" in html
