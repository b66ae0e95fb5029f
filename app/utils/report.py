# app/utils/report.py

from datetime import datetime
from html import escape
from typing import Optional

from app.schemas.budget import CalculatedBudget
from app.utils.recommendations import build_recommendations, format_currency

REPORT_MIME_TYPE = "text/plain"


def _pct(value: Optional[float], decimals: int) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{decimals}f}%"


def report_filename(now: datetime) -> str:
    return f"My_College_Finance_Budget_{now:%Y-%m-%d}.txt"


def render_text_report(budget: CalculatedBudget, now: datetime) -> str:
    """Plain-text report uploaded to Google Drive."""
    calc = budget.calculations
    recommendations = "\n".join(f"• {line}" for line in build_recommendations(calc))

    return f"""
==========================================
       MY COLLEGE FINANCE BUDGET REPORT
          50/30/20 Budget Calculator
==========================================
Date: {now:%m/%d/%Y}
Time: {now:%I:%M:%S %p}

==================== SUMMARY ===================

INCOME:                 {format_currency(calc.total_income)}

BUDGET BREAKDOWN:
---------------------------------------
NEEDS (50%):           {format_currency(calc.needs_total)} ({_pct(calc.needs_percentage, 1)})
WANTS (30%):           {format_currency(calc.wants_total)} ({_pct(calc.wants_percentage, 1)})
SAVINGS (20%):         {format_currency(calc.savings_total)} ({_pct(calc.savings_percentage, 1)})
---------------------------------------
TOTAL EXPENSES:        {format_currency(calc.total_expenses)}
REMAINING:             {format_currency(calc.remaining)}


=============== RECOMMENDATIONS ===============

{recommendations}


==============================================
Generated by MY COLLEGE FINANCE Budget Calculator
Educate • Motivate • Elevate
https://www.mycollegefinance.com
==============================================
"""


def render_email_html(budget: CalculatedBudget) -> str:
    calc = budget.calculations
    items = "".join(f"<li>{escape(line)}</li>" for line in build_recommendations(calc))

    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h1 style="color: #173F8F;">Your 50/30/20 Budget Summary</h1>

  <p>Thank you for using My College Finance's Budget Calculator! Here is your budget summary:</p>

  <div style="margin: 20px 0; padding: 15px; background-color: #f0f4f8; border-radius: 5px;">
    <h2 style="margin-top: 0;">Budget Overview</h2>
    <p><strong>Total Income:</strong> {format_currency(calc.total_income)}</p>
    <p><strong>Needs (50%):</strong> {format_currency(calc.needs_total)} ({_pct(calc.needs_percentage, 0)})</p>
    <p><strong>Wants (30%):</strong> {format_currency(calc.wants_total)} ({_pct(calc.wants_percentage, 0)})</p>
    <p><strong>Savings &amp; Debt (20%):</strong> {format_currency(calc.savings_total)} ({_pct(calc.savings_percentage, 0)})</p>
    <p><strong>Total Expenses:</strong> {format_currency(calc.total_expenses)}</p>
    <p><strong>Remaining:</strong> {format_currency(calc.remaining)}</p>
  </div>

  <h2>Recommendations</h2>
  <ul>{items}</ul>

  <p>Visit <a href="https://mycollegefinance.com">My College Finance</a> for more financial tips and tools.</p>

  <p style="font-size: 12px; color: #666;">
    This is an automated email. Please do not reply to this message.
  </p>
</div>
"""


def render_email_text(budget: CalculatedBudget) -> str:
    calc = budget.calculations
    lines = [
        "Your 50/30/20 Budget Summary",
        "",
        f"Total Income: {format_currency(calc.total_income)}",
        f"Needs (50%): {format_currency(calc.needs_total)} ({_pct(calc.needs_percentage, 0)})",
        f"Wants (30%): {format_currency(calc.wants_total)} ({_pct(calc.wants_percentage, 0)})",
        f"Savings & Debt (20%): {format_currency(calc.savings_total)} ({_pct(calc.savings_percentage, 0)})",
        f"Total Expenses: {format_currency(calc.total_expenses)}",
        f"Remaining: {format_currency(calc.remaining)}",
        "",
        "Recommendations:",
    ]
    lines.extend(f"- {line}" for line in build_recommendations(calc))
    return "\n".join(lines) + "\n"
