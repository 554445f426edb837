"""
Record Summaries

DESIGN DECISION: Aggregations are DETERMINISTIC and computed only from
the record set handed in. Dashboards and charts render these results;
they never compute totals on their own.

Months are 'YYYY-MM' strings throughout, the same key budgets use, so a
budget and the spending it limits always line up.
"""

from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel

from fintrack.models.records import Budget, ScopedRecordSet, Transaction


# Progress thresholds, in percent of budget spent
WARNING_THRESHOLD = 80.0
OVER_THRESHOLD = 100.0


class BudgetOverview(BaseModel):
    """Budget against spending for one month."""

    month_year: str
    budget_amount: float
    spending: float
    remaining: float
    progress_percent: float
    progress_level: str  # ok | warning | over


class CategoryTotal(BaseModel):
    category: str
    total: float


class MonthlyTotal(BaseModel):
    month_year: str
    spending: float


class Totals(BaseModel):
    """All-time income against expenses."""

    income: float
    expense: float
    balance: float


def current_month_key(today: Optional[date] = None) -> str:
    """YYYY-MM for today (or the given day)."""
    return (today or date.today()).strftime("%Y-%m")


def _expenses(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.is_expense]


def month_spending(transactions: Iterable[Transaction], month_year: str) -> float:
    """Total expenses dated in a month."""
    return sum(t.amount for t in _expenses(transactions) if t.month_year == month_year)


def budget_overview(
    record_set: ScopedRecordSet,
    month_year: Optional[str] = None,
) -> BudgetOverview:
    """
    Compare a month's budget with its expenses.

    A month with no budget has budget 0 and progress 0, whatever was spent.
    """
    month_year = month_year or current_month_key()
    budget = record_set.budget_for(month_year)
    budget_amount = budget.budget_amount if budget else 0.0
    spending = month_spending(record_set.transactions, month_year)

    progress = (spending / budget_amount) * 100 if budget_amount > 0 else 0.0
    if progress < WARNING_THRESHOLD:
        level = "ok"
    elif progress < OVER_THRESHOLD:
        level = "warning"
    else:
        level = "over"

    return BudgetOverview(
        month_year=month_year,
        budget_amount=budget_amount,
        spending=spending,
        remaining=budget_amount - spending,
        progress_percent=progress,
        progress_level=level,
    )


def category_breakdown(
    transactions: Iterable[Transaction],
    month_year: Optional[str] = None,
) -> list[CategoryTotal]:
    """
    Expense totals per category for one month.

    Categories appear in the order first met in the list.
    """
    month_year = month_year or current_month_key()
    totals: dict[str, float] = {}
    for transaction in _expenses(transactions):
        if transaction.month_year == month_year:
            totals[transaction.category] = totals.get(transaction.category, 0.0) + transaction.amount

    return [CategoryTotal(category=name, total=total) for name, total in totals.items()]


def monthly_trend(transactions: Iterable[Transaction]) -> list[MonthlyTotal]:
    """Expense totals per month, oldest month first."""
    totals: dict[str, float] = {}
    for transaction in _expenses(transactions):
        totals[transaction.month_year] = totals.get(transaction.month_year, 0.0) + transaction.amount

    return [
        MonthlyTotal(month_year=month, spending=totals[month])
        for month in sorted(totals)
    ]


def totals(transactions: Iterable[Transaction]) -> Totals:
    income = 0.0
    expense = 0.0
    for transaction in transactions:
        if transaction.is_expense:
            expense += transaction.amount
        else:
            income += transaction.amount
    return Totals(income=income, expense=expense, balance=income - expense)


def budgets_newest_first(budgets: Iterable[Budget]) -> list[Budget]:
    """Budgets for display, latest month first. Does not reorder storage."""
    return sorted(budgets, key=lambda b: b.month_year, reverse=True)
