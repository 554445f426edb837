"""Summary and export package."""

from fintrack.queries.export import (
    export_transactions_csv,
    export_transactions_excel,
    transactions_frame,
)
from fintrack.queries.summaries import (
    BudgetOverview,
    CategoryTotal,
    MonthlyTotal,
    Totals,
    budget_overview,
    budgets_newest_first,
    category_breakdown,
    current_month_key,
    month_spending,
    monthly_trend,
    totals,
)

__all__ = [
    "BudgetOverview",
    "CategoryTotal",
    "MonthlyTotal",
    "Totals",
    "budget_overview",
    "budgets_newest_first",
    "category_breakdown",
    "current_month_key",
    "export_transactions_csv",
    "export_transactions_excel",
    "month_spending",
    "monthly_trend",
    "totals",
    "transactions_frame",
]
