"""Form validation package."""

from fintrack.validation.forms import (
    AMOUNT_MESSAGE,
    BUDGET_AMOUNT_MESSAGE,
    CATEGORY_MESSAGE,
    DATE_MESSAGE,
    MONTH_MESSAGE,
    TYPE_MESSAGE,
    FormIssue,
    FormValidationResult,
    FormValidator,
)

__all__ = [
    "AMOUNT_MESSAGE",
    "BUDGET_AMOUNT_MESSAGE",
    "CATEGORY_MESSAGE",
    "DATE_MESSAGE",
    "MONTH_MESSAGE",
    "TYPE_MESSAGE",
    "FormIssue",
    "FormValidationResult",
    "FormValidator",
]
