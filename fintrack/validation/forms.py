"""
Form Validation

Turns raw form input into typed drafts, or into messages the user can act
on. Two stages, as with any input we persist:

STAGE 1 - SCHEMA:
- Amount parses as a number and is in range
- Required fields are present
- Dates and months are well formed

STAGE 2 - SEMANTIC (only if stage 1 passed):
- Category belongs to the chosen transaction type

Semantic findings are warnings: the user may keep a custom category.
Validation never fixes input silently; it reports.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from fintrack.models.records import (
    MONTH_YEAR_PATTERN,
    Budget,
    TransactionDraft,
    TransactionType,
    categories_for,
)


AMOUNT_MESSAGE = "Please enter a valid positive amount."
CATEGORY_MESSAGE = "Please select a category."
DATE_MESSAGE = "Please select a date."
TYPE_MESSAGE = "Please choose income or expense."
BUDGET_AMOUNT_MESSAGE = "Please enter a valid non-negative budget amount."
MONTH_MESSAGE = "Please select a valid month (YYYY-MM)."


class FormIssue(BaseModel):
    """A single problem found in a form."""

    field: str
    message: str
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
    )


class FormValidationResult(BaseModel):
    """Outcome of validating one form submission."""

    issues: list[FormIssue] = Field(default_factory=list)
    transaction: Optional[TransactionDraft] = None
    budget: Optional[Budget] = None

    @property
    def errors(self) -> list[FormIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[FormIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[str]:
        """Message to show when the form can only display one."""
        errors = self.errors
        return errors[0].message if errors else None


def _issues_from(error: ValidationError) -> list[FormIssue]:
    """One error issue per field the model rejected."""
    return [
        FormIssue(
            field=str(detail["loc"][0]) if detail["loc"] else "form",
            message=detail["msg"],
        )
        for detail in error.errors()
    ]


def _parse_amount(value: Any) -> Optional[float]:
    """Parse an amount; None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


class FormValidator:
    """Validates transaction and budget form submissions."""

    def validate_transaction(
        self,
        transaction_type: Any,
        category: Optional[str],
        amount: Any,
        transaction_date: Any,
        description: str = "",
    ) -> FormValidationResult:
        issues: list[FormIssue] = []

        # Stage 1: schema
        try:
            kind = TransactionType(transaction_type)
        except ValueError:
            kind = None
            issues.append(FormIssue(field="type", message=TYPE_MESSAGE))

        parsed_amount = _parse_amount(amount)
        if parsed_amount is None or parsed_amount <= 0:
            issues.append(FormIssue(field="amount", message=AMOUNT_MESSAGE))

        category = (category or "").strip()
        if not category:
            issues.append(FormIssue(field="category", message=CATEGORY_MESSAGE))

        parsed_date = _parse_date(transaction_date) if transaction_date else None
        if parsed_date is None:
            issues.append(FormIssue(field="date", message=DATE_MESSAGE))

        if issues:
            return FormValidationResult(issues=issues)

        # Stage 2: semantic
        allowed = categories_for(kind)
        if category not in allowed:
            issues.append(
                FormIssue(
                    field="category",
                    message=f"'{category}' is not a standard {kind.value} category",
                    severity="warning",
                )
            )

        try:
            draft = TransactionDraft(
                type=kind,
                category=category,
                amount=parsed_amount,
                transaction_date=parsed_date,
                description=(description or "").strip(),
            )
        except ValidationError as e:
            return FormValidationResult(issues=issues + _issues_from(e))
        return FormValidationResult(issues=issues, transaction=draft)

    def validate_budget(self, month_year: Optional[str], amount: Any) -> FormValidationResult:
        issues: list[FormIssue] = []

        month_year = (month_year or "").strip()
        if not re.match(MONTH_YEAR_PATTERN, month_year):
            issues.append(FormIssue(field="monthYear", message=MONTH_MESSAGE))

        parsed_amount = _parse_amount(amount)
        if parsed_amount is None or parsed_amount < 0:
            issues.append(FormIssue(field="budgetAmount", message=BUDGET_AMOUNT_MESSAGE))

        if issues:
            return FormValidationResult(issues=issues)

        try:
            budget = Budget(month_year=month_year, budget_amount=parsed_amount)
        except ValidationError as e:
            return FormValidationResult(issues=_issues_from(e))
        return FormValidationResult(budget=budget)
