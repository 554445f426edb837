"""
Core Data Models for fintrack

These models define the strict schemas for every record a user owns.
They are designed to:
1. Enforce the record invariants at construction time
2. Serialize to the camelCase JSON the stored collections already use
3. Accept the legacy keys older stored settings were written with

DESIGN DECISION: Amounts are floats, not Decimals. Stored collections are
plain JSON numbers and must round-trip through the store unchanged.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS AND FIXED VOCABULARIES
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class RecordCollection(str, Enum):
    """
    The three collections kept in every user's namespace.

    The value is the suffix of the store key:
    {prefix}_{username}_{value}
    """
    TRANSACTIONS = "transactions"
    BUDGETS = "budgets"
    SETTINGS = "settings"


EXPENSE_CATEGORIES = [
    "Food",
    "Transport",
    "Utilities",
    "Rent",
    "Shopping",
    "Entertainment",
    "Health",
    "Education",
    "Other Expense",
]

INCOME_CATEGORIES = [
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Other Income",
]

# symbol -> display name
CURRENCY_OPTIONS = {
    "$": "US Dollar",
    "€": "Euro",
    "£": "British Pound",
    "¥": "Japanese Yen",
    "₹": "Indian Rupee",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
}

# Shown while nobody is signed in
DEFAULT_DISPLAY_NAME = "User"

MONTH_YEAR_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def categories_for(transaction_type: TransactionType) -> list[str]:
    """Categories offered for a transaction type."""
    if TransactionType(transaction_type) == TransactionType.INCOME:
        return list(INCOME_CATEGORIES)
    return list(EXPENSE_CATEGORIES)


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction as entered by the user, before it is stored.

    The store assigns id and timestamp when the draft is added.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        extra="ignore",
    )

    type: TransactionType = Field(
        ...,
        description="income or expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category label"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Positive amount in the user's currency"
    )
    transaction_date: date = Field(
        ...,
        alias="date",
        description="Calendar date of the transaction"
    )
    description: str = Field(
        default="",
        description="Free-text note, unbounded"
    )

    @property
    def month_year(self) -> str:
        """YYYY-MM bucket this transaction falls into."""
        return self.transaction_date.strftime("%Y-%m")

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class Transaction(TransactionDraft):
    """
    A stored transaction.

    Collections keep these newest-first by insertion.
    """

    id: int = Field(
        ...,
        description="Millisecond stamp, unique within the owner's collection"
    )
    timestamp: datetime = Field(
        ...,
        description="When the transaction was recorded"
    )


# =============================================================================
# BUDGETS
# =============================================================================

class Budget(BaseModel):
    """
    Spending limit for one month.

    CRITICAL: A user's budgets hold at most one entry per month_year.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    month_year: str = Field(
        ...,
        alias="monthYear",
        pattern=MONTH_YEAR_PATTERN,
        description="Month the budget applies to (YYYY-MM)"
    )
    budget_amount: float = Field(
        ...,
        alias="budgetAmount",
        ge=0,
        allow_inf_nan=False,
        description="Non-negative budget amount"
    )


# =============================================================================
# SETTINGS
# =============================================================================

class UserSettings(BaseModel):
    """
    Per-user preferences. A single record per user.

    Older stored settings used 'name' and 'isDarkMode'; both are accepted
    on load and rewritten under the current keys on the next save.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    display_name: str = Field(
        default=DEFAULT_DISPLAY_NAME,
        validation_alias=AliasChoices("displayName", "name"),
        serialization_alias="displayName",
    )
    currency: str = Field(
        default="$",
        min_length=1,
    )
    profile_picture_url: str = Field(
        default="",
        alias="profilePictureUrl",
    )
    dark_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("darkMode", "isDarkMode"),
        serialization_alias="darkMode",
    )

    @property
    def currency_name(self) -> str:
        """Display name of the currency, or the symbol itself if unknown."""
        return CURRENCY_OPTIONS.get(self.currency, self.currency)


# =============================================================================
# SCOPED RECORD SET
# =============================================================================

class ScopedRecordSet(BaseModel):
    """
    Everything one user owns, as loaded into memory for a session.

    The username travels with the collections, so every store call that
    mutates the set knows which namespace it writes to.
    """

    username: str = Field(..., min_length=1)
    transactions: list[Transaction] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)

    def budget_for(self, month_year: str) -> Optional[Budget]:
        """The budget set for a month, if any."""
        for budget in self.budgets:
            if budget.month_year == month_year:
                return budget
        return None
