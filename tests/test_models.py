"""
Tests for fintrack models

Test strategy:
1. Unit tests for individual components (models, codec, directory, store)
2. Flow tests for the session lifecycle against an in-memory store
3. No real filesystem outside pytest's tmp_path
"""

import pytest
from datetime import date, datetime, timezone

from fintrack.models.records import (
    CURRENCY_OPTIONS,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Budget,
    ScopedRecordSet,
    Transaction,
    TransactionDraft,
    TransactionType,
    UserSettings,
    categories_for,
)
from fintrack.models.auth import AuthResult, Credential, SessionState, TokenClaims
from fintrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestTransactionModels:
    """Tests for transaction models."""

    def test_draft_creation_by_alias(self):
        """Test drafts accept the stored 'date' key."""
        draft = TransactionDraft.model_validate({
            "type": "expense",
            "category": "Food",
            "amount": 12.5,
            "date": "2024-01-05",
        })
        assert draft.type == TransactionType.EXPENSE
        assert draft.transaction_date == date(2024, 1, 5)
        assert draft.description == ""

    def test_draft_creation_by_field_name(self):
        draft = TransactionDraft(
            type=TransactionType.INCOME,
            category="Salary",
            amount=1000,
            transaction_date=date(2024, 2, 1),
        )
        assert draft.month_year == "2024-02"
        assert draft.is_expense is False

    def test_draft_strips_whitespace(self):
        draft = TransactionDraft(
            type="expense",
            category="  Food  ",
            amount=1,
            transaction_date=date(2024, 1, 1),
        )
        assert draft.category == "Food"

    @pytest.mark.parametrize("amount", [0, -1, float("inf"), float("nan")])
    def test_draft_rejects_non_positive_amount(self, amount):
        """Test that amounts must be positive and finite."""
        with pytest.raises(ValueError):
            TransactionDraft(
                type="expense",
                category="Food",
                amount=amount,
                transaction_date=date(2024, 1, 1),
            )

    def test_draft_text_fields_are_unbounded(self):
        """Test long categories and descriptions are stored as entered."""
        draft = TransactionDraft(
            type="expense",
            category="C" * 250,
            amount=1,
            transaction_date=date(2024, 1, 1),
            description="x" * 5000,
        )
        assert len(draft.category) == 250
        assert len(draft.description) == 5000

    def test_draft_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            TransactionDraft(
                type="transfer",
                category="Food",
                amount=1,
                transaction_date=date(2024, 1, 1),
            )

    def test_transaction_serializes_with_stored_keys(self):
        """Test that dumps use the keys the stored collections use."""
        transaction = Transaction(
            id=1704456000000,
            type="expense",
            category="Food",
            amount=12.5,
            transaction_date=date(2024, 1, 5),
            description="Lunch",
            timestamp=datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc),
        )
        dumped = transaction.model_dump(mode="json", by_alias=True)
        assert dumped["date"] == "2024-01-05"
        assert dumped["type"] == "expense"
        assert dumped["id"] == 1704456000000
        assert "transaction_date" not in dumped

    def test_transaction_accepts_browser_timestamp(self):
        transaction = Transaction.model_validate({
            "id": 1,
            "type": "income",
            "category": "Gift",
            "amount": 20,
            "date": "2024-03-01",
            "description": "",
            "timestamp": "2024-03-01T09:15:00.000Z",
        })
        assert transaction.timestamp.tzinfo is not None


class TestBudgetModel:
    """Tests for the Budget model."""

    def test_budget_aliases(self):
        budget = Budget.model_validate({"monthYear": "2024-02", "budgetAmount": 500})
        assert budget.month_year == "2024-02"
        assert budget.budget_amount == 500
        assert budget.model_dump(by_alias=True) == {
            "monthYear": "2024-02",
            "budgetAmount": 500.0,
        }

    def test_budget_allows_zero(self):
        assert Budget(month_year="2024-02", budget_amount=0).budget_amount == 0

    def test_budget_rejects_negative(self):
        with pytest.raises(ValueError):
            Budget(month_year="2024-02", budget_amount=-1)

    @pytest.mark.parametrize("month_year", ["2024-13", "2024-2", "24-02", "2024-02-01", ""])
    def test_budget_rejects_bad_month(self, month_year):
        with pytest.raises(ValueError):
            Budget(month_year=month_year, budget_amount=10)


class TestUserSettingsModel:
    """Tests for UserSettings."""

    def test_defaults(self):
        settings = UserSettings()
        assert settings.display_name == "User"
        assert settings.currency == "$"
        assert settings.profile_picture_url == ""
        assert settings.dark_mode is False

    def test_reads_legacy_keys(self):
        """Test settings written with 'name' and 'isDarkMode' still load."""
        settings = UserSettings.model_validate({
            "profilePictureUrl": "",
            "name": "Alice",
            "currency": "€",
            "isDarkMode": True,
        })
        assert settings.display_name == "Alice"
        assert settings.dark_mode is True

    def test_writes_current_keys(self):
        dumped = UserSettings(display_name="Alice", dark_mode=True).model_dump(by_alias=True)
        assert dumped == {
            "displayName": "Alice",
            "currency": "$",
            "profilePictureUrl": "",
            "darkMode": True,
        }

    def test_currency_name(self):
        assert UserSettings(currency="₹").currency_name == "Indian Rupee"
        assert UserSettings(currency="BTC").currency_name == "BTC"


class TestScopedRecordSet:

    def test_budget_for(self):
        records = ScopedRecordSet(
            username="alice",
            budgets=[Budget(month_year="2024-02", budget_amount=500)],
        )
        assert records.budget_for("2024-02").budget_amount == 500
        assert records.budget_for("2024-03") is None

    def test_defaults_are_empty(self):
        records = ScopedRecordSet(username="alice")
        assert records.transactions == []
        assert records.budgets == []


class TestCategories:
    """Tests for the fixed vocabularies."""

    def test_categories_for_type(self):
        assert categories_for(TransactionType.EXPENSE) == EXPENSE_CATEGORIES
        assert categories_for("income") == INCOME_CATEGORIES

    def test_categories_for_returns_copy(self):
        categories_for(TransactionType.EXPENSE).append("Nope")
        assert "Nope" not in EXPENSE_CATEGORIES

    def test_currency_options(self):
        assert set(CURRENCY_OPTIONS) == {"$", "€", "£", "¥", "₹", "CAD", "AUD"}


class TestAuthModels:

    def test_credential_directory_entry(self):
        credential = Credential(username="alice", password="pw1")
        assert credential.to_directory_entry() == {"password": "pw1"}

    def test_token_claims_ignore_extra(self):
        claims = TokenClaims.model_validate({"username": "alice", "iat": 1})
        assert claims == TokenClaims(username="alice")

    def test_token_claims_require_username(self):
        with pytest.raises(ValueError):
            TokenClaims(username="")

    def test_auth_result(self):
        result = AuthResult(success=False, state=SessionState.UNAUTHENTICATED, message="x")
        assert result.username is None
        assert result.error_code is None


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.LOGOUT,
            description="User logged out",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.login_failed("alice", "invalid_credentials")
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "login_failed"
        assert log_dict["severity"] == "warning"
        assert log_dict["username"] == "alice"
        assert log_dict["details"] == {"reason": "invalid_credentials"}
        assert log_dict["is_user_action"] is True

    def test_collection_corrupt_event(self):
        event = AuditEventBuilder.collection_corrupt("alice", "budgets", "bad json")
        assert event.event_type == AuditEventType.COLLECTION_CORRUPT
        assert event.details["collection"] == "budgets"
        assert event.error_message == "bad json"

    def test_system_error_event(self):
        event = AuditEventBuilder.system_error("signup_failed", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.details == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
