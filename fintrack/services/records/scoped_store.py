"""
Scoped Data Store

Keeps each user's transactions, budgets and settings under their own
key namespace in the shared store:

    {prefix}_{username}_transactions   JSON list, newest first
    {prefix}_{username}_budgets        JSON list, one entry per monthYear
    {prefix}_{username}_settings       JSON object

DESIGN DECISIONS:
1. Every mutator saves the collection it changed before returning.
   There is no batching and no multi-collection commit.
2. The record set carries its username, so a mutator can only ever
   write to the namespace of the set it was handed.
3. A stored collection that is missing, unreadable or fails validation
   loads as its default. Corruption is audited, never raised past load().
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from pydantic import TypeAdapter, ValidationError

from fintrack.audit import AuditLogger
from fintrack.config import TrackerSettings, get_settings
from fintrack.models.records import (
    Budget,
    RecordCollection,
    ScopedRecordSet,
    Transaction,
    TransactionDraft,
    UserSettings,
)
from fintrack.services.storage import KeyValueStore, StorageError


_TRANSACTIONS = TypeAdapter(list[Transaction])
_BUDGETS = TypeAdapter(list[Budget])


class CorruptCollectionError(StorageError):
    """A stored collection could not be parsed or validated."""

    def __init__(self, collection: str, message: str):
        self.collection = collection
        super().__init__(f"Stored {collection} is corrupt: {message}")


def encode_collection(collection: RecordCollection, value: Any) -> str:
    """
    Serialize a collection to the JSON stored under its key.

    Accepts models or plain dicts; either way the value is validated
    before anything is written.
    """
    if collection == RecordCollection.TRANSACTIONS:
        items = _TRANSACTIONS.validate_python(value)
        return _TRANSACTIONS.dump_json(items, by_alias=True).decode("utf-8")
    if collection == RecordCollection.BUDGETS:
        items = _BUDGETS.validate_python(value)
        return _BUDGETS.dump_json(items, by_alias=True).decode("utf-8")
    return UserSettings.model_validate(value).model_dump_json(by_alias=True)


def decode_collection(collection: RecordCollection, raw: str) -> Any:
    """
    Parse the JSON stored under a collection key.

    Raises:
        CorruptCollectionError: Invalid JSON or records that fail validation
    """
    try:
        if collection == RecordCollection.TRANSACTIONS:
            return _TRANSACTIONS.validate_json(raw)
        if collection == RecordCollection.BUDGETS:
            return collapse_budgets(_BUDGETS.validate_json(raw))
        return UserSettings.model_validate_json(raw)
    except ValidationError as e:
        raise CorruptCollectionError(collection.value, str(e)) from e


def collapse_budgets(budgets: list[Budget]) -> list[Budget]:
    """
    Keep one entry per month_year: the last one, at the first one's position.
    """
    positions: dict[str, int] = {}
    result: list[Budget] = []
    for budget in budgets:
        if budget.month_year in positions:
            result[positions[budget.month_year]] = budget
        else:
            positions[budget.month_year] = len(result)
            result.append(budget)
    return result


class ScopedDataStore:
    """
    Loads and persists per-user record sets.

    Usage:
        records = data_store.load("alice")
        data_store.add_transaction(records, draft)
        data_store.upsert_budget(records, "2024-02", 500)
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[TrackerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self._settings = settings or get_settings()
        self._audit_logger = audit_logger
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def default_settings(self, username: str) -> UserSettings:
        """Settings for a user seen for the first time."""
        return UserSettings(
            display_name=username,
            currency=self._settings.default_currency,
        )

    # -------------------------------------------------------------------------
    # Load / save
    # -------------------------------------------------------------------------

    def _read(self, username: str, collection: RecordCollection) -> Any:
        """Stored value of one collection, or None if absent or unusable."""
        key = self._settings.user_key(username, collection.value)
        try:
            raw = self._store.get_item(key)
            if raw is None:
                return None
            return decode_collection(collection, raw)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_collection_corrupt(
                    username=username,
                    collection=collection.value,
                    error_message=str(e),
                )
            return None

    def load(self, username: str) -> ScopedRecordSet:
        """
        Load everything a user owns.

        Each collection falls back to its default on its own: corrupt
        budgets do not cost the user their transactions.
        """
        transactions = self._read(username, RecordCollection.TRANSACTIONS)
        budgets = self._read(username, RecordCollection.BUDGETS)
        settings = self._read(username, RecordCollection.SETTINGS)

        return ScopedRecordSet(
            username=username,
            transactions=transactions if transactions is not None else [],
            budgets=budgets if budgets is not None else [],
            settings=settings if settings is not None else self.default_settings(username),
        )

    def save(
        self,
        username: str,
        collection_name: Union[RecordCollection, str],
        value: Any,
    ) -> None:
        """
        Serialize and write one collection.

        Raises:
            ValueError: Unknown collection name or invalid records
            StorageError: If the store write fails
        """
        collection = RecordCollection(collection_name)
        self._store.set_item(
            self._settings.user_key(username, collection.value),
            encode_collection(collection, value),
        )

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def _next_transaction_id(self, existing: list[Transaction], now: datetime) -> int:
        stamp = int(now.timestamp() * 1000)
        highest = max((t.id for t in existing), default=0)
        return max(stamp, highest + 1)

    def add_transaction(
        self,
        record_set: ScopedRecordSet,
        draft: Union[TransactionDraft, dict],
    ) -> Transaction:
        """Record a transaction at the head of the list and save."""
        if not isinstance(draft, TransactionDraft):
            draft = TransactionDraft.model_validate(draft)

        now = self._clock()
        transaction = Transaction(
            **draft.model_dump(include=set(TransactionDraft.model_fields)),
            id=self._next_transaction_id(record_set.transactions, now),
            timestamp=now,
        )

        transactions = [transaction, *record_set.transactions]
        self.save(record_set.username, RecordCollection.TRANSACTIONS, transactions)
        record_set.transactions = transactions
        return transaction

    def upsert_budget(
        self,
        record_set: ScopedRecordSet,
        month_year: str,
        amount: float,
    ) -> Budget:
        """
        Set the budget for a month and save.

        Replaces the existing entry for month_year in place (exact string
        match) or appends a new one.
        """
        budget = Budget(month_year=month_year, budget_amount=amount)

        budgets = list(record_set.budgets)
        for index, existing in enumerate(budgets):
            if existing.month_year == month_year:
                budgets[index] = budget
                break
        else:
            budgets.append(budget)

        self.save(record_set.username, RecordCollection.BUDGETS, budgets)
        record_set.budgets = budgets
        return budget

    def update_settings(
        self,
        record_set: ScopedRecordSet,
        **changes: Any,
    ) -> UserSettings:
        """
        Merge changes into the settings record and save.

        Fields not named keep their current values.

        Raises:
            ValueError: Unknown field name or invalid value
        """
        unknown = set(changes) - set(UserSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown settings field(s): {', '.join(sorted(unknown))}")

        merged = UserSettings.model_validate(
            {**record_set.settings.model_dump(), **changes}
        )
        self.save(record_set.username, RecordCollection.SETTINGS, merged)
        record_set.settings = merged
        return merged

    def toggle_dark_mode(self, record_set: ScopedRecordSet) -> UserSettings:
        return self.update_settings(
            record_set, dark_mode=not record_set.settings.dark_mode
        )
