"""
Transaction Export

Builds downloadable files from a user's transactions. Both formats share
one column layout: Date, Type, Category, Description, Amount.

CSV amounts carry the user's currency symbol and two decimals; the Excel
sheet keeps raw numbers so the spreadsheet can sum them.
"""

import csv
from io import BytesIO
from typing import Iterable, Optional

import pandas as pd

from fintrack.models.records import Transaction


EXPORT_COLUMNS = ["Date", "Type", "Category", "Description", "Amount"]
EXCEL_SHEET_NAME = "Transactions"


def transactions_frame(
    transactions: Iterable[Transaction],
    currency: Optional[str] = None,
) -> pd.DataFrame:
    """
    Tabulate transactions in export layout.

    With a currency, amounts are formatted strings; without, floats.
    """
    rows = [
        [
            t.transaction_date.isoformat(),
            t.type.value.capitalize(),
            t.category,
            t.description,
            f"{currency}{t.amount:.2f}" if currency is not None else t.amount,
        ]
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_transactions_csv(transactions: Iterable[Transaction], currency: str) -> str:
    """CSV text: a bare header line, then rows with every field quoted."""
    frame = transactions_frame(transactions, currency)
    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return ",".join(EXPORT_COLUMNS) + "\n" + body


def export_transactions_excel(transactions: Iterable[Transaction]) -> bytes:
    """An .xlsx workbook with a single Transactions sheet."""
    buffer = BytesIO()
    transactions_frame(transactions).to_excel(
        buffer,
        index=False,
        sheet_name=EXCEL_SHEET_NAME,
        engine="openpyxl",
    )
    return buffer.getvalue()
