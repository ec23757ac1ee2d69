"""Transaction file import.

Reads transaction history exported from the bank sync, or written by hand.
A file holds either a JSON list of rows or an object with a "transactions"
list (the shape of a sync response).

Two row shapes are accepted:

- Native: {"id", "account_id", "amount_cents", "date", "merchant_name",
  "pending", "category"}
- Bank sync: {"transaction_id", "account_id", "amount" (dollars), "date",
  "merchant_name" or "name", "pending", "category"}

Dates are YYYY-MM-DD. Positive amounts are spend.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from .schemas import Transaction

logger = logging.getLogger(__name__)


class TransactionParseError(ValueError):
    """Raised when a transaction row cannot be read."""
    pass


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()


def parse_transaction(row: Dict[str, Any]) -> Transaction:
    """Convert one row (native or bank-sync shape) into a Transaction."""
    if "amount_cents" in row:
        amount_cents = float(row["amount_cents"])
    elif "amount" in row:
        amount_cents = float(round(float(row["amount"]) * 100))
    else:
        raise ValueError("missing amount_cents/amount")

    txn_id = row.get("id") or row.get("transaction_id")
    if not txn_id:
        raise ValueError("missing id/transaction_id")

    if "date" not in row:
        raise ValueError("missing date")

    merchant = row.get("merchant_name") or row.get("name") or ""
    category = row.get("category") or []
    if isinstance(category, str):
        category = [category]

    return Transaction(
        id=str(txn_id),
        account_id=str(row.get("account_id") or ""),
        amount_cents=amount_cents,
        date=_parse_date(row["date"]),
        merchant_name=merchant,
        pending=bool(row.get("pending", False)),
        category=list(category),
    )


def parse_transactions(rows: List[Dict[str, Any]]) -> List[Transaction]:
    """Parse a list of rows.

    Raises:
        TransactionParseError: naming the first bad row index
    """
    transactions = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise TransactionParseError(f"row {index}: expected an object, got {type(row).__name__}")
        try:
            transactions.append(parse_transaction(row))
        except (ValueError, TypeError, ValidationError) as e:
            raise TransactionParseError(f"row {index}: {e}") from e
    return transactions


def load_transactions(path: Union[str, Path]) -> List[Transaction]:
    """Load transactions from a JSON file.

    Raises:
        FileNotFoundError: path does not exist
        TransactionParseError: file is not valid JSON or a row is malformed
    """
    path = Path(path)
    with open(path, "r") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise TransactionParseError(f"{path.name}: invalid JSON: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("transactions", [])
    if not isinstance(payload, list):
        raise TransactionParseError(f"{path.name}: expected a list of transactions")

    transactions = parse_transactions(payload)
    logger.debug(f"loaded {len(transactions)} transaction(s) from {path.name}")
    return transactions
