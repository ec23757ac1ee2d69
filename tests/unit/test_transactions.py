"""Tests for transaction file import."""
import json
from datetime import date

import pytest

from dayboard.sdk.transactions import (
    TransactionParseError,
    load_transactions,
    parse_transaction,
    parse_transactions,
)


NATIVE_ROW = {
    "id": "t1",
    "account_id": "acct-1",
    "amount_cents": 999,
    "date": "2024-06-01",
    "merchant_name": "Spotify",
    "pending": False,
    "category": ["Entertainment"],
}

SYNC_ROW = {
    "transaction_id": "abc123",
    "account_id": "acct-1",
    "amount": 15.99,
    "date": "2024-06-02",
    "name": "NETFLIX.COM",
    "pending": True,
    "category": "Service",
}


class TestParseTransaction:
    """Native and bank-sync row shapes."""

    def test_native_row(self):
        txn = parse_transaction(NATIVE_ROW)

        assert txn.id == "t1"
        assert txn.amount_cents == 999
        assert txn.date == date(2024, 6, 1)
        assert txn.merchant_name == "Spotify"
        assert txn.category == ["Entertainment"]
        assert txn.pending is False

    def test_sync_row(self):
        txn = parse_transaction(SYNC_ROW)

        assert txn.id == "abc123"
        assert txn.amount_cents == 1599
        assert txn.merchant_name == "NETFLIX.COM"
        assert txn.pending is True
        assert txn.category == ["Service"]

    def test_merchant_name_preferred_over_name(self):
        txn = parse_transaction({**SYNC_ROW, "merchant_name": "Netflix"})
        assert txn.merchant_name == "Netflix"

    def test_datetime_string(self):
        txn = parse_transaction({**NATIVE_ROW, "date": "2024-06-01T10:15:00Z"})
        assert txn.date == date(2024, 6, 1)

    def test_negative_amount_kept(self):
        """Refunds load fine; the detector is what skips them."""
        assert parse_transaction({**NATIVE_ROW, "amount_cents": -500}).amount_cents == -500

    def test_missing_amount(self):
        row = {k: v for k, v in NATIVE_ROW.items() if k != "amount_cents"}
        with pytest.raises(ValueError, match="amount"):
            parse_transaction(row)

    def test_missing_id(self):
        row = {k: v for k, v in NATIVE_ROW.items() if k != "id"}
        with pytest.raises(ValueError, match="id"):
            parse_transaction(row)


class TestParseTransactions:
    def test_reports_bad_row_index(self):
        rows = [NATIVE_ROW, {**NATIVE_ROW, "id": "t2", "date": "June 1"}]
        with pytest.raises(TransactionParseError, match="row 1"):
            parse_transactions(rows)

    def test_non_object_row(self):
        with pytest.raises(TransactionParseError, match="row 0: expected an object"):
            parse_transactions(["not a row"])


class TestLoadTransactions:
    """JSON files holding a list or a sync response object."""

    def test_list_file(self, tmp_path):
        path = tmp_path / "txns.json"
        path.write_text(json.dumps([NATIVE_ROW, SYNC_ROW]))

        txns = load_transactions(path)
        assert [t.id for t in txns] == ["t1", "abc123"]

    def test_sync_response_file(self, tmp_path):
        path = tmp_path / "sync.json"
        path.write_text(json.dumps({"transactions": [SYNC_ROW], "next_cursor": "x"}))

        assert len(load_transactions(str(path))) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(TransactionParseError, match="invalid JSON"):
            load_transactions(path)

    def test_wrong_top_level_type(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps("hello"))
        with pytest.raises(TransactionParseError, match="expected a list"):
            load_transactions(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_transactions(tmp_path / "missing.json")
