"""Tests for the SQLAlchemy store returning domain models."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain import entities
from ledgerkit.domain.entities import AccountType, LineInput
from ledgerkit.domain.errors import AccountNotFoundError, EntryNotFoundError


class TestDatabaseInterface:
    """Tests to verify the Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, empty_db):
        account_id = empty_db.create_account(
            code="100", name="Cash", account_type=AccountType.ASSET, category="Current Assets"
        )

        account = empty_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.id == account_id
        assert isinstance(account.created_at, datetime)

    def test_missing_rows_return_none(self, empty_db):
        assert empty_db.get_account("nope") is None
        assert empty_db.get_account_by_code("100") is None
        assert empty_db.get_journal_entry("nope") is None

    def test_entry_lines_keep_order(self, temp_db):
        cash = temp_db.get_account_by_code("100")
        sales = temp_db.get_account_by_code("400")
        tax = temp_db.get_account_by_code("210")

        entry_id = temp_db.create_journal_entry(
            date=date(2024, 1, 15),
            description="Sale with tax",
            lines=[
                LineInput(account_id=cash.id, debit_amount=Decimal("110.00")),
                LineInput(account_id=sales.id, credit_amount=Decimal("100.00")),
                LineInput(account_id=tax.id, credit_amount=Decimal("10.00")),
            ],
        )
        entry = temp_db.get_journal_entry(entry_id)

        assert isinstance(entry, entities.JournalEntry)
        assert [line.account_id for line in entry.lines] == [cash.id, sales.id, tax.id]
        assert all(line.journal_entry_id == entry_id for line in entry.lines)
        assert temp_db.get_account_line_count(cash.id) == 1

    def test_update_unknown_rows(self, empty_db):
        with pytest.raises(AccountNotFoundError):
            empty_db.update_account("nope", name="X")
        with pytest.raises(EntryNotFoundError):
            empty_db.delete_journal_entry("nope")

    def test_clear(self, temp_db):
        cash = temp_db.get_account_by_code("100")
        equity = temp_db.get_account_by_code("300")
        temp_db.create_journal_entry(
            date=date(2024, 1, 1),
            description="Investment",
            lines=[
                LineInput(account_id=cash.id, debit_amount=Decimal("1.00")),
                LineInput(account_id=equity.id, credit_amount=Decimal("1.00")),
            ],
        )

        temp_db.clear()

        assert temp_db.list_accounts() == []
        assert temp_db.list_journal_entries() == []


def test_file_database_persists(tmp_path):
    db_path = tmp_path / "nested" / "ledger.db"

    db = create_sqlite_database(database_path=str(db_path))
    db.connect()
    db.create_account(code="100", name="Cash", account_type=AccountType.ASSET, category="Current Assets")
    db.disconnect()

    reopened = create_sqlite_database(database_path=str(db_path))
    reopened.connect()
    assert reopened.get_account_by_code("100").name == "Cash"
    reopened.disconnect()


def test_in_memory_by_default(monkeypatch):
    monkeypatch.delenv("LEDGERKIT_DB_PATH", raising=False)
    db = create_sqlite_database()
    assert db.database_url == "sqlite://"
