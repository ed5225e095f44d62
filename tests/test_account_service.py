"""Tests for AccountService."""

import threading

import pytest

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.chart import STANDARD_ACCOUNTS, reset_ledger, seed_standard_chart
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    DuplicateCodeError,
    ValidationError,
)


class TestCreateAccount:
    """Tests for creating accounts."""

    def test_create_account(self, account_service):
        account = account_service.create_account(
            code="105", name="Petty Cash", account_type="asset", category="Current Assets"
        )

        assert account.code == "105"
        assert account.type is AccountType.ASSET
        assert len(account.id) == 36
        assert account_service.get_account(account.id) == account

    def test_create_account_with_parent(self, account_service, ids):
        account = account_service.create_account(
            code="121",
            name="Raw Materials",
            account_type=AccountType.ASSET,
            category="Inventory",
            parent_id=ids["120"],
        )
        assert account.parent_id == ids["120"]

    def test_unknown_parent(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.create_account(
                code="121", name="Raw Materials", account_type="asset", category="Inventory", parent_id="missing"
            )

    def test_duplicate_code(self, account_service):
        with pytest.raises(DuplicateCodeError, match="already exists"):
            account_service.create_account(
                code="100", name="Other Cash", account_type="asset", category="Current Assets"
            )

    def test_duplicate_code_is_conflict(self, account_service):
        with pytest.raises(ConflictError):
            account_service.create_account(
                code="100", name="Other Cash", account_type="asset", category="Current Assets"
            )

    @pytest.mark.parametrize("field", ["code", "name", "account_type", "category"])
    def test_missing_field(self, account_service, field):
        values = dict(code="105", name="Petty Cash", account_type="asset", category="Current Assets")
        values[field] = "  "
        with pytest.raises(ValidationError, match="Missing required field"):
            account_service.create_account(**values)

    def test_unknown_type(self, account_service):
        with pytest.raises(ValidationError, match="Invalid account type"):
            account_service.create_account(
                code="105", name="Petty Cash", account_type="cash", category="Current Assets"
            )


class TestQueryAccounts:
    """Tests for reading accounts."""

    def test_list_in_insertion_order(self, account_service):
        codes = [acc.code for acc in account_service.list_accounts()]
        assert codes == [code for code, _, _, _ in STANDARD_ACCOUNTS]

    def test_list_by_type(self, account_service):
        accounts = account_service.list_accounts(account_type="revenue")
        assert [acc.code for acc in accounts] == ["400", "410"]

    def test_list_unknown_type(self, account_service):
        with pytest.raises(ValidationError):
            account_service.list_accounts(account_type="cash")

    def test_get_unknown_account(self, account_service):
        with pytest.raises(AccountNotFoundError, match="Account not found: nope"):
            account_service.get_account("nope")

    def test_get_by_code(self, account_service):
        assert account_service.get_account_by_code("400").name == "Sales"


class TestUpdateAccount:
    """Tests for updating accounts."""

    def test_rename(self, account_service, ids):
        account = account_service.update_account(ids["100"], name="Cash on Hand")

        assert account.name == "Cash on Hand"
        assert account.code == "100"
        assert account.category == "Current Assets"

    def test_rename_shows_on_existing_lines(self, account_service, journal_service, post, ids):
        entry = post("2024-01-01", "Investment", ("100", 1000, 0), ("300", 0, 1000))
        account_service.update_account(ids["100"], name="Cash on Hand")

        reread = journal_service.get_entry(entry.id)
        assert reread.lines[0].account_name == "Cash on Hand"

    def test_blank_name(self, account_service, ids):
        with pytest.raises(ValidationError):
            account_service.update_account(ids["100"], name="")

    def test_unknown_account(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.update_account("nope", name="X")


class TestDeleteAccount:
    """Tests for deleting accounts."""

    def test_delete_unused_account(self, account_service, ids):
        account_service.delete_account(ids["550"])

        with pytest.raises(AccountNotFoundError):
            account_service.get_account(ids["550"])

    def test_delete_used_account(self, account_service, post, ids):
        post("2024-01-01", "Investment", ("100", 1000, 0), ("300", 0, 1000))

        with pytest.raises(ConflictError, match="1 journal line"):
            account_service.delete_account(ids["100"])
        assert account_service.get_account(ids["100"]).code == "100"

    def test_delete_unknown_account(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.delete_account("nope")

    def test_delete_races_posting(self, temp_db, account_service, journal_service, ids):
        """Either the delete or the posting wins, never both."""
        errors = []

        def delete():
            try:
                account_service.delete_account(ids["520"])
            except ConflictError as e:
                errors.append(e)

        def post():
            try:
                journal_service.create_entry(
                    date="2024-02-01",
                    description="Ads",
                    lines=[
                        {"account_id": ids["520"], "debit_amount": 50},
                        {"account_id": ids["100"], "credit_amount": 50},
                    ],
                )
            except AccountNotFoundError as e:
                errors.append(e)

        threads = [threading.Thread(target=delete), threading.Thread(target=post)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(errors) == 1
        still_exists = temp_db.get_account(ids["520"]) is not None
        posted = len(journal_service.list_entries()) == 1
        assert still_exists == posted


class TestStandardChart:
    """Tests for chart seeding and reset."""

    def test_seed_is_idempotent(self, empty_db):
        assert seed_standard_chart(empty_db) == len(STANDARD_ACCOUNTS)
        assert seed_standard_chart(empty_db) == 0

    def test_reset(self, temp_db, account_service, post):
        post("2024-01-01", "Investment", ("100", 1000, 0), ("300", 0, 1000))
        account_service.create_account(
            code="999", name="Suspense", account_type="asset", category="Other"
        )

        reset_ledger(temp_db)

        assert temp_db.list_journal_entries() == []
        codes = [acc.code for acc in AccountService(temp_db).list_accounts()]
        assert codes == [code for code, _, _, _ in STANDARD_ACCOUNTS]
