"""Tests for LedgerService balances and statements."""

import random
from datetime import date, timedelta
from decimal import Decimal

import pytest

from ledgerkit.domain.chart import STANDARD_ACCOUNTS
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    UnbalancedEntryError,
    ValidationError,
)

TOLERANCE = Decimal("0.01")
CODES = [code for code, _, _, _ in STANDARD_ACCOUNTS]


def _random_entry(rng, ids):
    """Build a random balanced entry across the standard chart."""
    codes = rng.sample(CODES, rng.randint(2, 5))
    cents = [rng.randint(1, 500_000) for _ in codes[1:]]
    total = sum(cents)
    lines = []
    if rng.random() < 0.5:
        lines.append({"account_id": ids[codes[0]], "debit_amount": Decimal(total) / 100})
        lines += [{"account_id": ids[code], "credit_amount": Decimal(c) / 100} for code, c in zip(codes[1:], cents)]
    else:
        lines.append({"account_id": ids[codes[0]], "credit_amount": Decimal(total) / 100})
        lines += [{"account_id": ids[code], "debit_amount": Decimal(c) / 100} for code, c in zip(codes[1:], cents)]
    return lines


class TestConcreteScenario:
    """A single cash sale against the standard chart."""

    @pytest.fixture
    def sale(self, post):
        return post("2024-01-15", "Cash sale", ("100", 10000, 0), ("400", 0, 10000))

    def test_account_balances(self, ledger_service, ids, sale):
        assert ledger_service.account_balance(ids["100"]) == Decimal("10000")
        assert ledger_service.account_balance(ids["400"]) == Decimal("10000")

    def test_trial_balance(self, ledger_service, sale):
        report = ledger_service.trial_balance()
        assert report.total_debit == report.total_credit == Decimal("10000")
        assert report.is_balanced
        assert [row.account_code for row in report.rows] == ["100", "400"]

    def test_balance_sheet(self, ledger_service, sale):
        report = ledger_service.balance_sheet()
        assert report.assets == Decimal("10000")
        assert report.liabilities == Decimal("0")
        assert report.equity == Decimal("10000")

    def test_round_trip(self, journal_service, sale):
        fetched = journal_service.get_entry(sale.id)
        assert fetched.date == date(2024, 1, 15)
        assert fetched.description == "Cash sale"
        assert [(l.debit_amount, l.credit_amount) for l in fetched.lines] == [
            (Decimal("10000.00"), Decimal("0.00")),
            (Decimal("0.00"), Decimal("10000.00")),
        ]


class TestProperties:
    """Invariants that hold for any sequence of entries."""

    @pytest.mark.parametrize("seed", range(5))
    def test_trial_balance_always_balanced(self, journal_service, ledger_service, ids, seed):
        rng = random.Random(seed)
        start = date(2024, 1, 1)
        for _ in range(25):
            journal_service.create_entry(
                date=start + timedelta(days=rng.randint(0, 365)),
                description="Random",
                lines=_random_entry(rng, ids),
            )
            report = ledger_service.trial_balance()
            assert report.total_debit == report.total_credit

    @pytest.mark.parametrize("seed", range(5))
    def test_balance_sheet_identity(self, journal_service, ledger_service, ids, seed):
        rng = random.Random(seed)
        for _ in range(25):
            journal_service.create_entry(
                date=date(2024, 1, 1) + timedelta(days=rng.randint(0, 365)),
                description="Random",
                lines=_random_entry(rng, ids),
            )

        for as_of in (None, "2024-03-31", "2024-09-30"):
            report = ledger_service.balance_sheet(as_of=as_of)
            assert abs(report.assets - (report.liabilities + report.equity)) <= TOLERANCE
            assert report.is_balanced

    @pytest.mark.parametrize("seed", range(3))
    def test_net_income_is_exact(self, journal_service, ledger_service, ids, seed):
        rng = random.Random(seed)
        for _ in range(20):
            journal_service.create_entry(
                date=date(2024, 1, 1) + timedelta(days=rng.randint(0, 365)),
                description="Random",
                lines=_random_entry(rng, ids),
            )

        report = ledger_service.income_statement("2024-01-01", "2024-06-30")
        assert report.net_income == report.revenue - report.expenses

    def test_unbalanced_entry_changes_nothing(self, journal_service, ledger_service, post, ids):
        post("2024-01-01", "Investment", ("100", 5000, 0), ("300", 0, 5000))

        with pytest.raises(UnbalancedEntryError):
            journal_service.create_entry(
                date="2024-01-15",
                description="Bad",
                lines=[
                    {"account_id": ids["100"], "debit_amount": 10000},
                    {"account_id": ids["400"], "credit_amount": 9000},
                ],
            )

        assert len(journal_service.list_entries()) == 1
        assert ledger_service.trial_balance().total_debit == Decimal("5000")

    @pytest.mark.parametrize("debit,credit", [(100, 0), (0, 100), (100, 100)])
    def test_single_line_always_rejected(self, journal_service, ids, debit, credit):
        with pytest.raises(ValidationError):
            journal_service.create_entry(
                date="2024-01-15",
                description="One line",
                lines=[{"account_id": ids["100"], "debit_amount": debit, "credit_amount": credit}],
            )

    def test_deletion_guard(self, account_service, post, ids):
        post("2024-01-01", "Investment", ("100", 5000, 0), ("300", 0, 5000))

        for code in ("100", "300"):
            with pytest.raises(ConflictError):
                account_service.delete_account(ids[code])
        for code in ("101", "410", "550"):
            account_service.delete_account(ids[code])


class TestAccountBalance:
    """Tests for single-account balances."""

    def test_no_postings(self, ledger_service, ids):
        assert ledger_service.account_balance(ids["250"]) == Decimal("0")

    def test_unknown_account(self, ledger_service):
        with pytest.raises(AccountNotFoundError):
            ledger_service.account_balance("nope")

    def test_as_of_is_inclusive(self, ledger_service, post, ids):
        post("2024-01-31", "January rent", ("510", 1200, 0), ("100", 0, 1200))
        post("2024-02-01", "February rent", ("510", 1200, 0), ("100", 0, 1200))

        assert ledger_service.account_balance(ids["510"], as_of="2024-01-30") == Decimal("0")
        assert ledger_service.account_balance(ids["510"], as_of="2024-01-31") == Decimal("1200")
        assert ledger_service.account_balance(ids["510"]) == Decimal("2400")
        assert ledger_service.account_balance(ids["100"]) == Decimal("-2400")

    def test_invalid_as_of(self, ledger_service, ids):
        with pytest.raises(ValidationError, match="asOfDate"):
            ledger_service.account_balance(ids["100"], as_of="31/01/2024")


class TestStatements:
    """Tests for the balance sheet and income statement."""

    @pytest.fixture
    def activity(self, post):
        post("2024-01-01", "Owner investment", ("100", 20000, 0), ("300", 0, 20000))
        post("2024-01-05", "Bank loan", ("101", 15000, 0), ("250", 0, 15000))
        post("2024-01-10", "Stock on credit", ("120", 4000, 0), ("200", 0, 4000))
        post("2024-01-15", "Sales", ("110", 9000, 0), ("400", 0, 9000))
        post("2024-01-31", "Salaries", ("510", 3000, 0), ("100", 0, 3000))
        post("2024-02-10", "Advertising", ("520", 500, 0), ("100", 0, 500))

    def test_balance_sheet(self, ledger_service, activity):
        report = ledger_service.balance_sheet(as_of="2024-01-31")

        assert report.assets == Decimal("45000")
        assert report.liabilities == Decimal("19000")
        # 20000 capital + 9000 sales - 3000 salaries
        assert report.equity == Decimal("26000")
        assert report.as_of == date(2024, 1, 31)

    def test_expenses_reduce_equity(self, ledger_service, activity):
        january = ledger_service.balance_sheet(as_of="2024-01-31")
        february = ledger_service.balance_sheet(as_of="2024-02-28")
        assert february.equity == january.equity - Decimal("500")
        assert february.is_balanced

    def test_income_statement(self, ledger_service, activity):
        report = ledger_service.income_statement("2024-01-01", "2024-01-31")

        assert report.revenue == Decimal("9000")
        assert report.expenses == Decimal("3000")
        assert report.net_income == Decimal("6000")

    def test_income_statement_bounds_inclusive(self, ledger_service, activity):
        report = ledger_service.income_statement("2024-02-10", "2024-02-10")
        assert report.expenses == Decimal("500")
        assert report.revenue == Decimal("0")

    def test_income_statement_requires_dates(self, ledger_service):
        with pytest.raises(ValidationError, match="required"):
            ledger_service.income_statement("2024-01-01", None)

    def test_income_statement_reversed_dates(self, ledger_service):
        with pytest.raises(ValidationError):
            ledger_service.income_statement("2024-02-01", "2024-01-01")


class TestTAccount:
    """Tests for the T-account view."""

    def test_rows_by_date(self, ledger_service, post, ids):
        second = post("2024-02-01", "Second", ("100", 50, 0), ("400", 0, 50))
        first = post("2024-01-01", "First", ("300", 0, 100), ("100", 100, 0))
        third = post("2024-02-01", "Third", ("510", 30, 0), ("100", 0, 30))

        view = ledger_service.t_account(ids["100"])

        assert [row.journal_entry_id for row in view.entries] == [first.id, second.id, third.id]
        assert view.total_debit == Decimal("150")
        assert view.total_credit == Decimal("30")
        assert view.balance == Decimal("120")
        # The view can be walked again
        assert len(list(view.entries)) == 3

    def test_as_of(self, ledger_service, post, ids):
        post("2024-01-01", "First", ("100", 100, 0), ("300", 0, 100))
        post("2024-03-01", "Later", ("100", 100, 0), ("300", 0, 100))

        view = ledger_service.t_account(ids["300"], as_of="2024-02-01")

        assert len(view.entries) == 1
        assert view.balance == Decimal("100")

    def test_unknown_account(self, ledger_service):
        with pytest.raises(AccountNotFoundError):
            ledger_service.t_account("nope")
