"""Shared pytest fixtures for ledgerkit tests."""

import pytest

from ledgerkit.config import Settings
from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.chart import seed_standard_chart
from ledgerkit.domain.journal import JournalService
from ledgerkit.domain.ledger import LedgerService


@pytest.fixture
def empty_db():
    """Create an empty in-memory database."""
    db = create_sqlite_database(database_path=":memory:")
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()


@pytest.fixture
def temp_db(empty_db):
    """In-memory database seeded with the standard chart of accounts."""
    seed_standard_chart(empty_db)
    return empty_db


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a seeded database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a seeded database."""
    return JournalService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a seeded database."""
    return LedgerService(temp_db)


@pytest.fixture
def ids(account_service):
    """Map standard account codes to account IDs."""
    return {acc.code: acc.id for acc in account_service.list_accounts()}


@pytest.fixture
def post(journal_service, ids):
    """Record an entry from (code, debit, credit) tuples."""

    def _post(entry_date, description, *lines):
        return journal_service.create_entry(
            date=entry_date,
            description=description,
            lines=[
                {"account_id": ids[code], "debit_amount": debit, "credit_amount": credit}
                for code, debit, credit in lines
            ],
        )

    return _post


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return Settings()


@pytest.fixture
def client(temp_db, settings):
    """FastAPI test client serving the seeded database."""
    from fastapi.testclient import TestClient
    from ledgerkit.api.app import create_app

    with TestClient(create_app(db=temp_db, settings=settings)) as test_client:
        yield test_client


@pytest.fixture
def db_path(tmp_path):
    """Path for a file-backed ledger used by CLI tests."""
    return str(tmp_path / "ledger.db")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
