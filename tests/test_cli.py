"""Tests for CLI commands."""

import json

import pytest

from ledgerkit.cli.commands.entry import parse_line_spec
from ledgerkit.cli.main import cli


@pytest.fixture
def ledger(cli_runner, db_path):
    """Run CLI commands against a file-backed ledger with the standard chart."""

    def _run(*args, input=None):
        return cli_runner.invoke(cli, ["--db-path", db_path, *args], input=input)

    result = _run("init-chart")
    assert result.exit_code == 0
    return _run


def _add_sale(ledger, entry_date="2024-01-15", amount="10000"):
    return ledger(
        "entry", "add",
        "--date", entry_date,
        "--description", "Cash sale",
        "--line", f"100:debit:{amount}",
        "--line", f"400:credit:{amount}",
    )


def _entry_id(output):
    return output.strip().split()[3]


def test_init_chart(cli_runner, db_path):
    result = cli_runner.invoke(cli, ["--db-path", db_path, "init-chart"])
    assert result.exit_code == 0
    assert "Created 19 of 19 standard accounts" in result.output

    again = cli_runner.invoke(cli, ["--db-path", db_path, "init-chart"])
    assert "already present" in again.output


def test_help_does_not_open_database(cli_runner, tmp_path):
    db_path = tmp_path / "never.db"
    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])
    assert result.exit_code == 0
    assert not db_path.exists()


class TestAccountCommands:
    """Tests for account commands."""

    def test_list(self, ledger):
        result = ledger("account", "list", "--type", "revenue")
        assert result.exit_code == 0
        assert "400" in result.output
        assert "Sales" in result.output
        assert "Cash" not in result.output

    def test_create(self, ledger):
        result = ledger("account", "create", "105", "Petty Cash", "--type", "asset", "--category", "Current Assets")
        assert result.exit_code == 0
        assert "Created account 105 'Petty Cash'" in result.output

    def test_create_duplicate(self, ledger):
        result = ledger("account", "create", "100", "Cash", "--type", "asset", "--category", "Current Assets")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_create_with_parent(self, ledger):
        result = ledger(
            "account", "create", "121", "Raw Materials", "--type", "asset", "--category", "Inventory", "--parent", "120"
        )
        assert result.exit_code == 0

    def test_rename(self, ledger):
        result = ledger("account", "rename", "100", "Cash on Hand")
        assert result.exit_code == 0
        assert "Cash on Hand" in ledger("account", "list").output

    def test_delete_unknown(self, ledger):
        result = ledger("account", "delete", "999", "--yes")
        assert result.exit_code == 1
        assert "Account not found" in result.output

    def test_delete_in_use(self, ledger):
        _add_sale(ledger)
        result = ledger("account", "delete", "100", "--yes")
        assert result.exit_code == 1
        assert "journal line" in result.output

    def test_delete_confirmed(self, ledger):
        result = ledger("account", "delete", "550", input="y\n")
        assert result.exit_code == 0
        assert "Deleted account 550" in result.output

    def test_delete_cancelled(self, ledger):
        result = ledger("account", "delete", "550", input="n\n")
        assert "Deletion cancelled" in result.output
        assert "550" in ledger("account", "list").output


class TestEntryCommands:
    """Tests for journal entry commands."""

    def test_add_and_show(self, ledger):
        added = _add_sale(ledger)
        assert added.exit_code == 0
        assert "Recorded journal entry" in added.output

        shown = ledger("entry", "show", _entry_id(added.output))
        assert shown.exit_code == 0
        assert "Cash sale" in shown.output
        assert "10,000.00" in shown.output

    def test_add_unbalanced(self, ledger):
        result = ledger(
            "entry", "add",
            "--date", "2024-01-15",
            "--description", "Bad",
            "--line", "100:debit:10000",
            "--line", "400:credit:9000",
        )
        assert result.exit_code == 1
        assert "must be equal" in result.output

    def test_add_unknown_account(self, ledger):
        result = ledger(
            "entry", "add",
            "--date", "2024-01-15",
            "--description", "Bad",
            "--line", "100:debit:10",
            "--line", "999:credit:10",
        )
        assert result.exit_code == 1
        assert "Account not found: 999" in result.output

    def test_add_bad_line(self, ledger):
        result = ledger("entry", "add", "--date", "2024-01-15", "--description", "Bad", "--line", "100-debit-10")
        assert result.exit_code == 2

    def test_list(self, ledger):
        _add_sale(ledger, entry_date="2024-01-15")
        _add_sale(ledger, entry_date="2024-03-15")

        result = ledger("entry", "list", "--start-date", "2024-03-01")

        assert result.exit_code == 0
        assert "2024-03-15" in result.output
        assert "2024-01-15" not in result.output

    def test_list_rejects_two_periods(self, ledger):
        result = ledger("entry", "list", "--this-month", "--last-year")
        assert result.exit_code == 1

    def test_delete(self, ledger):
        entry_id = _entry_id(_add_sale(ledger).output)
        result = ledger("entry", "delete", entry_id)
        assert result.exit_code == 0
        assert "No journal entries found" in ledger("entry", "list").output

    def test_close(self, ledger):
        entry_id = _entry_id(_add_sale(ledger, entry_date="2023-12-01").output)

        result = ledger("entry", "close", "--through", "2023-12-31")
        assert "Closed 1 journal entry" in result.output

        blocked = ledger("entry", "delete", entry_id)
        assert blocked.exit_code == 1
        assert "closed period" in blocked.output


class TestReportCommands:
    """Tests for report commands."""

    def test_trial_balance(self, ledger):
        _add_sale(ledger)
        result = ledger("report", "trial-balance")
        assert result.exit_code == 0
        assert "Balanced" in result.output

    def test_balance_sheet(self, ledger):
        _add_sale(ledger)
        result = ledger("report", "balance-sheet", "--as-of", "2024-12-31")
        assert "Balance Sheet as of 2024-12-31" in result.output
        assert result.output.count("10,000.00") == 3

    def test_income_statement(self, ledger):
        _add_sale(ledger)
        result = ledger("report", "income-statement", "--start-date", "2024-01-01", "--end-date", "2024-01-31")
        assert result.exit_code == 0
        assert "Net income" in result.output

    def test_income_statement_needs_period(self, ledger):
        result = ledger("report", "income-statement")
        assert result.exit_code == 1
        assert "required" in result.output

    def test_balance(self, ledger):
        _add_sale(ledger)
        result = ledger("report", "balance", "400")
        assert "400 Sales (revenue): 10,000.00" in result.output

    def test_t_account(self, ledger):
        _add_sale(ledger)
        result = ledger("report", "t-account", "100")
        assert result.exit_code == 0
        assert "2024-01-15" in result.output


def test_mcp_command(cli_runner, db_path):
    requests = "\n".join(
        [
            json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize"}),
            json.dumps(
                {"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "list_accounts"}}
            ),
        ]
    )
    result = cli_runner.invoke(cli, ["--db-path", db_path, "mcp"], input=requests + "\n")

    assert result.exit_code == 0
    replies = [json.loads(line) for line in result.stdout.splitlines() if line.startswith("{")]
    assert replies[0]["result"]["protocolVersion"] == "2024-11-05"
    assert len(replies[1]["result"]["accounts"]) == 19


@pytest.mark.parametrize(
    "spec,expected",
    [
        ("100:debit:500", ("100", "debit", "500")),
        ("100:CREDIT:1,250.00", ("100", "credit", "1,250.00")),
    ],
)
def test_parse_line_spec(spec, expected):
    assert parse_line_spec(spec) == expected
