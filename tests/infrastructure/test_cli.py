"""End-to-end tests of the click CLI over an in-memory database."""

import json

import pytest
from click.testing import CliRunner

from bevpos.infrastructure.bootstrap import build_container
from bevpos.infrastructure.cli.main import cli
from bevpos.infrastructure.config import Settings


def _envelope(result) -> dict:
    lines = [line for line in result.output.splitlines() if line.startswith("{")]
    return json.loads(lines[-1])


@pytest.fixture
def run():
    container = build_container(Settings(database_url="sqlite://"))
    container.install_schema()
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, list(args), obj={"container": container})

    yield invoke
    container.dispose()


def _add_skol(run) -> str:
    result = run("--json", "product", "add", "--name", "Skol 350ml", "--price", "4.90", "--stock", "5")
    assert result.exit_code == 0, result.output
    return _envelope(result)["data"]["id"]


class TestOrderCommands:

    def test_place_and_show(self, run):
        skol = _add_skol(run)

        result = run("--json", "order", "place", "--customer", "Maria", "--items", f"{skol}:3", "--payment", "dinheiro")

        assert result.exit_code == 0, result.output
        body = _envelope(result)
        assert body["ok"] is True
        assert body["data"]["total"] == "14.70"
        assert body["data"]["order_number"] == "VENDA00001"

        shown = run("order", "show", "--id", body["data"]["order_id"])
        assert shown.exit_code == 0
        assert "VENDA00001" in shown.output
        assert "Skol 350ml" in shown.output

    def test_oversell_fails_with_kind(self, run):
        skol = _add_skol(run)

        result = run("--json", "order", "place", "--customer", "Maria", "--items", f"{skol}:6", "--payment", "pix")

        assert result.exit_code == 1
        body = _envelope(result)
        assert body["ok"] is False
        assert body["kind"] == "InsufficientStockError"

    def test_human_error_message(self, run):
        result = run("order", "cancel", "--id", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_bad_items_format(self, run):
        result = run("order", "place", "--customer", "Maria", "--items", "skol", "--payment", "cash")
        assert result.exit_code == 2
        assert "Invalid item format" in result.output


class TestCashAndReportCommands:

    def test_open_twice_then_report(self, run):
        assert run("cash", "open", "--float", "100").exit_code == 0

        second = run("--json", "cash", "open", "--float", "50")
        assert second.exit_code == 1
        assert _envelope(second)["kind"] == "ConflictError"

        report = run("--json", "report", "daily")
        assert report.exit_code == 0
        data = _envelope(report)["data"]
        assert data["cash_register"]["opened"] is True
        assert data["status"] == "warning"

    def test_close_without_open(self, run):
        result = run("cash", "close")
        assert result.exit_code == 1
        assert "No open cash register" in result.output


class TestFiadoAndLedgerCommands:

    def test_receipt_lifecycle(self, run):
        added = run("--json", "fiado", "add", "--customer", "Dona Ana", "--total", "30")
        receipt_id = _envelope(added)["data"]["id"]

        listed = _envelope(run("--json", "fiado", "list"))["data"]
        assert [item["id"] for item in listed] == [receipt_id]

        settled = run("--json", "fiado", "settle", "--id", receipt_id, "--paid")
        assert _envelope(settled)["data"]["paid"] is True

        ledger = _envelope(run("--json", "ledger", "list"))["data"]
        assert ledger[0]["fiado_receipt_id"] == receipt_id

    def test_manual_ledger_entry(self, run):
        result = run("ledger", "add", "--direction", "out", "--description", "Gelo", "--category", "Supplies", "--amount", "45")
        assert result.exit_code == 0
        assert "Gelo" in run("ledger", "list").output


class TestEnvironment:

    def test_db_init_from_environment(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'bevpos.db'}"
        result = CliRunner().invoke(cli, ["--json", "db", "init"], env={"DATABASE_URL": url})
        assert result.exit_code == 0, result.output
        assert "orders" in _envelope(result)["data"]["tables"]

    def test_missing_database_url(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        result = CliRunner().invoke(cli, ["product", "list"])
        assert result.exit_code == 1
        assert "DATABASE_URL" in result.output
