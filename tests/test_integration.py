"""Integration tests for end-to-end CLI workflows."""

import re

import pytest
from budgetinsight.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _invoke(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return _invoke


def _extract_after(output, marker):
    for line in output.split("\n"):
        if marker in line:
            return line.split(marker, 1)[1].strip().rstrip(")")
    return None


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "income" in result.output
    assert "allocation" in result.output


def test_full_workflow(invoke, fixtures_dir):
    """Test complete workflow: income → allocation → import → summary → snapshot."""
    # Step 1: Enter income
    result = invoke("income", "set", "--salary", "100000")
    assert result.exit_code == 0
    assert "Income updated:" in result.output
    assert "69,271.08" in result.output
    assert "5,772.59" in result.output

    result = invoke("income", "show")
    assert result.exit_code == 0
    assert "Federal marginal rate" in result.output
    assert "22.0%" in result.output

    # Step 2: Allocate take-home pay
    result = invoke("allocation", "add", "Rent", "50")
    assert result.exit_code == 0
    assert "Added category 'Rent' (50%)" in result.output
    assert _extract_after(result.output, "ID:") is not None

    result = invoke("allocation", "add", "Food & Dining", "20")
    assert result.exit_code == 0

    result = invoke("allocation", "show")
    assert result.exit_code == 0
    assert "Monthly take-home: $5,772.59" in result.output
    assert "Emergency buffer" in result.output
    assert "Total allocated: 70.00%" in result.output
    assert "Warning" not in result.output

    # Step 3: Import transactions
    result = invoke("transaction", "import", str(fixtures_dir / "transactions.json"))
    assert result.exit_code == 0
    assert "Imported 4 transactions" in result.output

    result = invoke("transaction", "list", "--period", "2025-03")
    assert result.exit_code == 0
    assert "Corner Bistro" in result.output
    assert "sf-4" not in result.output

    # Step 4: Summary
    result = invoke("summary", "--date", "2025-03-15")
    assert result.exit_code == 0
    assert "Summary for March 2025" in result.output
    assert "2,000.00" in result.output
    assert "80.00" in result.output
    assert "+100.0%" in result.output
    assert "Food & Dining" in result.output
    assert "[high] Great Saving!" in result.output
    assert "Food & Dining is your highest expense at $50.00" in result.output

    # Allocation spend is refreshed by the summary
    result = invoke("allocation", "show")
    assert re.search(r"Food & Dining.*spent \$\s+50\.00", result.output)

    # Step 5: Snapshots
    result = invoke("snapshot", "update", "--date", "2025-03-15")
    assert result.exit_code == 0
    assert "March 2025: spent $80.00 of $5,772.59" in result.output
    assert "2025: spent $120.00 of $69,271.08" in result.output

    result = invoke("snapshot", "list")
    assert result.exit_code == 0
    assert "March 2025" in result.output
    assert "green" in result.output


def test_over_allocation_warns(invoke):
    invoke("allocation", "add", "Rent", "70")
    result = invoke("allocation", "add", "Extra", "40")

    assert result.exit_code == 0
    assert "Warning: Total exceeds 100% by 10.0%" in result.output

    result = invoke("allocation", "set", "extra", "10")
    assert result.exit_code == 0
    assert "Set 'Extra' to 10%" in result.output
    assert "Warning" not in result.output


def test_allocation_remove(invoke):
    invoke("allocation", "add", "Rent", "35")

    result = invoke("allocation", "remove", "Rent")
    assert result.exit_code == 0
    assert "Removed category 'Rent'" in result.output

    result = invoke("allocation", "remove", "Rent")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_allocation_init_defaults(invoke):
    result = invoke("allocation", "init-defaults")
    assert result.exit_code == 0
    assert "75% allocated" in result.output


def test_invalid_income_is_rejected(invoke):
    result = invoke("income", "set", "--salary", "1000", "--contribution", "2000")
    assert result.exit_code == 1
    assert "Error: Pre-tax contribution" in result.output

    result = invoke("income", "show")
    assert "No income set" in result.output


def test_custom_tax_table(cli_runner, temp_db, fixtures_dir):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "--tax-table",
            str(fixtures_dir / "flat_tax_table.json"),
            "income",
            "set",
            "--salary",
            "100000",
        ],
    )
    assert result.exit_code == 0
    assert "15,000.00" in result.output


def test_budget_limits_and_insights(invoke):
    result = invoke("budget", "set-limit", "Food & Dining", "--monthly", "50")
    assert result.exit_code == 0
    assert "Food & Dining: $50.00/month, $600.00/year" in result.output

    invoke("transaction", "add", "--amount", "50", "--date", "2025-03-03", "--category", "Restaurants")
    invoke("transaction", "add", "--amount", "45", "--date", "2025-03-04", "--category", "Shops")

    result = invoke("summary", "--date", "2025-03-20")
    assert result.exit_code == 0
    assert "[medium] Approaching Limit: You've used 100% of your Food & Dining budget" in result.output

    invoke("transaction", "add", "--amount", "5", "--date", "2025-03-05", "--category", "Food")
    result = invoke("summary", "--date", "2025-03-20")
    assert "[high] Budget Exceeded: You've exceeded your Food & Dining budget by $5.00" in result.output

    result = invoke("budget", "list")
    assert result.exit_code == 0
    assert "exceeded" in result.output


def test_budget_unknown_category(invoke):
    result = invoke("budget", "set-limit", "Groceries", "--monthly", "50")
    assert result.exit_code == 1
    assert "Unknown category" in result.output


def test_alert_matching_workflow(invoke):
    result = invoke(
        "alert", "add", "--email-id", "m1", "--merchant", "Target", "--date", "2025-03-06", "--amount", "12.00"
    )
    assert result.exit_code == 0
    alert_id = _extract_after(result.output, "Created alert")

    result = invoke("transaction", "add", "--amount", "12", "--date", "2025-03-06", "--id", "manual-1")
    assert result.exit_code == 0
    assert "Created transaction manual-1" in result.output
    assert "1 unlinked alert(s) match" in result.output

    result = invoke("alert", "match", "--amount", "12", "--date", "2025-03-06")
    assert alert_id in result.output

    result = invoke("alert", "link", alert_id, "manual-1")
    assert result.exit_code == 0

    result = invoke("alert", "list")
    assert "No unlinked alerts." in result.output


def test_transaction_duplicate_and_delete(invoke):
    invoke("transaction", "add", "--amount", "10", "--date", "2025-03-01", "--id", "t1")

    result = invoke("transaction", "add", "--amount", "10", "--date", "2025-03-01", "--id", "t1")
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = invoke("transaction", "delete", "t1")
    assert result.exit_code == 0

    result = invoke("transaction", "delete", "t1")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_malformed_tax_table_reports_error(cli_runner, temp_db, tmp_path):
    table = tmp_path / "bad.json"
    table.write_text('{"federal": {"brackets": [{"threshold": 0, "rate": "ten"}]}, "state": []}')

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--tax-table", str(table), "income", "show"]
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not isinstance(result.exception, ValueError)
