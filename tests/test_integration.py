"""Integration tests for end-to-end workflows."""

from cashflow.cli.main import cli


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def _created_id(output):
    # Extract the ID from output like "Created client 'Maria' (ID: 1)"
    for line in output.split("\n"):
        if "ID:" in line:
            return line.split("ID:")[1].strip().rstrip(")")
    return None


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: client → item → installments → payment → receivables → projection."""
    # Step 1: Create client and service
    result = _invoke(cli_runner, temp_db, "client", "add", "Maria Souza", "--phone", "(11) 98765-4321")
    assert result.exit_code == 0
    client_id = _created_id(result.output)
    assert client_id is not None

    result = _invoke(cli_runner, temp_db, "item", "add", "Logo design")
    assert result.exit_code == 0
    assert "Created service 'Logo design'" in result.output
    item_id = _created_id(result.output)

    # Step 2: Record an entry split into 3 installments
    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "add",
        "900",
        "--date",
        "2025-03-01",
        "--client-id",
        client_id,
        "--item-id",
        item_id,
        "--installments",
        "3",
        "--first-due-date",
        "2025-03-20",
    )
    assert result.exit_code == 0, result.output
    assert "Created entry 1 of $900.00" in result.output
    assert "Created 3 installment(s) starting 2025-03-20" in result.output

    # Step 3: Pay the first installment
    result = _invoke(cli_runner, temp_db, "schedule", "pay", "1", "--date", "2025-03-18")
    assert result.exit_code == 0
    assert "Installment 1 marked as paid" in result.output

    result = _invoke(cli_runner, temp_db, "schedule", "list", "1", "--today", "2025-04-25")
    assert result.exit_code == 0
    assert "3x - 1 paid / 2 pending" in result.output
    assert "Paid on 18/03" in result.output
    assert "Overdue by 6 day(s)" in result.output

    # Step 4: Receivables
    result = _invoke(cli_runner, temp_db, "receivables", "--today", "2025-04-25")
    assert result.exit_code == 0
    assert "Maria Souza" in result.output
    assert "Logo design" in result.output
    assert "OVERDUE" in result.output
    assert "partial" in result.output
    assert "2 receivable(s), 1 overdue" in result.output

    # Step 5: Expense and projection
    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "1,200",
        "--date",
        "2025-03-05",
        "--category",
        "rent",
        "--type",
        "fixed",
    )
    assert result.exit_code == 0
    assert "Created expense 1 of $1,200.00" in result.output

    result = _invoke(cli_runner, temp_db, "projection", "--anchor", "2025-03", "--months", "3")
    assert result.exit_code == 0
    lines = result.output.split("\n")
    march = next(line for line in lines if line.startswith("Mar/25"))
    assert "$300.00" in march
    assert "$1,200.00" in march
    assert any(line.startswith("May/25") for line in lines)
    total = next(line for line in lines if line.startswith("Total"))
    assert "$900.00" in total

    # Step 6: Settle the remaining installments
    for schedule_id in ("2", "3"):
        result = _invoke(cli_runner, temp_db, "schedule", "pay", schedule_id, "--date", "2025-05-19")
        assert result.exit_code == 0

    result = _invoke(cli_runner, temp_db, "entry", "list", "--status", "paid")
    assert result.exit_code == 0
    assert "Paid on 19/05" in result.output

    result = _invoke(cli_runner, temp_db, "receivables", "--today", "2025-05-20")
    assert result.exit_code == 0
    assert "Nothing to receive." in result.output


def test_db_path_from_environment(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["client", "add", "Joana"], env={"CASHFLOW_DB_PATH": temp_db.database_path}
    )
    assert result.exit_code == 0

    assert [c.name for c in temp_db.list_clients()] == ["Joana"]
