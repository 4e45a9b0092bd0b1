"""Tests for account, tag and user commands."""

import pytest
from click.testing import CliRunner
from ledgerport.cli.main import cli


def test_account_create(cli_runner, temp_db):
    """Test creating an account with a currency."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Main USD", "--currency", "usd"]
    )

    assert result.exit_code == 0
    assert "Created account 'Main USD'" in result.output
    assert "ID:" in result.output
    assert temp_db.list_accounts()[0].currency_code == "USD"


def test_account_create_requires_currency(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "create", "Main USD"])

    assert result.exit_code == 2
    assert "--currency" in result.output


def test_account_create_with_balance(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "create", "Main HKD", "--currency", "HKD", "--balance", "2,500"],
    )

    assert result.exit_code == 0
    assert str(temp_db.list_accounts()[0].balance) == "2500.00"


def test_account_create_invalid_balance(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "create", "Main", "--currency", "USD", "--balance", "lots"],
    )

    assert result.exit_code == 1
    assert "Invalid balance" in result.output


def test_account_list_empty(cli_runner, temp_db):
    """Test listing accounts when none exist."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, temp_db, reference_data):
    """Test listing accounts with data."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "Main USD" in result.output
    assert "HKD" in result.output
    assert "1,000.00" in result.output


def test_account_create_duplicate(cli_runner, temp_db):
    """Test creating duplicate account name fails."""
    args = ["--db-path", temp_db.database_path, "account", "create", "Main USD", "--currency", "USD"]
    assert cli_runner.invoke(cli, args).exit_code == 0

    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_tag_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tag", "create", "Office"])
    assert result.exit_code == 0
    assert "Created tag 'Office'" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tag", "list"])
    assert result.exit_code == 0
    assert "Office" in result.output
    assert "#6b7280" in result.output


def test_tag_create_rejects_comma(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tag", "create", "A,B"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_user_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "create", "Admin User"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "list"])
    assert "Admin User" in result.output


def test_db_path_from_environment(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("LEDGERPORT_DB_PATH", temp_db.database_path)

    result = cli_runner.invoke(cli, ["user", "create", "Admin User"])

    assert result.exit_code == 0
    assert temp_db.list_users()[0].name == "Admin User"


def test_invalid_log_level(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "LOUD", "account", "list"]
    )

    assert result.exit_code == 2
