"""Shared pytest fixtures for ledgerport tests."""

import tempfile
import os
from decimal import Decimal
import pytest
from openpyxl import Workbook

from ledgerport.database.factories import create_sqlite_database
from ledgerport.domain.account import AccountService
from ledgerport.domain.batch_import import ImportService
from ledgerport.domain.expense import ExpenseService
from ledgerport.domain.export import ExportService
from ledgerport.domain.reference import TagService, UserService
from ledgerport.domain.transfer import TransferService

EXPENSE_HEADERS = ["Expense ID", "Account", "Amount", "Currency", "Description", "Created By", "Tags"]
TRANSFER_HEADERS = [
    "Transfer ID",
    "From Account",
    "To Account",
    "Amount",
    "Currency",
    "Transaction Fee",
    "Description",
    "Created By",
    "Tags",
]


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def tag_service(temp_db):
    return TagService(temp_db)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def import_service(temp_db):
    return ImportService(temp_db)


@pytest.fixture
def export_service(temp_db):
    return ExportService(temp_db)


@pytest.fixture
def reference_data(account_service, tag_service, user_service):
    """Create the accounts, tags and users used by the example workbooks.

    Returns a dict of name -> ID for each kind.
    """
    accounts = {
        name: account_service.create_account(name=name, currency_code=currency, balance=Decimal("1000"))
        for name, currency in [
            ("Main USD", "USD"),
            ("Main HKD", "HKD"),
            ("Secondary USD", "USD"),
            ("Secondary HKD", "HKD"),
        ]
    }
    tags = {name: tag_service.create_tag(name) for name in ["Office", "Monthly", "Travel", "Internal"]}
    users = {"Admin User": user_service.create_user("Admin User")}
    return {"accounts": accounts, "tags": tags, "users": users}


@pytest.fixture
def write_workbook(tmp_path):
    """Return a function that writes one sheet of rows to an xlsx file.

    Usage: write_workbook("Expenses", headers, rows, name="file.xlsx")
    """

    def _write(sheet_name, headers, rows, name="import.xlsx"):
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name
        if headers is not None:
            ws.append(list(headers))
        for row in rows:
            ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _write


@pytest.fixture
def expense_workbook(write_workbook):
    """Write an "Expenses" sheet with the standard import headers."""

    def _write(rows, name="expenses.xlsx"):
        return write_workbook("Expenses", EXPENSE_HEADERS, rows, name=name)

    return _write


@pytest.fixture
def transfer_workbook(write_workbook):
    """Write a "Transfers" sheet with the standard import headers."""

    def _write(rows, name="transfers.xlsx"):
        return write_workbook("Transfers", TRANSFER_HEADERS, rows, name=name)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
