"""Tests for the spreadsheet import service."""

from decimal import Decimal

import pytest

from ledgerport.domain.batch_import import format_summary
from ledgerport.domain.entities import ImportSummary
from ledgerport.domain.errors import ImportFileError, PersistenceError


def test_import_expenses_creates_records(import_service, expense_service, account_service, reference_data, expense_workbook):
    path = expense_workbook(
        [
            ["EXT-1001", "Main USD", "100.50", "USD", "Office supplies", "Admin User", "Office, Monthly"],
            ["EXT-1002", "main  hkd", 500, None, "Travel", None, "Travel"],
        ]
    )

    summary = import_service.import_expenses(path)

    assert summary.success_count == 2
    assert summary.error_count == 0
    assert summary.errors == []

    expenses = {e.external_id: e for e in expense_service.list_expenses()}
    office = expenses["EXT-1001"]
    assert office.account_name == "Main USD"
    assert office.amount == Decimal("100.50")
    assert office.created_by_name == "Admin User"
    assert [t.name for t in office.tags] == ["Office", "Monthly"]
    assert office.is_imported
    assert expenses["EXT-1002"].currency_code == "HKD"

    main_usd = account_service.get_account(reference_data["accounts"]["Main USD"])
    assert main_usd.balance == Decimal("899.50")


def test_row_errors_do_not_stop_the_batch(import_service, expense_service, reference_data, expense_workbook):
    path = expense_workbook(
        [
            ["", "Main USD", "-5"],
            ["", "Unknown Account", "10"],
            ["", "Main USD", "10", None, None, None, "Office, NoSuchTag"],
            ["", "Main USD", "10"],
        ]
    )

    summary = import_service.import_expenses(path)

    assert summary.success_count == 1
    assert summary.error_count == 3
    assert summary.errors[0] == "Row 2: Amount must be a positive number"
    assert summary.errors[1].startswith('Row 3: Account "Unknown Account" not found. Known accounts: ')
    assert summary.errors[2] == 'Row 4: Tag "NoSuchTag" does not exist'
    assert len(expense_service.list_expenses()) == 1


def test_external_id_already_persisted_is_rejected(import_service, expense_service, reference_data, expense_workbook):
    expense_service.create_expense(
        account_id=reference_data["accounts"]["Main USD"], amount=Decimal("1"), external_id="EXT-1"
    )
    path = expense_workbook([["ext-1", "Main USD", 10]])

    summary = import_service.import_expenses(path)

    assert summary.success_count == 0
    assert summary.errors == ['Row 2: Expense ID "ext-1" already exists']


def test_unedited_export_ids_count_as_existing(import_service, expense_service, reference_data, expense_workbook):
    expense_id = expense_service.create_expense(
        account_id=reference_data["accounts"]["Main USD"], amount=Decimal("1")
    )
    path = expense_workbook([[str(expense_id), "Main USD", 10]])

    summary = import_service.import_expenses(path)

    assert summary.errors == [f'Row 2: Expense ID "{expense_id}" already exists']


def test_duplicate_external_id_in_file(import_service, reference_data, expense_workbook):
    path = expense_workbook(
        [
            ["EXT-9", "Main USD", 1],
            ["ext-9", "Main USD", 2],
        ]
    )

    summary = import_service.import_expenses(path)

    assert summary.success_count == 1
    assert summary.errors == ['Row 3: Expense ID "ext-9" is duplicated in the file']


def test_submission_failure_is_reported_by_account_and_amount(import_service, reference_data, expense_workbook):
    # Row 2 becomes expense 1, so row 3's ID collides only at submission time
    path = expense_workbook(
        [
            [None, "Main USD", 5],
            ["1", "Main USD", 7],
            [None, "Main HKD", 9],
        ]
    )

    summary = import_service.import_expenses(path)

    assert summary.success_count == 2
    assert summary.error_count == 1
    assert summary.errors == ["Expense for account \"Main USD\" amount 7: External ID '1' is already in use"]


def test_persistence_errors_are_collected(import_service, reference_data, expense_workbook, monkeypatch):
    calls = []

    def failing_create(**kwargs):
        calls.append(kwargs)
        if len(calls) == 1:
            raise PersistenceError("Database rejected the write: disk full")
        return len(calls)

    monkeypatch.setattr(import_service.expense_service, "create_expense", failing_create)
    path = expense_workbook([[None, "Main USD", 5], [None, "Main USD", 6]])

    summary = import_service.import_expenses(path)

    assert len(calls) == 2
    assert all(call["is_imported"] for call in calls)
    assert summary.success_count == 1
    assert summary.errors == [
        'Expense for account "Main USD" amount 5: Database rejected the write: disk full'
    ]


def test_stop_request_halts_submission_without_rollback(import_service, expense_service, reference_data, expense_workbook):
    path = expense_workbook([[None, "Main USD", amount] for amount in (1, 2, 3, 4)])
    submitted = []
    original = import_service.expense_service.create_expense

    def tracking_create(**kwargs):
        submitted.append(kwargs["amount"])
        return original(**kwargs)

    import_service.expense_service.create_expense = tracking_create

    summary = import_service.import_expenses(path, should_stop=lambda: len(submitted) >= 2)

    assert summary.cancelled
    assert summary.success_count == 2
    assert summary.not_submitted == 2
    assert len(expense_service.list_expenses()) == 2


def test_missing_sheet_aborts_before_any_row(import_service, reference_data, write_workbook, expense_service):
    path = write_workbook("Sheet1", ["Account", "Amount"], [["Main USD", 1]])

    with pytest.raises(ImportFileError, match="Expenses sheet not found in the file"):
        import_service.import_expenses(path)
    assert expense_service.list_expenses() == []


def test_empty_file_reports_no_records(import_service, reference_data, expense_workbook):
    with pytest.raises(ImportFileError, match="No records found in the file"):
        import_service.import_expenses(expense_workbook([]))


def test_validate_expenses_does_not_submit(import_service, expense_service, reference_data, expense_workbook):
    outcomes = import_service.validate_expenses(expense_workbook([[None, "Main USD", 1], [None, "Main USD", 0]]))

    assert [o.is_ok for o in outcomes] == [True, False]
    assert expense_service.list_expenses() == []


def test_import_transfers_moves_balances(import_service, transfer_service, account_service, reference_data, transfer_workbook):
    path = transfer_workbook(
        [
            ["TRF-1", "Main USD", "Secondary USD", 100, "USD", 5, "Top up", "Admin User", "Internal"],
            ["TRF-2", "Main USD", "Main HKD", 100, None, None, "Cross currency", None, None],
            ["TRF-3", "Main HKD", "Secondary HKD", 50, None, None, None, None, None],
        ]
    )

    summary = import_service.import_transfers(path)

    assert summary.success_count == 1
    assert summary.errors == [
        "Row 3: From Account and To Account must have the same currency",
        "Row 4: Description is required",
    ]

    transfer = transfer_service.list_transfers()[0]
    assert transfer.external_id == "TRF-1"
    assert transfer.transaction_fee == Decimal("5")
    assert transfer.is_imported
    accounts = reference_data["accounts"]
    assert account_service.get_account(accounts["Main USD"]).balance == Decimal("895")
    assert account_service.get_account(accounts["Secondary USD"]).balance == Decimal("1100")


def test_transfer_submission_failure_names_both_accounts(import_service, reference_data, transfer_workbook, monkeypatch):
    def failing_create(**kwargs):
        raise PersistenceError("locked")

    monkeypatch.setattr(import_service.transfer_service, "create_transfer", failing_create)
    path = transfer_workbook([[None, "Main USD", "Secondary USD", 10, None, None, "Move"]])

    summary = import_service.import_transfers(path)

    assert summary.errors == ['Transfer "Main USD" -> "Secondary USD" amount 10: locked']


def test_format_summary_truncates_to_ten_errors():
    summary = ImportSummary(
        success_count=3,
        error_count=12,
        errors=[f"Row {n}: Amount must be a positive number" for n in range(2, 14)],
    )

    message = format_summary(summary, "expenses")

    assert message.startswith("Successfully imported 3 expenses. 12 expenses failed to import.")
    assert "Row 11:" in message
    assert "Row 12:" not in message
    assert message.endswith("... and 2 more errors")
    assert summary.error_count == 12


def test_format_summary_without_errors():
    assert format_summary(ImportSummary(success_count=2), "transfers") == "Successfully imported 2 transfers"


def test_format_summary_reports_stop():
    summary = ImportSummary(success_count=1, not_submitted=3, cancelled=True)

    assert "3 validated expenses were not submitted" in format_summary(summary, "expenses")


def test_account_names_differing_only_by_case_are_not_guessed(import_service, expense_service, temp_db, expense_workbook):
    # Written straight to the database, bypassing the account service's name check
    temp_db.create_account(name="MAIN USD", currency_code="HKD")
    temp_db.create_account(name="Main USD", currency_code="USD")
    path = expense_workbook([["", "Main USD", "10"]])

    summary = import_service.import_expenses(path)

    assert summary.success_count == 0
    assert summary.errors == ['Row 2: Account "Main USD" matches more than one account: MAIN USD, Main USD']
    assert expense_service.list_expenses() == []


def test_fractional_cents_are_rejected_before_anything_is_stored(
    import_service, expense_service, account_service, reference_data, expense_workbook
):
    path = expense_workbook([["", "Main USD", "100.555"], ["", "Main USD", "100.55"]])

    summary = import_service.import_expenses(path)

    assert summary.success_count == 1
    assert summary.errors == ["Row 2: Amount must have at most 2 decimal places"]
    (expense,) = expense_service.list_expenses()
    assert expense.amount == Decimal("100.55")
    main_usd = account_service.get_account(reference_data["accounts"]["Main USD"])
    assert main_usd.balance == Decimal("899.45")
