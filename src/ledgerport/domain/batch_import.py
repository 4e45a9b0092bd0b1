"""Spreadsheet import domain service."""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ledgerport.database.base import Database
from ledgerport.domain import errors
from ledgerport.domain.duplicates import DuplicateTracker
from ledgerport.domain.entities import ExpenseImport, ImportSummary, RowOutcome, TransferImport
from ledgerport.domain.errors import DomainError
from ledgerport.domain.expense import ExpenseService
from ledgerport.domain.layouts import EXPENSE_LAYOUT, TRANSFER_LAYOUT
from ledgerport.domain.resolver import ReferenceCatalog
from ledgerport.domain.row_validation import expense_validator, transfer_validator
from ledgerport.domain.transfer import TransferService
from ledgerport.domain.workbook import read_sheet

logger = logging.getLogger(__name__)

# Number of detailed error lines shown to a user
ERROR_DISPLAY_LIMIT = 10

StopCheck = Callable[[], bool]


def format_summary(summary: ImportSummary, noun: str, limit: int = ERROR_DISPLAY_LIMIT) -> str:
    """Render an import summary for display.

    At most ``limit`` error lines are shown, followed by an "and N more"
    line. Truncation only affects the text, never ``summary.error_count``.
    """
    message = f"Successfully imported {summary.success_count} {noun}"
    if summary.error_count > 0:
        message += f". {summary.error_count} {noun} failed to import."
    if summary.cancelled:
        message += f"\nImport stopped early; {summary.not_submitted} validated {noun} were not submitted."
    if summary.errors:
        message += "\n\nErrors:\n" + "\n".join(summary.errors[:limit])
        if len(summary.errors) > limit:
            message += f"\n... and {len(summary.errors) - limit} more errors"
    return message


class ImportService:
    """Service for importing expense and transfer workbooks.

    Every run snapshots reference data and persisted identifiers afresh,
    validates all rows, then submits the validated records one at a time in
    row order. Row problems and rejected submissions are collected; neither
    stops the rest of the batch. There is no enclosing transaction: records
    submitted before a failure or a stop request stay committed.
    """

    def __init__(self, db: Database):
        """Initialize import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.expense_service = ExpenseService(db)
        self.transfer_service = TransferService(db)

    def _prepare(self, identifiers: list[str]) -> tuple[ReferenceCatalog, DuplicateTracker]:
        catalog = ReferenceCatalog.from_database(self.db)
        logger.info("Loaded %r and %d existing identifiers", catalog, len(identifiers))
        return catalog, DuplicateTracker(identifiers)

    @staticmethod
    def _collect(outcomes: list[RowOutcome], summary: ImportSummary) -> list:
        records = []
        for outcome in outcomes:
            if outcome.is_ok:
                records.append(outcome.record)
            else:
                summary.errors.extend(outcome.messages)
                summary.error_count += 1
        return records

    def validate_expenses(self, file_path: Union[str, Path]) -> list[RowOutcome]:
        """Validate an expense workbook without submitting anything.

        Raises:
            ImportFileError: If the workbook is structurally unusable
        """
        rows = read_sheet(file_path, EXPENSE_LAYOUT)
        catalog, tracker = self._prepare(self.expense_service.list_identifiers())
        return expense_validator(catalog, tracker).validate_all(rows)

    def validate_transfers(self, file_path: Union[str, Path]) -> list[RowOutcome]:
        """Validate a transfer workbook without submitting anything.

        Raises:
            ImportFileError: If the workbook is structurally unusable
        """
        rows = read_sheet(file_path, TRANSFER_LAYOUT)
        catalog, tracker = self._prepare(self.transfer_service.list_identifiers())
        return transfer_validator(catalog, tracker).validate_all(rows)

    def import_expenses(
        self, file_path: Union[str, Path], should_stop: Optional[StopCheck] = None
    ) -> ImportSummary:
        """Import expenses from the "Expenses" sheet of an xlsx file.

        Args:
            file_path: Path to the workbook
            should_stop: Optional callable checked before each submission;
                once it returns True no further records are submitted

        Returns:
            ImportSummary with counts and the combined error list

        Raises:
            ImportFileError: If the workbook is structurally unusable
        """
        logger.info("Importing expenses from %s", file_path)
        summary = ImportSummary()
        records = self._collect(self.validate_expenses(file_path), summary)
        account_names = {account.id: account.name for account in self.db.list_accounts()}

        def submit(record: ExpenseImport) -> None:
            self.expense_service.create_expense(
                account_id=record.account_id,
                amount=record.amount,
                currency_code=record.currency_code,
                external_id=record.external_id,
                description=record.description,
                created_by=record.created_by,
                tag_ids=record.tag_ids,
                is_imported=True,
            )

        def describe_failure(record: ExpenseImport, message: str) -> str:
            name = account_names.get(record.account_id, str(record.account_id))
            return errors.expense_submission_failed(name, record.amount, message)

        self._submit_all(records, submit, describe_failure, summary, should_stop)
        logger.info(
            "Expense import finished: %d imported, %d failed", summary.success_count, summary.error_count
        )
        return summary

    def import_transfers(
        self, file_path: Union[str, Path], should_stop: Optional[StopCheck] = None
    ) -> ImportSummary:
        """Import transfers from the "Transfers" sheet of an xlsx file.

        Raises:
            ImportFileError: If the workbook is structurally unusable
        """
        logger.info("Importing transfers from %s", file_path)
        summary = ImportSummary()
        records = self._collect(self.validate_transfers(file_path), summary)
        account_names = {account.id: account.name for account in self.db.list_accounts()}

        def submit(record: TransferImport) -> None:
            self.transfer_service.create_transfer(
                from_account_id=record.from_account_id,
                to_account_id=record.to_account_id,
                amount=record.amount,
                currency_code=record.currency_code,
                external_id=record.external_id,
                transaction_fee=record.transaction_fee,
                description=record.description,
                created_by=record.created_by,
                tag_ids=record.tag_ids,
                is_imported=True,
            )

        def describe_failure(record: TransferImport, message: str) -> str:
            return errors.transfer_submission_failed(
                account_names.get(record.from_account_id, str(record.from_account_id)),
                account_names.get(record.to_account_id, str(record.to_account_id)),
                record.amount,
                message,
            )

        self._submit_all(records, submit, describe_failure, summary, should_stop)
        logger.info(
            "Transfer import finished: %d imported, %d failed", summary.success_count, summary.error_count
        )
        return summary

    @staticmethod
    def _submit_all(records, submit, describe_failure, summary: ImportSummary, should_stop) -> None:
        for index, record in enumerate(records):
            if should_stop is not None and should_stop():
                summary.cancelled = True
                summary.not_submitted = len(records) - index
                logger.info("Import stopped; %d records not submitted", summary.not_submitted)
                return
            try:
                submit(record)
            except DomainError as e:
                logger.warning("Submission rejected: %s", e)
                summary.errors.append(describe_failure(record, str(e)))
                summary.error_count += 1
                continue
            summary.success_count += 1
