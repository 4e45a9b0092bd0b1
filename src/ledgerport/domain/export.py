"""Spreadsheet export domain service."""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from ledgerport.database.base import Database
from ledgerport.domain.entities import (
    Expense,
    ExpenseQuery,
    ExportResult,
    Tag,
    Transfer,
    TransferQuery,
)
from ledgerport.domain.layouts import EXPENSE_LAYOUT, TRANSFER_LAYOUT, SheetLayout
from ledgerport.domain.workbook import write_sheet, write_template

logger = logging.getLogger(__name__)


def default_file_name(layout: SheetLayout, today: Optional[date] = None) -> str:
    """Return e.g. ``expenses_export_2024-03-01.xlsx``."""
    today = today or date.today()
    return f"{layout.noun}_export_{today.isoformat()}.xlsx"


def _tag_names(tags: tuple[Tag, ...]) -> str:
    return ", ".join(tag.name for tag in tags)


def _identifier(record: Union[Expense, Transfer]) -> str:
    # Records entered without an external ID are exported under their internal ID
    return record.external_id or str(record.id)


def expense_row(expense: Expense) -> dict[str, Any]:
    """Flatten an expense to a row keyed by export header."""
    return {
        "Expense ID": _identifier(expense),
        "Date": expense.created_at.date().isoformat(),
        "Account": expense.account_name,
        "Amount": expense.amount,
        "Currency": expense.currency_code,
        "Description": expense.description,
        "Created By": expense.created_by_name,
        "Tags": _tag_names(expense.tags),
    }


def transfer_row(transfer: Transfer) -> dict[str, Any]:
    """Flatten a transfer to a row keyed by export header."""
    return {
        "Transfer ID": _identifier(transfer),
        "Date": transfer.created_at.date().isoformat(),
        "From Account": transfer.from_account_name,
        "To Account": transfer.to_account_name,
        "Amount": transfer.amount,
        "Currency": transfer.currency_code,
        "Transaction Fee": transfer.transaction_fee,
        "Description": transfer.description,
        "Created By": transfer.created_by_name,
        "Tags": _tag_names(transfer.tags),
    }


class ExportService:
    """Service for exporting expenses and transfers to xlsx workbooks."""

    def __init__(self, db: Database):
        """Initialize export service.

        Args:
            db: Database instance
        """
        self.db = db

    def _export(self, layout: SheetLayout, rows: list[dict[str, Any]], output_dir, file_name) -> ExportResult:
        file_name = file_name or default_file_name(layout)
        path = Path(output_dir) / file_name
        count = write_sheet(path, layout, layout.headers, rows)
        logger.info("Exported %d %s to %s", count, layout.noun, path)
        return ExportResult(file_name=str(path), record_count=count)

    def export_expenses(
        self,
        query: Optional[ExpenseQuery] = None,
        output_dir: Union[str, Path] = ".",
        file_name: Optional[str] = None,
    ) -> ExportResult:
        """Export the expenses matching ``query`` to an xlsx file.

        Args:
            query: Filter; all expenses when omitted
            output_dir: Directory for the workbook
            file_name: File name; defaults to ``expenses_export_<today>.xlsx``

        Returns:
            ExportResult with the written path and row count
        """
        expenses = self.db.list_expenses(query or ExpenseQuery())
        return self._export(EXPENSE_LAYOUT, [expense_row(e) for e in expenses], output_dir, file_name)

    def export_transfers(
        self,
        query: Optional[TransferQuery] = None,
        output_dir: Union[str, Path] = ".",
        file_name: Optional[str] = None,
    ) -> ExportResult:
        """Export the transfers matching ``query`` to an xlsx file."""
        transfers = self.db.list_transfers(query or TransferQuery())
        return self._export(TRANSFER_LAYOUT, [transfer_row(t) for t in transfers], output_dir, file_name)

    @staticmethod
    def write_template(layout: SheetLayout, path: Union[str, Path]) -> ExportResult:
        """Write the example import document for ``layout``."""
        count = write_template(path, layout)
        logger.info("Wrote %s template to %s", layout.noun, path)
        return ExportResult(file_name=str(path), record_count=count)
