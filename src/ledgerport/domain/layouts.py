"""Spreadsheet layouts shared by the importer, exporter and template writer.

Headers are matched ignoring case and surrounding whitespace, and each column
accepts a few aliases, so an exported file that was hand-edited (or written
by another tool using camelCase keys) still imports.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class Column:
    key: str
    header: str
    aliases: tuple[str, ...] = ()
    # Export-only columns are written but never read back
    importable: bool = True

    def matches(self, header: str) -> bool:
        wanted = header.strip().lower()
        return wanted == self.header.lower() or wanted in {a.lower() for a in self.aliases}


@dataclass(frozen=True)
class SheetLayout:
    """Sheet name, columns and example rows for one importable entity."""

    sheet_name: str
    noun: str
    id_label: str
    columns: tuple[Column, ...]
    template_rows: tuple[dict[str, Any], ...] = field(default=())

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]

    @property
    def import_headers(self) -> list[str]:
        return [column.header for column in self.columns if column.importable]

    def column_for(self, header: Any) -> Optional[Column]:
        """Return the importable column a header cell refers to, if any."""
        if header is None:
            return None
        for column in self.columns:
            if column.importable and column.matches(str(header)):
                return column
        return None

    def match_headers(self, header_cells: Sequence[Any]) -> dict[int, str]:
        """Map header cell positions to column keys; unknown headers are ignored.

        When two cells name the same column, the leftmost wins.
        """
        positions: dict[int, str] = {}
        claimed: set[str] = set()
        for index, cell in enumerate(header_cells):
            column = self.column_for(cell)
            if column is None or column.key in claimed:
                continue
            positions[index] = column.key
            claimed.add(column.key)
        return positions


EXPENSE_LAYOUT = SheetLayout(
    sheet_name="Expenses",
    noun="expenses",
    id_label="Expense ID",
    columns=(
        Column("external_id", "Expense ID", ("Expense Id", "expenseId", "expense_id")),
        Column("date", "Date", importable=False),
        Column("account", "Account", ("accountName", "account_name")),
        Column("amount", "Amount"),
        Column("currency", "Currency", ("currencyCode", "currency_code")),
        Column("description", "Description"),
        Column("created_by", "Created By", ("createdBy", "created_by", "createdByName")),
        Column("tags", "Tags"),
    ),
    template_rows=(
        {
            "Expense ID": "EXT-1001",
            "Account": "Main USD",
            "Amount": Decimal("100.50"),
            "Currency": "USD",
            "Description": "Office supplies",
            "Created By": "Admin User",
            "Tags": "Office, Monthly",
        },
        {
            "Expense ID": "EXT-1002",
            "Account": "Main HKD",
            "Amount": Decimal("500"),
            "Currency": "HKD",
            "Description": "Travel expenses",
            "Created By": "Admin User",
            "Tags": "Travel",
        },
    ),
)

TRANSFER_LAYOUT = SheetLayout(
    sheet_name="Transfers",
    noun="transfers",
    id_label="Transfer ID",
    columns=(
        Column("external_id", "Transfer ID", ("Transfer Id", "transferId", "transfer_id")),
        Column("date", "Date", importable=False),
        Column("from_account", "From Account", ("fromAccount", "from_account", "fromAccountName")),
        Column("to_account", "To Account", ("toAccount", "to_account", "toAccountName")),
        Column("amount", "Amount"),
        Column("currency", "Currency", ("currencyCode", "currency_code")),
        Column("transaction_fee", "Transaction Fee", ("transactionFee", "transaction_fee", "Fee")),
        Column("description", "Description"),
        Column("created_by", "Created By", ("createdBy", "created_by", "createdByName")),
        Column("tags", "Tags"),
    ),
    template_rows=(
        {
            "Transfer ID": "TRF-1001",
            "From Account": "Main USD",
            "To Account": "Secondary USD",
            "Amount": Decimal("1000"),
            "Currency": "USD",
            "Transaction Fee": Decimal("5"),
            "Description": "Transfer to secondary account",
            "Created By": "Admin User",
            "Tags": "Internal, Monthly",
        },
        {
            "Transfer ID": "TRF-1002",
            "From Account": "Main HKD",
            "To Account": "Secondary HKD",
            "Amount": Decimal("5000"),
            "Currency": "HKD",
            "Transaction Fee": None,
            "Description": "Fund allocation",
            "Created By": "Admin User",
            "Tags": None,
        },
    ),
)
