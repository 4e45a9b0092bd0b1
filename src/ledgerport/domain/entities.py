"""Domain model entities for ledgerport.

These are pure data classes representing business concepts, independent of
database schema. Persisted entities come back from the database layer with
their relations already flattened (account name, creator name, tags), which is
the shape both the ledger views and the spreadsheet exporter consume.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: int
    name: str
    currency_code: str
    balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Tag:
    """Tag domain entity."""

    id: int
    name: str
    color: str
    created_at: datetime


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    external_id: Optional[str]
    account_id: int
    account_name: str
    amount: Decimal
    currency_code: str
    description: Optional[str]
    created_by: Optional[int]
    created_by_name: Optional[str]
    tags: tuple[Tag, ...]
    is_imported: bool
    created_at: datetime


@dataclass(frozen=True)
class Transfer:
    """Transfer domain entity."""

    id: int
    external_id: Optional[str]
    from_account_id: int
    from_account_name: str
    to_account_id: int
    to_account_name: str
    amount: Decimal
    currency_code: str
    transaction_fee: Optional[Decimal]
    description: Optional[str]
    created_by: Optional[int]
    created_by_name: Optional[str]
    tags: tuple[Tag, ...]
    is_imported: bool
    created_at: datetime


@dataclass(frozen=True)
class ExpenseImport:
    """Validated expense row, ready to be submitted."""

    account_id: int
    amount: Decimal
    currency_code: str
    external_id: Optional[str] = None
    description: Optional[str] = None
    tag_ids: tuple[int, ...] = ()
    created_by: Optional[int] = None


@dataclass(frozen=True)
class TransferImport:
    """Validated transfer row, ready to be submitted."""

    from_account_id: int
    to_account_id: int
    amount: Decimal
    currency_code: str
    description: str
    external_id: Optional[str] = None
    transaction_fee: Optional[Decimal] = None
    tag_ids: tuple[int, ...] = ()
    created_by: Optional[int] = None


@dataclass(frozen=True)
class ExpenseQuery:
    """Filter descriptor for listing or exporting expenses."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    account_id: Optional[int] = None
    currency_code: Optional[str] = None
    created_by: Optional[int] = None
    tag_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class TransferQuery:
    """Filter descriptor for listing or exporting transfers."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    from_account_id: Optional[int] = None
    to_account_id: Optional[int] = None
    currency_code: Optional[str] = None
    created_by: Optional[int] = None
    tag_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class RowOutcome:
    """Result of validating one spreadsheet row.

    ``kind`` is ``"ok"`` with a ``record``, or ``"error"`` with ``messages``.
    """

    row_number: int
    kind: str
    record: Any = None
    messages: tuple[str, ...] = ()

    @classmethod
    def accepted(cls, row_number: int, record: Any) -> "RowOutcome":
        return cls(row_number=row_number, kind="ok", record=record)

    @classmethod
    def rejected(cls, row_number: int, *messages: str) -> "RowOutcome":
        return cls(row_number=row_number, kind="error", messages=tuple(messages))

    @property
    def is_ok(self) -> bool:
        return self.kind == "ok"


@dataclass
class ImportSummary:
    """Aggregate result of one import run.

    ``errors`` holds row validation messages first, in row order, followed by
    submission failures in submission order. ``not_submitted`` counts
    validated records skipped because the run was stopped early.
    """

    success_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)
    not_submitted: int = 0
    cancelled: bool = False


@dataclass(frozen=True)
class ExportResult:
    """Result of writing an export workbook."""

    file_name: str
    record_count: int
