"""Row validation for spreadsheet imports.

Each row runs through an ordered list of steps. A step reads raw cells from
the row, stores refined values on the context and returns ``None`` to
continue, or returns an error message to stop. The first failing step ends
validation for that row only; the caller moves on to the next row.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from ledgerport.domain import errors
from ledgerport.domain.duplicates import EXISTS_IN_STORE, DuplicateTracker
from ledgerport.domain.entities import ExpenseImport, RowOutcome, TransferImport
from ledgerport.domain.layouts import EXPENSE_LAYOUT, TRANSFER_LAYOUT, SheetLayout
from ledgerport.domain.resolver import ReferenceCatalog
from ledgerport.domain.workbook import SheetRow
from ledgerport.utils.amount_parser import decimal_places, parse_amount


@dataclass
class RowContext:
    """Per-row state threaded through the validation steps."""

    row: SheetRow
    layout: SheetLayout
    catalog: ReferenceCatalog
    tracker: DuplicateTracker
    values: dict[str, Any] = field(default_factory=dict)


Step = Callable[[RowContext], Optional[str]]


def check_external_id(ctx: RowContext) -> Optional[str]:
    raw = ctx.row.get("external_id")
    check = ctx.tracker.check_and_reserve(raw)
    if not check.accepted:
        if check.reason == EXISTS_IN_STORE:
            return errors.exists_in_store(ctx.layout.id_label, raw)
        return errors.duplicated_in_file(ctx.layout.id_label, raw)
    ctx.values["external_id"] = raw or None
    return None


def require_text(key: str, label: str) -> Step:
    """Fail when the cell is blank; otherwise store its trimmed text."""

    def step(ctx: RowContext) -> Optional[str]:
        text = ctx.row.get(key).strip()
        if not text:
            return errors.field_required(label)
        ctx.values[key] = text
        return None

    return step


def resolve_account(key: str, label: str) -> Step:
    """Resolve the text stored by ``require_text(key, ...)`` to an Account."""

    def step(ctx: RowContext) -> Optional[str]:
        resolution = ctx.catalog.resolve_account(ctx.values[key], label=label)
        if not resolution.found:
            return resolution.error
        ctx.values[f"{key}_entity"] = resolution.entity
        return None

    return step


def parse_positive_amount(ctx: RowContext) -> Optional[str]:
    try:
        amount = parse_amount(ctx.row.get("amount"))
    except ValueError:
        return errors.amount_not_positive()
    if amount <= 0:
        return errors.amount_not_positive()
    if decimal_places(amount) > 2:
        return errors.amount_too_precise()
    ctx.values["amount"] = amount
    return None


def check_currency(account_key: str) -> Step:
    """An explicit currency must equal the account's; a blank one defaults to it."""

    def step(ctx: RowContext) -> Optional[str]:
        account = ctx.values[f"{account_key}_entity"]
        stated = ctx.row.get("currency").strip().upper()
        if stated and stated != account.currency_code.upper():
            return errors.currency_mismatch(stated, account.name, account.currency_code)
        ctx.values["currency_code"] = stated or account.currency_code
        return None

    return step


def resolve_creator(ctx: RowContext) -> Optional[str]:
    name = ctx.row.get("created_by").strip()
    ctx.values["created_by"] = None
    if not name:
        return None
    resolution = ctx.catalog.resolve_user(name)
    if not resolution.found:
        return resolution.error
    ctx.values["created_by"] = resolution.entity.id
    return None


def resolve_tags(ctx: RowContext) -> Optional[str]:
    """Resolve a comma separated tag list; one unknown tag fails the row."""
    tag_ids: list[int] = []
    for name in ctx.row.get("tags").split(","):
        name = name.strip()
        if not name:
            continue
        resolution = ctx.catalog.resolve_tag(name)
        if not resolution.found:
            return resolution.error
        if resolution.entity.id not in tag_ids:
            tag_ids.append(resolution.entity.id)
    ctx.values["tag_ids"] = tuple(tag_ids)
    return None


def check_distinct_accounts(ctx: RowContext) -> Optional[str]:
    if ctx.values["from_account_entity"].id == ctx.values["to_account_entity"].id:
        return errors.transfer_same_account()
    return None


def check_same_currency(ctx: RowContext) -> Optional[str]:
    source = ctx.values["from_account_entity"].currency_code.upper()
    target = ctx.values["to_account_entity"].currency_code.upper()
    if source != target:
        return errors.transfer_currency_differs()
    return None


def parse_optional_fee(ctx: RowContext) -> Optional[str]:
    text = ctx.row.get("transaction_fee").strip()
    ctx.values["transaction_fee"] = None
    if not text:
        return None
    try:
        fee = parse_amount(text)
    except ValueError:
        return errors.fee_not_valid()
    if fee < 0:
        return errors.fee_not_valid()
    if decimal_places(fee) > 2:
        return errors.fee_too_precise()
    ctx.values["transaction_fee"] = fee
    return None


def build_expense(ctx: RowContext) -> ExpenseImport:
    return ExpenseImport(
        external_id=ctx.values["external_id"],
        account_id=ctx.values["account_entity"].id,
        amount=ctx.values["amount"],
        currency_code=ctx.values["currency_code"],
        description=ctx.row.get("description").strip() or None,
        tag_ids=ctx.values["tag_ids"],
        created_by=ctx.values["created_by"],
    )


def build_transfer(ctx: RowContext) -> TransferImport:
    return TransferImport(
        external_id=ctx.values["external_id"],
        from_account_id=ctx.values["from_account_entity"].id,
        to_account_id=ctx.values["to_account_entity"].id,
        amount=ctx.values["amount"],
        currency_code=ctx.values["currency_code"],
        transaction_fee=ctx.values["transaction_fee"],
        description=ctx.values["description"],
        tag_ids=ctx.values["tag_ids"],
        created_by=ctx.values["created_by"],
    )


EXPENSE_STEPS: tuple[Step, ...] = (
    check_external_id,
    require_text("account", "Account"),
    resolve_account("account", "Account"),
    parse_positive_amount,
    check_currency("account"),
    resolve_creator,
    resolve_tags,
)

TRANSFER_STEPS: tuple[Step, ...] = (
    check_external_id,
    require_text("from_account", "From Account"),
    resolve_account("from_account", "From Account"),
    require_text("to_account", "To Account"),
    resolve_account("to_account", "To Account"),
    check_distinct_accounts,
    check_same_currency,
    parse_positive_amount,
    check_currency("from_account"),
    require_text("description", "Description"),
    parse_optional_fee,
    resolve_creator,
    resolve_tags,
)


class RowValidator:
    """Validates rows of one layout against a catalog and duplicate tracker."""

    def __init__(
        self,
        layout: SheetLayout,
        steps: Sequence[Step],
        build: Callable[[RowContext], Any],
        catalog: ReferenceCatalog,
        tracker: DuplicateTracker,
    ):
        self.layout = layout
        self.steps = tuple(steps)
        self.build = build
        self.catalog = catalog
        self.tracker = tracker

    def validate(self, row: SheetRow) -> RowOutcome:
        ctx = RowContext(row=row, layout=self.layout, catalog=self.catalog, tracker=self.tracker)
        for step in self.steps:
            message = step(ctx)
            if message is not None:
                return RowOutcome.rejected(row.row_number, errors.row_message(row.row_number, message))
        return RowOutcome.accepted(row.row_number, self.build(ctx))

    def validate_all(self, rows: Sequence[SheetRow]) -> list[RowOutcome]:
        return [self.validate(row) for row in rows]


def expense_validator(catalog: ReferenceCatalog, tracker: DuplicateTracker) -> RowValidator:
    return RowValidator(EXPENSE_LAYOUT, EXPENSE_STEPS, build_expense, catalog, tracker)


def transfer_validator(catalog: ReferenceCatalog, tracker: DuplicateTracker) -> RowValidator:
    return RowValidator(TRANSFER_LAYOUT, TRANSFER_STEPS, build_transfer, catalog, tracker)
