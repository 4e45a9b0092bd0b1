"""Expense domain service."""

from typing import Iterable, Optional
from decimal import Decimal
from ledgerport.database.base import Database
from ledgerport.domain.entities import Expense as ExpenseEntity, ExpenseQuery
from ledgerport.domain import errors
from ledgerport.domain.errors import ConflictError, NotFoundError, ValidationError
from ledgerport.utils.amount_parser import decimal_places


def check_references(db: Database, created_by: Optional[int], tag_ids: Iterable[int]) -> None:
    """Verify that the creator and every tag exist.

    Raises:
        NotFoundError: If the user or any tag is missing
    """
    if created_by is not None and db.get_user(created_by) is None:
        raise NotFoundError(errors.user_not_found(created_by))
    for tag_id in tag_ids:
        if db.get_tag(tag_id) is None:
            raise NotFoundError(errors.tag_not_found(tag_id))


def check_external_id(identifiers: Iterable[str], external_id: Optional[str]) -> None:
    """Reject an external ID already used by a persisted record (ignoring case).

    Raises:
        ConflictError: If the ID is taken
    """
    if not external_id:
        return
    wanted = external_id.strip().lower()
    if any(identifier.lower() == wanted for identifier in identifiers):
        raise ConflictError(errors.duplicate_external_id(external_id))


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_expense(
        self,
        account_id: int,
        amount: Decimal,
        currency_code: Optional[str] = None,
        external_id: Optional[str] = None,
        description: Optional[str] = None,
        created_by: Optional[int] = None,
        tag_ids: tuple[int, ...] = (),
        is_imported: bool = False,
    ) -> int:
        """Create an expense.

        Args:
            account_id: Account the expense is paid from
            amount: Positive amount
            currency_code: Must equal the account currency; defaults to it
            external_id: Optional user-supplied identifier, unique if present
            description: Optional description
            created_by: Optional user ID the expense is attributed to
            tag_ids: Tag IDs
            is_imported: True when created by a spreadsheet import

        Returns:
            Expense ID

        Raises:
            NotFoundError: If account, user or a tag doesn't exist
            ValidationError: If amount or currency is invalid
            ConflictError: If the external ID is already in use
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(errors.account_not_found(account_id))

        if amount <= 0:
            raise ValidationError(errors.amount_not_positive())
        if decimal_places(amount) > 2:
            raise ValidationError(errors.amount_too_precise())

        currency_code = (currency_code or account.currency_code).upper()
        if currency_code != account.currency_code.upper():
            raise ValidationError(
                errors.currency_mismatch(currency_code, account.name, account.currency_code)
            )

        check_references(self.db, created_by, tag_ids)
        check_external_id(self.db.list_expense_identifiers(), external_id)

        return self.db.create_expense(
            account_id=account_id,
            amount=amount,
            currency_code=currency_code,
            external_id=external_id or None,
            description=description,
            created_by=created_by,
            tag_ids=tuple(tag_ids),
            is_imported=is_imported,
        )

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def list_expenses(self, query: Optional[ExpenseQuery] = None) -> list[ExpenseEntity]:
        """List expenses, optionally filtered by a query descriptor."""
        return self.db.list_expenses(query)

    def list_identifiers(self) -> list[str]:
        """Return identifiers that imported Expense IDs must not collide with."""
        return self.db.list_expense_identifiers()
