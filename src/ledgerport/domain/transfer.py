"""Transfer domain service."""

from typing import Optional
from decimal import Decimal
from ledgerport.database.base import Database
from ledgerport.domain.entities import Transfer as TransferEntity, TransferQuery
from ledgerport.domain import errors
from ledgerport.domain.errors import NotFoundError, ValidationError
from ledgerport.utils.amount_parser import decimal_places
from ledgerport.domain.expense import check_external_id, check_references


class TransferService:
    """Service for managing transfers between accounts of the same currency."""

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
        currency_code: Optional[str] = None,
        external_id: Optional[str] = None,
        transaction_fee: Optional[Decimal] = None,
        description: Optional[str] = None,
        created_by: Optional[int] = None,
        tag_ids: tuple[int, ...] = (),
        is_imported: bool = False,
    ) -> int:
        """Create a transfer.

        Returns:
            Transfer ID

        Raises:
            NotFoundError: If an account, the user or a tag doesn't exist
            ValidationError: If accounts are equal, currencies differ, or
                amount/fee are out of range
            ConflictError: If the external ID is already in use
        """
        if from_account_id == to_account_id:
            raise ValidationError(errors.transfer_same_account())

        from_account = self.db.get_account(from_account_id)
        if from_account is None:
            raise NotFoundError(errors.account_not_found(from_account_id))
        to_account = self.db.get_account(to_account_id)
        if to_account is None:
            raise NotFoundError(errors.account_not_found(to_account_id))

        if from_account.currency_code.upper() != to_account.currency_code.upper():
            raise ValidationError(errors.transfer_currency_differs())

        if amount <= 0:
            raise ValidationError(errors.amount_not_positive())
        if decimal_places(amount) > 2:
            raise ValidationError(errors.amount_too_precise())
        if transaction_fee is not None and transaction_fee < 0:
            raise ValidationError(errors.fee_not_valid())
        if transaction_fee is not None and decimal_places(transaction_fee) > 2:
            raise ValidationError(errors.fee_too_precise())

        currency_code = (currency_code or from_account.currency_code).upper()
        if currency_code != from_account.currency_code.upper():
            raise ValidationError(
                errors.currency_mismatch(currency_code, from_account.name, from_account.currency_code)
            )

        check_references(self.db, created_by, tag_ids)
        check_external_id(self.db.list_transfer_identifiers(), external_id)

        return self.db.create_transfer(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            currency_code=currency_code,
            external_id=external_id or None,
            transaction_fee=transaction_fee,
            description=description,
            created_by=created_by,
            tag_ids=tuple(tag_ids),
            is_imported=is_imported,
        )

    def get_transfer(self, transfer_id: int) -> Optional[TransferEntity]:
        """Get transfer by ID."""
        return self.db.get_transfer(transfer_id)

    def list_transfers(self, query: Optional[TransferQuery] = None) -> list[TransferEntity]:
        """List transfers, optionally filtered by a query descriptor."""
        return self.db.list_transfers(query)

    def list_identifiers(self) -> list[str]:
        """Return identifiers that imported Transfer IDs must not collide with."""
        return self.db.list_transfer_identifiers()
