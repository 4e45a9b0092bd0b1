"""Account domain service."""

from decimal import Decimal
from typing import Optional
from ledgerport.database.base import Database
from ledgerport.domain.entities import Account as AccountEntity
from ledgerport.domain.errors import ConflictError, ValidationError
from ledgerport.utils.amount_parser import decimal_places
from ledgerport.utils.name_normalizer import ACCOUNT_NAME_STRATEGIES, normalize


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self, name: str, currency_code: str, balance: Decimal = Decimal("0")
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            currency_code: Three-letter currency code (stored upper-cased)
            balance: Opening balance

        Returns:
            Account ID

        Raises:
            ValidationError: If name is blank, currency code is malformed or
                the balance has more than 2 decimal places
            ConflictError: If the name already exists or only differs from an
                existing name by case, whitespace or Unicode form
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")

        currency_code = currency_code.strip().upper()
        if len(currency_code) != 3 or not currency_code.isalpha():
            raise ValidationError(f"Invalid currency code '{currency_code}'")

        if decimal_places(balance) > 2:
            raise ValidationError("Balance must have at most 2 decimal places")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")
            # Names that normalize alike could not be told apart on import
            for strategy in ACCOUNT_NAME_STRATEGIES:
                if normalize(strategy, acc.name) == normalize(strategy, name):
                    raise ConflictError(
                        f"Account name '{name}' is indistinguishable from existing account '{acc.name}'"
                    )

        return self.db.create_account(name=name, currency_code=currency_code, balance=balance)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()
