"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerport.domain.entities import (
    Account,
    Tag,
    User,
    Expense,
    Transfer,
    ExpenseQuery,
    TransferQuery,
)


class Database(ABC):
    """Abstract database interface for ledgerport.

    This is the persistence collaborator of the import/export pipeline: it
    supplies reference data, the identifiers of already persisted records,
    one create call per record, and filtered record listings for export.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, currency_code: str, balance: Decimal = Decimal("0")) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Tag operations
    @abstractmethod
    def create_tag(self, name: str, color: str) -> int:
        """Create a tag. Returns tag ID."""
        pass

    @abstractmethod
    def get_tag(self, tag_id: int) -> Optional[Tag]:
        """Get tag by ID."""
        pass

    @abstractmethod
    def list_tags(self) -> list[Tag]:
        """List all tags."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, name: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        account_id: int,
        amount: Decimal,
        currency_code: str,
        external_id: Optional[str] = None,
        description: Optional[str] = None,
        created_by: Optional[int] = None,
        tag_ids: tuple[int, ...] = (),
        is_imported: bool = False,
    ) -> int:
        """Create an expense and deduct it from the account. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(self, query: Optional[ExpenseQuery] = None) -> list[Expense]:
        """List expenses matching an optional filter descriptor."""
        pass

    @abstractmethod
    def list_expense_identifiers(self) -> list[str]:
        """Return every persisted expense's external ID and internal ID as text."""
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
        currency_code: str,
        external_id: Optional[str] = None,
        transaction_fee: Optional[Decimal] = None,
        description: Optional[str] = None,
        created_by: Optional[int] = None,
        tag_ids: tuple[int, ...] = (),
        is_imported: bool = False,
    ) -> int:
        """Create a transfer and move the balances. Returns transfer ID."""
        pass

    @abstractmethod
    def get_transfer(self, transfer_id: int) -> Optional[Transfer]:
        """Get transfer by ID."""
        pass

    @abstractmethod
    def list_transfers(self, query: Optional[TransferQuery] = None) -> list[Transfer]:
        """List transfers matching an optional filter descriptor."""
        pass

    @abstractmethod
    def list_transfer_identifiers(self) -> list[str]:
        """Return every persisted transfer's external ID and internal ID as text."""
        pass
