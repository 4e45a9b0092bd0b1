"""Tests for database mappers."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from ledgerport.database.models import (
    Account as ORMAccount,
    Tag as ORMTag,
    User as ORMUser,
    Expense as ORMExpense,
    Transfer as ORMTransfer,
)
from ledgerport.database.mappers import (
    account_to_domain,
    tag_to_domain,
    expense_to_domain,
    transfer_to_domain,
)
from ledgerport.domain.entities import Account, Expense, Tag, Transfer


@pytest.fixture
def now():
    return datetime.now(UTC)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self, now):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(id=1, name="Main USD", currency_code="USD", balance=Decimal("12.50"), created_at=now)

        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.name == "Main USD"
        assert account.balance == Decimal("12.50")

    def test_unset_balance_maps_to_zero(self, now):
        orm_account = ORMAccount(id=1, name="Main USD", currency_code="USD", created_at=now)

        assert account_to_domain(orm_account).balance == Decimal("0")


class TestExpenseMapper:
    """Tests for Expense mapper."""

    def test_expense_to_domain_flattens_relations(self, now):
        account = ORMAccount(id=7, name="Main USD", currency_code="USD", created_at=now)
        user = ORMUser(id=5, name="Admin User", created_at=now)
        tag = ORMTag(id=3, name="Office", color="#6b7280", created_at=now)
        orm_expense = ORMExpense(
            id=1,
            external_id="EXT-1",
            account_id=7,
            amount=Decimal("100.50"),
            currency_code="USD",
            created_by=5,
            is_imported=True,
            created_at=now,
        )
        orm_expense.account = account
        orm_expense.creator = user
        orm_expense.tags = [tag]

        expense = expense_to_domain(orm_expense)

        assert isinstance(expense, Expense)
        assert expense.account_name == "Main USD"
        assert expense.created_by_name == "Admin User"
        assert expense.tags == (tag_to_domain(tag),)
        assert isinstance(expense.tags[0], Tag)

    def test_expense_without_creator(self, now):
        orm_expense = ORMExpense(
            id=2, account_id=7, amount=Decimal("1"), currency_code="USD", is_imported=False, created_at=now
        )
        orm_expense.account = ORMAccount(id=7, name="Main USD", currency_code="USD", created_at=now)

        expense = expense_to_domain(orm_expense)

        assert expense.created_by_name is None
        assert expense.tags == ()


class TestTransferMapper:
    """Tests for Transfer mapper."""

    def test_transfer_to_domain(self, now):
        orm_transfer = ORMTransfer(
            id=1,
            from_account_id=7,
            to_account_id=8,
            amount=Decimal("10"),
            currency_code="USD",
            transaction_fee=Decimal("1"),
            description="Move",
            is_imported=False,
            created_at=now,
        )
        orm_transfer.from_account = ORMAccount(id=7, name="Main USD", currency_code="USD", created_at=now)
        orm_transfer.to_account = ORMAccount(id=8, name="Secondary USD", currency_code="USD", created_at=now)

        transfer = transfer_to_domain(orm_transfer)

        assert isinstance(transfer, Transfer)
        assert transfer.from_account_name == "Main USD"
        assert transfer.to_account_name == "Secondary USD"
        assert transfer.transaction_fee == Decimal("1")
