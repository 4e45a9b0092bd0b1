"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer also flattens relations (account names, creator name, tags) so the
domain layer never touches lazy-loaded ORM attributes.
"""

from decimal import Decimal

from ledgerport.domain import entities as domain
from ledgerport.database.models import (
    Account as ORMAccount,
    Tag as ORMTag,
    User as ORMUser,
    Expense as ORMExpense,
    Transfer as ORMTransfer,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        currency_code=orm_account.currency_code,
        balance=Decimal(orm_account.balance or 0),
        created_at=orm_account.created_at,
    )


def tag_to_domain(orm_tag: ORMTag) -> domain.Tag:
    """Convert SQLAlchemy Tag model to domain Tag entity."""
    return domain.Tag(
        id=orm_tag.id,
        name=orm_tag.name,
        color=orm_tag.color,
        created_at=orm_tag.created_at,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(id=orm_user.id, name=orm_user.name, created_at=orm_user.created_at)


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        external_id=orm_expense.external_id,
        account_id=orm_expense.account_id,
        account_name=orm_expense.account.name,
        amount=orm_expense.amount,
        currency_code=orm_expense.currency_code,
        description=orm_expense.description,
        created_by=orm_expense.created_by,
        created_by_name=orm_expense.creator.name if orm_expense.creator else None,
        tags=tuple(tag_to_domain(tag) for tag in orm_expense.tags),
        is_imported=orm_expense.is_imported,
        created_at=orm_expense.created_at,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        external_id=orm_transfer.external_id,
        from_account_id=orm_transfer.from_account_id,
        from_account_name=orm_transfer.from_account.name,
        to_account_id=orm_transfer.to_account_id,
        to_account_name=orm_transfer.to_account.name,
        amount=orm_transfer.amount,
        currency_code=orm_transfer.currency_code,
        transaction_fee=orm_transfer.transaction_fee,
        description=orm_transfer.description,
        created_by=orm_transfer.created_by,
        created_by_name=orm_transfer.creator.name if orm_transfer.creator else None,
        tags=tuple(tag_to_domain(tag) for tag in orm_transfer.tags),
        is_imported=orm_transfer.is_imported,
        created_at=orm_transfer.created_at,
    )
