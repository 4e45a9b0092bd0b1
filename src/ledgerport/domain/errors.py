"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Sequence

# Upper bound on example account names quoted in a "not found" message.
ACCOUNT_SAMPLE_LIMIT = 10


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PersistenceError(DomainError):
    """The persistence layer rejected a write."""


class ImportFileError(DomainError):
    """The import file is structurally unusable (no rows are processed)."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def tag_not_found(tag_id: int) -> str:
    """Return message for missing tag."""
    return f"Tag {tag_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def duplicate_external_id(external_id: str) -> str:
    """Return message for an external ID already used by a persisted record."""
    return f"External ID '{external_id}' is already in use"


def sheet_not_found(sheet_name: str) -> str:
    return f"{sheet_name} sheet not found in the file"


def no_records_found() -> str:
    return "No records found in the file"


def row_message(row_number: int, message: str) -> str:
    """Prefix a message with its 1-indexed spreadsheet row."""
    return f"Row {row_number}: {message}"


def exists_in_store(label: str, value: str) -> str:
    return f'{label} "{value}" already exists'


def duplicated_in_file(label: str, value: str) -> str:
    return f'{label} "{value}" is duplicated in the file'


def field_required(label: str) -> str:
    return f"{label} is required"


def account_name_not_found(label: str, name: str, known_names: Sequence[str]) -> str:
    """Return message for an unresolvable account name.

    Quotes at most ``ACCOUNT_SAMPLE_LIMIT`` known names, followed by ``...``
    when there are more, so the user can see what a valid value looks like.
    """
    message = f'{label} "{name}" not found'
    if not known_names:
        return f"{message}. No accounts are defined"
    sample = list(known_names[:ACCOUNT_SAMPLE_LIMIT])
    if len(known_names) > ACCOUNT_SAMPLE_LIMIT:
        sample.append("...")
    return f"{message}. Known accounts: {', '.join(sample)}"


def account_name_ambiguous(label: str, name: str, matching_names: Sequence[str]) -> str:
    return f'{label} "{name}" matches more than one account: {", ".join(matching_names)}'


def tag_name_not_found(name: str) -> str:
    return f'Tag "{name}" does not exist'


def user_name_not_found(label: str, name: str) -> str:
    return f'{label} "{name}" not found'


def amount_not_positive() -> str:
    return "Amount must be a positive number"


def amount_too_precise() -> str:
    return "Amount must have at most 2 decimal places"


def currency_mismatch(currency_code: str, account_name: str, account_currency: str) -> str:
    return (
        f'Currency "{currency_code}" does not match account "{account_name}" '
        f"currency ({account_currency})"
    )


def transfer_same_account() -> str:
    return "From Account and To Account must be different"


def transfer_currency_differs() -> str:
    return "From Account and To Account must have the same currency"


def fee_not_valid() -> str:
    return "Transaction Fee must be a non-negative number"


def fee_too_precise() -> str:
    return "Transaction Fee must have at most 2 decimal places"


def expense_submission_failed(account_name: str, amount: Decimal, message: str) -> str:
    """Return message for a validated expense the persistence layer rejected."""
    return f'Expense for account "{account_name}" amount {amount}: {message}'


def transfer_submission_failed(
    from_account_name: str, to_account_name: str, amount: Decimal, message: str
) -> str:
    """Return message for a validated transfer the persistence layer rejected."""
    return (
        f'Transfer "{from_account_name}" -> "{to_account_name}" amount {amount}: {message}'
    )
