"""Resolution of spreadsheet text to accounts, tags and users.

A ``ReferenceCatalog`` is a read-only snapshot of the reference data taken at
the start of one import run. It is never cached across runs: accounts, tags
and users may change between imports.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from ledgerport.database.base import Database
from ledgerport.domain import errors
from ledgerport.domain.entities import Account, Tag, User
from ledgerport.utils.name_normalizer import ACCOUNT_NAME_STRATEGIES, NormalizationStrategy, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Either a resolved entity or the reason it could not be resolved."""

    entity: Any = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.entity is not None


class ReferenceCatalog:
    """Name lookups over a snapshot of accounts, tags and users."""

    def __init__(
        self,
        accounts: Iterable[Account],
        tags: Iterable[Tag],
        users: Iterable[User],
        strategies: Sequence[NormalizationStrategy] = ACCOUNT_NAME_STRATEGIES,
    ):
        self.accounts = tuple(accounts)
        self.account_names = [account.name for account in self.accounts]
        self.strategies = tuple(strategies)

        # One key map per strategy. A key claimed by several accounts stays
        # ambiguous and never resolves.
        self._account_keys: dict[str, dict[str, list[Account]]] = {}
        for strategy in self.strategies:
            keys: dict[str, list[Account]] = {}
            for account in self.accounts:
                keys.setdefault(normalize(strategy, account.name), []).append(account)
            self._account_keys[strategy.name] = keys

        self._tags: dict[str, Tag] = {}
        for tag in tags:
            self._tags.setdefault(tag.name.strip().lower(), tag)

        self._users: dict[str, User] = {}
        for user in users:
            self._users.setdefault(user.name.strip().lower(), user)

    @classmethod
    def from_database(cls, db: Database) -> "ReferenceCatalog":
        """Snapshot the reference data currently held by ``db``."""
        return cls(db.list_accounts(), db.list_tags(), db.list_users())

    def __repr__(self) -> str:
        return (
            f"ReferenceCatalog(accounts={len(self.accounts)}, "
            f"tags={len(self._tags)}, users={len(self._users)})"
        )

    def _matched(self, raw_name: str, label: str, matches: list[Account], how: str) -> Resolution:
        if len(matches) > 1:
            logger.warning("Account %r is ambiguous via %s: %d matches", raw_name, how, len(matches))
            return Resolution(
                error=errors.account_name_ambiguous(label, raw_name, [account.name for account in matches])
            )
        logger.debug("Resolved account %r via %s", raw_name, how)
        return Resolution(entity=matches[0])

    def resolve_account(self, raw_name: str, label: str = "Account") -> Resolution:
        """Resolve an account name, trying each normalization strategy in order.

        The first strategy whose key is present decides the outcome. A key
        shared by more than one account is reported as ambiguous rather than
        picking one of them.

        When every strategy misses, falls back to a case-insensitive scan
        against each account's primary key and original name. The scan only
        matters when the catalog runs with fewer strategies than the default
        set, since the collapse strategies already cover a case-insensitive
        match on the stored name. A miss is reported with a bounded sample of
        known names.
        """
        for strategy in self.strategies:
            matches = self._account_keys[strategy.name].get(normalize(strategy, raw_name))
            if matches:
                return self._matched(raw_name, label, matches, strategy.name)

        lowered = raw_name.strip().lower()
        primary = ACCOUNT_NAME_STRATEGIES[0]
        matches = [
            account
            for account in self.accounts
            if lowered == normalize(primary, account.name) or lowered == account.name.lower()
        ]
        if matches:
            return self._matched(raw_name, label, matches, "fallback scan")

        return Resolution(error=errors.account_name_not_found(label, raw_name, self.account_names))

    def resolve_tag(self, raw_name: str) -> Resolution:
        """Resolve a tag by exact name, ignoring case."""
        tag = self._tags.get(raw_name.strip().lower())
        if tag is None:
            return Resolution(error=errors.tag_name_not_found(raw_name))
        return Resolution(entity=tag)

    def resolve_user(self, raw_name: str, label: str = "Created By") -> Resolution:
        """Resolve a user by exact name, ignoring case."""
        user = self._users.get(raw_name.strip().lower())
        if user is None:
            return Resolution(error=errors.user_name_not_found(label, raw_name))
        return Resolution(entity=user)
