"""External identifier uniqueness tracking for one import run."""

from dataclasses import dataclass
from typing import Iterable, Optional

EXISTS_IN_STORE = "exists-in-store"
DUPLICATE_IN_FILE = "duplicate-in-file"


@dataclass(frozen=True)
class DuplicateCheck:
    accepted: bool
    reason: Optional[str] = None


class DuplicateTracker:
    """Rejects external IDs already persisted or already seen in this file.

    Comparison ignores case and surrounding whitespace. The persisted set is
    fixed at construction; the in-file set grows as IDs are accepted.
    """

    def __init__(self, existing_ids: Iterable[str]):
        self._existing = frozenset(self._key(value) for value in existing_ids if value)
        self._seen: set[str] = set()

    @staticmethod
    def _key(value: str) -> str:
        return str(value).strip().lower()

    def check_and_reserve(self, external_id: Optional[str]) -> DuplicateCheck:
        """Check ``external_id`` and reserve it if accepted.

        Blank or missing IDs are always accepted and never reserved.
        """
        if external_id is None or not str(external_id).strip():
            return DuplicateCheck(accepted=True)

        key = self._key(external_id)
        if key in self._existing:
            return DuplicateCheck(accepted=False, reason=EXISTS_IN_STORE)
        if key in self._seen:
            return DuplicateCheck(accepted=False, reason=DUPLICATE_IN_FILE)

        self._seen.add(key)
        return DuplicateCheck(accepted=True)

    @property
    def seen_count(self) -> int:
        return len(self._seen)
