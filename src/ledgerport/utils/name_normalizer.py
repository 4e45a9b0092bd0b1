"""Name normalization strategies for matching spreadsheet text to accounts.

Spreadsheet authors introduce stray whitespace, no-break spaces and mixed
Unicode forms into account names. Each strategy below only removes that kind of
noise; none of them performs edit-distance or substring matching, so two names
that differ in their letters never normalize to the same key.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Callable

# Zero-width characters are not matched by \s but show up in pasted text.
_INVISIBLE = "\u200b\u200c\u200d\u2060\ufeff"
_WHITESPACE_RUN = re.compile(r"\s+")
_ANY_WHITESPACE = re.compile(rf"[\s{_INVISIBLE}]+")


@dataclass(frozen=True)
class NormalizationStrategy:
    """A named, pure string transform used to build and query catalog keys."""

    name: str
    transform: Callable[[str], str]


def _canonical(value: str) -> str:
    return unicodedata.normalize("NFKC", value)


def collapse_canonical(value: str) -> str:
    """NFKC-canonicalize, lowercase and collapse whitespace runs to one space."""
    return _WHITESPACE_RUN.sub(" ", _canonical(value)).strip().lower()


def collapse_plain(value: str) -> str:
    """Lowercase and collapse whitespace runs without Unicode canonicalization."""
    return _WHITESPACE_RUN.sub(" ", value).strip().lower()


def strip_whitespace(value: str) -> str:
    """NFKC-canonicalize, lowercase and drop every whitespace or invisible char."""
    return _ANY_WHITESPACE.sub("", _canonical(value)).lower()


# Tried in order; append new strategies here (e.g. accent folding).
ACCOUNT_NAME_STRATEGIES: tuple[NormalizationStrategy, ...] = (
    NormalizationStrategy("collapse-canonical", collapse_canonical),
    NormalizationStrategy("collapse-plain", collapse_plain),
    NormalizationStrategy("strip-whitespace", strip_whitespace),
)


def normalize(strategy: NormalizationStrategy, raw_name: str) -> str:
    """Return the catalog key for ``raw_name`` under ``strategy``."""
    return strategy.transform(raw_name)
