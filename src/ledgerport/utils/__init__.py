"""Utility functions for ledgerport."""

from ledgerport.utils.date_parser import parse_date
from ledgerport.utils.amount_parser import parse_amount
from ledgerport.utils.name_normalizer import ACCOUNT_NAME_STRATEGIES, normalize

__all__ = ["parse_date", "parse_amount", "ACCOUNT_NAME_STRATEGIES", "normalize"]
