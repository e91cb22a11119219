"""Utility functions for shopledger."""

from shopledger.utils.date_parser import parse_date
from shopledger.utils.amount_parser import parse_amount, coerce_amount, parse_quantity
from shopledger.utils.payload import pick, camelize_keys

__all__ = ["parse_date", "parse_amount", "coerce_amount", "parse_quantity", "pick", "camelize_keys"]
