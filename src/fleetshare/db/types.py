"""Column types for exact integer amounts.

Money, prices and the scaled distribution accumulator are unbounded
non-negative Python ints. The accumulator alone reaches 10**18 times the
revenue per share, which overflows BIGINT and loses precision in SQLite's
NUMERIC affinity, so these values are stored as their decimal digits.
"""

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

# Enough digits for any 256-bit unsigned value
UINT256_DIGITS = 78


class UInt256(TypeDecorator):
    """
    Non-negative integer stored as a decimal string.

    Guarantees:
        - process_bind_param: int -> str on INSERT/UPDATE, rejecting negatives.
        - process_result_value: str -> int on SELECT.
        - cache_ok=True enables SQLAlchemy statement caching.
    """

    impl = String(UINT256_DIGITS)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert int to its decimal string when storing."""
        if value is None:
            return None
        value = int(value)
        if value < 0:
            raise ValueError(f"UInt256 column cannot store negative value {value}")
        return str(value)

    def process_result_value(self, value, dialect):
        """Convert the decimal string back to int when loading."""
        if value is None:
            return None
        return int(value)
