"""Application-wide constants and configuration values.

This module centralizes the fixed-point parameters of the distribution
algorithm and the API defaults, providing a single source of truth for
values that must never drift between modules.
"""


class DistributionConstants:
    """Constants for the per-share revenue accumulator."""

    # Fixed-point factor applied to revenue-per-share before integer division.
    # Truncation loses at most 1 / SCALE of a currency unit per share per deposit.
    SCALE = 10**18


class APIConstants:
    """Constants for API behavior, limits, and defaults."""

    # Pagination defaults for list endpoints
    DEFAULT_PAGE_SIZE = 100  # Default items per page
    MAX_PAGE_SIZE = 1000  # Maximum allowed items per page


class AssetConstants:
    """Constraints on asset metadata and share counts."""

    MAX_NAME_LENGTH = 255
    MAX_IMAGE_REF_LENGTH = 1024
    # Share counts live in 32-bit INTEGER columns
    MAX_TOTAL_SHARES = 2**31 - 1


# Shortcut used throughout the distribution engine and its tests
SCALE = DistributionConstants.SCALE
