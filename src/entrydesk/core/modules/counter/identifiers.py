"""Entry ID formatting: PREFIX-000042."""

import re

ENTRY_NUMBER_WIDTH = 6


def format_entry_id(prefix: str, value: int) -> str:
    """Format a counter value as a prefixed, zero-padded entry ID.

    Values wider than six digits are not truncated.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"Entry number must be non-negative, got {value}")
    return f"{prefix}-{value:0{ENTRY_NUMBER_WIDTH}d}"


def parse_entry_number(prefix: str, entry_id: str) -> int | None:
    """Extract the numeric suffix from an entry ID, or None if it does not match the prefix."""
    match = re.fullmatch(rf"{re.escape(prefix)}-(\d+)", entry_id)
    if match is None:
        return None
    return int(match.group(1))
