"""Symbol normalization and validation."""

import re
from typing import Optional

_SYMBOL_RE = re.compile(r"^[A-Z0-9]{1,15}$")


def normalize_symbol(s: Optional[str]) -> Optional[str]:
    """Normalize symbol: strip whitespace and uppercase; None or empty -> None."""
    if s is None:
        return None
    stripped = s.strip().upper()
    return stripped if stripped else None


def validate_symbol(s: Optional[str]) -> bool:
    """Return True if the symbol is 1-15 letters/digits after normalization."""
    if not isinstance(s, str):
        return False
    symbol = normalize_symbol(s)
    return bool(symbol and _SYMBOL_RE.match(symbol))
