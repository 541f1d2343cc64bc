from __future__ import annotations
import re
from typing import Any, Optional


_DOTS_AND_SPACES = re.compile(r"[.\s]+")

def normalize_str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None

def lower_or_empty(value: Optional[str]) -> str:
    return (value or "").lower()

def normalize_text(value: Optional[str]) -> str:
    """Lowercase, collapse runs of periods and whitespace into one space, trim.

        ``"Zeer  groot."`` and ``"zeer groot"`` both become ``"zeer groot"``.
        """

    return _DOTS_AND_SPACES.sub(" ", lower_or_empty(value)).strip()

def contains_either_way(a: str, b: str) -> bool:
    # empty strings would match everything
    if not a or not b:
        return False
    return a in b or b in a
