from __future__ import annotations
import re
from dataclasses import dataclass
from collections.abc import Iterable, Sequence


_TOKEN_PATTERN = re.compile(r"^([0-9]+)\s*(.+)$")

@dataclass(frozen=True, slots=True)
class UnitToken:
    count: int
    type: str

def parse_token(token: str) -> UnitToken:
    """Split a resource token like ``"2 TS-6"`` into count and unit type.

        Tokens without a leading count (``"SI"``) are taken as a single unit
        of the whole trimmed string.
        """

    match = _TOKEN_PATTERN.match(token)
    if match:
        return UnitToken(count=int(match.group(1)), type=match.group(2).strip())
    return UnitToken(count=1, type=token.strip())

def combine(existing: Sequence[str], incoming: str) -> list[str]:
    """Merge ``incoming`` into ``existing``, summing counts of an identical unit type.

        Type comparison is exact. An unknown type is appended as given.
        """

    new = parse_token(incoming)
    result = list(existing)

    for index, current in enumerate(result):
        parsed = parse_token(current)
        if parsed.type == new.type:
            result[index] = f"{parsed.count + new.count} {parsed.type}"
            return result

    result.append(incoming)
    return result

def combine_all(existing: Sequence[str], incoming: Iterable[str]) -> list[str]:
    result = list(existing)
    for token in incoming:
        result = combine(result, token)
    return result
