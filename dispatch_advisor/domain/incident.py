from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class IncidentCharacteristic:
    name: str | None = None
    code: str | None = None
    value: str | None = None
    parser_label: str | None = None

@dataclass(slots=True)
class Incident:
    id: str | None
    mc1: str | None
    mc2: str | None = None
    mc3: str | None = None
    characteristics: list[IncidentCharacteristic] = field(default_factory=list)
    function_text: str | None = None
