from __future__ import annotations
from dataclasses import dataclass, field
from dispatch_advisor.domain.rules import ClassificationRule


@dataclass(frozen=True)
class BaseMatch:
    base_units: tuple[str, ...]
    extra_units: tuple[str, ...]
    rationale: str
    priority: int = 0

@dataclass(frozen=True)
class ExtraMatch:
    extra_units: tuple[str, ...]
    rationale: str

@dataclass
class RecommendationResult:
    base: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)
    total: list[str] = field(default_factory=list)
    rationale: list[str] = field(default_factory=list)
    matched_classification_rule: ClassificationRule | None = None
    matched_characteristic_base: bool = False
