from __future__ import annotations
from typing import Protocol
from dispatch_advisor.domain.rules import RuleSet


class RuleSetProvider(Protocol):
    def fetch_rule_set(self) -> RuleSet:
        ...
