from __future__ import annotations
import logging
from collections.abc import Iterable
from dispatch_advisor.domain.incident import IncidentCharacteristic
from dispatch_advisor.domain.recommendation import ExtraMatch
from dispatch_advisor.domain.rules import CharacteristicModifierRule, FunctionModifierRule
from dispatch_advisor.shared.normalization import lower_or_empty


logger = logging.getLogger(__name__)

class CharacteristicModifierMatcher:
    """Additive rules keyed on a characteristic's code or name; first rule wins."""

    def __init__(self, rules: Iterable[CharacteristicModifierRule]) -> None:
        self._rules: tuple[CharacteristicModifierRule, ...] = tuple(rules)

    def match_first(self, characteristic: IncidentCharacteristic) -> ExtraMatch | None:
        code = lower_or_empty(characteristic.code)
        name = lower_or_empty(characteristic.name)

        for rule in self._rules:
            matches_code = bool(code) and any(c.lower() == code for c in rule.codes)
            matches_name = bool(name) and any(n.lower() in name for n in rule.names if n)
            if matches_code or matches_name:
                logger.debug("Characteristic modifier %r matched %r", rule.rationale, characteristic)
                return ExtraMatch(extra_units=tuple(rule.extra_units), rationale=rule.rationale)

        return None

class FunctionModifierMatcher:
    """Additive rules keyed on substrings of the object function text."""

    def __init__(self, rules: Iterable[FunctionModifierRule]) -> None:
        self._rules: tuple[FunctionModifierRule, ...] = tuple(rules)

    def match_first(self, function_text: str | None) -> ExtraMatch | None:
        if not function_text:
            return None

        text = function_text.lower()
        for rule in self._rules:
            if any(p.lower() in text for p in rule.patterns if p):
                logger.debug("Function modifier %r matched %r", rule.rationale, function_text)
                return ExtraMatch(extra_units=tuple(rule.extra_units), rationale=rule.rationale)

        return None
