from __future__ import annotations
import logging
from collections.abc import Iterable, Sequence
from dispatch_advisor.domain.incident import IncidentCharacteristic
from dispatch_advisor.domain.recommendation import BaseMatch
from dispatch_advisor.domain.rules import CharacteristicBaseRule
from dispatch_advisor.shared.normalization import (
    contains_either_way,
    lower_or_empty,
    normalize_text,
)


logger = logging.getLogger(__name__)

# names carrying this marker are parser labels, never value qualifiers
PARSER_LABEL_MARKER = "-inzet brw"

class CharacteristicBaseMatcher:
    """Finds every characteristic rule that determines (part of) the base deployment.

        Characteristics come from several upstream sources, so one property
        may show up in the code, the display name, the measured value or the
        parser label. A rule matches a characteristic on either of:

        - code: the codes are equal (case-insensitive). When the rule also
          lists names that are neither the characteristic's name nor its
          parser label, those names are value qualifiers and the
          characteristic's value has to match one of them as well.
        - name: a rule name overlaps the value, the parser label or the name.

        A rule is reported at most once per call, however many
        characteristics trigger it.
        """

    def __init__(self, rules: Iterable[CharacteristicBaseRule]) -> None:
        self._rules: tuple[CharacteristicBaseRule, ...] = tuple(rules)

    def match_all(self, characteristics: Sequence[IncidentCharacteristic]) -> list[BaseMatch]:
        if not characteristics:
            return []

        matches: list[BaseMatch] = []
        seen: set[str] = set()

        for characteristic in characteristics:
            for rule in self._rules:
                if rule.key in seen:
                    continue

                code_matched = _matches_code(rule, characteristic)
                name_matched = _matches_name(rule, characteristic)
                if not (code_matched or name_matched):
                    continue

                logger.debug(
                    "Characteristic rule %r matched (code=%s name=%s) for %r",
                    rule.key,
                    code_matched,
                    name_matched,
                    characteristic,
                )
                seen.add(rule.key)
                matches.append(
                    BaseMatch(
                        base_units=tuple(rule.base_units),
                        extra_units=tuple(rule.extra_units),
                        rationale=rule.rationale,
                        priority=rule.priority,
                    )
                )

        # sorted() is stable, equal priorities keep discovery order
        matches = sorted(matches, key=lambda m: m.priority, reverse=True)
        logger.debug("Found %d characteristic base match(es)", len(matches))
        return matches

    def match_best(self, characteristics: Sequence[IncidentCharacteristic]) -> BaseMatch | None:
        """Return only the highest-priority match, or None."""
        matches = self.match_all(characteristics)
        return matches[0] if matches else None


def _qualifier_names(rule: CharacteristicBaseRule, characteristic: IncidentCharacteristic) -> list[str]:
    name = lower_or_empty(characteristic.name).strip()
    parser_label = lower_or_empty(characteristic.parser_label).strip()

    qualifiers: list[str] = []
    for candidate in rule.names:
        candidate_lower = candidate.lower().strip()
        if contains_either_way(candidate_lower, name):
            continue
        if contains_either_way(candidate_lower, parser_label):
            continue
        if PARSER_LABEL_MARKER in candidate_lower:
            continue
        qualifiers.append(candidate)
    return qualifiers

def _matches_code(rule: CharacteristicBaseRule, characteristic: IncidentCharacteristic) -> bool:
    code = lower_or_empty(characteristic.code)
    if not rule.codes or not code:
        return False
    if not any(c.lower() == code for c in rule.codes):
        return False

    qualifiers = _qualifier_names(rule, characteristic)
    if not qualifiers:
        return True

    value = normalize_text(characteristic.value)
    if not value:
        logger.debug(
            "Rule %r expects a value (%s) but characteristic has none",
            rule.key,
            qualifiers,
        )
        return False

    return any(contains_either_way(normalize_text(q), value) for q in qualifiers)

def _matches_name(rule: CharacteristicBaseRule, characteristic: IncidentCharacteristic) -> bool:
    value = normalize_text(characteristic.value)
    parser_label = lower_or_empty(characteristic.parser_label)
    name = lower_or_empty(characteristic.name)

    for candidate in rule.names:
        candidate_lower = candidate.lower()
        if contains_either_way(normalize_text(candidate), value):
            return True
        if contains_either_way(candidate_lower, parser_label):
            return True
        if contains_either_way(candidate_lower, name):
            return True
    return False
