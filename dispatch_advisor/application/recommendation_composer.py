from __future__ import annotations
import logging
from collections.abc import Sequence
from dispatch_advisor.application.characteristic_base_matcher import CharacteristicBaseMatcher
from dispatch_advisor.application.classification_matcher import ClassificationMatcher
from dispatch_advisor.application.modifier_matchers import (
    CharacteristicModifierMatcher,
    FunctionModifierMatcher,
)
from dispatch_advisor.application.scale_up import scale_up_hints
from dispatch_advisor.domain.incident import Incident, IncidentCharacteristic
from dispatch_advisor.domain.recommendation import RecommendationResult
from dispatch_advisor.domain.rules import RuleSet
from dispatch_advisor.shared.unit_tokens import combine_all


logger = logging.getLogger(__name__)

CHARACTERISTIC_BASE_PREFIX = "Extra base deployment due to characteristic: "
NO_MAPPING_PREFIX = "No specific mapping found for classification"

class RecommendationComposer:
    """Builds the initial deployment recommendation for one incident.

        The composer owns one matcher per rule family. The rule set is
        read-only and every call works on its own lists, so a single
        composer can serve concurrent callers.
        """

    def __init__(self, rule_set: RuleSet) -> None:
        self._classification = ClassificationMatcher(rule_set.classification_rules)
        self._characteristic_base = CharacteristicBaseMatcher(rule_set.characteristic_base_rules)
        self._characteristic_modifiers = CharacteristicModifierMatcher(rule_set.characteristic_modifiers)
        self._function_modifiers = FunctionModifierMatcher(rule_set.function_modifiers)

    def compose(
        self,
        mc1: str | None,
        mc2: str | None = None,
        mc3: str | None = None,
        characteristics: Sequence[IncidentCharacteristic] = (),
        function_text: str | None = None,
        extended: bool = False,
    ) -> RecommendationResult:
        base: list[str] = []
        extra: list[str] = []
        rationale: list[str] = []

        # standard deployment for the classification
        rule = self._classification.match(mc1, mc2, mc3)
        if rule is not None:
            base = list(rule.base_units)
            extra = list(rule.extra_units)
            if rule.rationale:
                rationale.append(rule.rationale)

        # characteristics that determine base deployment, highest priority first
        base_matches = self._characteristic_base.match_all(characteristics)
        for match in base_matches:
            base = combine_all(base, match.base_units)
            extra = combine_all(extra, match.extra_units)
            rationale.append(f"{CHARACTERISTIC_BASE_PREFIX}{match.rationale}")

        if not base and rule is None and not base_matches:
            classification = " ".join(mc for mc in (mc1, mc2, mc3) if mc)
            rationale.append(f"{NO_MAPPING_PREFIX} {classification or '(none)'}")
            logger.debug("No mapping for classification %r", classification)

        for characteristic in characteristics:
            modifier = self._characteristic_modifiers.match_first(characteristic)
            if modifier is not None:
                extra = combine_all(extra, modifier.extra_units)
                rationale.append(modifier.rationale)

        function_modifier = self._function_modifiers.match_first(function_text)
        if function_modifier is not None:
            extra = combine_all(extra, function_modifier.extra_units)
            rationale.append(function_modifier.rationale)

        if extended:
            rationale.extend(scale_up_hints(base))

        return RecommendationResult(
            base=base,
            extra=extra,
            # base and extra stay unmerged so the split remains visible
            total=base + extra,
            rationale=rationale,
            matched_classification_rule=rule,
            matched_characteristic_base=bool(base_matches),
        )

    def compose_incident(self, incident: Incident, extended: bool = False) -> RecommendationResult:
        return self.compose(
            incident.mc1,
            incident.mc2,
            incident.mc3,
            incident.characteristics,
            incident.function_text,
            extended=extended,
        )
