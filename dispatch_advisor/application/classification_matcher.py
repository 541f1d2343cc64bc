from __future__ import annotations
import logging
from collections.abc import Iterable
from dispatch_advisor.domain.rules import ClassificationRule


logger = logging.getLogger(__name__)

class ClassificationMatcher:
    """Resolves an (mc1, mc2, mc3) classification to its standard deployment rule.

        Lookup falls back from the most specific tier to the generic mc1 rule:
        (mc1, mc2, mc3), then (mc1, mc2) with no mc3, then mc1 alone.
        Codes are compared exactly as stored.
        """

    def __init__(self, rules: Iterable[ClassificationRule]) -> None:
        self._rules: tuple[ClassificationRule, ...] = tuple(rules)

    def match(
        self,
        mc1: str | None,
        mc2: str | None = None,
        mc3: str | None = None,
    ) -> ClassificationRule | None:
        if not mc1:
            return None

        if mc2 and mc3:
            rule = self._first(lambda r: r.mc1 == mc1 and r.mc2 == mc2 and r.mc3 == mc3)
            if rule is not None:
                logger.debug("Classification %s/%s/%s matched exactly", mc1, mc2, mc3)
                return rule

        if mc2:
            rule = self._first(lambda r: r.mc1 == mc1 and r.mc2 == mc2 and not r.mc3)
            if rule is not None:
                logger.debug("Classification %s/%s matched on mc1+mc2", mc1, mc2)
                return rule

        rule = self._first(lambda r: r.mc1 == mc1 and not r.mc2 and not r.mc3)
        if rule is not None:
            logger.debug("Classification %s matched on mc1 only", mc1)
        return rule

    def _first(self, predicate) -> ClassificationRule | None:
        # first hit in index order; duplicates in the rule set are not resolved further
        return next((r for r in self._rules if predicate(r)), None)
