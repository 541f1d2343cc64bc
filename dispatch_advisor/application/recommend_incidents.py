from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Protocol
from collections.abc import Sequence
from dispatch_advisor.domain.incident import Incident
from dispatch_advisor.domain.recommendation import RecommendationResult


logger = logging.getLogger(__name__)

class IncidentRecommender(Protocol):
    def compose_incident(self, incident: Incident, extended: bool = False) -> RecommendationResult:
        ...

@dataclass(frozen=True, slots=True)
class IncidentRecommendation:
    incident: Incident
    result: RecommendationResult


def recommend_incidents(
        recommender: IncidentRecommender,
        incidents: Sequence[Incident],
        extended: bool = False,
        examples_to_log: int = 3,
) -> list[IncidentRecommendation]:
    if not incidents:
        logger.info("No incidents provided; skipping recommendation step")
        return []

    recommendations: list[IncidentRecommendation] = []
    classification_count = 0
    characteristic_count = 0
    unmatched_count = 0
    logged_examples = 0

    for incident in incidents:
        result = recommender.compose_incident(incident, extended=extended)
        recommendations.append(IncidentRecommendation(incident=incident, result=result))

        if result.matched_classification_rule is not None:
            classification_count += 1
        if result.matched_characteristic_base:
            characteristic_count += 1
        if result.matched_classification_rule is None and not result.matched_characteristic_base:
            unmatched_count += 1

        if logged_examples < examples_to_log:
            logger.info(
                "Recommendation for incident %s (%s/%s/%s): base=%s extra=%s",
                incident.id,
                incident.mc1,
                incident.mc2,
                incident.mc3,
                result.base,
                result.extra,
            )
            logged_examples += 1

    logger.info(
        "Recommendation summary: incidents=%d classification_matched=%d "
        "characteristic_matched=%d unmatched=%d",
        len(incidents),
        classification_count,
        characteristic_count,
        unmatched_count,
    )

    # show a warning if there were incidents without any mapping
    if unmatched_count > 0:
        logger.warning(
            "No deployment mapping found for %d incident(s)",
            unmatched_count,
        )

    return recommendations
