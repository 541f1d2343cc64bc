from __future__ import annotations
import logging
from collections.abc import Sequence
from pathlib import Path
from dispatch_advisor.application.ports.rule_set_provider_port import RuleSetProvider
from dispatch_advisor.application.recommend_incidents import IncidentRecommendation, recommend_incidents
from dispatch_advisor.application.recommendation_composer import RecommendationComposer
from dispatch_advisor.config import load_report_config, load_rule_set_config
from dispatch_advisor.domain.incident import Incident
from dispatch_advisor.domain.rules import RuleSet
from dispatch_advisor.infrastructure.excel import ExcelReportError, save_excel
from dispatch_advisor.infrastructure.incident_file import IncidentFileError, load_incidents
from dispatch_advisor.infrastructure.rule_set_client import RuleSetClient
from dispatch_advisor.infrastructure.rule_set_mapping import RuleSetError


logger = logging.getLogger(__name__)

def pipeline(
    incidents_path: str,
    rules_source: str | None = None,
    extended: bool = False,
    excel_report: bool = False,
) -> list[IncidentRecommendation]:
    rule_set_config = load_rule_set_config(rules_source)
    rule_set = _load_rule_set(RuleSetClient(rule_set_config))

    incidents = _load_incidents(incidents_path)

    composer = RecommendationComposer(rule_set)
    recommendations = recommend_incidents(composer, incidents, extended=extended)

    for rec in recommendations:
        print(format_recommendation(rec))

    if excel_report:
        _save_report(recommendations, load_report_config().output_dir)

    return recommendations

def format_recommendation(rec: IncidentRecommendation) -> str:
    incident, result = rec.incident, rec.result
    classification = " / ".join(mc for mc in (incident.mc1, incident.mc2, incident.mc3) if mc)

    lines = [
        f"Incident {incident.id}: {classification or '(unclassified)'}",
        f"  base:  {', '.join(result.base) or '-'}",
        f"  extra: {', '.join(result.extra) or '-'}",
        f"  total: {', '.join(result.total) or '-'}",
    ]
    lines.extend(f"  * {line}" for line in result.rationale if line)
    return "\n".join(lines)

def _load_rule_set(provider: RuleSetProvider) -> RuleSet:
    try:
        rule_set = provider.fetch_rule_set()
    except RuleSetError as exc:
        logger.error("Failed to load rule set: %s", exc)
        raise SystemExit(1) from exc

    logger.info(
        "Rule set loaded: %d classification rules, %d characteristic rules",
        len(rule_set.classification_rules),
        len(rule_set.characteristic_base_rules),
    )
    return rule_set

def _load_incidents(path: str) -> Sequence[Incident]:
    try:
        incidents = load_incidents(path)
    except IncidentFileError as exc:
        logger.error("Failed to load incidents: %s", exc)
        raise SystemExit(1) from exc

    logger.info("Successfully loaded %d incidents", len(incidents))
    return incidents

def _save_report(recommendations: Sequence[IncidentRecommendation], output_dir: Path) -> Path:
    try:
        return save_excel(recommendations, output_dir)
    except ExcelReportError as exc:
        logger.error("Failed to write recommendation report: %s", exc)
        raise SystemExit(1) from exc
