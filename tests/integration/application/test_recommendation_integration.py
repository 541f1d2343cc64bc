from __future__ import annotations
import json
from pathlib import Path
from dispatch_advisor.application.recommend_incidents import recommend_incidents
from dispatch_advisor.application.recommendation_composer import (
    CHARACTERISTIC_BASE_PREFIX,
    RecommendationComposer,
)
from dispatch_advisor.config import RuleSetConfig
from dispatch_advisor.domain.incident import Incident, IncidentCharacteristic
from dispatch_advisor.infrastructure.rule_set_client import RuleSetClient


MAR_MAPPINGS = [
    {
        "MC1": "Brand",
        "MC2": "Wegvervoer",
        "MC3": "",
        "baseInzet": ["1 TS-6"],
        "extraInzet": [],
        "toelichting": "Brand wegvervoer: standaard 1 TS-6 volgens MAR",
    },
    {
        "MC1": "Brand",
        "MC2": "Gebouw",
        "MC3": "Woning",
        "baseInzet": ["2 TS-6", "1 DV-OVD"],
        "toelichting": "Woningbrand",
    },
    {
        "MC1": "Brand",
        "baseInzet": ["1 TS-6"],
        "toelichting": "Brand algemeen",
    },
    {
        "ktCode": "opsbr",
        "ktNaam": "Ops Br",
        "ktWaarde": "Zeer groot",
        "ktParser": "-inzet brw ops br zeer groot",
        "baseInzet": ["3 TS-6", "1 HOVD"],
        "extraInzet": ["1 DV-CO"],
        "toelichting": "Ops Br zeer groot",
        "prioriteit": 10,
    },
    {
        "ktCode": "opsbr",
        "ktNaam": "Ops Br",
        "ktWaarde": "Middel",
        "ktParser": "-inzet brw ops br middel",
        "baseInzet": ["1 TS-6"],
        "toelichting": "Ops Br middel",
        "prioriteit": 5,
    },
]

def _composer(tmp_path: Path) -> RecommendationComposer:
    path = tmp_path / "mar_mappings.json"
    path.write_text(json.dumps(MAR_MAPPINGS), encoding="utf-8")
    rule_set = RuleSetClient(RuleSetConfig(source=str(path))).fetch_rule_set()
    return RecommendationComposer(rule_set)

def test_house_fire_with_large_scale_characteristic(tmp_path: Path) -> None:
    composer = _composer(tmp_path)

    result = composer.compose(
        "Brand",
        "Gebouw",
        "Woning",
        [
            IncidentCharacteristic(code="opsbr", value="Zeer groot"),
            IncidentCharacteristic(code="woh", name="Werk op hoogte"),
        ],
        function_text="Portiekflat",
    )

    assert result.base == ["5 TS-6", "1 DV-OVD", "1 HOVD"]
    assert result.extra == ["1 DV-CO", "2 RV"]
    assert result.rationale == [
        "Woningbrand",
        f"{CHARACTERISTIC_BASE_PREFIX}Ops Br zeer groot",
        "Werken op hoogte: extra 1 RV",
        "Portiek/woongebouw: extra 1 RV voor werken op hoogte",
    ]

def test_value_selects_the_matching_characteristic_rule(tmp_path: Path) -> None:
    composer = _composer(tmp_path)

    result = composer.compose("Brand", "Wegvervoer", characteristics=[IncidentCharacteristic(code="opsbr", value="middel")])

    assert result.base == ["2 TS-6"]
    assert f"{CHARACTERISTIC_BASE_PREFIX}Ops Br middel" in result.rationale
    assert f"{CHARACTERISTIC_BASE_PREFIX}Ops Br zeer groot" not in result.rationale

def test_generic_fallback_and_unknown_classification(tmp_path: Path) -> None:
    composer = _composer(tmp_path)
    incidents = [
        Incident(id="1", mc1="Brand", mc2="Buitenbrand"),
        Incident(id="2", mc1="Dienstverlening", mc2="Dier"),
    ]

    first, second = recommend_incidents(composer, incidents)

    assert first.result.base == ["1 TS-6"]
    assert first.result.rationale == ["Brand algemeen"]
    assert second.result.total == []
    assert second.result.rationale == ["No specific mapping found for classification Dienstverlening Dier"]
