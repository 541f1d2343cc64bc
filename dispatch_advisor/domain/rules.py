from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ClassificationRule:
    mc1: str
    mc2: str | None = None
    mc3: str | None = None
    base_units: tuple[str, ...] = ()
    extra_units: tuple[str, ...] = ()
    rationale: str | None = None

@dataclass(frozen=True)
class CharacteristicBaseRule:
    key: str
    codes: tuple[str, ...] = ()
    names: tuple[str, ...] = ()
    base_units: tuple[str, ...] = ()
    extra_units: tuple[str, ...] = ()
    rationale: str = ""
    priority: int = 0

@dataclass(frozen=True)
class CharacteristicModifierRule:
    codes: tuple[str, ...] = ()
    names: tuple[str, ...] = ()
    extra_units: tuple[str, ...] = ()
    rationale: str = ""

@dataclass(frozen=True)
class FunctionModifierRule:
    patterns: tuple[str, ...] = ()
    extra_units: tuple[str, ...] = ()
    rationale: str = ""


@dataclass(frozen=True)
class RuleSet:
    """Read-only bundle of the four rule families, built once per process."""

    classification_rules: tuple[ClassificationRule, ...] = ()
    characteristic_base_rules: tuple[CharacteristicBaseRule, ...] = ()
    characteristic_modifiers: tuple[CharacteristicModifierRule, ...] = ()
    function_modifiers: tuple[FunctionModifierRule, ...] = ()


# MAR defaults, used when a rule-set document carries no modifier sections
DEFAULT_CHARACTERISTIC_MODIFIERS: tuple[CharacteristicModifierRule, ...] = (
    CharacteristicModifierRule(
        codes=("woh", "WOH"),
        names=("hoogte", "werk op hoogte"),
        extra_units=("1 RV",),
        rationale="Werken op hoogte: extra 1 RV",
    ),
    CharacteristicModifierRule(
        codes=("vlb", "VLB"),
        names=("vloeistof", "olie", "vloeistofbrand"),
        extra_units=("1 SB",),
        rationale="Vloeistofbrand: extra 1 SB (schuimblusvoertuig)",
    ),
    CharacteristicModifierRule(
        codes=("bwa", "BWA"),
        names=("bluswater", "bluswaterarm"),
        extra_units=("1 GW 1500",),
        rationale="Bluswaterarm gebied: extra 1 GW 1500",
    ),
    CharacteristicModifierRule(
        codes=("zwo", "ZWO"),
        names=("zwaar", "zwaar ongeval"),
        extra_units=("1 HV",),
        rationale="Zwaar ongeval: extra 1 HV (hulpverlening)",
    ),
)

DEFAULT_FUNCTION_MODIFIERS: tuple[FunctionModifierRule, ...] = (
    FunctionModifierRule(
        patterns=("portiek", "woongebouw", "woonzorg"),
        extra_units=("1 RV",),
        rationale="Portiek/woongebouw: extra 1 RV voor werken op hoogte",
    ),
)
