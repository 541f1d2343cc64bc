from __future__ import annotations
import logging
import re
from typing import Any
from collections.abc import Mapping
from dispatch_advisor.domain.rules import (
    DEFAULT_CHARACTERISTIC_MODIFIERS,
    DEFAULT_FUNCTION_MODIFIERS,
    CharacteristicBaseRule,
    CharacteristicModifierRule,
    ClassificationRule,
    FunctionModifierRule,
    RuleSet,
)
from dispatch_advisor.shared.normalization import normalize_str_or_none


logger = logging.getLogger(__name__)

class RuleSetError(RuntimeError):
    """Raised when a rule set cannot be retrieved, parsed, or mapped to rules."""

def build_rule_set(data: Any) -> RuleSet:
    """Map a parsed rule-set document into a RuleSet.

        Supported shapes:
        - a flat list of mapping records (classification and characteristic
          records mixed, told apart by ``MC1`` versus ``ktCode``/``ktNaam``)
        - a dict with that list under ``mappings`` and optional
          ``characteristic_modifiers`` / ``function_modifiers`` lists

        Modifier sections that are absent fall back to the built-in defaults.
        Raises:
            RuleSetError: if the document or one of its records is malformed.
        """

    if isinstance(data, list):
        records: Any = data
        char_modifiers_raw: Any = None
        function_modifiers_raw: Any = None
    elif isinstance(data, Mapping):
        records = data.get("mappings", [])
        char_modifiers_raw = data.get("characteristic_modifiers")
        function_modifiers_raw = data.get("function_modifiers")
    else:
        msg = f"Unexpected rule set format: {type(data).__name__}"
        logger.error(msg)
        raise RuleSetError(msg)

    if not isinstance(records, list):
        raise RuleSetError("Rule set 'mappings' must be a list")

    classification_rules: list[ClassificationRule] = []
    # dict keeps first-registration order while later records overwrite
    base_rules: dict[str, CharacteristicBaseRule] = {}
    skipped = 0

    try:
        for item in records:
            _require_mapping(item)

            mc1 = normalize_str_or_none(item.get("MC1"))
            if mc1:
                classification_rules.append(_classification_rule(item, mc1))
            elif item.get("ktCode") or item.get("ktNaam"):
                rule = _characteristic_base_rule(item)
                if rule.key in base_rules:
                    logger.debug("Characteristic rule key %r registered twice; last one wins", rule.key)
                base_rules[rule.key] = rule
            else:
                skipped += 1
                logger.debug("Skipping rule record without MC1 or characteristic: %r", item)

        if char_modifiers_raw is None:
            char_modifiers = DEFAULT_CHARACTERISTIC_MODIFIERS
        else:
            char_modifiers = tuple(_characteristic_modifier(m) for m in _as_list(char_modifiers_raw))

        if function_modifiers_raw is None:
            function_modifiers = DEFAULT_FUNCTION_MODIFIERS
        else:
            function_modifiers = tuple(_function_modifier(m) for m in _as_list(function_modifiers_raw))
    except (KeyError, TypeError, ValueError) as exc:
        msg = "Failed to map rule set to domain rules"
        logger.error("%s: %s", msg, exc)
        raise RuleSetError(msg) from exc

    rule_set = RuleSet(
        classification_rules=tuple(classification_rules),
        characteristic_base_rules=tuple(base_rules.values()),
        characteristic_modifiers=char_modifiers,
        function_modifiers=function_modifiers,
    )
    logger.info(
        "Loaded rule set: %d classification rules, %d characteristic rules, "
        "%d characteristic modifiers, %d function modifiers (skipped %d records)",
        len(rule_set.classification_rules),
        len(rule_set.characteristic_base_rules),
        len(rule_set.characteristic_modifiers),
        len(rule_set.function_modifiers),
        skipped,
    )
    return rule_set

def characteristic_rule_key(code: str | None, name: str | None, value: str | None) -> str:
    """Key from code, name and value so records sharing a code stay distinct."""

    parts: list[str] = []
    if code:
        parts.append(code.lower())
    if name:
        parts.append(re.sub(r"\s+", "_", name.lower()))
    if value:
        parts.append(re.sub(r"[.\s]+", "_", value.lower()))
    return "_".join(parts) or "unknown"

def _classification_rule(item: Mapping[str, Any], mc1: str) -> ClassificationRule:
    return ClassificationRule(
        mc1=mc1,
        mc2=normalize_str_or_none(item.get("MC2")),
        mc3=normalize_str_or_none(item.get("MC3")),
        base_units=_units(item.get("baseInzet")),
        extra_units=_units(item.get("extraInzet")),
        rationale=_text(item.get("toelichting")),
    )

def _characteristic_base_rule(item: Mapping[str, Any]) -> CharacteristicBaseRule:
    code = normalize_str_or_none(item.get("ktCode"))
    name = normalize_str_or_none(item.get("ktNaam"))
    value = normalize_str_or_none(item.get("ktWaarde"))
    parser_label = normalize_str_or_none(item.get("ktParser"))

    return CharacteristicBaseRule(
        key=characteristic_rule_key(code, name, value),
        codes=(code,) if code else (),
        names=tuple(n for n in (name, value, parser_label) if n),
        base_units=_units(item.get("baseInzet")),
        extra_units=_units(item.get("extraInzet")),
        rationale=_text(item.get("toelichting")) or "",
        priority=_priority(item.get("prioriteit")),
    )

def _characteristic_modifier(item: Mapping[str, Any]) -> CharacteristicModifierRule:
    _require_mapping(item)
    codes = _strings(item.get("codes"))
    names = _strings(item.get("names"))
    if not codes and not names:
        raise ValueError(f"characteristic modifier needs codes or names: {item!r}")
    return CharacteristicModifierRule(
        codes=codes,
        names=names,
        extra_units=_units(item.get("extraInzet", item.get("extra_units"))),
        rationale=_text(item.get("toelichting", item.get("rationale"))) or "",
    )

def _function_modifier(item: Mapping[str, Any]) -> FunctionModifierRule:
    _require_mapping(item)
    patterns = _strings(item.get("patterns"))
    if not patterns:
        raise ValueError(f"function modifier needs patterns: {item!r}")
    return FunctionModifierRule(
        patterns=patterns,
        extra_units=_units(item.get("extraInzet", item.get("extra_units"))),
        rationale=_text(item.get("toelichting", item.get("rationale"))) or "",
    )

def _require_mapping(item: Any) -> None:
    if not isinstance(item, Mapping):
        raise TypeError(f"rule record must be an object, got {type(item).__name__}")

def _as_list(value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return value

def _strings(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    items = _as_list(value)
    if not all(isinstance(v, str) for v in items):
        raise TypeError(f"expected a list of strings, got {items!r}")
    return tuple(items)

def _text(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value or None

def _units(value: Any) -> tuple[str, ...]:
    return tuple(u.strip() for u in _strings(value) if u.strip())

def _priority(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"priority must be a number, got {value!r}")
    return int(value)
