from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any
from dispatch_advisor.domain.incident import Incident, IncidentCharacteristic
from dispatch_advisor.shared.normalization import normalize_str_or_none


logger = logging.getLogger(__name__)

class IncidentFileError(RuntimeError):
    """Raised when an incident file cannot be read or does not hold incidents."""

# upstream intake systems use the ktXxx names for characteristic fields
_CHARACTERISTIC_FIELDS: dict[str, tuple[str, str]] = {
    "name": ("name", "ktNaam"),
    "code": ("code", "ktCode"),
    "value": ("value", "ktWaarde"),
    "parser_label": ("parser_label", "ktParser"),
}

def load_incidents(path: Path | str) -> list[Incident]:
    """Read incidents from a JSON file.

        Accepts a top-level list of incident objects or an object with an
        ``incidents`` list.
        Raises:
            IncidentFileError: if the file is missing, not JSON, or has an unexpected shape.
        """

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read incident file {path}: {exc}"
        logger.error(msg)
        raise IncidentFileError(msg) from exc
    except ValueError as exc:
        msg = f"Incident file {path} is not valid JSON"
        logger.error(msg)
        raise IncidentFileError(msg) from exc

    if isinstance(data, dict):
        data = data.get("incidents")
    if not isinstance(data, list):
        msg = f"Unexpected incident file format in {path}: expected a list of incidents"
        logger.error(msg)
        raise IncidentFileError(msg)

    incidents: list[Incident] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            msg = f"Incident #{index} in {path} is not an object"
            logger.error(msg)
            raise IncidentFileError(msg)
        incidents.append(_incident_from_item(item, index))

    logger.info("Loaded %d incident(s) from %s", len(incidents), path)
    return incidents

def _incident_from_item(item: dict[str, Any], index: int) -> Incident:
    characteristics_raw = item.get("characteristics") or item.get("karakteristieken") or []
    if not isinstance(characteristics_raw, list):
        raise IncidentFileError(f"Incident #{index} has characteristics that are not a list")

    characteristics: list[IncidentCharacteristic] = []
    for raw in characteristics_raw:
        if not isinstance(raw, dict):
            raise IncidentFileError(f"Incident #{index} has a characteristic that is not an object")
        characteristics.append(_characteristic_from_item(raw))

    return Incident(
        id=normalize_str_or_none(item.get("id")) or str(index + 1),
        mc1=normalize_str_or_none(item.get("mc1") or item.get("MC1")),
        mc2=normalize_str_or_none(item.get("mc2") or item.get("MC2")),
        mc3=normalize_str_or_none(item.get("mc3") or item.get("MC3")),
        characteristics=characteristics,
        function_text=normalize_str_or_none(item.get("function_text") or item.get("functie")),
    )

def _characteristic_from_item(raw: dict[str, Any]) -> IncidentCharacteristic:
    fields: dict[str, str | None] = {}
    for field_name, aliases in _CHARACTERISTIC_FIELDS.items():
        value = next((raw[a] for a in aliases if raw.get(a) is not None), None)
        fields[field_name] = normalize_str_or_none(value)
    return IncidentCharacteristic(**fields)
