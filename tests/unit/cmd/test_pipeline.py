from __future__ import annotations
import json
from pathlib import Path
import pytest
import dispatch_advisor.cmd.pipeline as pipeline_module
from dispatch_advisor.cmd.main import build_parser, main
from dispatch_advisor.cmd.pipeline import format_recommendation, pipeline
from dispatch_advisor.infrastructure.rule_set_mapping import RuleSetError


RULES = [
    {"MC1": "Brand", "MC2": "Wegvervoer", "baseInzet": ["1 TS-6"], "toelichting": "Brand wegvervoer"},
]
INCIDENTS = [
    {"id": "1", "mc1": "Brand", "mc2": "Wegvervoer", "characteristics": [{"code": "woh"}]},
]

def _write_inputs(tmp_path: Path) -> tuple[Path, Path]:
    rules = tmp_path / "mar_mappings.json"
    rules.write_text(json.dumps(RULES), encoding="utf-8")
    incidents = tmp_path / "incidents.json"
    incidents.write_text(json.dumps(INCIDENTS), encoding="utf-8")
    return rules, incidents

def test_pipeline_prints_recommendations(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rules, incidents = _write_inputs(tmp_path)

    recommendations = pipeline(str(incidents), rules_source=str(rules))

    assert len(recommendations) == 1
    assert recommendations[0].result.total == ["1 TS-6", "1 RV"]
    out = capsys.readouterr().out
    assert "Incident 1: Brand / Wegvervoer" in out
    assert "  total: 1 TS-6, 1 RV" in out

def test_pipeline_writes_excel_report(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    rules, incidents = _write_inputs(tmp_path)
    monkeypatch.setenv("DISPATCH_REPORT_DIR", str(tmp_path / "reports"))

    pipeline(str(incidents), rules_source=str(rules), excel_report=True)

    assert len(list((tmp_path / "reports").glob("recommendations_*.xlsx"))) == 1

def test_pipeline_exits_when_rule_set_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _, incidents = _write_inputs(tmp_path)

    class FailingClient:
        def __init__(self, _config: object) -> None:
            pass

        def fetch_rule_set(self) -> None:
            raise RuleSetError("boom")

    monkeypatch.setattr(pipeline_module, "RuleSetClient", FailingClient)

    with pytest.raises(SystemExit) as exc_info:
        pipeline(str(incidents), rules_source="https://example.com/rules.json")

    assert exc_info.value.code == 1

def test_pipeline_exits_when_incidents_missing(tmp_path: Path) -> None:
    rules, _ = _write_inputs(tmp_path)

    with pytest.raises(SystemExit):
        pipeline(str(tmp_path / "missing.json"), rules_source=str(rules))

def test_format_recommendation_without_units(tmp_path: Path) -> None:
    rules, incidents = _write_inputs(tmp_path)
    incidents.write_text(json.dumps([{"id": "9"}]), encoding="utf-8")

    (rec,) = pipeline(str(incidents), rules_source=str(rules))
    text = format_recommendation(rec)

    assert text.startswith("Incident 9: (unclassified)")
    assert "  base:  -" in text
    assert "  * No specific mapping found for classification (none)" in text

def test_build_parser_flags() -> None:
    args = build_parser().parse_args(["incidents.json", "--rules", "rules.yaml", "--extended", "--excel"])

    assert args.incidents == "incidents.json"
    assert args.rules == "rules.yaml"
    assert args.extended is True
    assert args.excel is True
    assert args.verbose is False

def test_main_uses_rule_set_from_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    rules, incidents = _write_inputs(tmp_path)
    monkeypatch.setenv("DISPATCH_RULE_SET", str(rules))

    main([str(incidents), "--extended"])

    assert "Scale-up options:" in capsys.readouterr().out
