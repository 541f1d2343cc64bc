from pathlib import Path
import pytest
from dispatch_advisor.config import load_report_config, load_rule_set_config


def test_rule_set_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISPATCH_RULE_SET", "rules/mar_mappings.json")
    monkeypatch.delenv("DISPATCH_RULE_SET_TIMEOUT", raising=False)

    config = load_rule_set_config()

    assert config.source == "rules/mar_mappings.json"
    assert config.timeout_seconds == 10.0

def test_rule_set_config_parses_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISPATCH_RULE_SET_TIMEOUT", "2.5")

    config = load_rule_set_config("https://example.com/mar_mappings.json")

    assert config.source == "https://example.com/mar_mappings.json"
    assert config.timeout_seconds == 2.5

def test_rule_set_config_rejects_non_numeric_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISPATCH_RULE_SET_TIMEOUT", "soon")

    with pytest.raises(RuntimeError, match="DISPATCH_RULE_SET_TIMEOUT"):
        load_rule_set_config("rules.json")

def test_rule_set_config_requires_source(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPATCH_RULE_SET", raising=False)

    with pytest.raises(RuntimeError, match="DISPATCH_RULE_SET"):
        load_rule_set_config()

def test_report_config_defaults_to_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPATCH_REPORT_DIR", raising=False)

    assert load_report_config().output_dir == Path("output")
