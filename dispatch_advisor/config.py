from dataclasses import dataclass
import os
from pathlib import Path
from dotenv import load_dotenv


load_dotenv()

@dataclass(frozen=True)
class RuleSetConfig:
    source: str
    timeout_seconds: float = 10.0

@dataclass(frozen=True)
class ReportConfig:
    output_dir: Path

def _get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Environment variable {name} is required but not set")
    return value

def load_rule_set_config(source: str | None = None) -> RuleSetConfig:
    source = source or _get_required_env("DISPATCH_RULE_SET")

    timeout_raw = os.getenv("DISPATCH_RULE_SET_TIMEOUT")
    if not timeout_raw:
        return RuleSetConfig(source=source)

    try:
        timeout_seconds = float(timeout_raw)
    except ValueError as exc:
        raise RuntimeError(
            f"Environment variable DISPATCH_RULE_SET_TIMEOUT must be a number, got {timeout_raw!r}"
        ) from exc

    return RuleSetConfig(
        source=source,
        timeout_seconds=timeout_seconds,
    )

def load_report_config() -> ReportConfig:
    output_dir = os.getenv("DISPATCH_REPORT_DIR") or "output"

    return ReportConfig(
        output_dir=Path(output_dir),
    )
