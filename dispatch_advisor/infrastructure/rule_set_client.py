from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any
import requests
import yaml
from requests import HTTPError, RequestException
from dispatch_advisor.config import RuleSetConfig
from dispatch_advisor.domain.rules import RuleSet
from dispatch_advisor.infrastructure.rule_set_mapping import RuleSetError, build_rule_set


logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")

class RuleSetClient:
    """Loads the deployment rule set from a URL or a local file.

        JSON is the default document format; sources ending in ``.yaml`` or
        ``.yml`` are read as YAML.
        """

    def __init__(self, config: RuleSetConfig) -> None:
        self._config = config
        self._session = requests.Session()

    def fetch_rule_set(self) -> RuleSet:
        text = self._read_text()
        data = self._parse(text)
        return build_rule_set(data)

    def _is_remote(self) -> bool:
        return self._config.source.startswith(("http://", "https://"))

    def _read_text(self) -> str:
        if self._is_remote():
            return self._download_text()

        path = Path(self._config.source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot read rule set file {path}: {exc}"
            logger.error(msg)
            raise RuleSetError(msg) from exc

        logger.debug("Read rule set file %s (length=%d)", path, len(text))
        return text

    def _download_text(self) -> str:
        try:
            response = self._session.get(
                self._config.source,
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
        except (HTTPError, RequestException) as exc:
            msg = f"Error calling rule set endpoint: {exc}"
            logger.error(msg)
            raise RuleSetError(msg) from exc

        text = response.text
        logger.debug("Raw rule set response length=%d", len(text))
        return text

    def _parse(self, text: str) -> Any:
        source = self._config.source.lower().split("?", 1)[0]
        if source.endswith(_YAML_SUFFIXES):
            try:
                return yaml.safe_load(text)
            except yaml.YAMLError as exc:
                msg = "Failed to parse rule set YAML"
                logger.error(msg)
                raise RuleSetError(msg) from exc

        try:
            return json.loads(text)
        except ValueError as exc:
            msg = "Failed to parse rule set JSON"
            logger.error(msg)
            raise RuleSetError(msg) from exc
