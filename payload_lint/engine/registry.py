"""Directory-backed registry of API description documents."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import orjson
import structlog

from payload_lint.engine.validator import PayloadValidator
from payload_lint.options import ValidateOptions
from payload_lint.report import LintReport

LOGGER = structlog.get_logger(__name__)


class SchemaRegistry:
    """Lazily loads API description documents and validates payloads against them."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._cache: Dict[Path, PayloadValidator] = {}

    def _path(self, name: str) -> Path:
        path = self._root / name
        if not path.suffix:
            path = path.with_suffix(".json")
        return path.resolve()

    def _load(self, name: str) -> PayloadValidator:
        path = self._path(name)
        if path not in self._cache:
            if not path.exists():
                raise FileNotFoundError(f"API description not found for {name}: {path}")
            document = orjson.loads(path.read_bytes())
            self._cache[path] = PayloadValidator(document, uri=path.as_uri())
            LOGGER.info("document_loaded", name=name, path=str(path))
        return self._cache[path]

    def validator(self, name: str) -> PayloadValidator:
        return self._load(name)

    def validate(
        self,
        name: str,
        payload: Any,
        pointer: str = "",
        options: Optional[ValidateOptions] = None,
    ) -> LintReport:
        return self._load(name).validate(payload, pointer, options)
