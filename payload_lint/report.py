"""Flattened, serialisable view of the errors found in one validation pass."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import orjson
from jsonschema.exceptions import ValidationError

from payload_lint.errors import LintError
from payload_lint.options import Direction


def pointer_for(*tokens: Any) -> str:
    """Build a JSON pointer from raw tokens, e.g. ``("paths", "/pets", "get")``."""
    return "".join("/" + str(token).replace("~", "~0").replace("/", "~1") for token in tokens)


@dataclass
class LintIssue:
    """A single reported error with its sub-reports."""

    code: str
    message: str
    path: str
    schema_path: str
    params: List[Any] = field(default_factory=list)
    inner: List["LintIssue"] = field(default_factory=list)

    @classmethod
    def from_error(cls, error: ValidationError) -> "LintIssue":
        if isinstance(error, LintError):
            code, params = error.code, list(error.params)
        else:
            code, params = str(error.validator), []
        return cls(
            code=code,
            message=error.message,
            path=pointer_for(*error.absolute_path),
            schema_path=pointer_for(*error.absolute_schema_path),
            params=params,
            inner=[cls.from_error(child) for child in error.context],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "schema_path": self.schema_path,
            "params": self.params,
            "inner": [issue.to_dict() for issue in self.inner],
        }


@dataclass
class LintReport:
    """Outcome of validating a single payload."""

    direction: Direction
    issues: List[LintIssue] = field(default_factory=list)

    @classmethod
    def from_errors(cls, direction: Direction, errors: Iterable[ValidationError]) -> "LintReport":
        return cls(direction=direction, issues=[LintIssue.from_error(error) for error in errors])

    @property
    def ok(self) -> bool:
        return not self.issues

    def codes(self) -> List[str]:
        """Top-level error codes in report order."""
        return [issue.code for issue in self.issues]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "ok": self.ok,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2)
