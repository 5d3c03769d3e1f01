"""The ``enum`` keyword with case-insensitive and extensible-enum leniency."""
from __future__ import annotations

from typing import Any, Iterator, List, Mapping

from payload_lint.engine.context import LintContext
from payload_lint.errors import ErrorKind, LintError
from payload_lint.options import should_skip

EXTENSIBLE_ENUM = "x-ms-enum"


def _equal(left: Any, right: Any) -> bool:
    # JSON true is not the number 1
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    return left == right


def _model_as_string(schema: Mapping[str, Any]) -> bool:
    extension = schema.get(EXTENSIBLE_ENUM)
    return isinstance(extension, Mapping) and bool(extension.get("modelAsString"))


def enum_rule(
    lint: LintContext, validator, enums: List[Any], instance: Any, schema: Mapping[str, Any]
) -> Iterator[LintError]:
    options = lint.options
    if should_skip(options, ErrorKind.ENUM_CASE_MISMATCH, ErrorKind.ENUM_MISMATCH):
        return
    if not isinstance(enums, list):
        return

    case_insensitive_match = False
    for candidate in reversed(enums):
        if _equal(instance, candidate):
            return
        if (
            isinstance(instance, str)
            and isinstance(candidate, str)
            and instance.upper() == candidate.upper()
        ):
            case_insensitive_match = True

    if case_insensitive_match and not should_skip(options, ErrorKind.ENUM_CASE_MISMATCH):
        yield LintError(ErrorKind.ENUM_CASE_MISMATCH, [instance], schema=schema)
    elif not _model_as_string(schema) and not should_skip(options, ErrorKind.ENUM_MISMATCH):
        yield LintError(ErrorKind.ENUM_MISMATCH, [instance], schema=schema)
