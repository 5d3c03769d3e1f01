"""The ``type`` keyword with integer/number compatibility."""
from __future__ import annotations

from typing import Any, Iterator, Mapping

from payload_lint.classify import what_is
from payload_lint.engine.context import LintContext
from payload_lint.errors import ErrorKind, LintError
from payload_lint.options import should_skip
from payload_lint.rules.mutability import absent_from_responses


def _matches(declared: Any, kind: str) -> bool:
    if isinstance(declared, str):
        return kind == declared or (kind == "integer" and declared == "number")
    return kind in declared or (kind == "integer" and "number" in declared)


def type_rule(
    lint: LintContext, validator, declared: Any, instance: Any, schema: Mapping[str, Any]
) -> Iterator[LintError]:
    if declared != "null" and should_skip(lint.options, ErrorKind.INVALID_TYPE):
        return
    if not isinstance(declared, (str, list)):
        return
    # required write-only properties are not type checked in responses
    if absent_from_responses(schema, lint.options) and lint.index.is_required_property(schema):
        return
    kind = what_is(instance)
    if not _matches(declared, kind):
        yield LintError(ErrorKind.INVALID_TYPE, [declared, kind], schema=schema)
