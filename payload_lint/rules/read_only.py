"""The ``readOnly`` keyword: boolean read-only flag checked on requests."""
from __future__ import annotations

from typing import Any, Iterator, Mapping

from payload_lint.classify import UNDEFINED
from payload_lint.engine.context import LintContext
from payload_lint.errors import ErrorKind, LintError
from payload_lint.options import Direction, should_skip
from payload_lint.rules.mutability import violation_template


def read_only_rule(
    lint: LintContext, validator, flag: Any, instance: Any, schema: Mapping[str, Any]
) -> Iterator[LintError]:
    options = lint.options
    if should_skip(options, ErrorKind.READONLY_PROPERTY_NOT_ALLOWED_IN_REQUEST):
        return
    if options.is_response or not flag or instance is UNDEFINED:
        return
    # the property name comes from the payload path once the error is reported
    yield LintError(
        ErrorKind.READONLY_PROPERTY_NOT_ALLOWED_IN_REQUEST,
        ["", instance],
        template=violation_template("ReadOnly", schema, instance, Direction.REQUEST),
        schema=schema,
        name_from_path=True,
    )
