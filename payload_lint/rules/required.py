"""The ``required`` keyword, aware of properties that responses never carry."""
from __future__ import annotations

from typing import Any, Iterator, List, Mapping

from payload_lint.classify import is_plain_object
from payload_lint.engine.context import LintContext
from payload_lint.errors import ErrorKind, LintError
from payload_lint.options import should_skip
from payload_lint.rules.mutability import absent_from_responses


def required_rule(
    lint: LintContext, validator, required: List[Any], instance: Any, schema: Mapping[str, Any]
) -> Iterator[LintError]:
    if should_skip(lint.options, ErrorKind.OBJECT_MISSING_REQUIRED_PROPERTY):
        return
    # parameter objects use a boolean ``required``
    if not isinstance(required, list) or not is_plain_object(instance):
        return
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        properties = {}

    for name in required:
        if not isinstance(name, str):
            continue
        declared = properties.get(name)
        if isinstance(declared, Mapping) and absent_from_responses(declared, lint.options):
            continue
        if name not in instance:
            yield LintError(ErrorKind.OBJECT_MISSING_REQUIRED_PROPERTY, [name], schema=schema)
