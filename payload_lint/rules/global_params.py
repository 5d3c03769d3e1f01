"""Request parameters that wrap their payload schema under a ``schema`` key."""
from __future__ import annotations

from typing import Any, Iterator, Mapping

from jsonschema.exceptions import ValidationError

from payload_lint.classify import UNDEFINED
from payload_lint.engine.context import LintContext


def check_global_parameter(
    lint: LintContext, validator, instance: Any, schema: Mapping[str, Any]
) -> Iterator[ValidationError]:
    if lint.options.is_response or instance is UNDEFINED:
        return
    embedded = schema.get("schema")
    if not isinstance(embedded, Mapping) or not lint.hook_enabled:
        return
    with lint.hook_suspended():
        yield from validator.descend(instance, embedded, schema_path="schema")
