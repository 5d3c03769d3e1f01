"""Per-node entry point for the mutability, secret and parameter checks."""
from __future__ import annotations

from typing import Any, Iterator, Mapping

from jsonschema.exceptions import ValidationError

from payload_lint.engine.context import LintContext
from payload_lint.rules.global_params import check_global_parameter
from payload_lint.rules.mutability import (
    check_read_only_in_request,
    check_secret_in_response,
    check_write_only_in_response,
)

NODE_HOOK = "x-payload-lint-node"


def check_node(
    lint: LintContext, validator, _enabled: Any, instance: Any, schema: Mapping[str, Any]
) -> Iterator[ValidationError]:
    if not lint.hook_enabled:
        return
    options = lint.options
    yield from check_write_only_in_response(options, schema, instance)
    yield from check_secret_in_response(options, schema, instance)
    yield from check_read_only_in_request(options, schema, instance)
    yield from check_global_parameter(lint, validator, instance, schema)
