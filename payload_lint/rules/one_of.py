"""The ``oneOf`` keyword: discriminator dispatch, then exactly-one matching."""
from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Optional

from jsonschema.exceptions import ValidationError

from payload_lint.engine.context import LintContext
from payload_lint.errors import ErrorKind, LintError
from payload_lint.rules.discriminator import resolve_polymorphic


def _first_error(errors: Iterator[ValidationError]) -> Optional[ValidationError]:
    try:
        return next(errors, None)
    finally:
        errors.close()


def one_of_rule(
    lint: LintContext, validator, alternatives: List[Any], instance: Any, schema: Mapping[str, Any]
) -> Iterator[ValidationError]:
    polymorphic = resolve_polymorphic(lint, validator, instance, schema)
    if polymorphic is not None:
        yield from polymorphic
        return
    if not isinstance(alternatives, list):
        return

    passes = 0
    sub_reports: List[ValidationError] = []
    for position, alternative in enumerate(alternatives):
        error = _first_error(validator.descend(instance, alternative, schema_path=position))
        if error is None:
            passes += 1
        else:
            sub_reports.append(error)

    if passes == 0:
        yield LintError(ErrorKind.ONE_OF_MISSING, context=sub_reports, schema=schema)
    elif passes > 1:
        yield LintError(ErrorKind.ONE_OF_MULTIPLE, schema=schema)
