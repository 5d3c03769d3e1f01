"""Direction-aware checks driven by ``x-ms-mutability`` and ``x-ms-secret``.

Each check yields at most one error and is a no-op for the other direction.
"""
from __future__ import annotations

from typing import Any, FrozenSet, Iterator, Mapping, Optional

import orjson
import structlog

from payload_lint.classify import UNDEFINED
from payload_lint.errors import ErrorKind, LintError
from payload_lint.options import Direction, ValidateOptions, should_skip

LOGGER = structlog.get_logger(__name__)

MUTABILITY = "x-ms-mutability"
SECRET = "x-ms-secret"
READ = "read"
CREATE = "create"
UPDATE = "update"
_WRITES = frozenset({CREATE, UPDATE})


def mutability_of(schema: Mapping[str, Any]) -> Optional[FrozenSet[str]]:
    """Return the declared mutability set, or None when the property has none."""
    if not isinstance(schema, Mapping):
        return None
    declared = schema.get(MUTABILITY)
    if not isinstance(declared, (list, tuple)):
        return None
    return frozenset(declared)


def is_write_only(mutability: Optional[FrozenSet[str]]) -> bool:
    return mutability is not None and READ not in mutability and bool(mutability & _WRITES)


def is_read_only(mutability: Optional[FrozenSet[str]]) -> bool:
    return mutability is not None and READ in mutability and not mutability & _WRITES


def absent_from_responses(schema: Mapping[str, Any], options: ValidateOptions) -> bool:
    """True when validating a response and the property can never be read back."""
    mutability = mutability_of(schema)
    return options.is_response and mutability is not None and READ not in mutability


def property_name(schema: Mapping[str, Any]) -> str:
    """Best-effort property name from a JSON title of the form ``{"path": [...]}``."""
    title = schema.get("title")
    if not isinstance(title, str):
        return ""
    try:
        parsed = orjson.loads(title)
    except orjson.JSONDecodeError:
        LOGGER.debug("title_not_json", title=title)
        return ""
    path = parsed.get("path") if isinstance(parsed, dict) else None
    if isinstance(path, list) and path:
        return str(path[-1])
    return ""


def violation_template(label: str, schema: Mapping[str, Any], instance: Any, direction: Direction) -> str:
    """Message template with ``{0}`` for the property name and ``{1}`` for the value."""
    value = '"{1}"' if schema.get("type") == "string" and isinstance(instance, str) else "{1}"
    return f'{label} property `"{{0}}": {value}`, cannot be sent in the {direction.value}.'


def _violation(
    kind: ErrorKind, label: str, schema: Mapping[str, Any], instance: Any, direction: Direction
) -> LintError:
    return LintError(
        kind,
        [property_name(schema), instance],
        template=violation_template(label, schema, instance, direction),
        schema=schema,
    )


def check_secret_in_response(
    options: ValidateOptions, schema: Mapping[str, Any], instance: Any
) -> Iterator[LintError]:
    if should_skip(options, ErrorKind.SECRET_PROPERTY):
        return
    if not options.is_response or instance is UNDEFINED:
        return
    secret = schema.get(SECRET)
    if isinstance(secret, str) and secret.lower() == "true":
        yield _violation(ErrorKind.SECRET_PROPERTY, "Secret", schema, instance, Direction.RESPONSE)


def check_write_only_in_response(
    options: ValidateOptions, schema: Mapping[str, Any], instance: Any
) -> Iterator[LintError]:
    if should_skip(options, ErrorKind.WRITEONLY_PROPERTY_NOT_ALLOWED_IN_RESPONSE):
        return
    if not options.is_response or instance is UNDEFINED:
        return
    if is_write_only(mutability_of(schema)):
        yield _violation(
            ErrorKind.WRITEONLY_PROPERTY_NOT_ALLOWED_IN_RESPONSE,
            "Write-only",
            schema,
            instance,
            Direction.RESPONSE,
        )


def check_read_only_in_request(
    options: ValidateOptions, schema: Mapping[str, Any], instance: Any
) -> Iterator[LintError]:
    if should_skip(options, ErrorKind.READONLY_PROPERTY_NOT_ALLOWED_IN_REQUEST):
        return
    if options.is_response or instance is UNDEFINED:
        return
    # schemas with the boolean readOnly flag are reported by the readOnly keyword
    if is_read_only(mutability_of(schema)) and "readOnly" not in schema:
        yield _violation(
            ErrorKind.READONLY_PROPERTY_NOT_ALLOWED_IN_REQUEST,
            "ReadOnly",
            schema,
            instance,
            Direction.REQUEST,
        )
