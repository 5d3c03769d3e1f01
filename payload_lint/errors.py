"""Error kinds and message rendering for payload conformance rules."""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

import orjson
from jsonschema.exceptions import ValidationError


class ErrorKind(str, Enum):
    """Error kinds emitted by the conformance rules."""

    ENUM_MISMATCH = "ENUM_MISMATCH"
    ENUM_CASE_MISMATCH = "ENUM_CASE_MISMATCH"
    OBJECT_MISSING_REQUIRED_PROPERTY = "OBJECT_MISSING_REQUIRED_PROPERTY"
    INVALID_TYPE = "INVALID_TYPE"
    ONE_OF_MISSING = "ONE_OF_MISSING"
    ONE_OF_MULTIPLE = "ONE_OF_MULTIPLE"
    SECRET_PROPERTY = "SECRET_PROPERTY"
    WRITEONLY_PROPERTY_NOT_ALLOWED_IN_RESPONSE = "WRITEONLY_PROPERTY_NOT_ALLOWED_IN_RESPONSE"
    READONLY_PROPERTY_NOT_ALLOWED_IN_REQUEST = "READONLY_PROPERTY_NOT_ALLOWED_IN_REQUEST"


MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.ENUM_MISMATCH: "No enum match for: {0}",
    ErrorKind.ENUM_CASE_MISMATCH: "Enum does not match case for: {0}",
    ErrorKind.OBJECT_MISSING_REQUIRED_PROPERTY: "Missing required property: {0}",
    ErrorKind.INVALID_TYPE: "Expected type {0} but found type {1}",
    ErrorKind.ONE_OF_MISSING: "Data does not match any schemas from 'oneOf'",
    ErrorKind.ONE_OF_MULTIPLE: "Data is valid against more than one schema from 'oneOf'",
}

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def render_param(value: Any) -> str:
    """Render a message argument the way it reads in JSON."""
    if value is None or isinstance(value, Mapping):
        return orjson.dumps(value).decode("utf-8")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(render_param(item) for item in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_message(template: str, params: Iterable[Any]) -> str:
    """Substitute ``{n}`` placeholders with rendered positional arguments."""
    values = list(params)

    def _replace(match: re.Match) -> str:
        index = int(match.group(1))
        if index >= len(values):
            return match.group(0)
        return render_param(values[index])

    return _PLACEHOLDER.sub(_replace, template)


class LintError(ValidationError):
    """A conformance violation yielded into the jsonschema error stream.

    ``context`` holds the sub-reports attached as evidence (one capped error per
    rejected alternative for ``ONE_OF_MISSING``).
    """

    def __init__(
        self,
        kind: ErrorKind,
        params: Iterable[Any] = (),
        *,
        template: Optional[str] = None,
        context: Iterable[ValidationError] = (),
        schema: Optional[Mapping[str, Any]] = None,
        name_from_path: bool = False,
    ) -> None:
        self.kind = kind
        self.params: List[Any] = list(params)
        self.template = template if template is not None else MESSAGES[kind]
        self.name_from_path = name_from_path
        extra: Dict[str, Any] = {}
        if schema is not None:
            extra["schema"] = schema
        super().__init__(format_message(self.template, self.params), context=context, **extra)

    @property
    def code(self) -> str:
        return self.kind.value

    def bind_property_name(self) -> None:
        """Fill the property name argument from the payload path of the error."""
        if not self.name_from_path:
            return
        path = self.absolute_path
        if not path:
            return
        self.params[0] = str(path[-1])
        self.message = format_message(self.template, self.params)


def bind_property_names(error: ValidationError) -> ValidationError:
    """Bind path-derived property names on ``error`` and its sub-reports."""
    if isinstance(error, LintError):
        error.bind_property_name()
    for child in error.context:
        bind_property_names(child)
    return error
