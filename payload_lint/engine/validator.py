"""jsonschema validator classes carrying the payload conformance rules."""
from __future__ import annotations

from functools import partial
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import structlog
from jsonschema.exceptions import ValidationError
from jsonschema.validators import Draft4Validator, create
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT4

from payload_lint.engine.context import LintContext
from payload_lint.engine.index import SchemaIndex
from payload_lint.errors import bind_property_names
from payload_lint.options import ValidateOptions
from payload_lint.report import LintReport
from payload_lint.rules.enum_check import enum_rule
from payload_lint.rules.node_hook import NODE_HOOK, check_node
from payload_lint.rules.one_of import one_of_rule
from payload_lint.rules.read_only import read_only_rule
from payload_lint.rules.required import required_rule
from payload_lint.rules.type_check import type_rule

LOGGER = structlog.get_logger(__name__)

DEFAULT_URI = "urn:payload-lint:document"


def _node_keywords(schema: Mapping[str, Any]) -> List[Tuple[str, Any]]:
    # every node also runs the hook; $ref siblings are kept
    keywords = list(schema.items())
    keywords.append((NODE_HOOK, True))
    return keywords


def build_validator_class(lint: LintContext):
    """Draft 4 keyword table with the conformance rules bound to ``lint``."""
    keywords = dict(Draft4Validator.VALIDATORS)
    keywords.update(
        {
            "enum": partial(enum_rule, lint),
            "required": partial(required_rule, lint),
            "type": partial(type_rule, lint),
            "oneOf": partial(one_of_rule, lint),
            "readOnly": partial(read_only_rule, lint),
            NODE_HOOK: partial(check_node, lint),
        }
    )
    return create(
        meta_schema=Draft4Validator.META_SCHEMA,
        validators=keywords,
        type_checker=Draft4Validator.TYPE_CHECKER,
        format_checker=Draft4Validator.FORMAT_CHECKER,
        id_of=DRAFT4.id_of,
        applicable_validators=_node_keywords,
    )


class PayloadValidator:
    """Validates payloads against schemas inside one API description document."""

    def __init__(self, document: Dict[str, Any], *, uri: str = DEFAULT_URI) -> None:
        self._document = document
        self._uri = uri
        self._registry = Registry().with_resource(
            uri, Resource.from_contents(document, default_specification=DRAFT4)
        )
        self._index = SchemaIndex.build(document, self._registry.resolver(base_uri=uri))

    @property
    def uri(self) -> str:
        return self._uri

    def _check_pointer(self, pointer: str) -> None:
        try:
            self._registry.resolver(base_uri=self._uri).lookup(f"#{pointer}")
        except Unresolvable as exc:
            raise LookupError(f"Schema not found in {self._uri}: {pointer!r}") from exc

    def iter_errors(
        self, payload: Any, pointer: str = "", options: Optional[ValidateOptions] = None
    ) -> Iterator[ValidationError]:
        """Yield every error of ``payload`` against the schema at ``pointer``."""
        self._check_pointer(pointer)
        lint = LintContext(options=options or ValidateOptions(), index=self._index)
        validator_class = build_validator_class(lint)
        validator = validator_class({"$ref": f"{self._uri}#{pointer}"}, registry=self._registry)
        return (bind_property_names(error) for error in validator.iter_errors(payload))

    def validate(
        self, payload: Any, pointer: str = "", options: Optional[ValidateOptions] = None
    ) -> LintReport:
        options = options or ValidateOptions()
        errors = list(self.iter_errors(payload, pointer, options))
        report = LintReport.from_errors(options.direction, errors)
        LOGGER.info(
            "payload_validated",
            document=self._uri,
            pointer=pointer,
            direction=options.direction.value,
            issues=len(report.issues),
        )
        return report
