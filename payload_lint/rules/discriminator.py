"""Discriminator-based selection of a ``oneOf`` alternative.

Payloads are treated leniently: a missing discriminator, or one naming no
known alternative, selects the base type. When the base type is selected the
discriminator field is written onto the payload so later checks (and anything
serialising the payload afterwards) see a consistent value.
"""
from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

import structlog
from jsonschema.exceptions import ValidationError

from payload_lint.classify import is_plain_object
from payload_lint.engine.context import LintContext
from payload_lint.engine.index import DiscriminatorUnion

LOGGER = structlog.get_logger(__name__)


def _validate_selected(
    union: DiscriminatorUnion, validator, instance: Any
) -> Iterator[ValidationError]:
    declared = instance.get(union.property_name) if is_plain_object(instance) else None
    value = declared or union.base_value
    selected = union.select(value)
    if declared and selected is union.base and declared != union.base_value:
        LOGGER.debug(
            "discriminator_fallback",
            discriminator=union.property_name,
            value=declared,
            base=union.base_value,
        )
    if selected is union.base and is_plain_object(instance):
        instance[union.property_name] = union.base_value
    yield from validator.descend(instance, selected.schema, schema_path=selected.position)


def resolve_polymorphic(
    lint: LintContext, validator, instance: Any, schema: Mapping[str, Any]
) -> Optional[Iterator[ValidationError]]:
    """Return the errors of the selected alternative, or None when ``schema`` is not polymorphic."""
    union = lint.index.union_for(schema)
    if union is None:
        return None
    return _validate_selected(union, validator, instance)
