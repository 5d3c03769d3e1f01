"""Load-time index of polymorphic unions and required property schemas."""
from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set

import structlog
from referencing.exceptions import Unresolvable

LOGGER = structlog.get_logger(__name__)

DISCRIMINATOR_VALUE = "x-ms-discriminator-value"


@dataclass(frozen=True)
class Alternative:
    """One ``oneOf`` entry of a polymorphic union."""

    position: int
    schema: Mapping[str, Any]
    value: Any


@dataclass(frozen=True)
class DiscriminatorUnion:
    """A ``oneOf`` whose alternatives are keyed by discriminator value."""

    property_name: str
    base: Alternative
    by_value: Dict[Any, Alternative] = field(default_factory=dict)

    @property
    def base_value(self) -> Any:
        return self.base.value

    def select(self, value: Any) -> Alternative:
        """Return the alternative for ``value``, degrading to the base type."""
        if isinstance(value, Hashable):
            return self.by_value.get(value, self.base)
        return self.base


def _discriminator_name(target: Mapping[str, Any]) -> Optional[str]:
    declared = target.get("discriminator")
    if isinstance(declared, str):
        return declared
    if isinstance(declared, Mapping) and isinstance(declared.get("propertyName"), str):
        return declared["propertyName"]
    return None


def _discriminator_value(target: Mapping[str, Any], property_name: str, ref: str) -> Any:
    properties = target.get("properties")
    declared = properties.get(property_name) if isinstance(properties, Mapping) else None
    enum = declared.get("enum") if isinstance(declared, Mapping) else None
    if isinstance(enum, list) and enum:
        return enum[0]
    if DISCRIMINATOR_VALUE in target:
        return target[DISCRIMINATOR_VALUE]
    return ref.rsplit("/", 1)[-1]


def _resolve(alternative: Any, resolver) -> Optional[Mapping[str, Any]]:
    if not isinstance(alternative, Mapping):
        return None
    ref = alternative.get("$ref")
    if not isinstance(ref, str):
        return None
    try:
        contents = resolver.lookup(ref).contents
    except Unresolvable:
        LOGGER.warning("discriminator_ref_unresolved", ref=ref)
        return None
    return contents if isinstance(contents, Mapping) else None


def build_union(alternatives: List[Any], resolver) -> Optional[DiscriminatorUnion]:
    """Build the tagged union for a ``oneOf`` list, or None if it is not polymorphic.

    Only ``$ref`` alternatives take part. The base alternative is the first one
    whose referenced schema declares a discriminator.
    """
    resolved = []
    for position, alternative in enumerate(alternatives):
        target = _resolve(alternative, resolver)
        if target is not None:
            resolved.append((position, alternative, target))

    base_entry = next((entry for entry in resolved if _discriminator_name(entry[2])), None)
    if base_entry is None:
        return None
    property_name = _discriminator_name(base_entry[2])

    base: Optional[Alternative] = None
    by_value: Dict[Any, Alternative] = {}
    for position, alternative, target in resolved:
        value = _discriminator_value(target, property_name, alternative["$ref"])
        entry = Alternative(position=position, schema=alternative, value=value)
        if position == base_entry[0]:
            base = entry
        if isinstance(value, Hashable):
            by_value.setdefault(value, entry)
    return DiscriminatorUnion(property_name=property_name, base=base, by_value=by_value)


class SchemaIndex:
    """Facts about an API description document computed once at load time."""

    def __init__(self) -> None:
        self._unions: Dict[int, DiscriminatorUnion] = {}
        self._required_properties: Set[int] = set()

    @classmethod
    def build(cls, document: Any, resolver) -> "SchemaIndex":
        index = cls()
        seen: Set[int] = set()
        stack = [document]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            if isinstance(node, Mapping):
                index._index_node(node, resolver)
                stack.extend(value for value in node.values() if isinstance(value, (Mapping, list)))
            elif isinstance(node, list):
                stack.extend(value for value in node if isinstance(value, (Mapping, list)))
        LOGGER.debug(
            "schema_index_built",
            unions=len(index._unions),
            required_properties=len(index._required_properties),
        )
        return index

    def _index_node(self, node: Mapping[str, Any], resolver) -> None:
        required = node.get("required")
        properties = node.get("properties")
        if isinstance(required, list) and isinstance(properties, Mapping):
            for name in required:
                subschema = properties.get(name) if isinstance(name, str) else None
                if isinstance(subschema, Mapping):
                    self._required_properties.add(id(subschema))
        alternatives = node.get("oneOf")
        if isinstance(alternatives, list):
            union = build_union(alternatives, resolver)
            if union is not None:
                self._unions[id(node)] = union

    def union_for(self, schema: Mapping[str, Any]) -> Optional[DiscriminatorUnion]:
        return self._unions.get(id(schema))

    def is_required_property(self, schema: Mapping[str, Any]) -> bool:
        """True when ``schema`` is a property schema its parent lists as required."""
        return id(schema) in self._required_properties
