"""Validation options, their configuration loading and the rule gate."""
from __future__ import annotations

import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from payload_lint.errors import ErrorKind

ENV_DIRECTION = "PAYLOAD_LINT_DIRECTION"
ENV_INCLUDE_ERRORS = "PAYLOAD_LINT_INCLUDE_ERRORS"


class Direction(str, Enum):
    """Which side of an API exchange the payload belongs to."""

    REQUEST = "request"
    RESPONSE = "response"


class ValidateOptions(BaseModel):
    """Per-pass options read by every rule."""

    model_config = ConfigDict(frozen=True)

    direction: Direction = Direction.REQUEST
    include_errors: FrozenSet[ErrorKind] = frozenset()

    @field_validator("direction", mode="before")
    @classmethod
    def _normalise_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("include_errors", mode="before")
    @classmethod
    def _split_kinds(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = value.split(",")
        kinds = set()
        for item in value:
            if isinstance(item, ErrorKind):
                kinds.add(item)
                continue
            text = str(item).strip().upper()
            if text:
                kinds.add(text)
        return frozenset(kinds)

    @property
    def is_response(self) -> bool:
        return self.direction is Direction.RESPONSE


def should_skip(options: ValidateOptions, *kinds: ErrorKind) -> bool:
    """Return True when an allow-list is configured and none of ``kinds`` is on it."""
    allowed = options.include_errors
    if not allowed:
        return False
    return not any(kind in allowed for kind in kinds)


def load_options(path: Path) -> ValidateOptions:
    """Read the ``[lint]`` table of a TOML settings file, then apply env overrides."""
    load_dotenv()
    data: Dict[str, Any] = {}
    if path.exists():
        with path.open("rb") as handle:
            data = dict(tomllib.load(handle).get("lint", {}))
    direction = os.environ.get(ENV_DIRECTION)
    if direction:
        data["direction"] = direction
    include_errors = os.environ.get(ENV_INCLUDE_ERRORS)
    if include_errors:
        data["include_errors"] = include_errors
    try:
        return ValidateOptions(**data)
    except ValidationError as exc:
        raise ValueError(f"Invalid lint options in {path}: {exc}") from exc
