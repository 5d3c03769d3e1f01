"""Per-pass state shared by the rules of one validation run."""
from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Iterator

from payload_lint.engine.index import SchemaIndex
from payload_lint.options import ValidateOptions


@dataclass
class LintContext:
    """Options, schema index and node-hook state for a single validation pass."""

    options: ValidateOptions
    index: SchemaIndex
    hook_enabled: bool = True

    @contextlib.contextmanager
    def hook_suspended(self) -> Iterator[None]:
        """Disable the per-node hook until the block exits, then restore it."""
        previous = self.hook_enabled
        self.hook_enabled = False
        try:
            yield
        finally:
            self.hook_enabled = previous
