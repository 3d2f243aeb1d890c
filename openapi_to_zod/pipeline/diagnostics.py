"""
Structured diagnostics for degraded generation paths.

Every recoverable problem met while loading, collecting, converting or
emitting is recorded here (and logged), so callers can assert on what
went wrong instead of scraping console output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DOCUMENT_LOAD_FAILED = "document-load-failed"
UNRESOLVED_REFERENCE = "unresolved-reference"
SCHEMA_NAME_CONFLICT = "schema-name-conflict"
CIRCULAR_DEPENDENCY = "circular-dependency"


@dataclass
class Diagnostic:
    """One recorded warning."""

    code: str
    message: str
    reference: str = ""  # The $ref, file path or schema name concerned


@dataclass
class Diagnostics:
    """Collects the warnings of one generator run."""

    items: list[Diagnostic] = field(default_factory=list)

    def warn(self, code: str, message: str, reference: str = "") -> Diagnostic:
        diagnostic = Diagnostic(code=code, message=message, reference=reference)
        self.items.append(diagnostic)
        logger.warning(message)
        return diagnostic

    def by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.items if d.code == code]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
