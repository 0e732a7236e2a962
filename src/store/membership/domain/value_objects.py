"""Value objects for the membership domain.

Constrained field types shared by the entity records, plus the default
identifier generator.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Callable
from uuid import uuid4

from pydantic import StringConstraints

UUID_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_UUID_RE = re.compile(UUID_PATTERN)

# Canonical 8-4-4-4-12 UUID text, any version
EntityId = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]

# Required free text: the empty string counts as missing
RequiredText = Annotated[str, StringConstraints(min_length=1)]

IdGenerator = Callable[[], str]


def generate_id() -> str:
    """Generate a new random entity identifier (UUID4 text)."""
    return str(uuid4())


def is_entity_id(value: Any) -> bool:
    """Check whether ``value`` is identifier text that could match a row."""
    return isinstance(value, str) and _UUID_RE.match(value) is not None
