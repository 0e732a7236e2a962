"""Observability for membership infrastructure."""

from membership.infrastructure.observability.repository_probe import (
    DefaultEntityRepositoryProbe,
    EntityRepositoryProbe,
)

__all__ = [
    "DefaultEntityRepositoryProbe",
    "EntityRepositoryProbe",
]
