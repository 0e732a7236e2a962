"""Domain probe for membership repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of entity persistence: records created, changed,
found, missing, deleted and listed, plus validation failures and backend
errors replaced by safe messages.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class EntityRepositoryProbe(Protocol):
    """Domain probe for entity repository operations."""

    def entity_created(self, entity_id: str) -> None:
        """Record that an entity was successfully created."""
        ...

    def entity_updated(self, entity_id: str, fields: Sequence[str]) -> None:
        """Record that the masked fields of an entity were changed."""
        ...

    def entity_retrieved(self, entity_id: str) -> None:
        """Record that an entity was retrieved."""
        ...

    def entity_not_found(self, entity_id: str) -> None:
        """Record that an entity was not found."""
        ...

    def entity_deleted(self, entity_id: str) -> None:
        """Record that an entity was deleted."""
        ...

    def entities_listed(
        self, count: int, criteria: Mapping[str, Any] | None = None
    ) -> None:
        """Record that entities matching the lookup criteria were listed."""
        ...

    def validation_failed(self, errors: list[dict[str, Any]]) -> None:
        """Record that a record was rejected before reaching the backend."""
        ...

    def backend_error_translated(self, raw_error: str, safe_message: str) -> None:
        """Record that a backend error was replaced by a safe message."""
        ...

    def with_context(self, context: ObservationContext) -> EntityRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEntityRepositoryProbe:
    """Default implementation of EntityRepositoryProbe using structlog.

    Every event carries the entity type name, so one probe class serves all
    four repositories.
    """

    def __init__(
        self,
        entity_type: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._entity_type = entity_type
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultEntityRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultEntityRepositoryProbe(
            self._entity_type, logger=self._logger, context=context
        )

    def entity_created(self, entity_id: str) -> None:
        """Record that an entity was successfully created."""
        self._logger.info(
            "entity_created",
            entity_type=self._entity_type,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_updated(self, entity_id: str, fields: Sequence[str]) -> None:
        """Record that the masked fields of an entity were changed."""
        self._logger.info(
            "entity_updated",
            entity_type=self._entity_type,
            entity_id=entity_id,
            fields=list(fields),
            **self._get_context_kwargs(),
        )

    def entity_retrieved(self, entity_id: str) -> None:
        """Record that an entity was retrieved."""
        self._logger.debug(
            "entity_retrieved",
            entity_type=self._entity_type,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_not_found(self, entity_id: str) -> None:
        """Record that an entity was not found."""
        self._logger.debug(
            "entity_not_found",
            entity_type=self._entity_type,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_deleted(self, entity_id: str) -> None:
        """Record that an entity was deleted."""
        self._logger.info(
            "entity_deleted",
            entity_type=self._entity_type,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entities_listed(
        self, count: int, criteria: Mapping[str, Any] | None = None
    ) -> None:
        """Record that entities matching the lookup criteria were listed.

        Criteria are logged under their own key so they never collide with
        the bound observation context.
        """
        self._logger.debug(
            "entities_listed",
            entity_type=self._entity_type,
            count=count,
            criteria=dict(criteria or {}),
            **self._get_context_kwargs(),
        )

    def validation_failed(self, errors: list[dict[str, Any]]) -> None:
        """Record that a record was rejected before reaching the backend."""
        self._logger.info(
            "validation_failed",
            entity_type=self._entity_type,
            fields=[".".join(str(part) for part in error["loc"]) for error in errors],
            **self._get_context_kwargs(),
        )

    def backend_error_translated(self, raw_error: str, safe_message: str) -> None:
        """Record that a backend error was replaced by a safe message.

        The raw text stays in internal logs only.
        """
        self._logger.warning(
            "backend_error_translated",
            entity_type=self._entity_type,
            raw_error=raw_error,
            safe_message=safe_message,
            **self._get_context_kwargs(),
        )
