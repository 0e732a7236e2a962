"""Observation context for domain-oriented observability.

An observation context carries the request-scoped metadata that every
domain probe adds to its events.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable metadata attached to every event of a bound probe.

    Attributes:
        request_id: Correlates the events of one caller operation.
        user_id: User acting in the operation (if applicable).
        tenant_id: Tenant the operation is scoped to (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123").for_tenant(tenant.id)
        store = MembershipStore(engine, context=context)
    """

    request_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Metadata as logging keyword arguments, without unset values."""
        result = {
            key: value
            for key, value in (
                ("request_id", self.request_id),
                ("user_id", self.user_id),
                ("tenant_id", self.tenant_id),
            )
            if value is not None
        }
        result.update(self.extra)
        return result

    def for_tenant(self, tenant_id: str) -> ObservationContext:
        """Scope a copy of this context to a tenant."""
        return replace(self, tenant_id=tenant_id)

    def for_user(self, user_id: str) -> ObservationContext:
        """Attribute a copy of this context to the acting user."""
        return replace(self, user_id=user_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
