"""Review domain events."""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class ReviewPosted(DomainEvent):
    """
    Event: A new review was stored and the target's rating recomputed

    Triggers:
    - Notify the service owner when the target is a Service
    """
    review_id: UUID
    author_id: int
    target_id: UUID
    target_kind: str
    target_name: str
    rating: int
    comment: str = ''
    service_owner_id: int | None = None
