"""
Actors

The caller of every authorization-sensitive operation is described by one
of three variants. Authentication happens outside the core; the API layer
(or any other caller) supplies ``(actor_id, role)`` and the core turns it
into a variant with ``build_actor``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union
from uuid import UUID

from shared.domain.exceptions import ValidationError


class Role(Enum):
    TOURIST = 'Tourist'
    LOCAL_BUSINESS_OWNER = 'LocalBusinessOwner'
    ADMINISTRATOR = 'Administrator'

    @classmethod
    def parse(cls, value: 'Role | str') -> 'Role':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unknown role: {value!r}") from None


@dataclass(frozen=True)
class Tourist:
    user_id: int


@dataclass(frozen=True)
class ServiceOwner:
    user_id: int
    owned_service_ids: frozenset[UUID] = frozenset()

    def owns(self, service_id: UUID) -> bool:
        return service_id in self.owned_service_ids


@dataclass(frozen=True)
class Administrator:
    user_id: int


Actor = Union[Tourist, ServiceOwner, Administrator]


def build_actor(
    actor_id: int,
    role: 'Role | str',
    owned_service_ids: Iterable[UUID] = (),
) -> Actor:
    """Turn a caller-supplied ``(id, role)`` pair into an actor variant."""
    role = Role.parse(role)
    if role is Role.ADMINISTRATOR:
        return Administrator(actor_id)
    if role is Role.LOCAL_BUSINESS_OWNER:
        return ServiceOwner(actor_id, frozenset(owned_service_ids))
    return Tourist(actor_id)
