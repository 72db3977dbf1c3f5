"""Permission classes for role-gated endpoints."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from shared.domain.actors import Role

from .services import role_for_user


class IsTourist(permissions.BasePermission):
    """
    Only tourists may book services and write reviews.

    Staff users act as administrators and are refused like business owners.
    """

    message = "Only tourists can perform this action"

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return role_for_user(user) is Role.TOURIST
