"""Helpers turning Django users into what the booking core consumes."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore

from shared.domain.actors import Role

from .models import UserProfile


def role_for_user(user) -> Role:  # type: ignore
    """Staff and superusers act as administrators; others use their profile role."""
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return Role.ADMINISTRATOR
    try:
        return user.profile.platform_role
    except UserProfile.DoesNotExist:
        return Role.TOURIST


def display_name(user) -> str:  # type: ignore
    return user.get_full_name() or user.get_username() or user.email


def get_user(user_id: int):  # type: ignore
    return get_user_model().objects.filter(pk=user_id).first()
