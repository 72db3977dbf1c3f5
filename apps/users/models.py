"""User profile model.

The platform distinguishes three roles: tourists book services and write
reviews, local business owners run services, administrators moderate
everything. The role is kept on a profile next to Django's default user
model.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.actors import Role


class UserProfile(models.Model):
    """Platform role and contact details of a user."""

    class RoleChoices(models.TextChoices):
        TOURIST = Role.TOURIST.value, _("Tourist")
        LOCAL_BUSINESS_OWNER = Role.LOCAL_BUSINESS_OWNER.value, _("Local business owner")
        ADMINISTRATOR = Role.ADMINISTRATOR.value, _("Administrator")

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role = models.CharField(
        max_length=32,
        choices=RoleChoices.choices,
        default=RoleChoices.TOURIST,
    )
    phone = models.CharField(max_length=32, blank=True)
    company_name = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.user_id} ({self.role})"

    @property
    def platform_role(self) -> Role:
        return Role(self.role)
