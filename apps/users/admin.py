"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "company_name", "created_at")
    list_filter = ("role",)
    search_fields = ("user__username", "user__email", "company_name")
    readonly_fields = ("created_at",)
