"""Admin registration for notifications."""

from __future__ import annotations

from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "recipient", "category", "priority", "is_read", "created_at")
    list_filter = ("category", "priority", "is_read")
    search_fields = ("title", "message", "recipient__email")
    readonly_fields = ("created_at", "read_at")
