"""Admin registration for reviews."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "author", "target_kind", "target_id", "rating", "created_at")
    list_filter = ("target_kind", "rating")
    search_fields = ("comment", "author__email", "author__username")
    readonly_fields = ("created_at", "updated_at")
