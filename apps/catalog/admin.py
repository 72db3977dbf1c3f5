"""Admin registrations for the catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import Attraction, Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "service_type", "owner", "price", "average_rating", "review_count")
    list_filter = ("service_type",)
    search_fields = ("name", "owner__email")
    readonly_fields = ("average_rating", "review_count", "created_at", "updated_at")


@admin.register(Attraction)
class AttractionAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "ticket_price", "average_rating", "review_count")
    list_filter = ("category",)
    search_fields = ("name",)
    readonly_fields = ("average_rating", "review_count", "created_at", "updated_at")
