"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "service",
        "tourist",
        "status",
        "service_date",
        "number_of_people",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "service_date")
    search_fields = ("service__name", "tourist__email", "tourist__username")
    readonly_fields = (
        "created_at",
        "updated_at",
        "total_price",
        "currency",
    )
