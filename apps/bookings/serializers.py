"""Serializers for the booking domain.

Input serializers only check shapes; every business rule is enforced by
the command handlers.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Payload for creating a booking."""

    service_id = serializers.UUIDField()
    service_date = serializers.DateTimeField()
    number_of_people = serializers.IntegerField(required=False, allow_null=True)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")


class BookingUpdateSerializer(serializers.Serializer):
    """Partial edit of date, head count or special requests."""

    service_date = serializers.DateTimeField(required=False)
    number_of_people = serializers.IntegerField(required=False)
    special_requests = serializers.CharField(required=False, allow_blank=True)


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a booking."""

    tourist_id = serializers.ReadOnlyField(source="tourist.id")
    service_id = serializers.ReadOnlyField(source="service.id")
    service_name = serializers.ReadOnlyField(source="service.name")

    class Meta:
        model = Booking
        fields = [
            "id",
            "tourist_id",
            "service_id",
            "service_name",
            "service_date",
            "number_of_people",
            "total_price",
            "currency",
            "special_requests",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
