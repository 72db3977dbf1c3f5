"""Serializers for notifications."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for notifications."""

    class Meta:
        model = Notification
        fields = [
            'id',
            'category',
            'title',
            'message',
            'related_entity_id',
            'related_entity_kind',
            'action_url',
            'priority',
            'is_read',
            'read_at',
            'created_at',
        ]
        read_only_fields = fields
