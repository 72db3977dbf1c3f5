"""Serializers for reviews."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    """Read representation of a review."""

    author_id = serializers.ReadOnlyField(source='author.id')
    author_name = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            'id',
            'author_id',
            'author_name',
            'target_id',
            'target_kind',
            'rating',
            'comment',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_author_name(self, obj: Review) -> str:  # type: ignore
        from apps.users.services import display_name

        return display_name(obj.author)


class ReviewCreateSerializer(serializers.Serializer):
    """Shape of a new review; ranges are checked by the review service."""

    target_id = serializers.UUIDField()
    target_kind = serializers.CharField()
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(required=False)
    comment = serializers.CharField(required=False, allow_blank=True)


class RatingSummarySerializer(serializers.Serializer):
    average_rating = serializers.FloatField(source='average')
    total_reviews = serializers.IntegerField(source='count')
