"""API views for managing reviews."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError as DRFValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsTourist
from apps.users.services import role_for_user
from shared.domain.actors import build_actor

from . import services
from .filters import ReviewFilterSet
from .models import Review
from .rating import as_target_id
from .serializers import (
    RatingSummarySerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
)


class ReviewViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for listing, creating, editing and deleting reviews."""

    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    filterset_class = ReviewFilterSet
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [permissions.IsAuthenticated(), IsTourist()]
        return super().get_permissions()

    def _target_param(self):
        target = self.request.query_params.get('target')
        if not target:
            raise DRFValidationError({'target': ['This query parameter is required.']})
        return as_target_id(target)

    def get_queryset(self):  # type: ignore
        return Review.objects.select_related('author')

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review, summary = services.create_review(author_id=request.user.id, **serializer.validated_data)
        return Response(
            {
                'review': ReviewSerializer(review).data,
                'stats': RatingSummarySerializer(summary).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = ReviewUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        review, summary = services.update_review(pk, request.user.id, **serializer.validated_data)
        return Response(
            {
                'review': ReviewSerializer(review).data,
                'stats': RatingSummarySerializer(summary).data,
            }
        )

    def destroy(self, request, pk=None):  # type: ignore
        actor = build_actor(request.user.id, role_for_user(request.user))
        summary = services.delete_review(pk, actor)
        return Response({'stats': RatingSummarySerializer(summary).data}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAuthenticated])
    def check(self, request):  # type: ignore
        target_id = self._target_param()
        review = Review.objects.filter(author=request.user, target_id=target_id).first()
        return Response({
            'has_reviewed': services.has_reviewed(request.user.id, target_id),
            'review': ReviewSerializer(review).data if review else None,
        })

    @action(detail=False, methods=['get'])
    def stats(self, request):  # type: ignore
        return Response(services.target_rating_stats(self._target_param()))

    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAuthenticated])
    def mine(self, request):  # type: ignore
        qs = self.filter_queryset(self.get_queryset().filter(author=request.user))
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ReviewSerializer(page, many=True).data)
        return Response(ReviewSerializer(qs, many=True).data)
