"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsTourist
from apps.users.services import role_for_user

from .application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    DeleteBookingCommand,
    DeleteBookingHandler,
    TransitionBookingCommand,
    TransitionBookingHandler,
    UpdateBookingDetailsCommand,
    UpdateBookingDetailsHandler,
    resolve_actor,
)
from .filters import BookingFilterSet
from .models import Booking
from .queries import booking_stats, bookings_visible_to
from .repositories import DjangoServiceCatalog
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
    BookingUpdateSerializer,
)


class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Bookings as seen by the caller's role.

    Reads go through the role-scoped queryset; writes are delegated to the
    command handlers.
    """

    queryset = Booking.objects.none()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_permissions(self):  # type: ignore
        if self.action in {"create", "partial_update"}:
            return [permissions.IsAuthenticated(), IsTourist()]
        return super().get_permissions()

    def _actor(self):
        user = self.request.user
        return resolve_actor(user.id, role_for_user(user), DjangoServiceCatalog())

    def _render(self, booking_id, status_code=status.HTTP_200_OK):
        booking = Booking.objects.select_related("service", "tourist").get(pk=booking_id)
        return Response(BookingSerializer(booking).data, status=status_code)

    def get_queryset(self):  # type: ignore
        return bookings_visible_to(self._actor())

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = CreateBookingHandler().handle(
            CreateBookingCommand(tourist_id=request.user.id, **serializer.validated_data)
        )
        return self._render(booking.id, status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = BookingUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        booking = UpdateBookingDetailsHandler().handle(
            UpdateBookingDetailsCommand(
                booking_id=pk,
                tourist_id=request.user.id,
                **serializer.validated_data,
            )
        )
        return self._render(booking.id)

    def destroy(self, request, pk=None):  # type: ignore
        DeleteBookingHandler().handle(
            DeleteBookingCommand(
                booking_id=pk,
                actor_id=request.user.id,
                actor_role=role_for_user(request.user).value,
            )
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request, pk=None):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = TransitionBookingHandler().handle(
            TransitionBookingCommand(
                booking_id=pk,
                requested_status=serializer.validated_data["status"],
                actor_id=request.user.id,
                actor_role=role_for_user(request.user).value,
            )
        )
        return self._render(booking.id)

    @action(detail=False, methods=["get"])
    def stats(self, request):  # type: ignore
        return Response(booking_stats(self._actor()))
