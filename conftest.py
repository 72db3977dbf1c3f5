"""Shared pytest fixtures: users per role, catalog rows and a fixed clock."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from shared.domain.actors import Role

FIXED_NOW = datetime(2030, 1, 1, 9, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def make_user(db):
    from apps.users.models import UserProfile

    def factory(username: str, role: Role = Role.TOURIST, **extra):
        user = get_user_model().objects.create_user(
            username=username,
            email=f"{username}@example.com",
            password="pass",
            **extra,
        )
        UserProfile.objects.create(user=user, role=role.value)
        return user

    return factory


@pytest.fixture
def tourist(make_user):
    return make_user("tourist", first_name="Nour", last_name="Hassan")


@pytest.fixture
def other_tourist(make_user):
    return make_user("other_tourist")


@pytest.fixture
def owner(make_user):
    return make_user("owner", Role.LOCAL_BUSINESS_OWNER)


@pytest.fixture
def other_owner(make_user):
    return make_user("other_owner", Role.LOCAL_BUSINESS_OWNER)


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", Role.ADMINISTRATOR)


@pytest.fixture
def service(owner):
    from apps.catalog.models import Service

    return Service.objects.create(
        owner=owner,
        name="Nile Felucca Sunset Tour",
        service_type=Service.ServiceType.TOUR_PACKAGE,
        price=Decimal("100.00"),
    )


@pytest.fixture
def other_service(other_owner):
    from apps.catalog.models import Service

    return Service.objects.create(
        owner=other_owner,
        name="Karnak Bike Rental",
        service_type=Service.ServiceType.RENTAL,
        price=Decimal("15.00"),
    )


@pytest.fixture
def attraction(db):
    from apps.catalog.models import Attraction

    return Attraction.objects.create(name="Valley of the Kings", category="Historical")


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def service_date():
    return FIXED_NOW + timedelta(days=7)
