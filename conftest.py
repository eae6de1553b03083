from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

import pytest
from rest_framework.test import APIClient


class FrozenClock:
    """Stands in for django.utils.timezone.now so auction time can be moved by hand."""

    def __init__(self, current):
        self.current = current

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture(autouse=True)
def _plain_http(settings):
    settings.SECURE_SSL_REDIRECT = False


@pytest.fixture
def clock():
    frozen = FrozenClock(datetime(2025, 3, 1, 17, 0, tzinfo=dt_timezone.utc))
    with mock.patch('django.utils.timezone.now', frozen):
        yield frozen


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_item(clock):
    from auctions.services import create_item

    def _make(**overrides):
        data = {
            'seller_id': 1,
            'title': 'Vintage film camera',
            'description': 'Rangefinder, fully working',
            'starting_price': Decimal('100.00'),
            'end_time': clock.current + timedelta(hours=1),
        }
        data.update(overrides)
        return create_item(data)

    return _make


@pytest.fixture
def make_user(db):
    from accounts.models import User

    def _make(username, **extra):
        return User.objects.create_user(
            email=f"{username}@example.com",
            password="not-used",
            username=username,
            first_name=extra.pop('first_name', username.title()),
            last_name=extra.pop('last_name', 'Tester'),
            **extra,
        )

    return _make
