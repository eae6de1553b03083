from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from auctions import services
from auctions.models import Item, AuctionType, ItemStatus

T0 = datetime(2025, 3, 1, 17, 0, tzinfo=dt_timezone.utc)


def dutch_item(**overrides):
    fields = dict(
        auction_type=AuctionType.DUTCH,
        starting_price=Decimal('100.00'),
        current_price=Decimal('100.00'),
        minimum_price=Decimal('20.00'),
        created_at=T0,
        end_time=T0 + timedelta(minutes=100),
    )
    fields.update(overrides)
    return Item(**fields)


def test_price_halfway_through():
    assert services.calculate_dutch_price(dutch_item(), T0 + timedelta(minutes=50)) == Decimal('60.00')


def test_price_at_start_and_end():
    item = dutch_item()

    assert services.calculate_dutch_price(item, T0) == Decimal('100.00')
    assert services.calculate_dutch_price(item, T0 + timedelta(minutes=100)) == Decimal('20.00')
    assert services.calculate_dutch_price(item, T0 + timedelta(days=3)) == Decimal('20.00')


def test_price_before_creation_is_starting_price():
    assert services.calculate_dutch_price(dutch_item(), T0 - timedelta(minutes=5)) == Decimal('100.00')


def test_price_never_increases():
    item = dutch_item()
    prices = [
        services.calculate_dutch_price(item, T0 + timedelta(seconds=s))
        for s in range(0, 100 * 60 + 1, 45)
    ]

    assert all(later <= earlier for earlier, later in zip(prices, prices[1:]))
    assert prices[0] == Decimal('100.00')
    assert min(prices) >= Decimal('20.00')


def test_price_steps_are_small():
    # one second moves the price by at most a cent on this item
    item = dutch_item()
    for s in range(0, 100 * 60, 7):
        now = T0 + timedelta(seconds=s)
        step = services.calculate_dutch_price(item, now) - services.calculate_dutch_price(item, now + timedelta(seconds=1))
        assert Decimal('0.00') <= step <= Decimal('0.02')


def test_missing_floor_decays_to_zero():
    item = dutch_item(minimum_price=None)

    assert services.calculate_dutch_price(item, T0 + timedelta(minutes=25)) == Decimal('75.00')
    assert services.calculate_dutch_price(item, T0 + timedelta(minutes=100)) == Decimal('0.00')


def test_without_end_time_price_is_unchanged():
    item = dutch_item(end_time=None, current_price=Decimal('88.00'))

    assert services.calculate_dutch_price(item, T0 + timedelta(minutes=50)) == Decimal('88.00')


def test_naive_now_is_read_in_auction_zone():
    # 12:50 in Toronto is 17:50 UTC
    assert services.calculate_dutch_price(dutch_item(), datetime(2025, 3, 1, 12, 50)) == Decimal('60.00')


def test_forward_item_has_no_dutch_price():
    with pytest.raises(ValidationError):
        services.calculate_dutch_price(dutch_item(auction_type=AuctionType.FORWARD), T0)


@pytest.mark.django_db
class TestDutchAcceptance:

    @pytest.fixture
    def item(self, clock, make_item):
        return make_item(
            auction_type='DUTCH',
            minimum_price=Decimal('20.00'),
            end_time=clock.current + timedelta(minutes=100),
        )

    def test_current_price_follows_clock(self, clock, item):
        assert services.get_current_dutch_price(item.pk) == Decimal('100.00')
        clock.advance(minutes=50)
        assert services.get_current_dutch_price(item.pk) == Decimal('60.00')

    def test_current_price_rejects_forward_items(self, make_item):
        forward = make_item()
        with pytest.raises(ValidationError):
            services.get_current_dutch_price(forward.pk)

    def test_accept_sells_at_current_price(self, clock, item):
        clock.advance(minutes=25)

        sold = services.accept_dutch(item.pk, 42)

        assert sold.status == ItemStatus.ENDED
        assert sold.current_winner_id == 42
        assert sold.current_price == Decimal('80.00')
        item.refresh_from_db()
        assert (item.status, item.current_winner_id, item.current_price) == (ItemStatus.ENDED, 42, Decimal('80.00'))

    def test_accept_only_once(self, item):
        services.accept_dutch(item.pk, 42)

        with pytest.raises(ValidationError) as exc:
            services.accept_dutch(item.pk, 43)
        assert exc.value.detail[0] == "Auction is not active."
        item.refresh_from_db()
        assert item.current_winner_id == 42

    def test_accept_requires_buyer(self, item):
        with pytest.raises(ValidationError):
            services.accept_dutch(item.pk, None)
        item.refresh_from_db()
        assert item.status == ItemStatus.ACTIVE

    def test_accept_rejects_forward_items(self, make_item):
        forward = make_item()
        with pytest.raises(ValidationError) as exc:
            services.accept_dutch(forward.pk, 42)
        assert exc.value.detail[0] == "Not a Dutch auction."

    def test_accept_after_end_time_fails_and_closes(self, clock, item):
        clock.advance(minutes=101)

        with pytest.raises(ValidationError):
            services.accept_dutch(item.pk, 42)

        item.refresh_from_db()
        assert item.status == ItemStatus.ENDED
        assert item.current_winner_id is None
