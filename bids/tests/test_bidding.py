from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, connection
from rest_framework.exceptions import NotFound, ValidationError

from auctions.models import Item, ItemQuerySet, ItemStatus
from bids.models import Bid
from bids.services import place_bid, get_bids_for_item

pytestmark = pytest.mark.django_db


def rejection(item_id, bidder_id, amount):
    with pytest.raises(ValidationError) as exc:
        place_bid(item_id, bidder_id, amount)
    return str(exc.value.detail[0])


def test_bid_must_beat_starting_and_current_price(make_item):
    item = make_item()

    assert "starting price" in rejection(item.pk, 1, Decimal('80'))
    assert "higher than the current price" in rejection(item.pk, 1, Decimal('100'))

    bid = place_bid(item.pk, 1, Decimal('150'))

    item.refresh_from_db()
    assert bid.amount == Decimal('150')
    assert item.current_price == Decimal('150.00')
    assert item.current_winner_id == 1
    assert Bid.objects.count() == 1


def test_equal_bid_is_rejected(make_item):
    item = make_item()
    place_bid(item.pk, 1, Decimal('120'))

    assert "higher than the current price" in rejection(item.pk, 2, Decimal('120'))
    item.refresh_from_db()
    assert item.current_winner_id == 1


def test_history_is_sorted_by_amount(clock, make_item):
    item = make_item()
    other = make_item(title='Other lot')
    for bidder, amount in [(1, '110'), (2, '125.50'), (3, '130'), (1, '200')]:
        clock.advance(seconds=30)
        place_bid(item.pk, bidder, Decimal(amount))
    place_bid(other.pk, 9, Decimal('500'))

    history = get_bids_for_item(item.pk)

    assert [b.amount for b in history] == [Decimal('200.00'), Decimal('130.00'), Decimal('125.50'), Decimal('110.00')]
    assert [b.bidder_id for b in history] == [1, 3, 2, 1]
    item.refresh_from_db()
    assert item.current_price == Decimal('200.00')
    assert item.current_winner_id == 1


def test_bid_time_is_assigned_by_server(clock, make_item):
    item = make_item()
    clock.advance(minutes=3)

    bid = place_bid(item.pk, 4, '101.00')

    assert bid.bid_time == clock.current
    assert bid.amount == Decimal('101.00')


def test_dutch_items_cannot_be_bid_on(make_item):
    item = make_item(auction_type='DUTCH')

    assert rejection(item.pk, 1, Decimal('150')) == "Bidding is only allowed on FORWARD auctions."


def test_bid_on_ended_auction(make_item):
    item = make_item()
    Item.objects.filter(pk=item.pk).update(status=ItemStatus.ENDED)

    assert rejection(item.pk, 1, Decimal('150')) == "Auction is not active."


def test_bid_after_end_time_closes_auction(clock, make_item):
    item = make_item()
    clock.advance(hours=1, seconds=1)

    assert rejection(item.pk, 1, Decimal('150')) == "Auction is not active."

    item.refresh_from_db()
    assert item.status == ItemStatus.ENDED
    assert item.current_price == Decimal('100.00')
    assert not Bid.objects.exists()


@pytest.mark.parametrize('bidder_id, amount, message', [
    (None, Decimal('150'), "bidder_id is required."),
    (1, None, "amount is required."),
])
def test_bid_requires_bidder_and_amount(make_item, bidder_id, amount, message):
    item = make_item()

    assert rejection(item.pk, bidder_id, amount) == message


def test_bid_amount_must_be_numeric(make_item):
    item = make_item()

    assert rejection(item.pk, 1, 'lots') == "amount must be a number."


def test_bid_on_unknown_item():
    with pytest.raises(NotFound):
        place_bid(404, 1, Decimal('10'))
    with pytest.raises(NotFound):
        get_bids_for_item(404)


def test_failed_price_update_discards_bid(make_item):
    item = make_item()

    with mock.patch.object(Item, 'save', side_effect=DatabaseError("disk full")):
        with pytest.raises(DatabaseError):
            place_bid(item.pk, 1, Decimal('150'))

    assert not Bid.objects.exists()
    item.refresh_from_db()
    assert item.current_price == Decimal('100.00')
    assert item.current_winner_id is None


@pytest.mark.parametrize('amount, message', [
    ('NaN', "amount must be a number."),
    ('Infinity', "amount must be a number."),
    (Decimal('-10'), "amount cannot be negative."),
])
def test_bid_amount_must_be_finite_and_positive(make_item, amount, message):
    item = make_item()

    assert rejection(item.pk, 1, amount) == message
    assert not Bid.objects.exists()


@pytest.mark.django_db(transaction=True)
def test_bid_locks_item_inside_transaction(make_item):
    item = make_item()
    original = ItemQuerySet.select_for_update
    seen = []

    def spy(qs, *args, **kwargs):
        seen.append(connection.in_atomic_block)
        return original(qs, *args, **kwargs)

    with mock.patch.object(ItemQuerySet, 'select_for_update', autospec=True, side_effect=spy):
        place_bid(item.pk, 1, Decimal('150'))

    assert seen == [True]
    item.refresh_from_db()
    assert item.current_price == Decimal('150.00')


@pytest.mark.django_db(transaction=True)
def test_rejected_bid_after_lock_leaves_state_untouched(make_item):
    item = make_item()
    place_bid(item.pk, 1, Decimal('150'))

    assert "higher than the current price" in rejection(item.pk, 2, Decimal('140'))

    item.refresh_from_db()
    assert (item.current_price, item.current_winner_id) == (Decimal('150.00'), 1)
    assert [b.amount for b in get_bids_for_item(item.pk)] == [Decimal('150.00')]
