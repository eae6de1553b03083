# auctions/services.py
import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from accounts.utils import user_view
from .models import Item, AuctionType, ItemStatus, PaymentStatus
from .utils import auction_now, parse_auction_time, to_auction_time, to_decimal

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')

DEFAULT_CONDITION_CODE = 'USED'
DEFAULT_SHIP_DAYS = 5
DEFAULT_QUANTITY = 1


def fetch_item(item_id, for_update=False) -> Item:
    qs = Item.objects.select_for_update() if for_update else Item.objects.all()
    try:
        return qs.get(pk=item_id)
    except Item.DoesNotExist:
        raise NotFound("Item not found.")


# ---- lifecycle ----

def derive_status(item: Item, now) -> ItemStatus:
    """
    Status the item should have at `now`. An ACTIVE item whose end time is
    not strictly after `now` has ended; items without an end time never end
    by themselves.
    """
    status = ItemStatus(item.status)
    if status != ItemStatus.ACTIVE or item.end_time is None:
        return status
    if to_auction_time(item.end_time) <= to_auction_time(now):
        return ItemStatus.ENDED
    return status


def refresh_status(item: Item, now=None) -> bool:
    """Close the item if its end time has passed. Returns True when it changed."""
    if now is None:
        now = auction_now()
    if item.status == ItemStatus.ACTIVE and derive_status(item, now) == ItemStatus.ENDED:
        item.status = ItemStatus.ENDED
        item.save(update_fields=['status'])
        logger.info("Item #%s reached its end time and was closed", item.pk)
        return True
    return False


def close_expired_items(now=None) -> int:
    """Bulk version of refresh_status for listings and the management command."""
    if now is None:
        now = auction_now()
    count = Item.objects.due_to_end(now).update(status=ItemStatus.ENDED)
    if count:
        logger.info("Closed %s item(s) past their end time", count)
    return count


def _parse_auction_type(value):
    if value is None or value == '':
        return AuctionType.FORWARD
    try:
        return AuctionType(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"auction_type must be one of {', '.join(AuctionType.values)}.")


def _or_default(data, key, default):
    value = data.get(key)
    return default if value is None else value


def create_item(data) -> Item:
    seller_id = data.get('seller_id')
    title = data.get('title')
    starting_price = data.get('starting_price')

    if seller_id is None:
        raise ValidationError("seller_id is required.")
    if title is None or not str(title).strip():
        raise ValidationError("title is required.")
    if starting_price is None:
        raise ValidationError("starting_price is required.")

    starting_price = to_decimal(starting_price, 'starting_price')
    minimum_price = data.get('minimum_price')
    if minimum_price is not None:
        minimum_price = to_decimal(minimum_price, 'minimum_price')

    auction_type = _parse_auction_type(data.get('auction_type'))
    if auction_type == AuctionType.DUTCH and minimum_price is not None and minimum_price > starting_price:
        raise ValidationError("minimum_price cannot be higher than starting_price.")

    condition_code = data.get('condition_code')
    condition_code = condition_code.upper() if condition_code else DEFAULT_CONDITION_CODE

    item = Item.objects.create(
        seller_id=seller_id,
        title=title,
        description=data.get('description'),
        condition_code=condition_code,
        cover_image_url=data.get('cover_image_url'),
        ship_cost_std=to_decimal(_or_default(data, 'ship_cost_std', Decimal('0.00')), 'ship_cost_std'),
        ship_cost_exp=to_decimal(_or_default(data, 'ship_cost_exp', Decimal('0.00')), 'ship_cost_exp'),
        ship_days=_or_default(data, 'ship_days', DEFAULT_SHIP_DAYS),
        starting_price=starting_price,
        current_price=starting_price,
        minimum_price=minimum_price,
        auction_type=auction_type,
        status=ItemStatus.ACTIVE,
        end_time=parse_auction_time(data.get('end_time'), 'end_time'),
        category=data.get('category'),
        keywords=data.get('keywords'),
        quantity=_or_default(data, 'quantity', DEFAULT_QUANTITY),
        payment_status=PaymentStatus.UNPAID,
    )
    logger.info("Created %s auction #%s for seller %s", auction_type, item.pk, seller_id)
    return item


def list_all_items():
    close_expired_items()
    return list(Item.objects.all())


def list_active_items():
    close_expired_items()
    return list(Item.objects.active())


def list_ended_items():
    close_expired_items()
    return list(Item.objects.ended())


def search_items(query):
    if query is None or not query.strip():
        return list_all_items()
    close_expired_items()
    return list(Item.objects.search(query))


def get_item(item_id) -> Item:
    item = fetch_item(item_id)
    refresh_status(item)
    return item


@transaction.atomic
def end_auction(item_id) -> Item:
    item = fetch_item(item_id, for_update=True)
    refresh_status(item)
    if item.status == ItemStatus.ENDED:
        return item

    item.status = ItemStatus.ENDED
    item.save(update_fields=['status'])
    logger.info("Auction #%s ended manually", item.pk)
    return item


# ---- Dutch pricing ----

def _microseconds(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds


def calculate_dutch_price(item: Item, now) -> Decimal:
    """
    Linear decay from the starting price at creation down to the floor at
    the end time. Pure: nothing is saved.
    """
    if item.auction_type != AuctionType.DUTCH:
        raise ValidationError("Not a Dutch auction.")

    if item.created_at is None or item.end_time is None:
        return item.current_price

    start = item.starting_price
    floor = item.floor_price

    created_at = to_auction_time(item.created_at)
    total = to_auction_time(item.end_time) - created_at
    elapsed = to_auction_time(now) - created_at

    if elapsed < timedelta(0):
        return start
    if elapsed >= total:
        return floor

    fraction = Decimal(_microseconds(elapsed)) / Decimal(_microseconds(total))
    price = (start - (start - floor) * fraction).quantize(CENT, rounding=ROUND_HALF_UP)
    return max(price, floor)


def get_current_dutch_price(item_id) -> Decimal:
    item = fetch_item(item_id)
    if item.auction_type != AuctionType.DUTCH:
        raise ValidationError("Not a Dutch auction.")

    now = auction_now()
    refresh_status(item, now)
    return calculate_dutch_price(item, now)


def _dutch_rejection(item, buyer_id, now):
    if item.auction_type != AuctionType.DUTCH:
        return "Not a Dutch auction."
    if item.status != ItemStatus.ACTIVE:
        return "Auction is not active."
    if buyer_id is None:
        return "buyer_id is required."
    if item.end_time is not None and now > to_auction_time(item.end_time):
        item.status = ItemStatus.ENDED
        item.save(update_fields=['status'])
        return "Auction has ended."
    return None


def accept_dutch(item_id, buyer_id) -> Item:
    """
    Sell a Dutch item to `buyer_id` at the price reached right now.

    Lazy closes made while checking are committed before the rejection is
    raised, so a late buyer still leaves the item ENDED.
    """
    with transaction.atomic():
        item = fetch_item(item_id, for_update=True)
        now = auction_now()
        refresh_status(item, now)

        error = _dutch_rejection(item, buyer_id, now)
        if error is None:
            item.current_price = calculate_dutch_price(item, now)
            item.status = ItemStatus.ENDED
            item.current_winner_id = buyer_id
            item.save(update_fields=['current_price', 'status', 'current_winner_id'])

    if error:
        logger.info("Dutch acceptance on #%s by %s rejected: %s", item_id, buyer_id, error)
        raise ValidationError(error)

    logger.info("Dutch auction #%s accepted by %s at %s", item.pk, buyer_id, item.current_price)
    return item


# ---- payment / receipts ----

def _payment_rejection(item, payer_id):
    if item.status != ItemStatus.ENDED:
        return "Auction has not ended yet."
    if item.current_winner_id is None:
        return "No winner for this auction."
    if payer_id is None:
        return "payer_id is required."
    if item.current_winner_id != payer_id:
        return "Only the winning bidder can pay for this item."
    return None


def pay_for_item(item_id, payer_id):
    """
    Mark the item as paid by its winner and return the receipt. Paying
    twice returns the existing receipt; payment_time keeps its first value.
    """
    with transaction.atomic():
        item = fetch_item(item_id, for_update=True)
        now = auction_now()
        refresh_status(item, now)

        error = _payment_rejection(item, payer_id)
        if error is None and item.payment_status != PaymentStatus.PAID:
            item.payment_status = PaymentStatus.PAID
            item.payment_time = now
            item.save(update_fields=['payment_status', 'payment_time'])
            logger.info("Payment recorded for #%s by %s", item.pk, payer_id)

    if error:
        logger.info("Payment for #%s by %s rejected: %s", item_id, payer_id, error)
        raise ValidationError(error)
    return build_receipt(item)


def build_receipt(item: Item) -> dict:
    return {
        "item_id": item.pk,
        "title": item.title,
        "auction_type": item.auction_type,
        "status": item.status,
        "final_price": item.current_price,
        "created_at": item.created_at,
        "end_time": item.end_time,
        "seller": user_view(item.seller_id),
        "buyer": user_view(item.current_winner_id),
        "payment_status": item.payment_status,
        "payment_time": item.payment_time,
    }


def get_receipt(item_id) -> dict:
    item = fetch_item(item_id)
    refresh_status(item)
    if item.status != ItemStatus.ENDED:
        raise ValidationError("Auction has not ended yet.")
    return build_receipt(item)
