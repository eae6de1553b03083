# bids/services.py
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from auctions.models import Item, AuctionType, ItemStatus
from auctions.services import fetch_item, refresh_status
from auctions.utils import auction_now, to_auction_time, to_decimal
from .models import Bid

logger = logging.getLogger(__name__)


def _bid_rejection(item, bidder_id, amount, now):
    if item.auction_type != AuctionType.FORWARD:
        return "Bidding is only allowed on FORWARD auctions."
    if item.status != ItemStatus.ACTIVE:
        return "Auction is not active."
    if item.end_time is not None and now > to_auction_time(item.end_time):
        item.status = ItemStatus.ENDED
        item.save(update_fields=['status'])
        return "Auction has ended."
    if bidder_id is None:
        return "bidder_id is required."
    if amount is None:
        return "amount is required."
    if amount < item.starting_price:
        return f"Bid must be at least the starting price {item.starting_price}."
    if amount <= item.current_price:
        return f"Bid must be higher than the current price {item.current_price}."
    return None


def place_bid(item_id, bidder_id, amount) -> Bid:
    """
    Record a bid on a FORWARD auction and make the bidder the current winner.

    The item row stays locked from validation until both the bid and the new
    price are written, so concurrent bids on one item are applied one at a
    time against the latest price. Status changes made while checking are
    committed even when the bid is rejected.
    """
    if amount is not None:
        amount = to_decimal(amount, 'amount')

    with transaction.atomic():
        item = fetch_item(item_id, for_update=True)
        now = auction_now()
        refresh_status(item, now)

        error = _bid_rejection(item, bidder_id, amount, now)
        if error is None:
            bid = Bid.objects.create(item=item, bidder_id=bidder_id, amount=amount)
            item.current_price = amount
            item.current_winner_id = bidder_id
            item.save(update_fields=['current_price', 'current_winner_id'])

    if error:
        logger.debug("Bid of %s on #%s by %s rejected: %s", amount, item_id, bidder_id, error)
        raise ValidationError(error)

    logger.info("Bid #%s accepted: %s on #%s by %s", bid.pk, amount, item_id, bidder_id)
    return bid


def get_bids_for_item(item_id):
    """Bids on the item, highest amount first."""
    if not Item.objects.filter(pk=item_id).exists():
        raise NotFound("Item not found.")
    return list(Bid.objects.filter(item_id=item_id).order_by('-amount', '-bid_time'))
