# bids/models.py
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
from auctions.models import Item


class Bid(models.Model):
    item = models.ForeignKey(Item, on_delete=models.CASCADE, related_name='bids')
    bidder_id = models.PositiveBigIntegerField()
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.00'))])
    bid_time = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-amount', '-bid_time']
        indexes = [
            models.Index(fields=['item', '-amount'], name='bid_item_amount_idx'),
        ]

    def __str__(self):
        return f"Bid {self.amount} on {self.item_id} by {self.bidder_id}"
