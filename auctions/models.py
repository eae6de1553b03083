# auctions/models.py
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal


class AuctionType(models.TextChoices):
    FORWARD = 'FORWARD', 'Forward'      # ascending, highest bid wins
    DUTCH = 'DUTCH', 'Dutch'            # descending, first acceptance wins


class ItemStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    ENDED = 'ENDED', 'Ended'


class PaymentStatus(models.TextChoices):
    UNPAID = 'UNPAID', 'Unpaid'
    PAID = 'PAID', 'Paid'


class ItemQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=ItemStatus.ACTIVE)

    def ended(self):
        return self.filter(status=ItemStatus.ENDED)

    def due_to_end(self, now):
        """Active items whose end time is not after `now`."""
        return self.active().filter(end_time__isnull=False, end_time__lte=now)

    def search(self, query):
        return self.filter(
            models.Q(title__icontains=query) | models.Q(description__icontains=query)
        )


class Item(models.Model):
    # users live outside this service, so these are plain ids
    seller_id = models.PositiveBigIntegerField()
    current_winner_id = models.PositiveBigIntegerField(null=True, blank=True)

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)

    condition_code = models.CharField(max_length=10, default='USED')  # NEW / USED / REFURB
    cover_image_url = models.URLField(max_length=500, blank=True, null=True)
    ship_cost_std = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    ship_cost_exp = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    ship_days = models.PositiveIntegerField(default=5)

    starting_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.00'))])
    current_price = models.DecimalField(max_digits=12, decimal_places=2)
    minimum_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)  # Dutch floor

    auction_type = models.CharField(max_length=20, choices=AuctionType.choices, default=AuctionType.FORWARD)
    status = models.CharField(max_length=20, choices=ItemStatus.choices, default=ItemStatus.ACTIVE)

    category = models.CharField(max_length=80, blank=True, null=True)
    keywords = models.TextField(blank=True, null=True)
    quantity = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField(auto_now_add=True)
    end_time = models.DateTimeField(null=True, blank=True)

    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)
    payment_time = models.DateTimeField(null=True, blank=True)

    objects = ItemQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'end_time'], name='item_status_end_idx'),
        ]

    def __str__(self):
        return f"{self.title} (#{self.id})"

    @property
    def floor_price(self):
        return self.minimum_price if self.minimum_price is not None else Decimal('0.00')
