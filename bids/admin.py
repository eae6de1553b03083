from django.contrib import admin
from .models import Bid


@admin.register(Bid)
class BidAdmin(admin.ModelAdmin):
    list_display = ('item', 'bidder_id', 'amount', 'bid_time')
    list_filter = ('bid_time',)
    raw_id_fields = ('item',)

    # bids are an append-only record
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
