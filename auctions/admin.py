from django.contrib import admin
from .models import Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ('title', 'auction_type', 'status', 'current_price', 'current_winner_id', 'end_time', 'payment_status')
    list_filter = ('auction_type', 'status', 'payment_status')
    search_fields = ('title', 'description', 'category', 'keywords')
    # status and payment only move forward through the services
    readonly_fields = (
        'created_at', 'status', 'current_price', 'current_winner_id',
        'payment_status', 'payment_time',
    )

    fieldsets = (
        (None, {
            'fields': ('seller_id', 'title', 'description', 'category', 'keywords', 'quantity')
        }),
        ('Pricing', {
            'fields': ('auction_type', 'starting_price', 'current_price', 'minimum_price')
        }),
        ('Timing', {
            'fields': ('created_at', 'end_time', 'status')
        }),
        ('Shipping', {
            'fields': ('condition_code', 'cover_image_url', 'ship_cost_std', 'ship_cost_exp', 'ship_days')
        }),
        ('Outcome', {
            'fields': ('current_winner_id', 'payment_status', 'payment_time')
        }),
    )
