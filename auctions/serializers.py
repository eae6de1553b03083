from rest_framework import serializers
from .models import Item


class ItemCreateSerializer(serializers.Serializer):
    # presence rules and defaults are enforced by services.create_item
    seller_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    title = serializers.CharField(max_length=200, required=False, allow_null=True, allow_blank=True)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    starting_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    minimum_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    auction_type = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)
    end_time = serializers.DateTimeField(required=False, allow_null=True)

    category = serializers.CharField(max_length=80, required=False, allow_null=True, allow_blank=True)
    keywords = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    condition_code = serializers.CharField(max_length=10, required=False, allow_null=True, allow_blank=True)
    ship_cost_std = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    ship_cost_exp = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    ship_days = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    cover_image_url = serializers.URLField(max_length=500, required=False, allow_null=True, allow_blank=True)


class ItemSerializer(serializers.ModelSerializer):
    item_id = serializers.IntegerField(source='id', read_only=True)

    class Meta:
        model = Item
        fields = [
            'item_id', 'seller_id', 'title', 'description',
            'starting_price', 'current_price', 'minimum_price',
            'auction_type', 'status', 'current_winner_id',
            'created_at', 'end_time',
            'condition_code', 'cover_image_url',
            'ship_cost_std', 'ship_cost_exp', 'ship_days',
            'category', 'keywords', 'quantity',
            'payment_status', 'payment_time',
        ]
        read_only_fields = fields


class AcceptDutchSerializer(serializers.Serializer):
    buyer_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class PaymentSerializer(serializers.Serializer):
    payer_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class ReceiptUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()


class ReceiptSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    title = serializers.CharField()
    auction_type = serializers.CharField()
    status = serializers.CharField()
    final_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    created_at = serializers.DateTimeField()
    end_time = serializers.DateTimeField(allow_null=True)
    seller = ReceiptUserSerializer(allow_null=True)
    buyer = ReceiptUserSerializer(allow_null=True)
    payment_status = serializers.CharField()
    payment_time = serializers.DateTimeField(allow_null=True)
