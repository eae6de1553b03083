from rest_framework import serializers
from .models import Bid


class PlaceBidSerializer(serializers.Serializer):
    # presence is checked by services.place_bid after the auction state
    bidder_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)


class BidSerializer(serializers.ModelSerializer):
    bid_id = serializers.IntegerField(source='id', read_only=True)
    item_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Bid
        fields = ['bid_id', 'item_id', 'bidder_id', 'amount', 'bid_time']
        read_only_fields = fields
