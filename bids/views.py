# bids/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError

from auctions.utils import error_response
from .serializers import PlaceBidSerializer, BidSerializer
from .services import place_bid, get_bids_for_item


class ItemBidsView(APIView):
    """
    GET  /api/bids/<item_id>/   bid history, highest first
    POST /api/bids/<item_id>/   place a bid {bidder_id, amount}
    """
    permission_classes = []

    def get(self, request, item_id):
        try:
            bids = get_bids_for_item(item_id)
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        return Response(BidSerializer(bids, many=True).data)

    def post(self, request, item_id):
        ser = PlaceBidSerializer(data=request.data)
        if not ser.is_valid():
            return Response({"errors": ser.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            bid = place_bid(
                item_id,
                ser.validated_data.get('bidder_id'),
                ser.validated_data.get('amount'),
            )
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except ValidationError as e:
            return error_response(e)
        return Response(BidSerializer(bid).data, status=status.HTTP_201_CREATED)
