# auctions/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError

from . import services
from .serializers import (
    ItemCreateSerializer, ItemSerializer, AcceptDutchSerializer,
    PaymentSerializer, ReceiptSerializer,
)
from .utils import error_response


class ItemListView(APIView):
    """
    GET /api/items/?q=
    All items, or a title/description search when `q` is given.
    """
    permission_classes = []

    def get(self, request):
        query = request.query_params.get('q')
        items = services.search_items(query) if query else services.list_all_items()
        return Response(ItemSerializer(items, many=True).data)


class ItemCreateView(APIView):
    permission_classes = []

    def post(self, request):
        ser = ItemCreateSerializer(data=request.data)
        if not ser.is_valid():
            return Response({"errors": ser.errors}, status=status.HTTP_400_BAD_REQUEST)
        try:
            item = services.create_item(ser.validated_data)
        except ValidationError as e:
            return error_response(e)
        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)


class ActiveItemListView(APIView):
    permission_classes = []

    def get(self, request):
        return Response(ItemSerializer(services.list_active_items(), many=True).data)


class EndedItemListView(APIView):
    permission_classes = []

    def get(self, request):
        return Response(ItemSerializer(services.list_ended_items(), many=True).data)


class ItemSearchView(APIView):
    permission_classes = []

    def get(self, request):
        items = services.search_items(request.query_params.get('q'))
        return Response(ItemSerializer(items, many=True).data)


class ItemDetailView(APIView):
    permission_classes = []

    def get(self, request, pk):
        try:
            item = services.get_item(pk)
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        return Response(ItemSerializer(item).data)


class EndAuctionView(APIView):
    permission_classes = []

    def post(self, request, pk):
        try:
            item = services.end_auction(pk)
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        return Response(ItemSerializer(item).data)


class DutchPriceView(APIView):
    permission_classes = []

    def get(self, request, pk):
        try:
            price = services.get_current_dutch_price(pk)
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except ValidationError as e:
            return error_response(e)
        return Response({"item_id": pk, "current_price": str(price)})


class AcceptDutchView(APIView):
    permission_classes = []

    def post(self, request, pk):
        ser = AcceptDutchSerializer(data=request.data)
        if not ser.is_valid():
            return Response({"errors": ser.errors}, status=status.HTTP_400_BAD_REQUEST)
        try:
            item = services.accept_dutch(pk, ser.validated_data.get('buyer_id'))
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except ValidationError as e:
            return error_response(e)
        return Response(ItemSerializer(item).data)


class PayForItemView(APIView):
    permission_classes = []

    def post(self, request, pk):
        ser = PaymentSerializer(data=request.data)
        if not ser.is_valid():
            return Response({"errors": ser.errors}, status=status.HTTP_400_BAD_REQUEST)
        try:
            receipt = services.pay_for_item(pk, ser.validated_data.get('payer_id'))
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except ValidationError as e:
            return error_response(e)
        return Response(ReceiptSerializer(receipt).data)


class ReceiptView(APIView):
    permission_classes = []

    def get(self, request, pk):
        try:
            receipt = services.get_receipt(pk)
        except NotFound as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except ValidationError as e:
            return error_response(e)
        return Response(ReceiptSerializer(receipt).data)
