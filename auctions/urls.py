# auctions/urls.py
from django.urls import path
from .views import (
    ItemListView, ItemCreateView, ActiveItemListView, EndedItemListView,
    ItemSearchView, ItemDetailView, EndAuctionView, DutchPriceView,
    AcceptDutchView, PayForItemView, ReceiptView,
)

urlpatterns = [
    # listings
    path('', ItemListView.as_view(), name='item-list'),
    path('active/', ActiveItemListView.as_view(), name='item-list-active'),
    path('ended/', EndedItemListView.as_view(), name='item-list-ended'),
    path('search/', ItemSearchView.as_view(), name='item-search'),

    # seller
    path('create/', ItemCreateView.as_view(), name='item-create'),
    path('<int:pk>/', ItemDetailView.as_view(), name='item-detail'),
    path('<int:pk>/end/', EndAuctionView.as_view(), name='item-end'),

    # dutch
    path('<int:pk>/dutch-price/', DutchPriceView.as_view(), name='item-dutch-price'),
    path('<int:pk>/accept-dutch/', AcceptDutchView.as_view(), name='item-accept-dutch'),

    # settlement
    path('<int:pk>/pay/', PayForItemView.as_view(), name='item-pay'),
    path('<int:pk>/receipt/', ReceiptView.as_view(), name='item-receipt'),
]
