# bids/urls.py
from django.urls import path
from .views import ItemBidsView

urlpatterns = [
    path('<int:item_id>/', ItemBidsView.as_view(), name='item-bids'),
]
