"""
ASGI config for AuctionHouse project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'AuctionHouse.settings')

application = get_asgi_application()
