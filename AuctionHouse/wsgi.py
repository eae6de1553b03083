"""
WSGI config for AuctionHouse project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'AuctionHouse.settings')

application = get_wsgi_application()
