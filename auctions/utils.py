# auctions/utils.py
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response


def auction_zone():
    return ZoneInfo(settings.AUCTION_TIME_ZONE)


def auction_now():
    """Current time in the auction zone."""
    return timezone.now().astimezone(auction_zone())


def to_auction_time(value):
    """
    Normalise a datetime to the auction zone. Naive values are taken to be
    wall-clock times in that zone already.
    """
    if value is None:
        return None
    if timezone.is_naive(value):
        return timezone.make_aware(value, auction_zone())
    return value.astimezone(auction_zone())


def to_decimal(value, field):
    """Money input as a non-negative Decimal rounded to cents."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number.")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number.")
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative.")
    return amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def parse_auction_time(value, field):
    """Datetime input (or ISO 8601 string) normalised to the auction zone."""
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value.strip())
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError(f"{field} must be a valid datetime.")
        value = parsed
    elif value is not None and not isinstance(value, datetime):
        raise ValidationError(f"{field} must be a valid datetime.")
    return to_auction_time(value)


def error_message(exc):
    detail = getattr(exc, "detail", None)
    if isinstance(detail, list) and len(detail) == 1:
        return str(detail[0])
    if isinstance(detail, dict):
        return detail
    return str(detail or exc)


def error_response(exc, status_code=status.HTTP_400_BAD_REQUEST):
    msg = error_message(exc)
    if isinstance(msg, dict):
        return Response({"errors": msg}, status=status_code)
    return Response({"error": msg}, status=status_code)
