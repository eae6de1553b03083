# accounts/utils.py
from .models import User

USER_VIEW_FIELDS = ('id', 'username', 'first_name', 'last_name', 'email')


def user_view(user_id):
    """
    Public profile of a user for receipts, or None when the id is unknown.
    Users are managed elsewhere, so a dangling id is not an error.
    """
    if user_id is None:
        return None
    return User.objects.filter(pk=user_id).values(*USER_VIEW_FIELDS).first()
