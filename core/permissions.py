"""
Custom permission classes for the admin API.
"""
from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Allow access only to staff users of the admin dashboard.

    DRF answers 401 when no credentials were supplied and 403 (with
    ``message``) when an authenticated user is not staff.
    """
    message = 'Admin access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and user.is_staff)
