"""
RBAC decorator for view-level access control.

Usage as decorator:
    @role_required(Role.SALES)
    def add_fee(request, pk):
        ...

Owners and superusers pass every check.
"""

from functools import wraps

from django.core.exceptions import PermissionDenied

from .models import Role


def _has_access(user, roles):
    if user.is_superuser or user.role == Role.OWNER:
        return True
    return not roles or user.role in roles


def role_required(*roles):
    """Decorator for function-based views. No roles means any logged-in user."""

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                from django.conf import settings
                from django.shortcuts import redirect

                return redirect(settings.LOGIN_URL)
            if not _has_access(request.user, roles):
                raise PermissionDenied
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator
