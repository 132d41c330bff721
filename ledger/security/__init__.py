"""Authentication and authorization decorators for API routes."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar, cast

from flask_login import current_user

from ledger.errors import AuthenticationError, AuthorizationError
from ledger.security.policy import can, user_can

F = TypeVar('F', bound=Callable[..., object])


def _require_authenticated() -> None:
    if not current_user.is_authenticated:
        raise AuthenticationError()
    if not current_user.is_active:
        raise AuthenticationError('This account has been deactivated')


def login_required(func: F) -> F:
    """Decorator requiring an active, signed-in user."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        _require_authenticated()
        return func(*args, **kwargs)
    return cast(F, wrapper)


def permission_required(action: str):
    """Decorator factory checking the capability policy for ``action``."""
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            _require_authenticated()
            if not can(current_user.role, action):
                raise AuthorizationError()
            return func(*args, **kwargs)
        return cast(F, wrapper)
    return decorator


def authorize(user, action: str) -> None:
    """Raise the matching error unless ``user`` may perform ``action``."""
    if user is None or not getattr(user, 'is_authenticated', False):
        raise AuthenticationError()
    if not user_can(user, action):
        raise AuthorizationError()


def current_actor():
    """The signed-in user, or None for anonymous callers."""
    if current_user.is_authenticated and current_user.is_active:
        return current_user._get_current_object()
    return None


__all__ = ['login_required', 'permission_required', 'authorize', 'current_actor']
