"""Audit logging for administrative and security events."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from flask import current_app, has_request_context, request

from ledger.extensions import db
from ledger.models import AuditLog

if TYPE_CHECKING:
    from ledger.models import User


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    return value


def log_admin_action(
    user: User | None,
    action: str,
    entity_type: str,
    entity_id: str | None = None,
    metadata: dict[str, Any] | None = None,
    commit: bool = False,
) -> None:
    """
    Record an administrative action in the audit log.

    The entry joins the caller's transaction unless ``commit`` is set. A failure
    to write the entry is logged and never propagates.

    Args:
        user: User who performed the action (None for CLI/system actions)
        action: Action performed (e.g., "user_role_changed", "seed_forced")
        entity_type: Type of entity affected
        entity_id: ID of entity affected
        metadata: Additional metadata
        commit: Commit immediately instead of joining the open transaction
    """
    try:
        meta = _jsonable(metadata or {})
        if has_request_context():
            meta['ip_address'] = request.remote_addr

        db.session.add(AuditLog(
            user_id=getattr(user, 'id', None),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            meta=meta,
        ))
        if commit:
            db.session.commit()

    except Exception as e:
        if commit:
            db.session.rollback()
        current_app.logger.error(f"Failed to log admin action {action}: {e}")


def log_security_event(user: User, action: str, details: str | None = None) -> None:
    """Log a login, logout or password change for ``user``."""
    log_admin_action(
        user,
        action,
        'user',
        user.id,
        metadata={'details': details} if details else None,
        commit=True,
    )


__all__ = ["log_admin_action", "log_security_event"]
