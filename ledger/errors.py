"""Error taxonomy and JSON error handlers."""

from __future__ import annotations

from typing import Any

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException


class LedgerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    code = 'error'
    message = 'Internal server error'

    def __init__(self, message: str | None = None, *, details: dict[str, Any] | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {'error': self.message, 'code': self.code}
        payload.update(self.details)
        return payload


class ValidationError(LedgerError):
    """Bad or missing input fields."""

    status_code = 400
    code = 'validation_error'
    message = 'Invalid input'

    def __init__(self, fields: dict[str, list[str]] | None = None, message: str | None = None):
        super().__init__(message)
        self.fields = fields or {}

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.fields:
            payload['fields'] = self.fields
        return payload


class AuthenticationError(LedgerError):
    status_code = 401
    code = 'authentication_required'
    message = 'Authentication required'


class AuthorizationError(LedgerError):
    status_code = 403
    code = 'permission_denied'
    message = 'You do not have permission to perform this action'


class NotFoundError(LedgerError):
    status_code = 404
    code = 'not_found'
    message = 'Resource not found'


class ConflictError(LedgerError):
    status_code = 409
    code = 'conflict'
    message = 'A record with these values already exists'


class DependencyError(LedgerError):
    """An external service (object store, email provider) failed."""

    status_code = 502
    code = 'dependency_unavailable'
    message = 'An upstream service is unavailable'


class PersistenceError(LedgerError):
    status_code = 500
    code = 'persistence_error'
    message = 'The request could not be saved'


def register_error_handlers(app) -> None:
    """Render errors as JSON for API callers."""

    @app.errorhandler(LedgerError)
    def handle_ledger_error(error: LedgerError):
        if error.status_code >= 500:
            current_app.logger.error(f"{error.code} on {request.method} {request.path}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        if not request.path.startswith(('/api', '/objects')):
            return error
        return jsonify({'error': error.description, 'code': error.name.lower().replace(' ', '_')}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        from ledger.extensions import db

        db.session.rollback()
        current_app.logger.exception(f"Unhandled error on {request.method} {request.path}: {error}")
        return jsonify({'error': 'Internal server error', 'code': 'internal_error'}), 500


__all__ = [
    'LedgerError',
    'ValidationError',
    'AuthenticationError',
    'AuthorizationError',
    'NotFoundError',
    'ConflictError',
    'DependencyError',
    'PersistenceError',
    'register_error_handlers',
]
