"""Generic CRUD service with audit logging and typed errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Type, TypeVar

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ledger.errors import ConflictError, LedgerError, NotFoundError, PersistenceError, ValidationError
from ledger.extensions import db
from ledger.services.audit import log_admin_action

Model = TypeVar("Model", bound=db.Model)

PROTECTED_FIELDS = frozenset({'id', 'created_at', 'updated_at'})
SENSITIVE_FIELDS = frozenset({'password', 'password_hash', 'secret', 'token', 'api_key'})


def _integrity_error(error: IntegrityError) -> LedgerError:
    """Convert database integrity errors to user-facing errors."""
    error_msg = str(error.orig if error.orig is not None else error).lower()
    if 'unique' in error_msg or 'duplicate' in error_msg:
        return ConflictError()
    if 'foreign' in error_msg:
        return ValidationError(message="Referenced record does not exist")
    if 'not null' in error_msg:
        return ValidationError(message="A required value is missing")
    return ConflictError("Database constraint violation")


@contextmanager
def transaction(description: str) -> Iterator[None]:
    """Commit on success; roll back and raise a typed error on failure.

    Args:
        description: Human readable name of the unit of work, used in logs
    """
    try:
        yield
        db.session.commit()
    except LedgerError:
        db.session.rollback()
        raise
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning(f"Integrity error while trying to {description}: {e.orig}")
        raise _integrity_error(e) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to {description}: {e}")
        raise PersistenceError() from e


def paginate(query, limit: int | None, offset: int | None) -> tuple[list[Any], int]:
    """Apply limit/offset to a query and return ``(items, total)``."""
    total = query.order_by(None).count()
    max_size = current_app.config.get('MAX_PAGE_SIZE', 100)
    limit = min(max(limit or current_app.config.get('DEFAULT_PAGE_SIZE', 20), 1), max_size)
    offset = max(offset or 0, 0)
    return query.limit(limit).offset(offset).all(), total


class CRUDService:
    """Base CRUD service with common operations."""

    label: str | None = None

    def __init__(self, model: Type[Model]):
        """
        Initialize CRUD service.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model
        self.model_name = model.__tablename__
        self.label = self.label or self.model_name.replace('_', ' ').capitalize()

    def query(self):
        return db.session.query(self.model)

    def get_by_id(self, object_id: str) -> Model | None:
        if not object_id:
            return None
        return db.session.get(self.model, str(object_id))

    def get_or_404(self, object_id: str) -> Model:
        instance = self.get_by_id(object_id)
        if instance is None:
            raise NotFoundError(f"{self.label} not found")
        return instance

    def create(self, data: dict[str, Any], user: Any = None, skip_log: bool = False) -> Model:
        """
        Create a new record.

        Args:
            data: Cleaned field values
            user: User performing the action (for logging)
            skip_log: Skip audit logging

        Returns:
            The created instance

        Raises:
            ValidationError, ConflictError, PersistenceError
        """
        with transaction(f"create {self.model_name}"):
            values = self._prepare(dict(data), None)
            instance = self.model(**{k: v for k, v in values.items() if k not in PROTECTED_FIELDS})
            db.session.add(instance)
            db.session.flush()
            self._after_create(instance, data, user)

            if not skip_log and user:
                log_admin_action(
                    user,
                    f"{self.model_name}_created",
                    self.model_name,
                    instance.id,
                    metadata={'data': self._sanitize_log_data(data)}
                )
        return instance

    def update(self, object_id: str, data: dict[str, Any], user: Any = None, skip_log: bool = False) -> Model:
        """
        Merge ``data`` into an existing record; omitted fields keep their values.

        Args:
            object_id: ID of object to update
            data: Cleaned field values to change
            user: User performing the action (for logging)
            skip_log: Skip audit logging

        Returns:
            The updated instance
        """
        instance = self.get_or_404(object_id)
        with transaction(f"update {self.model_name}"):
            values = self._prepare(dict(data), instance)
            for key, value in values.items():
                if key in PROTECTED_FIELDS or not hasattr(instance, key):
                    continue
                setattr(instance, key, value)
            self._after_update(instance, data, user)

            if not skip_log and user:
                log_admin_action(
                    user,
                    f"{self.model_name}_updated",
                    self.model_name,
                    instance.id,
                    metadata={'data': self._sanitize_log_data(data)}
                )
        return instance

    def delete(self, object_id: str, user: Any = None, skip_log: bool = False) -> None:
        """
        Hard-delete a record together with its dependents.

        Args:
            object_id: ID of object to delete
            user: User performing the action (for logging)
            skip_log: Skip audit logging
        """
        instance = self.get_or_404(object_id)
        with transaction(f"delete {self.model_name}"):
            if not skip_log and user:
                log_admin_action(user, f"{self.model_name}_deleted", self.model_name, instance.id)
            self._delete_dependents(instance)
            db.session.delete(instance)

    def _prepare(self, data: dict[str, Any], instance: Model | None) -> dict[str, Any]:
        """
        Convert cleaned payload values into model attribute values.
        Override in subclasses for model-specific conversion and validation.

        Args:
            data: Cleaned payload values
            instance: Instance being updated, or None on create

        Returns:
            Attribute values to assign
        """
        return data

    def _after_create(self, instance: Model, data: dict[str, Any], user: Any) -> None:
        pass

    def _after_update(self, instance: Model, data: dict[str, Any], user: Any) -> None:
        pass

    def _delete_dependents(self, instance: Model) -> None:
        pass

    def _sanitize_log_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Remove sensitive fields from log data."""
        return {k: v for k, v in data.items() if k not in SENSITIVE_FIELDS}


__all__ = ['CRUDService', 'PROTECTED_FIELDS', 'paginate', 'transaction']
