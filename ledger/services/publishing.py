"""Shared behaviour for content with a publish status and archive flag."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func

from ledger.errors import NotFoundError, ValidationError
from ledger.extensions import db
from ledger.models import ContentStatus, NewsCategory
from ledger.security.policy import user_can
from ledger.services.audit import log_admin_action
from ledger.services.crud import CRUDService, transaction

ARCHIVE_FILTERS = ('exclude', 'include', 'only')


def parse_status(value: str | None) -> ContentStatus | None:
    if value is None:
        return None
    try:
        return ContentStatus(value)
    except ValueError:
        raise ValidationError({'status': [f"Unknown status: {value}"]})


def resolve_categories(ids: list[str] | None = None, name_or_slug: str | None = None) -> list[NewsCategory] | None:
    """Look up news categories by id list or by a single slug/name.

    Returns None when neither was supplied. Unknown references are a
    ValidationError.
    """
    if ids:
        categories = db.session.query(NewsCategory).filter(NewsCategory.id.in_(ids)).all()
        missing = set(ids) - {c.id for c in categories}
        if missing:
            raise ValidationError({'category_ids': [f"Unknown category: {i}" for i in sorted(missing)]})
        return categories
    if name_or_slug:
        key = name_or_slug.strip().lower()
        category = db.session.query(NewsCategory).filter(
            (NewsCategory.slug == key) | (func.lower(NewsCategory.name) == key)
        ).first()
        if category is None:
            raise ValidationError({'category': [f"Unknown category: {name_or_slug}"]})
        return [category]
    if ids is not None:
        return []
    return None


class PublishableService(CRUDService):
    """CRUD for entities carrying ``status`` and ``is_archived``."""

    def visible_query(self, user=None, archived: str = 'exclude', status: str | None = None):
        query = self.query()
        if user_can(user, 'draft.view'):
            if status:
                query = query.filter(self.model.status == parse_status(status))
        else:
            query = query.filter(self.model.status == ContentStatus.PUBLISHED)

        if archived not in ARCHIVE_FILTERS:
            raise ValidationError({'archived': [f"Must be one of: {', '.join(ARCHIVE_FILTERS)}"]})
        if archived == 'exclude':
            query = query.filter(self.model.is_archived.is_(False))
        elif archived == 'only':
            query = query.filter(self.model.is_archived.is_(True))
        return query

    def get_visible(self, object_id: str, user=None):
        instance = self.get_or_404(object_id)
        if instance.status != ContentStatus.PUBLISHED and not user_can(user, 'draft.view'):
            raise NotFoundError(f"{self.label} not found")
        return instance

    def set_archived(self, object_id: str, is_archived: bool, user=None):
        instance = self.get_or_404(object_id)
        with transaction(f"archive {self.model_name}"):
            instance.is_archived = bool(is_archived)
            log_admin_action(
                user,
                f"{self.model_name}_{'archived' if is_archived else 'unarchived'}",
                self.model_name,
                instance.id,
            )
        return instance

    def set_status(self, object_id: str, status: str, user=None):
        instance = self.get_or_404(object_id)
        new_status = parse_status(status)
        with transaction(f"change {self.model_name} status"):
            instance.status = new_status
            log_admin_action(
                user,
                f"{self.model_name}_status_changed",
                self.model_name,
                instance.id,
                metadata={'status': new_status.value},
            )
        return instance

    def _prepare(self, data: dict[str, Any], instance) -> dict[str, Any]:
        if 'status' in data:
            status = parse_status(data.pop('status'))
            if status is not None:
                data['status'] = status
        if 'published_at' in data and data['published_at'] is None:
            data.pop('published_at')
        return data


__all__ = ['ARCHIVE_FILTERS', 'parse_status', 'resolve_categories', 'PublishableService']
