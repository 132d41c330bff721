"""Resource library."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_, update

from ledger.extensions import db
from ledger.models import Resource, ResourceRating
from ledger.services.crud import CRUDService, paginate, transaction


class ResourceService(CRUDService):
    label = 'Resource'

    def __init__(self):
        super().__init__(Resource)

    def list(
        self,
        type: str | None = None,
        category: str | None = None,
        search: str | None = None,
        free_only: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[Resource], int]:
        query = self.query()
        if type:
            query = query.filter(Resource.type == type)
        if category:
            query = query.filter(Resource.category == category)
        if free_only:
            query = query.filter(Resource.is_free.is_(True))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(Resource.title.ilike(pattern), Resource.description.ilike(pattern)))
        query = query.order_by(Resource.created_at.desc())
        return paginate(query, limit, offset)

    def create(self, data: dict[str, Any], user: Any = None, skip_log: bool = False) -> Resource:
        if user is not None:
            data = {**data, 'author_id': user.id}
        return super().create(data, user, skip_log)

    def record_download(self, resource_id: str) -> Resource:
        resource = self.get_or_404(resource_id)
        with transaction("record resource download"):
            db.session.execute(
                update(Resource)
                .where(Resource.id == resource.id)
                .values(download_count=Resource.download_count + 1)
            )
        db.session.refresh(resource)
        return resource

    def rate(self, resource_id: str, user, rating: int) -> Resource:
        """
        Rate a resource 1-5; a user's later rating replaces their earlier one.

        Args:
            resource_id: Resource being rated
            user: Rating user
            rating: Integer between 1 and 5

        Returns:
            The resource with refreshed aggregates
        """
        resource = self.get_or_404(resource_id)
        existing = db.session.query(ResourceRating).filter_by(resource_id=resource.id, user_id=user.id).first()

        with transaction("rate resource"):
            if existing is None:
                db.session.add(ResourceRating(resource_id=resource.id, user_id=user.id, rating=rating))
                db.session.flush()
                values = {
                    'rating_total': Resource.rating_total + rating,
                    'rating_count': Resource.rating_count + 1,
                }
            else:
                delta = rating - existing.rating
                existing.rating = rating
                values = {'rating_total': Resource.rating_total + delta}
            db.session.execute(update(Resource).where(Resource.id == resource.id).values(**values))

        db.session.refresh(resource)
        return resource

    def _delete_dependents(self, instance: Resource) -> None:
        db.session.query(ResourceRating).filter(
            ResourceRating.resource_id == instance.id
        ).delete(synchronize_session=False)


resource_service = ResourceService()


__all__ = ['ResourceService', 'resource_service']
