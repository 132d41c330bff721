"""Podcast episode directory."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_, update

from ledger.extensions import db
from ledger.models import LikeTarget, NewsCategory, PodcastEpisode
from ledger.services.crud import paginate, transaction
from ledger.services.likes import delete_likes_for
from ledger.services.publishing import PublishableService, resolve_categories


class PodcastService(PublishableService):
    label = 'Podcast episode'

    def __init__(self):
        super().__init__(PodcastEpisode)

    def list(
        self,
        user=None,
        category: str | None = None,
        status: str | None = None,
        featured: bool | None = None,
        archived: str = 'exclude',
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[PodcastEpisode], int]:
        query = self.visible_query(user, archived=archived, status=status)
        if category:
            query = query.filter(PodcastEpisode.categories.any(NewsCategory.slug == category.lower()))
        if featured is not None:
            query = query.filter(PodcastEpisode.is_featured.is_(featured))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                PodcastEpisode.title.ilike(pattern),
                PodcastEpisode.guest_name.ilike(pattern),
                PodcastEpisode.description.ilike(pattern),
            ))
        query = query.order_by(PodcastEpisode.episode_number.desc())
        return paginate(query, limit, offset)

    def featured(self, user=None) -> PodcastEpisode | None:
        """Most recent featured episode, falling back to the most recent episode."""
        query = self.visible_query(user)
        episode = (
            query.filter(PodcastEpisode.is_featured.is_(True))
            .order_by(PodcastEpisode.published_at.desc())
            .first()
        )
        if episode is None:
            episode = query.order_by(PodcastEpisode.published_at.desc()).first()
        return episode

    def record_play(self, episode_id: str, user=None) -> PodcastEpisode:
        episode = self.get_visible(episode_id, user)
        with transaction("record podcast play"):
            db.session.execute(
                update(PodcastEpisode)
                .where(PodcastEpisode.id == episode.id)
                .values(play_count=PodcastEpisode.play_count + 1)
            )
        db.session.refresh(episode)
        return episode

    def _prepare(self, data: dict[str, Any], instance) -> dict[str, Any]:
        data = super()._prepare(data, instance)
        categories = resolve_categories(data.pop('category_ids', None))
        if categories is not None:
            data['categories'] = categories
        return data

    def _delete_dependents(self, instance: PodcastEpisode) -> None:
        delete_likes_for(LikeTarget.PODCAST, [instance.id])
        instance.categories = []


podcast_service = PodcastService()


__all__ = ['PodcastService', 'podcast_service']
