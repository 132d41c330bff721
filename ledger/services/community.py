"""Community leaderboard and headline counts."""

from __future__ import annotations

from ledger.extensions import db
from ledger.models import (
    ContentStatus,
    ForumDiscussion,
    ForumReply,
    NewsArticle,
    PodcastEpisode,
    Resource,
    User,
)


def contributors(limit: int = 10) -> list[User]:
    """Active members with points, highest first."""
    limit = min(max(limit, 1), 50)
    return (
        db.session.query(User)
        .filter(User.active.is_(True), User.points > 0)
        .order_by(User.points.desc(), User.last_name)
        .limit(limit)
        .all()
    )


def stats() -> dict[str, int]:
    """Counts shown on the community page, derived from live rows."""
    def count(model, *criteria) -> int:
        return db.session.query(model).filter(*criteria).count()

    return {
        'members': count(User, User.active.is_(True)),
        'articles': count(
            NewsArticle,
            NewsArticle.status == ContentStatus.PUBLISHED,
            NewsArticle.is_archived.is_(False),
        ),
        'podcasts': count(
            PodcastEpisode,
            PodcastEpisode.status == ContentStatus.PUBLISHED,
            PodcastEpisode.is_archived.is_(False),
        ),
        'discussions': count(ForumDiscussion, ForumDiscussion.status == ContentStatus.PUBLISHED),
        'replies': count(ForumReply),
        'resources': count(Resource),
    }


__all__ = ['contributors', 'stats']
