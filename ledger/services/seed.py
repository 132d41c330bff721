"""Demo data seeding.

Seeding runs as a single transaction guarded by a ``seed_marker`` row for the
current ``SEED_VERSION``. A forced run first purges every content table and all
non-admin accounts, then inserts the demo data again.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import timedelta
from typing import Any

from flask import current_app
from sqlalchemy import select

from ledger.errors import PersistenceError
from ledger.extensions import db
from ledger.models import (
    AuditLog,
    ContentStatus,
    ForumCategory,
    ForumDiscussion,
    ForumReply,
    Like,
    NewsArticle,
    NewsCategory,
    NewsComment,
    PodcastEpisode,
    Poll,
    PollVote,
    Resource,
    ResourceRating,
    SeedMarker,
    StoredObject,
    ToolboxApp,
    ToolboxSection,
    ToolboxStatus,
    User,
    UserInvitation,
    UserRole,
    article_category,
    podcast_category,
    utcnow,
)
from ledger.services import seed_data
from ledger.services.audit import log_admin_action
from ledger.services.counters import recount_counters


@dataclass
class SeedResult:
    success: bool
    already_seeded: bool = False
    message: str = ''
    counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _purge() -> dict[str, int]:
    """Delete seedable rows, children before parents. Admin accounts survive."""
    removed: dict[str, int] = {}

    def wipe(name: str, query) -> None:
        removed[name] = query.delete(synchronize_session=False)

    wipe('likes', db.session.query(Like))
    wipe('comments', db.session.query(NewsComment))
    # Self-referencing replies go in one statement so no child outlives its parent
    wipe('replies', db.session.query(ForumReply))
    wipe('discussions', db.session.query(ForumDiscussion))
    wipe('forum_categories', db.session.query(ForumCategory))
    db.session.execute(article_category.delete())
    db.session.execute(podcast_category.delete())
    wipe('articles', db.session.query(NewsArticle))
    wipe('podcasts', db.session.query(PodcastEpisode))
    wipe('ratings', db.session.query(ResourceRating))
    wipe('resources', db.session.query(Resource))
    wipe('toolbox_apps', db.session.query(ToolboxApp))
    wipe('poll_votes', db.session.query(PollVote))
    wipe('polls', db.session.query(Poll))
    wipe('seed_markers', db.session.query(SeedMarker))

    doomed = select(User.id).where(User.role != UserRole.ADMIN)
    for model, column in (
        (UserInvitation, UserInvitation.invited_by_id),
        (StoredObject, StoredObject.owner_id),
        (AuditLog, AuditLog.user_id),
    ):
        db.session.query(model).filter(column.in_(doomed)).update({column: None}, synchronize_session=False)
    wipe('users', db.session.query(User).filter(User.role != UserRole.ADMIN))

    db.session.expire_all()
    return removed


def _news_categories() -> dict[str, NewsCategory]:
    by_slug = {}
    for row in seed_data.NEWS_CATEGORIES:
        category = db.session.query(NewsCategory).filter_by(slug=row['slug']).first()
        if category is None:
            category = NewsCategory(**row)
            db.session.add(category)
        by_slug[row['slug']] = category
    db.session.flush()
    return by_slug


def _contributors() -> dict[str, User]:
    by_email = {}
    for row in seed_data.CONTRIBUTORS:
        user = db.session.query(User).filter_by(email=row['email']).first()
        if user is None:
            user = User(role=UserRole.CONTRIBUTOR, auth_provider='seed', **row)
            db.session.add(user)
        by_email[row['email']] = user
    db.session.flush()
    return by_email


def _insert_content(categories: dict[str, NewsCategory], people: dict[str, User]) -> dict[str, int]:
    now = utcnow()
    counts = {'articles': 0, 'podcasts': 0, 'resources': 0, 'toolbox_apps': 0}

    for row in seed_data.ARTICLES:
        values = dict(row)
        category = categories[values.pop('category')]
        days_ago = values.pop('days_ago')
        article = NewsArticle(
            published_at=now - timedelta(days=days_ago),
            status=ContentStatus.PUBLISHED,
            **values,
        )
        article.categories = [category]
        db.session.add(article)
        counts['articles'] += 1

    for row in seed_data.PODCASTS:
        values = dict(row)
        days_ago = values.pop('days_ago')
        exists = db.session.query(PodcastEpisode.id).filter_by(episode_number=values['episode_number']).first()
        if exists is not None:
            continue
        db.session.add(PodcastEpisode(
            published_at=now - timedelta(days=days_ago),
            status=ContentStatus.PUBLISHED,
            **values,
        ))
        counts['podcasts'] += 1

    authors = list(people.values())
    for index, row in enumerate(seed_data.RESOURCES):
        author = authors[index % len(authors)] if authors else None
        db.session.add(Resource(author_id=author.id if author else None, **row))
        counts['resources'] += 1

    for row in seed_data.TOOLBOX_APPS:
        values = dict(row)
        db.session.add(ToolboxApp(
            section=ToolboxSection(values.pop('section')),
            status=ToolboxStatus(values.pop('status')),
            **values,
        ))
        counts['toolbox_apps'] += 1

    db.session.flush()
    return counts


def _insert_forum(people: dict[str, User]) -> dict[str, int]:
    categories = {}
    for row in seed_data.FORUM_CATEGORIES:
        category = ForumCategory(**row)
        db.session.add(category)
        categories[row['name']] = category
    db.session.flush()

    discussions = {}
    for row in seed_data.DISCUSSIONS:
        values = dict(row)
        key = values.pop('key')
        author = people.get(values.pop('author'))
        discussion = ForumDiscussion(
            category_id=categories[values.pop('category')].id,
            author_id=author.id if author else None,
            **values,
        )
        db.session.add(discussion)
        discussions[key] = discussion
    db.session.flush()

    replies_by_discussion: dict[str, list[ForumReply]] = {}
    for row in seed_data.REPLIES:
        thread = replies_by_discussion.setdefault(row['discussion'], [])
        parent_index = row.get('parent')
        author = people.get(row['author'])
        reply = ForumReply(
            content=row['content'],
            discussion_id=discussions[row['discussion']].id,
            author_id=author.id if author else None,
            parent_reply_id=thread[parent_index].id if parent_index is not None else None,
        )
        db.session.add(reply)
        # Parents need an id before children reference them
        db.session.flush()
        thread.append(reply)

    return {
        'forum_categories': len(categories),
        'discussions': len(discussions),
        'replies': sum(len(thread) for thread in replies_by_discussion.values()),
    }


def seed_database(force: bool = False, user: User | None = None) -> SeedResult:
    """
    Populate the database with demo content.

    Args:
        force: Purge existing content and non-admin users before inserting
        user: Administrator who triggered the run, for the audit log

    Returns:
        SeedResult describing what happened

    Raises:
        PersistenceError: Any step failed; nothing was committed
    """
    version = seed_data.SEED_VERSION
    if not force:
        marker = db.session.query(SeedMarker).filter_by(version=version).first()
        if marker is not None:
            current_app.logger.info(f"Seed {version} already applied; skipping")
            return SeedResult(
                success=True,
                already_seeded=True,
                message="Database already seeded",
                counts=dict(marker.summary or {}),
            )

    try:
        removed = _purge() if force else {}
        categories = _news_categories()
        people = _contributors()
        counts = {'news_categories': len(categories), 'contributors': len(people)}
        counts.update(_insert_content(categories, people))
        counts.update(_insert_forum(people))
        recount_counters(commit=False)

        marker = SeedMarker(version=version, summary=counts)
        db.session.add(marker)
        db.session.flush()
        log_admin_action(
            user,
            "database_seeded",
            "seed_marker",
            marker.id,
            metadata={'force': force, 'removed': removed, 'counts': counts},
        )
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Seeding failed, rolled back: {e}")
        raise PersistenceError("Seeding failed; no changes were saved") from e

    current_app.logger.info(f"Seeded database (version {version}, force={force}): {counts}")
    return SeedResult(success=True, message="Database seeded successfully", counts=counts)


def clear_seed_data(user: User | None = None) -> dict[str, int]:
    """Remove all seedable content and non-admin users without reinserting."""
    try:
        removed = _purge()
        log_admin_action(user, "seed_data_cleared", "seed_marker", metadata=removed)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Clearing seed data failed, rolled back: {e}")
        raise PersistenceError("Clearing seed data failed; no changes were saved") from e

    current_app.logger.info(f"Cleared seed data: {removed}")
    return removed


__all__ = ['SeedResult', 'seed_database', 'clear_seed_data']
