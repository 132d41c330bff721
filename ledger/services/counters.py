"""Recompute denormalised counters from the rows they summarise."""

from __future__ import annotations

from flask import current_app
from sqlalchemy import func, select, update

from ledger.extensions import db
from ledger.models import ForumCategory, ForumDiscussion, ForumReply, Like, Poll, PollVote, Resource, ResourceRating
from ledger.services.crud import transaction
from ledger.services.likes import LIKE_MODELS


def _bulk(statement) -> int:
    result = db.session.execute(statement.execution_options(synchronize_session=False))
    return result.rowcount or 0


def _recount() -> dict[str, int]:
    touched: dict[str, int] = {}

    touched['forum_category'] = _bulk(
        update(ForumCategory).values(
            discussion_count=select(func.count(ForumDiscussion.id))
            .where(ForumDiscussion.category_id == ForumCategory.id)
            .scalar_subquery()
        )
    )

    touched['forum_discussion'] = _bulk(
        update(ForumDiscussion).values(
            reply_count=select(func.count(ForumReply.id))
            .where(ForumReply.discussion_id == ForumDiscussion.id)
            .scalar_subquery(),
            last_reply_at=select(func.max(ForumReply.created_at))
            .where(ForumReply.discussion_id == ForumDiscussion.id)
            .scalar_subquery(),
        )
    )

    for target, model in LIKE_MODELS.items():
        rows = _bulk(
            update(model).values(
                likes=select(func.count(Like.id))
                .where(Like.target_type == target.value, Like.target_id == model.id)
                .scalar_subquery()
            )
        )
        touched[model.__tablename__] = touched.get(model.__tablename__, 0) + rows

    touched['resource'] = _bulk(
        update(Resource).values(
            rating_total=select(func.coalesce(func.sum(ResourceRating.rating), 0))
            .where(ResourceRating.resource_id == Resource.id)
            .scalar_subquery(),
            rating_count=select(func.count(ResourceRating.id))
            .where(ResourceRating.resource_id == Resource.id)
            .scalar_subquery(),
        )
    )

    touched['poll'] = _bulk(
        update(Poll).values(
            total_votes=select(func.count(PollVote.id))
            .where(PollVote.poll_id == Poll.id)
            .scalar_subquery()
        )
    )

    return touched


def recount_counters(commit: bool = True) -> dict[str, int]:
    """
    Rewrite every stored count from the underlying rows.

    Args:
        commit: Commit when done; seeding passes False to keep one transaction

    Returns:
        Number of rows rewritten per table
    """
    if commit:
        with transaction("recount counters"):
            touched = _recount()
    else:
        touched = _recount()
    # Loaded instances still hold the old counts
    db.session.expire_all()
    current_app.logger.info(f"Recounted denormalised counters: {touched}")
    return touched


__all__ = ['recount_counters']
