"""Server-side like tracking.

Each like is a row keyed by an actor key (``user:<id>`` or a hashed anonymous
device token). The unique constraint on (target, actor) keeps likes idempotent
and the target's counter only moves in the same transaction as the row.
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from typing import Any

from flask import current_app
from sqlalchemy import update

from ledger.errors import ConflictError, NotFoundError, ValidationError
from ledger.extensions import db
from ledger.models import (
    ContentStatus,
    ForumDiscussion,
    ForumReply,
    Like,
    LikeTarget,
    NewsArticle,
    PodcastEpisode,
)
from ledger.security.policy import user_can
from ledger.services.crud import transaction

LIKE_MODELS = {
    LikeTarget.ARTICLE: NewsArticle,
    LikeTarget.PODCAST: PodcastEpisode,
    LikeTarget.DISCUSSION: ForumDiscussion,
    LikeTarget.REPLY: ForumReply,
}


@dataclass
class LikeResult:
    likes: int
    liked: bool
    counted: bool
    anonymous: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def actor_key_for(user=None, device_token: str | None = None) -> str | None:
    """Return the deduplication key for a caller, or None when untrackable."""
    if user is not None:
        return f"user:{user.id}"
    if device_token:
        digest = hashlib.sha256(device_token.strip().encode('utf-8')).hexdigest()
        return f"anon:{digest}"
    return None


def _is_hidden(instance, user) -> bool:
    if isinstance(instance, ForumReply):
        instance = instance.discussion
    status = getattr(instance, 'status', ContentStatus.PUBLISHED)
    return status != ContentStatus.PUBLISHED and not user_can(user, 'draft.view')


def _resolve(target_type: LikeTarget | str, target_id: str, user=None):
    try:
        target = LikeTarget(target_type)
    except ValueError:
        raise ValidationError({'target_type': [f"Unknown like target: {target_type}"]})
    model = LIKE_MODELS[target]
    instance = db.session.get(model, target_id)
    # Drafts are invisible to readers, so they cannot be liked either
    if instance is None or _is_hidden(instance, user):
        raise NotFoundError(f"{target.value.capitalize()} not found")
    return target, model, instance


def like(target_type: LikeTarget | str, target_id: str, user=None, device_token: str | None = None) -> LikeResult:
    """
    Record a like and increment the target's counter at most once per actor.

    Args:
        target_type: One of article, podcast, discussion, reply
        target_id: ID of the liked entity
        user: Authenticated user, if any
        device_token: Opaque anonymous device token (X-Device-Token header)

    Returns:
        LikeResult with the server-side count after the call
    """
    target, model, instance = _resolve(target_type, target_id, user)
    anonymous = user is None
    actor_key = actor_key_for(user, device_token)

    if actor_key is None:
        # Nothing to deduplicate against, so nothing is written
        return LikeResult(likes=instance.likes, liked=False, counted=False, anonymous=True)

    existing = db.session.query(Like.id).filter_by(
        target_type=target.value, target_id=instance.id, actor_key=actor_key
    ).first()
    if existing:
        return LikeResult(likes=instance.likes, liked=True, counted=False, anonymous=anonymous)

    try:
        with transaction(f"like {target.value}"):
            db.session.add(Like(
                target_type=target.value,
                target_id=instance.id,
                actor_key=actor_key,
                user_id=getattr(user, 'id', None),
            ))
            db.session.flush()
            db.session.execute(
                update(model).where(model.id == instance.id).values(likes=model.likes + 1)
            )
        counted = True
    except ConflictError:
        # A concurrent like from the same actor won the unique constraint
        current_app.logger.info(f"Duplicate like ignored for {target.value} {instance.id}")
        counted = False

    db.session.refresh(instance)
    return LikeResult(likes=instance.likes, liked=True, counted=counted, anonymous=anonymous)


def unlike(target_type: LikeTarget | str, target_id: str, user=None, device_token: str | None = None) -> LikeResult:
    """Remove the caller's like and decrement the counter if a row was removed."""
    target, model, instance = _resolve(target_type, target_id, user)
    anonymous = user is None
    actor_key = actor_key_for(user, device_token)

    if actor_key is None:
        return LikeResult(likes=instance.likes, liked=False, counted=False, anonymous=True)

    with transaction(f"unlike {target.value}"):
        removed = db.session.query(Like).filter_by(
            target_type=target.value, target_id=instance.id, actor_key=actor_key
        ).delete(synchronize_session=False)
        if removed:
            db.session.execute(
                update(model)
                .where(model.id == instance.id, model.likes > 0)
                .values(likes=model.likes - 1)
            )

    db.session.refresh(instance)
    return LikeResult(likes=instance.likes, liked=False, counted=bool(removed), anonymous=anonymous)


def delete_likes_for(target_type: LikeTarget, target_ids) -> int:
    """Delete like rows for removed targets; caller owns the transaction."""
    target_ids = list(target_ids)
    if not target_ids:
        return 0
    return db.session.query(Like).filter(
        Like.target_type == target_type.value,
        Like.target_id.in_(target_ids),
    ).delete(synchronize_session=False)


__all__ = ['LIKE_MODELS', 'LikeResult', 'actor_key_for', 'like', 'unlike', 'delete_likes_for']
