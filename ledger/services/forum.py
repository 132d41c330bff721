"""Discussion forum: categories, discussions and threaded replies.

Denormalised counters (``discussion_count``, ``reply_count``) are changed with
SQL-level arithmetic in the same transaction as the row they count.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, func, or_, select, update

from ledger.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ledger.extensions import db
from ledger.models import ContentStatus, ForumCategory, ForumDiscussion, ForumReply, LikeTarget, utcnow
from ledger.security.policy import user_can
from ledger.services.audit import log_admin_action
from ledger.services.crud import CRUDService, paginate, transaction
from ledger.services.likes import delete_likes_for
from ledger.services.publishing import parse_status


def _decrement(column, amount: int = 1):
    """``column - amount`` floored at zero."""
    return case((column >= amount, column - amount), else_=0)


def _ensure_can_edit(instance, user) -> None:
    if instance.author_id is not None and instance.author_id == getattr(user, 'id', None):
        return
    if user_can(user, 'content.moderate'):
        return
    raise AuthorizationError("Only the author or a moderator can change this post")


def _delete_replies(reply_ids: list[str]) -> int:
    if not reply_ids:
        return 0
    delete_likes_for(LikeTarget.REPLY, reply_ids)
    return db.session.query(ForumReply).filter(ForumReply.id.in_(reply_ids)).delete(synchronize_session=False)


def _delete_discussions(discussion_ids: list[str]) -> int:
    """Delete discussions with their replies and likes. Caller owns the transaction."""
    if not discussion_ids:
        return 0
    reply_ids = [
        row.id for row in
        db.session.query(ForumReply.id).filter(ForumReply.discussion_id.in_(discussion_ids)).all()
    ]
    _delete_replies(reply_ids)
    delete_likes_for(LikeTarget.DISCUSSION, discussion_ids)
    return db.session.query(ForumDiscussion).filter(
        ForumDiscussion.id.in_(discussion_ids)
    ).delete(synchronize_session=False)


class ForumCategoryService(CRUDService):
    label = 'Forum category'

    def __init__(self):
        super().__init__(ForumCategory)

    def list(self) -> list[ForumCategory]:
        return self.query().order_by(ForumCategory.name).all()

    def _delete_dependents(self, instance: ForumCategory) -> None:
        discussion_ids = [
            row.id for row in
            db.session.query(ForumDiscussion.id).filter(ForumDiscussion.category_id == instance.id).all()
        ]
        _delete_discussions(discussion_ids)


class DiscussionService(CRUDService):
    label = 'Discussion'

    def __init__(self):
        super().__init__(ForumDiscussion)

    def list(
        self,
        user=None,
        category_id: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[ForumDiscussion], int]:
        """Pinned discussions first, then by most recent activity."""
        query = self.query()
        if not user_can(user, 'draft.view'):
            query = query.filter(ForumDiscussion.status == ContentStatus.PUBLISHED)
        if category_id:
            query = query.filter(ForumDiscussion.category_id == category_id)
        if featured is not None:
            query = query.filter(ForumDiscussion.is_featured.is_(featured))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(ForumDiscussion.title.ilike(pattern), ForumDiscussion.content.ilike(pattern)))
        query = query.order_by(
            ForumDiscussion.is_pinned.desc(),
            func.coalesce(ForumDiscussion.last_reply_at, ForumDiscussion.created_at).desc(),
        )
        return paginate(query, limit, offset)

    def get_visible(self, discussion_id: str, user=None) -> ForumDiscussion:
        discussion = self.get_or_404(discussion_id)
        if discussion.status != ContentStatus.PUBLISHED and not user_can(user, 'draft.view'):
            raise NotFoundError("Discussion not found")
        return discussion

    def create(self, data: dict[str, Any], user: Any = None, skip_log: bool = True) -> ForumDiscussion:
        category = db.session.get(ForumCategory, data.get('category_id'))
        if category is None:
            raise ValidationError({'category_id': ['Unknown forum category']})

        with transaction("create discussion"):
            discussion = ForumDiscussion(
                title=data['title'],
                content=data['content'],
                category_id=category.id,
                author_id=getattr(user, 'id', None),
            )
            db.session.add(discussion)
            db.session.flush()
            db.session.execute(
                update(ForumCategory)
                .where(ForumCategory.id == category.id)
                .values(discussion_count=ForumCategory.discussion_count + 1)
            )
        return discussion

    def update(self, object_id: str, data: dict[str, Any], user: Any = None, skip_log: bool = True) -> ForumDiscussion:
        discussion = self.get_or_404(object_id)
        _ensure_can_edit(discussion, user)

        new_category_id = data.get('category_id')
        with transaction("update discussion"):
            if 'title' in data:
                discussion.title = data['title']
            if 'content' in data:
                discussion.content = data['content']
            if new_category_id and new_category_id != discussion.category_id:
                if db.session.get(ForumCategory, new_category_id) is None:
                    raise ValidationError({'category_id': ['Unknown forum category']})
                db.session.execute(
                    update(ForumCategory)
                    .where(ForumCategory.id == discussion.category_id)
                    .values(discussion_count=_decrement(ForumCategory.discussion_count))
                )
                db.session.execute(
                    update(ForumCategory)
                    .where(ForumCategory.id == new_category_id)
                    .values(discussion_count=ForumCategory.discussion_count + 1)
                )
                discussion.category_id = new_category_id
        return discussion

    def moderate(self, discussion_id: str, data: dict[str, Any], user) -> ForumDiscussion:
        """Pin, lock, feature or change the status of a discussion."""
        discussion = self.get_or_404(discussion_id)
        with transaction("moderate discussion"):
            for flag in ('is_pinned', 'is_locked', 'is_featured'):
                if flag in data:
                    setattr(discussion, flag, bool(data[flag]))
            if data.get('status'):
                discussion.status = parse_status(data['status'])
            log_admin_action(
                user,
                "forum_discussion_moderated",
                "forum_discussion",
                discussion.id,
                metadata={'changes': data},
            )
        return discussion

    def delete(self, object_id: str, user: Any = None, skip_log: bool = False) -> None:
        """Delete a discussion, its replies and likes, and fix the category count."""
        discussion = self.get_or_404(object_id)
        _ensure_can_edit(discussion, user)
        category_id = discussion.category_id
        discussion_id = discussion.id

        with transaction("delete discussion"):
            if discussion.author_id != getattr(user, 'id', None):
                log_admin_action(user, "forum_discussion_deleted", "forum_discussion", discussion_id)
            db.session.expunge(discussion)
            removed = _delete_discussions([discussion_id])
            if removed:
                db.session.execute(
                    update(ForumCategory)
                    .where(ForumCategory.id == category_id)
                    .values(discussion_count=_decrement(ForumCategory.discussion_count, removed))
                )


class ReplyService(CRUDService):
    label = 'Reply'

    def __init__(self):
        super().__init__(ForumReply)

    def list(self, discussion_id: str, user=None) -> list[ForumReply]:
        discussion = discussion_service.get_visible(discussion_id, user)
        return (
            self.query()
            .filter(ForumReply.discussion_id == discussion.id)
            .order_by(ForumReply.created_at.asc())
            .all()
        )

    def create(self, data: dict[str, Any], user: Any = None, skip_log: bool = True) -> ForumReply:
        """
        Add a reply and bump the discussion's reply count and activity time.

        Raises:
            NotFoundError: Unknown discussion
            ConflictError: The discussion is locked
            ValidationError: Parent reply belongs to another discussion
        """
        discussion = discussion_service.get_visible(data.get('discussion_id'), user)
        if discussion.is_locked:
            raise ConflictError("This discussion is locked")

        parent_id = data.get('parent_reply_id')
        if parent_id:
            parent = db.session.get(ForumReply, parent_id)
            if parent is None or parent.discussion_id != discussion.id:
                raise ValidationError({'parent_reply_id': ['Parent reply is not part of this discussion']})

        now = utcnow()
        with transaction("create reply"):
            reply = ForumReply(
                content=data['content'],
                discussion_id=discussion.id,
                author_id=getattr(user, 'id', None),
                parent_reply_id=parent_id,
            )
            db.session.add(reply)
            db.session.flush()
            db.session.execute(
                update(ForumDiscussion)
                .where(ForumDiscussion.id == discussion.id)
                .values(reply_count=ForumDiscussion.reply_count + 1, last_reply_at=now)
            )
        return reply

    def update(self, object_id: str, data: dict[str, Any], user: Any = None, skip_log: bool = True) -> ForumReply:
        reply = self.get_or_404(object_id)
        _ensure_can_edit(reply, user)
        with transaction("update reply"):
            if 'content' in data:
                reply.content = data['content']
        return reply

    def delete(self, object_id: str, user: Any = None, skip_log: bool = False) -> None:
        """Delete a reply with every reply nested under it."""
        reply = self.get_or_404(object_id)
        _ensure_can_edit(reply, user)
        discussion_id = reply.discussion_id

        to_delete = [reply.id]
        frontier = [reply.id]
        while frontier:
            children = [
                row.id for row in
                db.session.query(ForumReply.id).filter(ForumReply.parent_reply_id.in_(frontier)).all()
            ]
            to_delete.extend(children)
            frontier = children

        with transaction("delete reply"):
            db.session.expunge(reply)
            removed = _delete_replies(to_delete)
            db.session.execute(
                update(ForumDiscussion)
                .where(ForumDiscussion.id == discussion_id)
                .values(
                    reply_count=_decrement(ForumDiscussion.reply_count, removed),
                    last_reply_at=select(func.max(ForumReply.created_at))
                    .where(ForumReply.discussion_id == discussion_id)
                    .scalar_subquery(),
                )
            )


forum_category_service = ForumCategoryService()
discussion_service = DiscussionService()
reply_service = ReplyService()


__all__ = [
    'ForumCategoryService',
    'DiscussionService',
    'ReplyService',
    'forum_category_service',
    'discussion_service',
    'reply_service',
]
