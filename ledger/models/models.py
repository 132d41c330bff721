from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SqlEnum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ledger.extensions import db, bcrypt

JSONType = JSON().with_variant(JSONB, 'postgresql')


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedBase(db.Model):
    """Abstract base providing id/created/updated columns."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


class UserRole(Enum):
    SUBSCRIBER = "subscriber"
    CONTRIBUTOR = "contributor"
    EDITOR = "editor"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return ROLE_ORDER.index(self)


# Lowest to highest privilege; admin is the superset.
ROLE_ORDER = [UserRole.SUBSCRIBER, UserRole.CONTRIBUTOR, UserRole.EDITOR, UserRole.ADMIN]


class ContentStatus(Enum):
    PUBLISHED = "published"
    DRAFT = "draft"


class ToolboxSection(Enum):
    CONTROLLER = "controller"
    FPA = "fpa"


class ToolboxStatus(Enum):
    DEVELOPING = "developing"
    TESTING = "testing"
    BETA_READY = "beta_ready"
    READY_FOR_COMMERCIAL_USE = "ready_for_commercial_use"


class ObjectVisibility(Enum):
    PRIVATE = "private"
    PUBLIC = "public"


class LikeTarget(Enum):
    ARTICLE = "article"
    PODCAST = "podcast"
    DISCUSSION = "discussion"
    REPLY = "reply"


class User(TimestampedBase):
    __tablename__ = "user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255))
    auth_provider: Mapped[str] = mapped_column(String(32), nullable=False, default='local')
    external_id: Mapped[str | None] = mapped_column(String(255), unique=True)

    first_name: Mapped[str | None] = mapped_column(String(120))
    last_name: Mapped[str | None] = mapped_column(String(120))
    profile_image_url: Mapped[str | None] = mapped_column(String(1024))
    title: Mapped[str | None] = mapped_column(String(255))
    company: Mapped[str | None] = mapped_column(String(255))
    bio: Mapped[str | None] = mapped_column(Text)
    expertise_tags: Mapped[list | None] = mapped_column(JSONType, default=list)

    # Gamification
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    badges: Mapped[list | None] = mapped_column(JSONType, default=list)

    role: Mapped[UserRole] = mapped_column(
        SqlEnum(UserRole, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.SUBSCRIBER,
    )
    active: Mapped[bool] = mapped_column('is_active', Boolean, nullable=False, default=True)

    audit_logs: Mapped[list["AuditLog"]] = relationship(back_populates="user")

    def set_password(self, password: str) -> None:
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            return False

    def has_role(self, *roles: UserRole | str) -> bool:
        role_value = self.role.value if isinstance(self.role, UserRole) else str(self.role)
        allowed = {r.value if isinstance(r, UserRole) else str(r) for r in roles}
        return role_value in allowed

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_active(self) -> bool:  # Flask-Login compatibility
        return bool(self.active)

    @property
    def is_anonymous(self) -> bool:
        return False

    def get_id(self) -> str:
        return self.id


class UserInvitation(TimestampedBase):
    __tablename__ = "user_invitation"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[UserRole] = mapped_column(
        SqlEnum(UserRole, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.SUBSCRIBER,
    )
    invited_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    invited_by: Mapped[User | None] = relationship()

    @property
    def is_pending(self) -> bool:
        return self.accepted_at is None and self.revoked_at is None


class NewsCategory(TimestampedBase):
    __tablename__ = "news_category"

    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None] = mapped_column(String(64))
    color: Mapped[str | None] = mapped_column(String(32))
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


article_category = Table(
    "article_category",
    db.metadata,
    Column("article_id", String(36), ForeignKey("news_article.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("news_category.id", ondelete="CASCADE"), primary_key=True),
)

podcast_category = Table(
    "podcast_category",
    db.metadata,
    Column("podcast_id", String(36), ForeignKey("podcast_episode.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("news_category.id", ondelete="CASCADE"), primary_key=True),
)


class NewsArticle(TimestampedBase):
    __tablename__ = "news_article"
    __table_args__ = (
        Index("ix_news_article_published", "published_at"),
        Index("ix_news_article_status_archived", "status", "is_archived"),
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(1024))
    thumbnail_url: Mapped[str | None] = mapped_column(String(1024))
    source_url: Mapped[str | None] = mapped_column(String(1024))
    source_name: Mapped[str | None] = mapped_column(String(255))
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    published_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[ContentStatus] = mapped_column(
        SqlEnum(ContentStatus, name="content_status", native_enum=False),
        nullable=False,
        default=ContentStatus.PUBLISHED,
    )

    author: Mapped[User | None] = relationship()
    categories: Mapped[list[NewsCategory]] = relationship(
        secondary=article_category,
        order_by=NewsCategory.display_order,
    )


class NewsComment(TimestampedBase):
    __tablename__ = "news_comment"

    article_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("news_article.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    article: Mapped[NewsArticle] = relationship()
    author: Mapped[User] = relationship()


class PodcastEpisode(TimestampedBase):
    __tablename__ = "podcast_episode"

    episode_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    audio_url: Mapped[str | None] = mapped_column(String(1024))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    duration: Mapped[str | None] = mapped_column(String(32))
    host_name: Mapped[str | None] = mapped_column(String(255))
    guest_name: Mapped[str | None] = mapped_column(String(255))
    guest_title: Mapped[str | None] = mapped_column(String(255))

    play_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    status: Mapped[ContentStatus] = mapped_column(
        SqlEnum(ContentStatus, name="content_status", native_enum=False),
        nullable=False,
        default=ContentStatus.PUBLISHED,
    )

    categories: Mapped[list[NewsCategory]] = relationship(
        secondary=podcast_category,
        order_by=NewsCategory.display_order,
    )


class ForumCategory(TimestampedBase):
    __tablename__ = "forum_category"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None] = mapped_column(String(64))
    color: Mapped[str | None] = mapped_column(String(32))
    discussion_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ForumDiscussion(TimestampedBase):
    __tablename__ = "forum_discussion"
    __table_args__ = (
        Index("ix_forum_discussion_category_last_reply", "category_id", "last_reply_at"),
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_category.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reply_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[ContentStatus] = mapped_column(
        SqlEnum(ContentStatus, name="content_status", native_enum=False),
        nullable=False,
        default=ContentStatus.PUBLISHED,
    )

    category: Mapped[ForumCategory] = relationship()
    author: Mapped[User | None] = relationship()


class ForumReply(TimestampedBase):
    __tablename__ = "forum_reply"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    discussion_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_discussion.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    parent_reply_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("forum_reply.id", ondelete="CASCADE"),
        index=True,
    )
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    discussion: Mapped[ForumDiscussion] = relationship()
    author: Mapped[User | None] = relationship()


class Resource(TimestampedBase):
    __tablename__ = "resource"
    __table_args__ = (
        Index("ix_resource_type_category", "type", "category"),
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(32), nullable=False)  # guide, video, template, tool, case-study
    category: Mapped[str] = mapped_column(String(120), nullable=False)
    url: Mapped[str | None] = mapped_column(String(1024))
    file_url: Mapped[str | None] = mapped_column(String(1024))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    duration: Mapped[str | None] = mapped_column(String(32))
    difficulty: Mapped[str | None] = mapped_column(String(32))
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_free: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )

    author: Mapped[User | None] = relationship()

    @property
    def rating(self) -> float:
        if not self.rating_count:
            return 0.0
        return round(self.rating_total / self.rating_count, 2)


class ResourceRating(TimestampedBase):
    __tablename__ = "resource_rating"
    __table_args__ = (
        UniqueConstraint("resource_id", "user_id", name="uq_resource_rating_user"),
    )

    resource_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("resource.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)


class ToolboxApp(TimestampedBase):
    __tablename__ = "toolbox_app"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str | None] = mapped_column(String(1024))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    section: Mapped[ToolboxSection] = mapped_column(
        SqlEnum(ToolboxSection, name="toolbox_section", native_enum=False),
        nullable=False,
        default=ToolboxSection.CONTROLLER,
    )
    status: Mapped[ToolboxStatus] = mapped_column(
        SqlEnum(ToolboxStatus, name="toolbox_status", native_enum=False),
        nullable=False,
        default=ToolboxStatus.DEVELOPING,
    )
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Subscriber(TimestampedBase):
    """Newsletter signup, independent of user accounts."""
    __tablename__ = "subscriber"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    categories: Mapped[list | None] = mapped_column(JSONType, default=list)
    frequency: Mapped[str] = mapped_column(String(16), nullable=False, default='weekly')
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class Poll(TimestampedBase):
    """Community poll; per-option tallies are counted from ``PollVote`` rows."""
    __tablename__ = "poll"

    question: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    total_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )

    created_by: Mapped[User | None] = relationship()


class PollVote(TimestampedBase):
    __tablename__ = "poll_vote"
    __table_args__ = (
        UniqueConstraint("poll_id", "user_id", name="uq_poll_vote_user"),
    )

    poll_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("poll.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )
    option_index: Mapped[int] = mapped_column(Integer, nullable=False)


class Like(TimestampedBase):
    """One row per (target, actor); the unique constraint makes likes idempotent."""
    __tablename__ = "content_like"
    __table_args__ = (
        UniqueConstraint("target_type", "target_id", "actor_key", name="uq_like_target_actor"),
        Index("ix_like_target", "target_type", "target_id"),
    )

    target_type: Mapped[str] = mapped_column(String(32), nullable=False)
    target_id: Mapped[str] = mapped_column(String(36), nullable=False)
    actor_key: Mapped[str] = mapped_column(String(128), nullable=False)
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        index=True,
    )


class StoredObject(TimestampedBase):
    """Access policy and ownership for an object in the external blob store."""
    __tablename__ = "stored_object"

    object_path: Mapped[str] = mapped_column(String(1024), nullable=False, unique=True)
    purpose: Mapped[str] = mapped_column(String(32), nullable=False)
    owner_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    content_type: Mapped[str] = mapped_column(String(200), nullable=False)
    declared_size: Mapped[int] = mapped_column(Integer, nullable=False)
    original_name: Mapped[str | None] = mapped_column(String(500))
    visibility: Mapped[ObjectVisibility] = mapped_column(
        SqlEnum(ObjectVisibility, name="object_visibility", native_enum=False),
        nullable=False,
        default=ObjectVisibility.PRIVATE,
    )
    finalized_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    owner: Mapped[User | None] = relationship()


class SeedMarker(TimestampedBase):
    __tablename__ = "seed_marker"

    version: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    summary: Mapped[dict | None] = mapped_column(JSONType, default=dict)


class AuditLog(TimestampedBase):
    __tablename__ = "audit_log"

    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    action: Mapped[str] = mapped_column(String(128), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(128), nullable=False)
    entity_id: Mapped[str | None] = mapped_column(String(36))
    meta: Mapped[dict | None] = mapped_column(JSONType, default=dict)

    user: Mapped[User | None] = relationship(back_populates="audit_logs")


__all__ = [
    "JSONType",
    "TimestampedBase",
    "UserRole",
    "ROLE_ORDER",
    "ContentStatus",
    "ToolboxSection",
    "ToolboxStatus",
    "ObjectVisibility",
    "LikeTarget",
    "User",
    "UserInvitation",
    "NewsCategory",
    "article_category",
    "podcast_category",
    "NewsArticle",
    "NewsComment",
    "PodcastEpisode",
    "ForumCategory",
    "ForumDiscussion",
    "ForumReply",
    "Resource",
    "ResourceRating",
    "ToolboxApp",
    "Subscriber",
    "Poll",
    "PollVote",
    "Like",
    "StoredObject",
    "SeedMarker",
    "AuditLog",
    "utcnow",
]
