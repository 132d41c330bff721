"""JSON representations of models for API responses."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from ledger.models import (
    ForumCategory,
    ForumDiscussion,
    ForumReply,
    NewsArticle,
    NewsCategory,
    NewsComment,
    PodcastEpisode,
    Poll,
    Resource,
    Subscriber,
    ToolboxApp,
    User,
    UserInvitation,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _enum(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def serialize_author(user: User | None) -> dict | None:
    if user is None:
        return None
    return {
        'id': user.id,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'profile_image_url': user.profile_image_url,
        'title': user.title,
        'company': user.company,
    }


def serialize_user(user: User, private: bool = False) -> dict:
    """Public profile; ``private`` adds account fields for the owner and admins."""
    data = {
        'id': user.id,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'full_name': user.full_name,
        'profile_image_url': user.profile_image_url,
        'title': user.title,
        'company': user.company,
        'bio': user.bio,
        'expertise_tags': list(user.expertise_tags or []),
        'points': user.points,
        'badges': list(user.badges or []),
        'role': _enum(user.role),
    }
    if private:
        data.update({
            'email': user.email,
            'is_active': user.active,
            'auth_provider': user.auth_provider,
            'created_at': _iso(user.created_at),
            'updated_at': _iso(user.updated_at),
        })
    return data


def serialize_invitation(invitation: UserInvitation) -> dict:
    return {
        'id': invitation.id,
        'email': invitation.email,
        'role': _enum(invitation.role),
        'invited_by_id': invitation.invited_by_id,
        'accepted_at': _iso(invitation.accepted_at),
        'revoked_at': _iso(invitation.revoked_at),
        'is_pending': invitation.is_pending,
        'created_at': _iso(invitation.created_at),
    }


def serialize_news_category(category: NewsCategory) -> dict:
    return {
        'id': category.id,
        'name': category.name,
        'slug': category.slug,
        'description': category.description,
        'icon': category.icon,
        'color': category.color,
        'display_order': category.display_order,
        'is_active': category.is_active,
    }


def serialize_article(article: NewsArticle) -> dict:
    categories = list(article.categories)
    return {
        'id': article.id,
        'title': article.title,
        'content': article.content,
        'excerpt': article.excerpt,
        # First category doubles as the legacy single-category field
        'category': categories[0].slug if categories else None,
        'categories': [serialize_news_category(c) for c in categories],
        'image_url': article.image_url,
        'thumbnail_url': article.thumbnail_url,
        'source_url': article.source_url,
        'source_name': article.source_name,
        'author': serialize_author(article.author),
        'published_at': _iso(article.published_at),
        'likes': article.likes,
        'is_archived': article.is_archived,
        'is_featured': article.is_featured,
        'status': _enum(article.status),
        'created_at': _iso(article.created_at),
        'updated_at': _iso(article.updated_at),
    }


def serialize_comment(comment: NewsComment) -> dict:
    return {
        'id': comment.id,
        'article_id': comment.article_id,
        'content': comment.content,
        'author': serialize_author(comment.author),
        'created_at': _iso(comment.created_at),
    }


def serialize_podcast(episode: PodcastEpisode) -> dict:
    return {
        'id': episode.id,
        'episode_number': episode.episode_number,
        'title': episode.title,
        'description': episode.description,
        'audio_url': episode.audio_url,
        'image_url': episode.image_url,
        'duration': episode.duration,
        'host_name': episode.host_name,
        'guest_name': episode.guest_name,
        'guest_title': episode.guest_title,
        'categories': [serialize_news_category(c) for c in episode.categories],
        'play_count': episode.play_count,
        'likes': episode.likes,
        'is_archived': episode.is_archived,
        'is_featured': episode.is_featured,
        'status': _enum(episode.status),
        'published_at': _iso(episode.published_at),
        'created_at': _iso(episode.created_at),
    }


def serialize_forum_category(category: ForumCategory) -> dict:
    return {
        'id': category.id,
        'name': category.name,
        'description': category.description,
        'icon': category.icon,
        'color': category.color,
        'discussion_count': category.discussion_count,
    }


def serialize_discussion(discussion: ForumDiscussion) -> dict:
    return {
        'id': discussion.id,
        'title': discussion.title,
        'content': discussion.content,
        'category_id': discussion.category_id,
        'author': serialize_author(discussion.author),
        'is_pinned': discussion.is_pinned,
        'is_locked': discussion.is_locked,
        'is_featured': discussion.is_featured,
        'reply_count': discussion.reply_count,
        'likes': discussion.likes,
        'last_reply_at': _iso(discussion.last_reply_at),
        'status': _enum(discussion.status),
        'created_at': _iso(discussion.created_at),
        'updated_at': _iso(discussion.updated_at),
    }


def serialize_reply(reply: ForumReply) -> dict:
    return {
        'id': reply.id,
        'content': reply.content,
        'discussion_id': reply.discussion_id,
        'parent_reply_id': reply.parent_reply_id,
        'author': serialize_author(reply.author),
        'likes': reply.likes,
        'created_at': _iso(reply.created_at),
        'updated_at': _iso(reply.updated_at),
    }


def serialize_resource(resource: Resource) -> dict:
    return {
        'id': resource.id,
        'title': resource.title,
        'description': resource.description,
        'type': resource.type,
        'category': resource.category,
        'url': resource.url,
        'file_url': resource.file_url,
        'image_url': resource.image_url,
        'duration': resource.duration,
        'difficulty': resource.difficulty,
        'download_count': resource.download_count,
        'rating': resource.rating,
        'rating_count': resource.rating_count,
        'is_free': resource.is_free,
        'author': serialize_author(resource.author),
        'created_at': _iso(resource.created_at),
    }


def serialize_toolbox_app(app: ToolboxApp) -> dict:
    return {
        'id': app.id,
        'name': app.name,
        'description': app.description,
        'link': app.link,
        'image_url': app.image_url,
        'section': _enum(app.section),
        'status': _enum(app.status),
        'display_order': app.display_order,
        'is_active': app.is_active,
    }


def serialize_subscriber(subscriber: Subscriber) -> dict:
    return {
        'id': subscriber.id,
        'email': subscriber.email,
        'categories': list(subscriber.categories or []),
        'frequency': subscriber.frequency,
        'is_active': subscriber.is_active,
        'confirmed_at': _iso(subscriber.confirmed_at),
        'created_at': _iso(subscriber.created_at),
    }


def serialize_poll(poll: Poll, counts: dict[int, int] | None = None, my_vote: int | None = None) -> dict:
    """Poll with per-option vote counts; ``my_vote`` is the caller's option, if any."""
    counts = counts or {}
    return {
        'id': poll.id,
        'question': poll.question,
        'options': [
            {'text': text, 'votes': counts.get(index, 0)}
            for index, text in enumerate(poll.options or [])
        ],
        'total_votes': poll.total_votes,
        'is_active': poll.is_active,
        'expires_at': _iso(poll.expires_at),
        'created_by': serialize_author(poll.created_by),
        'my_vote': my_vote,
        'created_at': _iso(poll.created_at),
    }


def page(items: list, total: int, limit: int | None, offset: int | None, serializer) -> dict:
    """Envelope for paginated collections."""
    return {
        'items': [serializer(item) for item in items],
        'total': total,
        'limit': limit,
        'offset': offset or 0,
    }
