"""Role-based capability policy.

Every mutating endpoint asks :func:`can` whether the caller's role may perform
an action. Roles are ordered, so each action only records the lowest role that
is allowed to perform it.
"""

from __future__ import annotations

from ledger.models import UserRole

ACTION_MIN_ROLE: dict[str, UserRole] = {
    # Any signed-in member
    'comment.create': UserRole.SUBSCRIBER,
    'discussion.create': UserRole.SUBSCRIBER,
    'reply.create': UserRole.SUBSCRIBER,
    'like': UserRole.SUBSCRIBER,
    'resource.rate': UserRole.SUBSCRIBER,
    'upload.create': UserRole.SUBSCRIBER,
    'profile.update': UserRole.SUBSCRIBER,
    'poll.create': UserRole.SUBSCRIBER,
    'poll.vote': UserRole.SUBSCRIBER,
    # Contributors
    'resource.create': UserRole.CONTRIBUTOR,
    # Editorial staff
    'article.create': UserRole.EDITOR,
    'article.update': UserRole.EDITOR,
    'article.delete': UserRole.EDITOR,
    'article.archive': UserRole.EDITOR,
    'article.publish': UserRole.EDITOR,
    'podcast.create': UserRole.EDITOR,
    'podcast.update': UserRole.EDITOR,
    'podcast.delete': UserRole.EDITOR,
    'podcast.archive': UserRole.EDITOR,
    'podcast.publish': UserRole.EDITOR,
    'resource.update': UserRole.EDITOR,
    'resource.delete': UserRole.EDITOR,
    'discussion.moderate': UserRole.EDITOR,
    'content.moderate': UserRole.EDITOR,
    'draft.view': UserRole.EDITOR,
    'poll.manage': UserRole.EDITOR,
    # Administration
    'news_category.manage': UserRole.ADMIN,
    'forum_category.manage': UserRole.ADMIN,
    'toolbox.manage': UserRole.ADMIN,
    'user.list': UserRole.ADMIN,
    'user.create': UserRole.ADMIN,
    'user.update': UserRole.ADMIN,
    'user.delete': UserRole.ADMIN,
    'user.role': UserRole.ADMIN,
    'user.status': UserRole.ADMIN,
    'invitation.manage': UserRole.ADMIN,
    'subscriber.manage': UserRole.ADMIN,
    'seed.run': UserRole.ADMIN,
}


def coerce_role(role: UserRole | str | None) -> UserRole | None:
    if role is None or isinstance(role, UserRole):
        return role
    try:
        return UserRole(str(role).lower())
    except ValueError:
        return None


def can(role: UserRole | str | None, action: str) -> bool:
    """Return True when ``role`` is allowed to perform ``action``.

    Unknown actions and unknown roles are denied.
    """
    resolved = coerce_role(role)
    required = ACTION_MIN_ROLE.get(action)
    if resolved is None or required is None:
        return False
    return resolved.rank >= required.rank


def user_can(user, action: str) -> bool:
    """Policy check for a user object (anonymous or inactive users are denied)."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    if not getattr(user, 'is_active', False):
        return False
    return can(getattr(user, 'role', None), action)


__all__ = ['ACTION_MIN_ROLE', 'coerce_role', 'can', 'user_can']
