"""Capability policy tests."""

from types import SimpleNamespace

import pytest

from ledger.models import UserRole
from ledger.security.policy import ACTION_MIN_ROLE, can, coerce_role, user_can


@pytest.mark.parametrize('role, action, allowed', [
    (UserRole.SUBSCRIBER, 'comment.create', True),
    (UserRole.SUBSCRIBER, 'discussion.create', True),
    (UserRole.SUBSCRIBER, 'resource.create', False),
    (UserRole.SUBSCRIBER, 'article.create', False),
    (UserRole.CONTRIBUTOR, 'resource.create', True),
    (UserRole.CONTRIBUTOR, 'article.create', False),
    (UserRole.EDITOR, 'article.delete', True),
    (UserRole.EDITOR, 'discussion.moderate', True),
    (UserRole.EDITOR, 'user.role', False),
    (UserRole.EDITOR, 'seed.run', False),
    (UserRole.SUBSCRIBER, 'poll.vote', True),
    (UserRole.SUBSCRIBER, 'poll.manage', False),
    (UserRole.EDITOR, 'poll.manage', True),
    (UserRole.ADMIN, 'seed.run', True),
    (UserRole.ADMIN, 'comment.create', True),
])
def test_role_matrix(role, action, allowed):
    assert can(role, action) is allowed


def test_admin_can_do_everything():
    assert all(can(UserRole.ADMIN, action) for action in ACTION_MIN_ROLE)


def test_roles_accept_strings():
    assert can('editor', 'article.update')
    assert can('EDITOR', 'article.update')
    assert coerce_role('Contributor') == UserRole.CONTRIBUTOR


def test_unknown_role_or_action_is_denied():
    assert not can('owner', 'article.create')
    assert not can(None, 'comment.create')
    assert not can(UserRole.ADMIN, 'article.teleport')


def test_user_can_checks_authentication_and_status():
    active_editor = SimpleNamespace(is_authenticated=True, is_active=True, role=UserRole.EDITOR)
    inactive_admin = SimpleNamespace(is_authenticated=True, is_active=False, role=UserRole.ADMIN)
    anonymous = SimpleNamespace(is_authenticated=False, is_active=True, role=UserRole.ADMIN)

    assert user_can(active_editor, 'article.publish')
    assert not user_can(inactive_admin, 'article.publish')
    assert not user_can(anonymous, 'article.publish')
    assert not user_can(None, 'comment.create')
