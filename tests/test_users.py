"""Authentication, account administration and invitation tests."""

import requests

from conftest import PASSWORD, FakeResponse, create_user, login
from ledger.extensions import db
from ledger.models import AuditLog, User, UserInvitation, UserRole


def _register(client, email='new.member@example.com', **extra):
    payload = {'email': email, 'password': PASSWORD, 'first_name': 'New', 'last_name': 'Member'}
    payload.update(extra)
    return client.post('/api/auth/register', json=payload)


class TestAuthentication:
    def test_register_logs_in_and_sends_welcome(self, app, client, email_calls):
        response = _register(client)
        assert response.status_code == 201
        body = response.get_json()
        assert body['email'] == 'new.member@example.com'
        assert body['role'] == 'subscriber'
        assert 'password_hash' not in body

        assert client.get('/api/auth/user').get_json()['id'] == body['id']
        assert len(email_calls) == 1
        personalization = email_calls[0]['json']['personalizations'][0]
        assert personalization['dynamic_template_data'] == {'firstName': 'New'}

    def test_register_normalizes_email_and_rejects_duplicates(self, client, email_calls):
        assert _register(client, email='Mixed.Case@Example.com').status_code == 201
        response = _register(client.application.test_client(), email='mixed.case@example.com')
        assert response.status_code == 409
        assert response.get_json()['code'] == 'conflict'

    def test_register_rejects_short_password(self, client, email_calls):
        response = _register(client, password='short')
        assert response.status_code == 400
        assert 'password' in response.get_json()['fields']

    def test_email_outage_does_not_block_registration(self, app, client, monkeypatch):
        def broken_post(*args, **kwargs):
            raise requests.ConnectionError("sendgrid down")

        monkeypatch.setattr('ledger.services.email.requests.post', broken_post)
        assert _register(client).status_code == 201

        with app.app_context():
            assert db.session.query(User).filter_by(email='new.member@example.com').count() == 1

    def test_email_rejection_does_not_block_registration(self, client, monkeypatch):
        monkeypatch.setattr(
            'ledger.services.email.requests.post',
            lambda *args, **kwargs: FakeResponse(500, text='upstream error'),
        )
        assert _register(client).status_code == 201

    def test_login_with_wrong_password(self, app, client, users):
        response = client.post('/api/auth/login', json={'email': 'editor@example.com', 'password': 'nope-nope'})
        assert response.status_code == 401
        assert response.get_json()['code'] == 'authentication_required'

    def test_logout_ends_session(self, subscriber_client):
        assert subscriber_client.get('/api/auth/user').status_code == 200
        assert subscriber_client.post('/api/auth/logout').status_code == 200
        assert subscriber_client.get('/api/auth/user').status_code == 401

    def test_change_password(self, app, subscriber_client):
        response = subscriber_client.post('/api/auth/change-password', json={
            'current_password': 'wrong-password', 'new_password': 'BrandNewPass1',
        })
        assert response.status_code == 400
        assert 'current_password' in response.get_json()['fields']

        response = subscriber_client.post('/api/auth/change-password', json={
            'current_password': PASSWORD, 'new_password': 'BrandNewPass1',
        })
        assert response.status_code == 200
        login(app, 'subscriber@example.com', 'BrandNewPass1')

    def test_deactivated_user_cannot_log_in(self, app, client, admin_client, users):
        response = admin_client.patch(f"/api/users/{users['subscriber']}/status", json={'is_active': False})
        assert response.status_code == 200
        assert response.get_json()['is_active'] is False

        response = client.post('/api/auth/login', json={'email': 'subscriber@example.com', 'password': PASSWORD})
        assert response.status_code == 401

    def test_deactivation_ends_existing_session(self, subscriber_client, admin_client, users):
        admin_client.patch(f"/api/users/{users['subscriber']}/status", json={'is_active': False})
        assert subscriber_client.get('/api/auth/user').status_code == 401


class TestUserAdministration:
    def test_anonymous_and_members_cannot_list_users(self, client, editor_client):
        assert client.get('/api/users').status_code == 401
        assert editor_client.get('/api/users').status_code == 403

    def test_admin_lists_and_filters_users(self, admin_client, users):
        body = admin_client.get('/api/users').get_json()
        assert body['total'] == 4

        editors = admin_client.get('/api/users?role=editor').get_json()
        assert [u['email'] for u in editors['items']] == ['editor@example.com']

        found = admin_client.get('/api/users?search=contrib').get_json()
        assert found['total'] == 1

    def test_non_admin_cannot_change_roles_or_delete(self, editor_client, users):
        assert editor_client.patch(
            f"/api/users/{users['subscriber']}/role", json={'role': 'admin'}
        ).status_code == 403
        assert editor_client.delete(f"/api/users/{users['subscriber']}").status_code == 403

    def test_admin_changes_role_and_is_audited(self, app, admin_client, users):
        response = admin_client.patch(f"/api/users/{users['subscriber']}/role", json={'role': 'contributor'})
        assert response.status_code == 200
        assert response.get_json()['role'] == 'contributor'

        with app.app_context():
            entry = db.session.query(AuditLog).filter_by(action='user_role_changed').one()
            assert entry.entity_id == users['subscriber']
            assert entry.user_id == users['admin']

    def test_unknown_role_is_rejected(self, admin_client, users):
        response = admin_client.patch(f"/api/users/{users['subscriber']}/role", json={'role': 'owner'})
        assert response.status_code == 400

    def test_admin_cannot_demote_deactivate_or_delete_self(self, admin_client, users):
        me = users['admin']
        assert admin_client.patch(f"/api/users/{me}/role", json={'role': 'editor'}).status_code == 403
        assert admin_client.patch(f"/api/users/{me}/status", json={'is_active': False}).status_code == 403
        assert admin_client.patch(f"/api/users/{me}", json={'role': 'subscriber'}).status_code == 403
        assert admin_client.patch(f"/api/users/{me}", json={'is_active': False}).status_code == 403
        assert admin_client.delete(f"/api/users/{me}").status_code == 403

    def test_admin_creates_user_with_password(self, app, admin_client, users):
        response = admin_client.post('/api/users', json={
            'email': 'Analyst@Example.com',
            'password': 'AnalystPass1',
            'first_name': 'Ana',
            'role': 'contributor',
        })
        assert response.status_code == 201
        assert response.get_json()['email'] == 'analyst@example.com'
        login(app, 'analyst@example.com', 'AnalystPass1')

        duplicate = admin_client.post('/api/users', json={'email': 'analyst@example.com'})
        assert duplicate.status_code == 409

    def test_delete_user_keeps_their_discussions(self, app, admin_client, subscriber_client, users, forum_category):
        discussion = subscriber_client.post('/api/forum/discussions', json={
            'title': 'Close automation', 'content': 'Anyone tried it?', 'category_id': forum_category,
        }).get_json()

        assert admin_client.delete(f"/api/users/{users['subscriber']}").status_code == 200
        assert admin_client.get(f"/api/users/{users['subscriber']}").status_code == 404

        fetched = admin_client.get(f"/api/forum/discussions/{discussion['id']}").get_json()
        assert fetched['author'] is None

    def test_profile_visibility(self, client, subscriber_client, admin_client, users):
        public = client.get(f"/api/users/{users['editor']}").get_json()
        assert 'email' not in public

        own = subscriber_client.get(f"/api/users/{users['subscriber']}").get_json()
        assert own['email'] == 'subscriber@example.com'

        admin_client.patch(f"/api/users/{users['editor']}/status", json={'is_active': False})
        assert client.get(f"/api/users/{users['editor']}").status_code == 404
        assert admin_client.get(f"/api/users/{users['editor']}").status_code == 200

    def test_members_edit_their_own_profile(self, subscriber_client):
        response = subscriber_client.patch('/api/users/me', json={
            'title': 'Financial Controller', 'expertise_tags': ['IFRS', 'Close'],
        })
        assert response.status_code == 200
        body = response.get_json()
        assert body['title'] == 'Financial Controller'
        assert body['expertise_tags'] == ['IFRS', 'Close']
        assert body['first_name'] == 'Test'


class TestInvitations:
    def test_invited_email_registers_with_invited_role(self, app, admin_client, client, email_calls):
        response = admin_client.post('/api/users/invitations', json={
            'email': 'Invitee@Example.com', 'role': 'editor',
        })
        assert response.status_code == 201
        invitation = response.get_json()
        assert invitation['email'] == 'invitee@example.com'

        again = admin_client.post('/api/users/invitations', json={'email': 'invitee@example.com', 'role': 'editor'})
        assert again.status_code == 409

        registered = _register(client, email='invitee@example.com')
        assert registered.status_code == 201
        assert registered.get_json()['role'] == 'editor'

        with app.app_context():
            assert db.session.get(UserInvitation, invitation['id']).accepted_at is not None

    def test_revoked_invitation_grants_nothing(self, admin_client, client, email_calls):
        invitation = admin_client.post('/api/users/invitations', json={
            'email': 'revoked@example.com', 'role': 'admin',
        }).get_json()

        response = admin_client.post(f"/api/users/invitations/{invitation['id']}/revoke")
        assert response.status_code == 200

        registered = _register(client, email='revoked@example.com')
        assert registered.get_json()['role'] == 'subscriber'

        pending = admin_client.get('/api/users/invitations?pending_only=true').get_json()
        assert pending == []

    def test_cannot_invite_existing_account(self, admin_client, users):
        response = admin_client.post('/api/users/invitations', json={
            'email': 'editor@example.com', 'role': 'admin',
        })
        assert response.status_code == 409

    def test_only_admins_manage_invitations(self, editor_client):
        assert editor_client.get('/api/users/invitations').status_code == 403


def test_user_roles_are_ordered():
    ranks = [role.rank for role in (UserRole.SUBSCRIBER, UserRole.CONTRIBUTOR, UserRole.EDITOR, UserRole.ADMIN)]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 4


def test_created_user_helper_can_sign_in(app):
    create_user(app, 'helper@example.com', role=UserRole.EDITOR)
    client = login(app, 'helper@example.com')
    assert client.get('/api/auth/user').get_json()['role'] == 'editor'
