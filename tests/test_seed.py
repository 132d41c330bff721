"""Demo data seeding through the admin API and the CLI."""

import pytest

from ledger.extensions import db
from ledger.models import (
    ForumCategory,
    ForumDiscussion,
    NewsArticle,
    PodcastEpisode,
    Resource,
    SeedMarker,
    User,
    UserRole,
)
from ledger.services import seed_data


def _counts(app):
    with app.app_context():
        return {
            'articles': db.session.query(NewsArticle).count(),
            'podcasts': db.session.query(PodcastEpisode).count(),
            'forum_categories': db.session.query(ForumCategory).count(),
            'resources': db.session.query(Resource).count(),
            'users': db.session.query(User).count(),
        }


def test_seed_inserts_demo_content(app, admin_client):
    response = admin_client.post('/api/admin/seed-database', json={})
    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert body['already_seeded'] is False
    assert body['counts']['articles'] == len(seed_data.ARTICLES)

    counts = _counts(app)
    assert counts['articles'] == 11
    assert counts['podcasts'] == 10
    assert counts['forum_categories'] == 3
    assert counts['resources'] == len(seed_data.RESOURCES)


def test_seed_is_idempotent(app, admin_client):
    admin_client.post('/api/admin/seed-database')
    before = _counts(app)

    second = admin_client.post('/api/admin/seed-database').get_json()
    assert second['already_seeded'] is True
    assert second['counts']['articles'] == 11
    assert _counts(app) == before


def test_force_reseed_purges_content_and_non_admins(app, admin_client, users, news_category, forum_category):
    admin_client.post('/api/news', json={
        'title': 'Hand written', 'content': 'Not part of the demo set', 'category': 'automation',
    })
    admin_client.post('/api/admin/seed-database')

    response = admin_client.post('/api/admin/seed-database', json={'force': True})
    assert response.status_code == 200
    assert response.get_json()['already_seeded'] is False

    counts = _counts(app)
    assert counts['articles'] == 11
    assert counts['podcasts'] == 10
    assert counts['forum_categories'] == 3

    with app.app_context():
        assert db.session.query(NewsArticle).filter_by(title='Hand written').count() == 0
        survivors = {u.email for u in db.session.query(User).filter(User.role != UserRole.CONTRIBUTOR)}
        assert survivors == {'admin@example.com'}
        assert db.session.query(User).filter_by(role=UserRole.CONTRIBUTOR).count() == len(seed_data.CONTRIBUTORS)
        assert db.session.query(SeedMarker).count() == 1

    # The admin's session outlives the purge
    assert admin_client.get('/api/auth/user').status_code == 200


def test_seeded_counters_match_rows(app, admin_client):
    admin_client.post('/api/admin/seed-database')

    with app.app_context():
        for category in db.session.query(ForumCategory):
            assert category.discussion_count == db.session.query(ForumDiscussion).filter_by(
                category_id=category.id
            ).count()
        reconciliation = db.session.query(ForumDiscussion).filter_by(is_pinned=True).one()
        assert reconciliation.reply_count == 2
        assert reconciliation.last_reply_at is not None
        assert db.session.query(NewsArticle).filter(NewsArticle.likes != 0).count() == 0


def test_seeded_content_is_browsable(admin_client, client):
    admin_client.post('/api/admin/seed-database')

    news = client.get('/api/news?limit=50').get_json()
    assert news['total'] == 11
    assert all(item['category'] for item in news['items'])

    featured = client.get('/api/podcasts/featured').get_json()
    assert featured['episode_number'] == 3

    stats = client.get('/api/community/stats').get_json()
    assert stats['articles'] == 11
    assert stats['discussions'] == len(seed_data.DISCUSSIONS)

    leaders = client.get('/api/community/contributors?limit=3').get_json()
    assert len(leaders) == 3
    points = [person['points'] for person in leaders]
    assert points == sorted(points, reverse=True)


@pytest.mark.parametrize('client_name, status', [
    ('client', 401),
    ('subscriber_client', 403),
    ('editor_client', 403),
])
def test_seed_requires_admin(request, client_name, status):
    caller = request.getfixturevalue(client_name)
    assert caller.post('/api/admin/seed-database').status_code == status


def test_force_must_be_boolean(admin_client):
    response = admin_client.post('/api/admin/seed-database', json={'force': 'yes'})
    assert response.status_code == 400


def test_failed_seed_rolls_back(app, admin_client, monkeypatch):
    broken = list(seed_data.ARTICLES) + [{'title': None, 'content': None, 'category': 'automation', 'days_ago': 1}]
    monkeypatch.setattr(seed_data, 'ARTICLES', broken)

    response = admin_client.post('/api/admin/seed-database')
    assert response.status_code == 500
    assert response.get_json()['code'] == 'persistence_error'

    counts = _counts(app)
    assert counts['articles'] == 0
    assert counts['podcasts'] == 0
    with app.app_context():
        assert db.session.query(SeedMarker).count() == 0


class TestSeedCommands:
    def test_run_and_rerun(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['seed', 'run'])
        assert result.exit_code == 0
        assert 'Database seeded successfully' in result.output

        result = runner.invoke(args=['seed', 'run'])
        assert result.exit_code == 0
        assert 'already seeded' in result.output

    def test_clear_keeps_admins(self, app, users):
        runner = app.test_cli_runner()
        runner.invoke(args=['seed', 'run'])

        result = runner.invoke(args=['seed', 'clear'], input='y\n')
        assert result.exit_code == 0

        counts = _counts(app)
        assert counts['articles'] == 0
        assert counts['users'] == 1

    def test_clear_aborts_without_confirmation(self, app):
        runner = app.test_cli_runner()
        runner.invoke(args=['seed', 'run'])

        result = runner.invoke(args=['seed', 'clear'], input='n\n')
        assert result.exit_code == 1
        assert _counts(app)['articles'] == 11

    def test_recount(self, app):
        runner = app.test_cli_runner()
        runner.invoke(args=['seed', 'run'])
        with app.app_context():
            db.session.query(ForumCategory).update({ForumCategory.discussion_count: 99})
            db.session.commit()

        result = runner.invoke(args=['seed', 'recount'])
        assert result.exit_code == 0
        with app.app_context():
            assert all(c.discussion_count < 99 for c in db.session.query(ForumCategory))

    def test_user_commands(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'user', 'create', '--email', 'ops@example.com', '--password', 'OpsPassword1', '--role', 'admin',
        ])
        assert result.exit_code == 0, result.output

        result = runner.invoke(args=['user', 'set-role', '--email', 'ops@example.com', '--role', 'editor'])
        assert result.exit_code == 0
        with app.app_context():
            assert db.session.query(User).filter_by(email='ops@example.com').one().role == UserRole.EDITOR
