"""Podcasts, resources, toolbox apps, newsletter subscribers and community pages."""

import pytest

from conftest import create_user
from ledger.extensions import db
from ledger.models import Subscriber, UserRole


# ============= Podcasts =============

def _episode(client, number, **overrides):
    payload = {
        'episode_number': number,
        'title': f"Episode {number}",
        'description': 'Automation in the month-end close.',
        'audio_url': f"https://example.com/podcast-{number}.mp3",
        'duration': '38:12',
        'host_name': 'Sarah Chen',
    }
    payload.update(overrides)
    response = client.post('/api/podcasts', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestPodcasts:
    def test_list_is_newest_episode_first(self, editor_client, client):
        for number in (3, 5, 4):
            _episode(editor_client, number)
        body = client.get('/api/podcasts').get_json()
        assert [e['episode_number'] for e in body['items']] == [5, 4, 3]

    def test_duplicate_episode_number_conflicts(self, editor_client):
        _episode(editor_client, 7)
        response = editor_client.post('/api/podcasts', json={'episode_number': 7, 'title': 'Again'})
        assert response.status_code == 409

    def test_featured_episode(self, editor_client, client):
        assert client.get('/api/podcasts/featured').status_code == 404

        _episode(editor_client, 3, is_featured=True)
        _episode(editor_client, 4)
        assert client.get('/api/podcasts/featured').get_json()['episode_number'] == 3

    def test_play_count_increments(self, editor_client, client):
        episode = _episode(editor_client, 3)
        client.post(f"/api/podcasts/{episode['id']}/play")
        response = client.post(f"/api/podcasts/{episode['id']}/play")
        assert response.get_json() == {'play_count': 2}

    def test_archived_episodes_are_hidden(self, editor_client, client):
        episode = _episode(editor_client, 3)
        editor_client.patch(f"/api/podcasts/{episode['id']}/archive", json={'is_archived': True})

        assert client.get('/api/podcasts').get_json()['total'] == 0
        assert client.get('/api/podcasts?archived=only').get_json()['total'] == 1

    def test_subscribers_cannot_publish(self, subscriber_client):
        response = subscriber_client.post('/api/podcasts', json={'episode_number': 1, 'title': 'Mine'})
        assert response.status_code == 403

    def test_delete_removes_likes(self, editor_client, subscriber_client, client):
        episode = _episode(editor_client, 3)
        subscriber_client.post(f"/api/podcasts/{episode['id']}/like")

        assert editor_client.delete(f"/api/podcasts/{episode['id']}").status_code == 200
        assert client.get(f"/api/podcasts/{episode['id']}").status_code == 404


# ============= Resources =============

def _resource(client, **overrides):
    payload = {
        'title': 'AI Implementation Guide for Finance Teams',
        'description': 'A step-by-step rollout plan.',
        'type': 'guide',
        'category': 'Implementation',
        'difficulty': 'beginner',
        'url': 'https://example.com/guide.pdf',
    }
    payload.update(overrides)
    response = client.post('/api/resources', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestResources:
    def test_contributors_share_resources(self, contributor_client, subscriber_client, users):
        resource = _resource(contributor_client)
        assert resource['author']['id'] == users['contributor']
        assert subscriber_client.post('/api/resources', json={
            'title': 'x', 'type': 'guide', 'category': 'y',
        }).status_code == 403

    def test_unknown_type_is_rejected(self, contributor_client):
        response = contributor_client.post('/api/resources', json={
            'title': 'Podcast?', 'type': 'podcast', 'category': 'Audio',
        })
        assert response.status_code == 400
        assert 'type' in response.get_json()['fields']

    def test_filters(self, contributor_client, client):
        _resource(contributor_client)
        _resource(contributor_client, title='Variance Analysis Template', type='template', category='FP&A')

        assert client.get('/api/resources?type=template').get_json()['total'] == 1
        assert client.get('/api/resources?search=variance').get_json()['total'] == 1
        assert client.get('/api/resources?category=Implementation').get_json()['total'] == 1

    def test_download_counter(self, contributor_client, client):
        resource = _resource(contributor_client)
        response = client.post(f"/api/resources/{resource['id']}/download")
        assert response.get_json() == {'download_count': 1, 'url': 'https://example.com/guide.pdf'}

    def test_rating_replaces_previous_vote(self, app, contributor_client, subscriber_client):
        resource = _resource(contributor_client)
        url = f"/api/resources/{resource['id']}/rate"

        subscriber_client.post(url, json={'rating': 2})
        rated = contributor_client.post(url, json={'rating': 4}).get_json()
        assert rated['rating'] == 3.0
        assert rated['rating_count'] == 2

        rated = subscriber_client.post(url, json={'rating': 5}).get_json()
        assert rated['rating'] == 4.5
        assert rated['rating_count'] == 2

    @pytest.mark.parametrize('rating', [0, 6, 'great'])
    def test_rating_must_be_one_to_five(self, contributor_client, subscriber_client, rating):
        resource = _resource(contributor_client)
        response = subscriber_client.post(f"/api/resources/{resource['id']}/rate", json={'rating': rating})
        assert response.status_code == 400

    def test_anonymous_cannot_rate(self, contributor_client, client):
        resource = _resource(contributor_client)
        assert client.post(f"/api/resources/{resource['id']}/rate", json={'rating': 5}).status_code == 401


# ============= Toolbox =============

class TestToolbox:
    def test_inactive_apps_are_admin_only(self, admin_client, client):
        live = admin_client.post('/api/toolbox', json={
            'name': 'Reconciliation Copilot',
            'description': 'Matches bank lines to ledger entries.',
            'section': 'controller',
            'status': 'beta_ready',
        }).get_json()
        hidden = admin_client.post('/api/toolbox', json={
            'name': 'Forecast Explainer',
            'description': 'Narrates forecast variances.',
            'section': 'fpa',
            'is_active': False,
        }).get_json()

        assert [a['name'] for a in client.get('/api/toolbox').get_json()] == ['Reconciliation Copilot']
        assert client.get(f"/api/toolbox/{hidden['id']}").status_code == 404
        assert client.get(f"/api/toolbox/{live['id']}").get_json()['status'] == 'beta_ready'
        assert len(admin_client.get('/api/toolbox').get_json()) == 2

        assert [a['name'] for a in admin_client.get('/api/toolbox?section=fpa').get_json()] == ['Forecast Explainer']
        assert client.get('/api/toolbox?section=treasury').status_code == 400

    def test_only_admins_manage_apps(self, editor_client):
        response = editor_client.post('/api/toolbox', json={'name': 'Nope', 'description': 'No access'})
        assert response.status_code == 403


# ============= Newsletter =============

class TestSubscribers:
    def test_subscribe_unsubscribe_resubscribe(self, app, client, admin_client):
        payload = {'email': 'Reader@Example.com', 'categories': ['automation'], 'frequency': 'monthly'}

        created = client.post('/api/subscribers', json=payload)
        assert created.status_code == 201
        assert created.get_json()['email'] == 'reader@example.com'

        assert client.post('/api/subscribers', json=payload).status_code == 409

        assert client.post('/api/subscribers/unsubscribe', json={'email': 'reader@example.com'}).status_code == 200
        with app.app_context():
            assert db.session.query(Subscriber).one().is_active is False

        again = client.post('/api/subscribers', json={'email': 'reader@example.com'})
        assert again.status_code == 200
        assert again.get_json()['frequency'] == 'weekly'

        listing = admin_client.get('/api/subscribers').get_json()
        assert listing['total'] == 1

    def test_invalid_email_and_frequency(self, client):
        assert client.post('/api/subscribers', json={'email': 'not-an-email'}).status_code == 400
        response = client.post('/api/subscribers', json={'email': 'a@example.com', 'frequency': 'hourly'})
        assert response.status_code == 400

    def test_unknown_unsubscribe_is_not_found(self, client):
        assert client.post('/api/subscribers/unsubscribe', json={'email': 'ghost@example.com'}).status_code == 404

    def test_listing_is_admin_only(self, editor_client):
        assert editor_client.get('/api/subscribers').status_code == 403


# ============= Community =============

class TestCommunity:
    def test_contributors_ranked_by_points(self, app, client):
        create_user(app, 'low@example.com', role=UserRole.CONTRIBUTOR, points=10, last_name='Low')
        create_user(app, 'high@example.com', role=UserRole.CONTRIBUTOR, points=900, last_name='High')
        create_user(app, 'zero@example.com', points=0)
        create_user(app, 'gone@example.com', points=5000, active=False)

        leaders = client.get('/api/community/contributors').get_json()
        assert [person['last_name'] for person in leaders] == ['High', 'Low']
        assert 'email' not in leaders[0]

    def test_stats_count_live_rows(self, client, editor_client, subscriber_client, news_category, forum_category):
        editor_client.post('/api/news', json={'title': 'Live', 'content': 'Body', 'category': 'automation'})
        editor_client.post('/api/news', json={
            'title': 'Draft', 'content': 'Body', 'category': 'automation', 'status': 'draft',
        })
        subscriber_client.post('/api/forum/discussions', json={
            'title': 'Hello', 'content': 'World', 'category_id': forum_category,
        })

        stats = client.get('/api/community/stats').get_json()
        assert stats['articles'] == 1
        assert stats['discussions'] == 1
        assert stats['members'] == 4
        assert stats['podcasts'] == 0
