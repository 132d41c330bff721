"""News article, comment and news category API tests."""

from ledger.extensions import db
from ledger.models import NewsArticle, NewsComment


def _article_payload(**overrides):
    payload = {
        'title': 'Machine learning in audit',
        'content': 'Audit analytics are changing how samples are chosen.',
        'excerpt': 'Audit analytics are changing.',
        'category': 'automation',
        'source_url': 'https://example.com/ml-audit',
        'source_name': 'Jennifer Lawrence',
        'is_featured': True,
    }
    payload.update(overrides)
    return payload


def _create_article(client, **overrides):
    response = client.post('/api/news', json=_article_payload(**overrides))
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_create_then_get_returns_same_fields(editor_client, client, news_category):
    created = _create_article(editor_client)

    response = client.get(f"/api/news/{created['id']}")
    assert response.status_code == 200
    fetched = response.get_json()

    for field in ('title', 'content', 'excerpt', 'source_url', 'source_name', 'is_featured', 'category'):
        assert fetched[field] == created[field]
    assert fetched['category'] == 'automation'
    assert fetched['status'] == 'published'
    assert fetched['likes'] == 0


def test_create_requires_known_category(editor_client, news_category):
    response = editor_client.post('/api/news', json=_article_payload(category='astrology'))
    assert response.status_code == 400
    assert 'category' in response.get_json()['fields']

    missing = _article_payload()
    missing.pop('category')
    response = editor_client.post('/api/news', json=missing)
    assert response.status_code == 400


def test_create_rejects_missing_title(editor_client, news_category):
    response = editor_client.post('/api/news', json=_article_payload(title=''))
    assert response.status_code == 400
    body = response.get_json()
    assert body['code'] == 'validation_error'
    assert 'title' in body['fields']


def test_patch_merges_only_supplied_fields(editor_client, news_category):
    created = _create_article(editor_client)

    response = editor_client.patch(f"/api/news/{created['id']}", json={'title': 'Updated title'})
    assert response.status_code == 200
    updated = response.get_json()

    assert updated['title'] == 'Updated title'
    assert updated['content'] == created['content']
    assert updated['excerpt'] == created['excerpt']
    assert updated['is_featured'] is True


def test_patch_cannot_clear_categories(editor_client, client, news_category):
    created = _create_article(editor_client)

    response = editor_client.patch(f"/api/news/{created['id']}", json={'category_ids': []})
    assert response.status_code == 400
    assert 'category_ids' in response.get_json()['fields']

    fetched = client.get(f"/api/news/{created['id']}").get_json()
    assert fetched['category'] == 'automation'


def test_anonymous_cannot_create(client, news_category):
    response = client.post('/api/news', json=_article_payload())
    assert response.status_code == 401


def test_subscriber_cannot_create_or_delete(subscriber_client, editor_client, news_category):
    assert subscriber_client.post('/api/news', json=_article_payload()).status_code == 403

    created = _create_article(editor_client)
    assert subscriber_client.delete(f"/api/news/{created['id']}").status_code == 403


def test_drafts_hidden_from_readers(editor_client, client, news_category):
    draft = _create_article(editor_client, status='draft')

    assert client.get(f"/api/news/{draft['id']}").status_code == 404
    assert client.get('/api/news').get_json()['total'] == 0

    assert editor_client.get(f"/api/news/{draft['id']}").status_code == 200
    assert editor_client.get('/api/news').get_json()['total'] == 1

    response = editor_client.patch(f"/api/news/{draft['id']}/status", json={'status': 'published'})
    assert response.status_code == 200
    assert client.get(f"/api/news/{draft['id']}").status_code == 200


def test_archive_filters(editor_client, client, news_category):
    first = _create_article(editor_client, title='First')
    _create_article(editor_client, title='Second')

    response = editor_client.patch(f"/api/news/{first['id']}/archive", json={'is_archived': True})
    assert response.status_code == 200
    assert response.get_json()['is_archived'] is True

    assert client.get('/api/news').get_json()['total'] == 1
    only = client.get('/api/news?archived=only').get_json()
    assert [a['title'] for a in only['items']] == ['First']
    assert client.get('/api/news?archived=include').get_json()['total'] == 2
    assert client.get('/api/news?archived=sometimes').status_code == 400


def test_list_filters_by_category_and_paginates(app, editor_client, client, news_category):
    for n in range(3):
        _create_article(editor_client, title=f"Article {n}")

    body = client.get('/api/news?category=automation&limit=2').get_json()
    assert body['total'] == 3
    assert body['limit'] == 2
    assert len(body['items']) == 2

    assert client.get('/api/news?category=regulatory').get_json()['total'] == 0


def test_delete_removes_article_and_comments(app, editor_client, subscriber_client, news_category):
    article = _create_article(editor_client)
    response = subscriber_client.post(f"/api/news/{article['id']}/comments", json={'content': 'Great read'})
    assert response.status_code == 201

    assert editor_client.delete(f"/api/news/{article['id']}").status_code == 200
    assert editor_client.get(f"/api/news/{article['id']}").status_code == 404

    with app.app_context():
        assert db.session.query(NewsArticle).count() == 0
        assert db.session.query(NewsComment).count() == 0


def test_comments_can_only_be_deleted_by_author(app, editor_client, subscriber_client, news_category):
    from conftest import create_user, login

    article = _create_article(editor_client)
    comment = subscriber_client.post(
        f"/api/news/{article['id']}/comments", json={'content': 'First!'}
    ).get_json()
    assert comment['author']['first_name'] == 'Test'

    create_user(app, 'other@example.com')
    other = login(app, 'other@example.com')
    url = f"/api/news/{article['id']}/comments/{comment['id']}"

    assert other.delete(url).status_code == 403
    # Editors moderate articles, not other people's comments
    assert editor_client.delete(url).status_code == 403
    assert subscriber_client.delete(url).status_code == 200
    assert subscriber_client.get(f"/api/news/{article['id']}/comments").get_json() == []


def test_news_categories_admin_only(admin_client, editor_client, client):
    payload = {'name': 'Generative AI', 'color': '#10B981'}
    assert editor_client.post('/api/admin/news-categories', json=payload).status_code == 403

    response = admin_client.post('/api/admin/news-categories', json=payload)
    assert response.status_code == 201
    category = response.get_json()
    assert category['slug'] == 'generative-ai'

    admin_client.patch(f"/api/admin/news-categories/{category['id']}", json={'is_active': False})
    assert client.get('/api/news-categories?active_only=true').get_json() == []
    assert len(client.get('/api/news-categories').get_json()) == 1
