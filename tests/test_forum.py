"""Forum category, discussion and reply API tests."""

from ledger.extensions import db
from ledger.models import ForumCategory, ForumDiscussion, ForumReply, Like


def _start_discussion(client, category_id, **overrides):
    payload = {
        'title': 'Which reconciliation tools are you piloting?',
        'content': 'Comparing three vendors for bank reconciliation.',
        'category_id': category_id,
    }
    payload.update(overrides)
    response = client.post('/api/forum/discussions', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def _reply(client, discussion_id, content='Agreed', parent_reply_id=None):
    payload = {'discussion_id': discussion_id, 'content': content}
    if parent_reply_id:
        payload['parent_reply_id'] = parent_reply_id
    return client.post('/api/forum/replies', json=payload)


def _category_count(app, category_id):
    with app.app_context():
        return db.session.get(ForumCategory, category_id).discussion_count


def test_create_discussion_increments_category_count(app, subscriber_client, client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)
    assert discussion['category_id'] == forum_category
    assert _category_count(app, forum_category) == 1

    fetched = client.get(f"/api/forum/discussions/{discussion['id']}").get_json()
    assert fetched['title'] == discussion['title']
    assert fetched['content'] == discussion['content']


def test_unknown_category_is_rejected(subscriber_client, forum_category):
    response = subscriber_client.post('/api/forum/discussions', json={
        'title': 'Lost', 'content': 'No such category', 'category_id': 'missing',
    })
    assert response.status_code == 400
    assert 'category_id' in response.get_json()['fields']


def test_anonymous_cannot_post(client, forum_category):
    response = client.post('/api/forum/discussions', json={
        'title': 'Hello', 'content': 'World', 'category_id': forum_category,
    })
    assert response.status_code == 401


def test_replies_update_counts_and_threading(app, subscriber_client, editor_client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)

    first = _reply(subscriber_client, discussion['id'], 'We used the ERP matching engine.')
    assert first.status_code == 201
    nested = _reply(editor_client, discussion['id'], 'Did that cover intercompany?', first.get_json()['id'])
    assert nested.status_code == 201
    assert nested.get_json()['parent_reply_id'] == first.get_json()['id']

    fetched = subscriber_client.get(f"/api/forum/discussions/{discussion['id']}").get_json()
    assert fetched['reply_count'] == 2
    assert fetched['last_reply_at'] is not None

    replies = subscriber_client.get(f"/api/forum/replies?discussion_id={discussion['id']}").get_json()
    assert [r['content'] for r in replies] == [
        'We used the ERP matching engine.',
        'Did that cover intercompany?',
    ]


def test_parent_reply_must_share_discussion(subscriber_client, forum_category):
    one = _start_discussion(subscriber_client, forum_category, title='One')
    two = _start_discussion(subscriber_client, forum_category, title='Two')
    reply = _reply(subscriber_client, one['id']).get_json()

    response = _reply(subscriber_client, two['id'], parent_reply_id=reply['id'])
    assert response.status_code == 400
    assert 'parent_reply_id' in response.get_json()['fields']


def test_locked_discussion_rejects_replies(subscriber_client, editor_client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)

    assert subscriber_client.patch(
        f"/api/forum/discussions/{discussion['id']}/moderation", json={'is_locked': True}
    ).status_code == 403

    response = editor_client.patch(
        f"/api/forum/discussions/{discussion['id']}/moderation", json={'is_locked': True, 'is_pinned': True}
    )
    assert response.status_code == 200
    assert response.get_json()['is_locked'] is True
    assert response.get_json()['is_pinned'] is True

    response = _reply(subscriber_client, discussion['id'])
    assert response.status_code == 409


def test_only_author_or_moderator_can_edit(app, subscriber_client, editor_client, forum_category):
    from conftest import create_user, login

    discussion = _start_discussion(subscriber_client, forum_category)
    create_user(app, 'stranger@example.com')
    stranger = login(app, 'stranger@example.com')
    url = f"/api/forum/discussions/{discussion['id']}"

    assert stranger.patch(url, json={'title': 'Hijacked'}).status_code == 403

    response = subscriber_client.patch(url, json={'title': 'Edited by author'})
    assert response.status_code == 200
    assert response.get_json()['title'] == 'Edited by author'
    assert response.get_json()['content'] == discussion['content']

    assert editor_client.patch(url, json={'content': 'Tidied by a moderator'}).status_code == 200


def test_delete_discussion_cascades(app, subscriber_client, client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)
    reply = _reply(subscriber_client, discussion['id']).get_json()
    _reply(subscriber_client, discussion['id'], 'Nested', reply['id'])
    subscriber_client.post(f"/api/forum/discussions/{discussion['id']}/like")
    subscriber_client.post(f"/api/forum/replies/{reply['id']}/like")

    assert subscriber_client.delete(f"/api/forum/discussions/{discussion['id']}").status_code == 200
    assert client.get(f"/api/forum/discussions/{discussion['id']}").status_code == 404
    assert _category_count(app, forum_category) == 0

    with app.app_context():
        assert db.session.query(ForumDiscussion).count() == 0
        assert db.session.query(ForumReply).count() == 0
        assert db.session.query(Like).count() == 0


def test_delete_reply_removes_nested_replies(app, subscriber_client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)
    parent = _reply(subscriber_client, discussion['id'], 'Parent').get_json()
    child = _reply(subscriber_client, discussion['id'], 'Child', parent['id']).get_json()
    _reply(subscriber_client, discussion['id'], 'Grandchild', child['id'])
    _reply(subscriber_client, discussion['id'], 'Sibling')

    assert subscriber_client.delete(f"/api/forum/replies/{parent['id']}").status_code == 200

    fetched = subscriber_client.get(f"/api/forum/discussions/{discussion['id']}").get_json()
    assert fetched['reply_count'] == 1
    with app.app_context():
        assert [r.content for r in db.session.query(ForumReply).all()] == ['Sibling']


def test_delete_reply_rewinds_last_reply_time(app, subscriber_client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)
    only = _reply(subscriber_client, discussion['id'], 'Only reply').get_json()

    subscriber_client.delete(f"/api/forum/replies/{only['id']}")
    fetched = subscriber_client.get(f"/api/forum/discussions/{discussion['id']}").get_json()
    assert fetched['reply_count'] == 0
    assert fetched['last_reply_at'] is None

    first = _reply(subscriber_client, discussion['id'], 'First').get_json()
    latest = _reply(subscriber_client, discussion['id'], 'Latest').get_json()
    subscriber_client.delete(f"/api/forum/replies/{latest['id']}")

    with app.app_context():
        remaining = db.session.get(ForumReply, first['id'])
        assert db.session.get(ForumDiscussion, discussion['id']).last_reply_at == remaining.created_at


def test_deleting_category_removes_its_discussions(app, admin_client, subscriber_client, forum_category):
    discussion = _start_discussion(subscriber_client, forum_category)
    _reply(subscriber_client, discussion['id'])

    assert subscriber_client.delete(f"/api/forum/categories/{forum_category}").status_code == 403
    assert admin_client.delete(f"/api/forum/categories/{forum_category}").status_code == 200

    with app.app_context():
        assert db.session.query(ForumDiscussion).count() == 0
        assert db.session.query(ForumReply).count() == 0


def test_pinned_discussions_list_first(subscriber_client, editor_client, forum_category):
    older = _start_discussion(subscriber_client, forum_category, title='Older')
    _start_discussion(subscriber_client, forum_category, title='Newer')
    editor_client.patch(f"/api/forum/discussions/{older['id']}/moderation", json={'is_pinned': True})

    body = subscriber_client.get(f"/api/forum/discussions?category_id={forum_category}").get_json()
    assert body['total'] == 2
    assert body['items'][0]['title'] == 'Older'
