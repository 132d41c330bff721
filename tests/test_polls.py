"""Community poll endpoints."""

import pytest

from ledger.extensions import db
from ledger.models import Poll, PollVote
from ledger.services.counters import recount_counters


def _create_poll(client, **overrides):
    payload = {
        'question': 'Which close task should we automate first?',
        'options': ['Bank reconciliations', 'Accruals', 'Intercompany'],
    }
    payload.update(overrides)
    response = client.post('/api/polls', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def poll(subscriber_client):
    return _create_poll(subscriber_client)


def test_member_creates_poll(poll, users):
    assert poll['created_by']['id'] == users['subscriber']
    assert [option['text'] for option in poll['options']] == ['Bank reconciliations', 'Accruals', 'Intercompany']
    assert all(option['votes'] == 0 for option in poll['options'])
    assert poll['total_votes'] == 0
    assert poll['is_active'] is True
    assert poll['my_vote'] is None


def test_anonymous_can_read_but_not_create(client, poll):
    listed = client.get('/api/polls')
    assert listed.status_code == 200
    assert [p['id'] for p in listed.get_json()] == [poll['id']]
    assert client.get(f"/api/polls/{poll['id']}").status_code == 200

    response = client.post('/api/polls', json={'question': 'Anyone?', 'options': ['Yes', 'No']})
    assert response.status_code == 401


@pytest.mark.parametrize('options', [
    ['Only one'],
    ['Accruals', 'accruals'],
    [f"Option {n}" for n in range(11)],
    ['x' * 201, 'Short'],
])
def test_option_list_is_validated(subscriber_client, options):
    response = subscriber_client.post('/api/polls', json={'question': 'Pick one', 'options': options})
    assert response.status_code == 400
    assert 'options' in response.get_json()['fields']


def test_member_votes_once(app, subscriber_client, poll, users):
    url = f"/api/polls/{poll['id']}/vote"

    first = subscriber_client.post(url, json={'option_index': 1})
    assert first.status_code == 200
    body = first.get_json()
    assert body['counted'] is True
    assert body['total_votes'] == 1
    assert body['my_vote'] == 1
    assert [option['votes'] for option in body['options']] == [0, 1, 0]

    again = subscriber_client.post(url, json={'option_index': 2})
    assert again.status_code == 200
    body = again.get_json()
    assert body['counted'] is False
    assert body['total_votes'] == 1
    assert body['my_vote'] == 1

    with app.app_context():
        vote = db.session.query(PollVote).one()
        assert vote.user_id == users['subscriber']
        assert vote.option_index == 1


def test_votes_from_several_members_are_tallied(subscriber_client, editor_client, client, poll):
    url = f"/api/polls/{poll['id']}/vote"
    subscriber_client.post(url, json={'option_index': 0})
    editor_client.post(url, json={'option_index': 0})

    body = client.get(f"/api/polls/{poll['id']}").get_json()
    assert body['total_votes'] == 2
    assert [option['votes'] for option in body['options']] == [2, 0, 0]
    assert body['my_vote'] is None


def test_vote_requires_a_valid_option_and_an_account(client, subscriber_client, poll):
    url = f"/api/polls/{poll['id']}/vote"

    assert client.post(url, json={'option_index': 0}).status_code == 401

    response = subscriber_client.post(url, json={'option_index': 3})
    assert response.status_code == 400
    assert 'option_index' in response.get_json()['fields']

    response = subscriber_client.post(url, json={'option_index': -1})
    assert response.status_code == 400

    assert subscriber_client.post(url, json={}).status_code == 400
    assert subscriber_client.post('/api/polls/missing/vote', json={'option_index': 0}).status_code == 404


def test_closed_poll_rejects_votes_and_leaves_the_list(client, subscriber_client, editor_client, poll):
    url = f"/api/polls/{poll['id']}"

    response = subscriber_client.patch(url, json={'is_active': False})
    assert response.status_code == 200
    assert response.get_json()['is_active'] is False

    assert subscriber_client.post(f"{url}/vote", json={'option_index': 0}).status_code == 409
    assert client.get('/api/polls').get_json() == []
    # Closed polls are listed for moderators only
    assert client.get('/api/polls?include_closed=true').get_json() == []
    assert [p['id'] for p in editor_client.get('/api/polls?include_closed=true').get_json()] == [poll['id']]


def test_expired_poll_rejects_votes(subscriber_client):
    poll = _create_poll(subscriber_client, expires_at='2020-01-01T00:00:00Z')
    response = subscriber_client.post(f"/api/polls/{poll['id']}/vote", json={'option_index': 0})
    assert response.status_code == 409


def test_only_creator_or_moderator_can_change_poll(app, editor_client, poll):
    from conftest import create_user, login

    create_user(app, 'stranger@example.com')
    stranger = login(app, 'stranger@example.com')
    url = f"/api/polls/{poll['id']}"

    assert stranger.patch(url, json={'question': 'Hijacked?'}).status_code == 403
    assert stranger.delete(url).status_code == 403

    response = editor_client.patch(url, json={'question': 'Which close task first?'})
    assert response.status_code == 200
    assert response.get_json()['question'] == 'Which close task first?'

    assert editor_client.delete(url).status_code == 200
    assert editor_client.get(url).status_code == 404


def test_options_are_locked_once_votes_exist(subscriber_client, poll):
    url = f"/api/polls/{poll['id']}"
    subscriber_client.post(f"{url}/vote", json={'option_index': 0})

    response = subscriber_client.patch(url, json={'options': ['Accruals', 'Leases']})
    assert response.status_code == 409

    # The question can still be reworded
    assert subscriber_client.patch(url, json={'question': 'Reworded?'}).status_code == 200


def test_deleting_poll_removes_its_votes(app, subscriber_client, poll):
    url = f"/api/polls/{poll['id']}"
    subscriber_client.post(f"{url}/vote", json={'option_index': 2})

    assert subscriber_client.delete(url).status_code == 200

    with app.app_context():
        assert db.session.query(Poll).count() == 0
        assert db.session.query(PollVote).count() == 0


def test_deleting_a_voter_recounts_their_polls(app, admin_client, subscriber_client, editor_client, poll, users):
    url = f"/api/polls/{poll['id']}"
    subscriber_client.post(f"{url}/vote", json={'option_index': 0})
    editor_client.post(f"{url}/vote", json={'option_index': 1})

    assert admin_client.delete(f"/api/users/{users['editor']}").status_code == 200

    body = admin_client.get(url).get_json()
    assert body['total_votes'] == 1
    assert [option['votes'] for option in body['options']] == [1, 0, 0]


def test_recount_repairs_total_votes(app, subscriber_client, poll):
    subscriber_client.post(f"/api/polls/{poll['id']}/vote", json={'option_index': 0})

    with app.app_context():
        db.session.get(Poll, poll['id']).total_votes = 40
        db.session.commit()

        recount_counters()

        assert db.session.get(Poll, poll['id']).total_votes == 1
