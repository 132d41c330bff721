"""Signed upload, finalize and download tests."""

import requests

from conftest import FakeResponse
from ledger.extensions import db
from ledger.models import ObjectVisibility, StoredObject
from ledger.services.objects import MB

IMAGE = {'purpose': 'article-image', 'filename': 'chart.png', 'content_type': 'image/png', 'size': 2 * MB}


def _request_upload(client, **overrides):
    payload = dict(IMAGE)
    payload.update(overrides)
    return client.post('/api/objects/upload', json=payload)


def _signed_url(upload):
    # The signer hands back the bucket URL; clients PUT to it and report it back without the query
    return upload['upload_url'].split('?', 1)[0]


def test_oversized_image_is_rejected_before_signing(editor_client, signer_calls):
    response = _request_upload(editor_client, size=6 * MB)
    assert response.status_code == 400
    assert 'size' in response.get_json()['fields']
    assert signer_calls == []


def test_disallowed_content_type_is_rejected(editor_client, signer_calls):
    response = _request_upload(editor_client, filename='run.exe', content_type='application/x-msdownload')
    fields = response.get_json()['fields']
    assert response.status_code == 400
    assert 'content_type' in fields
    assert 'filename' in fields
    assert signer_calls == []


def test_upload_requires_permission_for_purpose(client, subscriber_client, signer_calls):
    assert _request_upload(client).status_code == 401
    assert _request_upload(subscriber_client).status_code == 403
    assert signer_calls == []


def test_upload_returns_signed_put_url(app, editor_client, signer_calls):
    response = _request_upload(editor_client)
    assert response.status_code == 201
    body = response.get_json()

    assert body['method'] == 'PUT'
    assert body['object_path'].startswith('/objects/uploads/')
    assert body['upload_url'].endswith('?sig=test')

    assert len(signer_calls) == 1
    request = signer_calls[0]['json']
    assert request['method'] == 'PUT'
    assert request['bucket_name'] == 'digital-ledger'
    assert request['object_name'] == f".private/uploads/{body['object_path'].rsplit('/', 1)[1]}"

    with app.app_context():
        stored = db.session.query(StoredObject).filter_by(object_path=body['object_path']).one()
        assert stored.visibility == ObjectVisibility.PRIVATE
        assert stored.declared_size == 2 * MB


def test_finalize_article_image(app, editor_client, signer_calls):
    upload = _request_upload(editor_client).get_json()

    response = editor_client.put('/api/articles/images', json={'image_url': _signed_url(upload)})
    assert response.status_code == 200
    assert response.get_json()['object_path'] == upload['object_path']

    with app.app_context():
        stored = db.session.query(StoredObject).filter_by(object_path=upload['object_path']).one()
        assert stored.visibility == ObjectVisibility.PUBLIC
        assert stored.finalized_at is not None


def test_finalize_leaves_external_urls_alone(editor_client):
    response = editor_client.put('/api/articles/images', json={'url': 'https://images.unsplash.com/photo-1'})
    assert response.status_code == 200
    assert response.get_json()['object_path'] == 'https://images.unsplash.com/photo-1'


def test_finalize_requires_matching_purpose_and_owner(app, editor_client, admin_client, signer_calls):
    upload = _request_upload(editor_client).get_json()
    url = _signed_url(upload)

    wrong_purpose = editor_client.put('/api/podcasts/images', json={'url': url})
    assert wrong_purpose.status_code == 400

    someone_else = admin_client.put('/api/articles/images', json={'url': url})
    assert someone_else.status_code == 403

    missing = editor_client.put('/api/articles/images', json={})
    assert missing.status_code == 400


def test_public_object_redirects_to_signed_download(editor_client, client, signer_calls):
    upload = _request_upload(editor_client).get_json()
    editor_client.put('/api/articles/images', json={'url': _signed_url(upload)})

    response = client.get(upload['object_path'])
    assert response.status_code == 302
    assert response.headers['Location'].endswith('?sig=test')
    assert signer_calls[-1]['json']['method'] == 'GET'


def test_private_object_requires_owner(app, editor_client, client, subscriber_client, signer_calls):
    upload = _request_upload(editor_client).get_json()

    assert client.get(upload['object_path']).status_code == 401
    assert subscriber_client.get(upload['object_path']).status_code == 403
    assert editor_client.get(upload['object_path']).status_code == 302


def test_unknown_object_is_not_found(client):
    assert client.get('/objects/uploads/nothing-here').status_code == 404


def test_avatar_upload_updates_profile(subscriber_client, signer_calls):
    upload = _request_upload(subscriber_client, purpose='avatar', filename='me.jpg', content_type='image/jpeg').get_json()

    response = subscriber_client.put('/api/users/avatar', json={'profile_image_url': _signed_url(upload)})
    assert response.status_code == 200
    body = response.get_json()
    assert body['object_path'] == upload['object_path']
    assert body['user']['profile_image_url'] == upload['object_path']


def test_signer_outage_is_reported_as_dependency_failure(editor_client, monkeypatch):
    def unreachable(*args, **kwargs):
        raise requests.ConnectionError("signer down")

    monkeypatch.setattr('ledger.services.objects.requests.post', unreachable)
    response = _request_upload(editor_client)
    assert response.status_code == 502
    assert response.get_json()['code'] == 'dependency_unavailable'


def test_signer_error_response_is_reported(editor_client, monkeypatch):
    monkeypatch.setattr(
        'ledger.services.objects.requests.post',
        lambda *args, **kwargs: FakeResponse(500, text='boom'),
    )
    assert _request_upload(editor_client).status_code == 502


def _object_name(upload):
    return f".private/{upload['object_path'][len('/objects/'):]}"


def test_signed_put_is_bound_to_declared_type_and_limit(editor_client, signer_calls):
    _request_upload(editor_client)
    request = signer_calls[0]['json']
    assert request['content_type'] == 'image/png'
    assert request['content_length_range'] == [0, 5 * MB]


def test_finalize_checks_the_stored_object_size(app, editor_client, signer_calls):
    upload = _request_upload(editor_client, size=10).get_json()
    signer_calls.stored[_object_name(upload)] = (100 * MB, 'image/png')

    response = editor_client.put('/api/articles/images', json={'url': _signed_url(upload)})
    assert response.status_code == 400
    assert 'size' in response.get_json()['fields']
    assert signer_calls[-1]['json']['method'] == 'HEAD'

    with app.app_context():
        stored = db.session.query(StoredObject).filter_by(object_path=upload['object_path']).one()
        assert stored.visibility == ObjectVisibility.PRIVATE
        assert stored.finalized_at is None


def test_finalize_checks_the_stored_content_type(editor_client, signer_calls):
    upload = _request_upload(editor_client).get_json()
    signer_calls.stored[_object_name(upload)] = (2048, 'application/x-msdownload')

    response = editor_client.put('/api/articles/images', json={'url': _signed_url(upload)})
    assert response.status_code == 400
    assert 'content_type' in response.get_json()['fields']


def test_finalize_before_upload_completes_is_not_found(editor_client, signer_calls):
    upload = _request_upload(editor_client).get_json()
    del signer_calls.stored[_object_name(upload)]

    response = editor_client.put('/api/articles/images', json={'url': _signed_url(upload)})
    assert response.status_code == 404
