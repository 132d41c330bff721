import pytest

from ledger import create_app
from ledger.config import TestingConfig
from ledger.extensions import db
from ledger.models import ForumCategory, NewsCategory, User, UserRole

PASSWORD = 'CorrectHorse9!'


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text='', headers=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text
        self.headers = headers or {}

    def json(self):
        return self._payload


@pytest.fixture
def app():
    """Create and configure a test application instance."""
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Anonymous test client."""
    return app.test_client()


class SignerCalls(list):
    """Requests made to the signer, plus the objects clients have PUT to the bucket.

    ``stored`` maps object names to (size, content type). A signed PUT URL
    counts as a completed upload of a small file of the signed content type;
    tests edit the entry to simulate a different upload.
    """

    def __init__(self):
        super().__init__()
        self.stored = {}


@pytest.fixture
def signer_calls(monkeypatch):
    """Replace the object-storage signer and bucket with stubs and record requests."""
    calls = SignerCalls()

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({'url': url, 'json': json})
        if json['method'] == 'PUT':
            calls.stored[json['object_name']] = (1024, json.get('content_type', ''))
        signed = f"https://storage.googleapis.com/{json['bucket_name']}/{json['object_name']}?sig=test"
        return FakeResponse(200, {'signed_url': signed})

    def fake_head(url, timeout=None, **kwargs):
        object_name = url.split('?', 1)[0].split('/', 4)[4]
        if object_name not in calls.stored:
            return FakeResponse(404)
        size, content_type = calls.stored[object_name]
        return FakeResponse(200, headers={'Content-Length': str(size), 'Content-Type': content_type})

    monkeypatch.setattr('ledger.services.objects.requests.post', fake_post)
    monkeypatch.setattr('ledger.services.objects.requests.head', fake_head)
    return calls


@pytest.fixture
def email_calls(monkeypatch):
    """Replace the SendGrid call with a stub that accepts every message."""
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({'url': url, 'json': json, 'headers': headers})
        return FakeResponse(202)

    monkeypatch.setattr('ledger.services.email.requests.post', fake_post)
    return calls


def create_user(app, email, role=UserRole.SUBSCRIBER, password=PASSWORD, **fields):
    with app.app_context():
        user = User(email=email, role=role, first_name=fields.pop('first_name', 'Test'), **fields)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id


def login(app, email, password=PASSWORD):
    client = app.test_client()
    response = client.post('/api/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def users(app):
    """One account per role; returns ids keyed by role value."""
    return {
        role.value: create_user(app, f"{role.value}@example.com", role=role)
        for role in UserRole
    }


@pytest.fixture
def subscriber_client(app, users):
    return login(app, 'subscriber@example.com')


@pytest.fixture
def contributor_client(app, users):
    return login(app, 'contributor@example.com')


@pytest.fixture
def editor_client(app, users):
    return login(app, 'editor@example.com')


@pytest.fixture
def admin_client(app, users):
    return login(app, 'admin@example.com')


@pytest.fixture
def news_category(app):
    with app.app_context():
        category = NewsCategory(name='Automation', slug='automation', display_order=1)
        db.session.add(category)
        db.session.commit()
        return category.id


@pytest.fixture
def forum_category(app):
    with app.app_context():
        category = ForumCategory(name='AI Implementation', color='#3B82F6')
        db.session.add(category)
        db.session.commit()
        return category.id
