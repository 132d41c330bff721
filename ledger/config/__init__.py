import os
from dotenv import load_dotenv

load_dotenv()


def _database_uri() -> str:
    uri = os.getenv('DATABASE_URL') or 'sqlite:///ledger.db'
    if uri.startswith('postgres://'):
        uri = uri.replace('postgres://', 'postgresql://', 1)
    return uri


def _flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    # Provide a safe development fallback to avoid 500s when SECRET_KEY is missing.
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-me'
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    SESSION_COOKIE_SECURE = _flag('SESSION_COOKIE_SECURE', 'true')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    REMEMBER_COOKIE_SECURE = True
    REMEMBER_COOKIE_HTTPONLY = True
    WTF_CSRF_TIME_LIMIT = None
    WTF_CSRF_HEADERS = ['X-CSRFToken', 'X-CSRF-Token']
    MAX_JSON_PAYLOAD = 1024 * 1024

    RATELIMIT_ENABLED = _flag('RATELIMIT_ENABLED', 'true')
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '2000 per day;300 per hour')

    # Object storage: URLs are signed by a sidecar, bytes never pass through the API.
    OBJECT_STORAGE_SIGNER_URL = os.getenv('OBJECT_STORAGE_SIGNER_URL', 'http://127.0.0.1:1106')
    PRIVATE_OBJECT_DIR = os.getenv('PRIVATE_OBJECT_DIR', '/digital-ledger/.private')
    OBJECT_STORAGE_PUBLIC_HOST = os.getenv('OBJECT_STORAGE_PUBLIC_HOST', 'https://storage.googleapis.com')
    UPLOAD_URL_TTL_SECONDS = int(os.getenv('UPLOAD_URL_TTL_SECONDS', 900))
    DOWNLOAD_URL_TTL_SECONDS = int(os.getenv('DOWNLOAD_URL_TTL_SECONDS', 3600))
    OBJECT_STORAGE_TIMEOUT_SECONDS = float(os.getenv('OBJECT_STORAGE_TIMEOUT_SECONDS', 10))

    # Transactional email (SendGrid dynamic templates)
    SENDGRID_API_KEY = os.getenv('SENDGRID_API_KEY')
    MAIL_FROM_EMAIL = os.getenv('MAIL_FROM_EMAIL', 'team@thedigitalledger.org')
    WELCOME_EMAIL_TEMPLATE_ID = os.getenv('WELCOME_EMAIL_TEMPLATE_ID', 'd-64ab79f349214e1f8ba8babefd5e6bad')
    EMAIL_TIMEOUT_SECONDS = float(os.getenv('EMAIL_TIMEOUT_SECONDS', 10))

    # Populate an empty database with demo content on startup
    AUTO_SEED = _flag('AUTO_SEED')

    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    SESSION_COOKIE_SECURE = False
    SENDGRID_API_KEY = 'test-sendgrid-key'
    AUTO_SEED = False
