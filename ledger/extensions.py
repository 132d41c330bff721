from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager, current_user
from flask_wtf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import bcrypt


def rate_limit_key():
    """Signed-in members are limited per account, everyone else per address."""
    if current_user and current_user.is_authenticated:
        return f"user:{current_user.get_id()}"
    return get_remote_address()


# Application-wide extension instances; storage and defaults come from
# RATELIMIT_* settings in Config.

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(key_func=rate_limit_key)

__all__ = [
    "db",
    "migrate",
    "login_manager",
    "csrf",
    "limiter",
    "bcrypt",
    "rate_limit_key",
]
