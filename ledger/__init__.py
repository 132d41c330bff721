"""Application factory for The Digital Ledger."""

from __future__ import annotations

from flask import Flask

from ledger.blueprints.admin import admin_bp
from ledger.blueprints.auth import auth_bp
from ledger.blueprints.community import community_bp
from ledger.blueprints.forum import forum_bp
from ledger.blueprints.news import news_bp
from ledger.blueprints.objects import objects_bp
from ledger.blueprints.podcasts import podcasts_bp
from ledger.blueprints.polls import polls_bp
from ledger.blueprints.resources import resources_bp
from ledger.blueprints.subscribers import subscribers_bp
from ledger.blueprints.toolbox import toolbox_bp
from ledger.blueprints.users import users_bp
from ledger.config import Config
from ledger.errors import AuthenticationError, register_error_handlers
from ledger.extensions import (
    db,
    migrate,
    login_manager,
    csrf,
    limiter,
)
from ledger.models import User
from ledger.security.config import (
    configure_request_logging,
    configure_security_headers,
    validate_input_length,
)


def create_app(config_class=Config):
    """Create Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # Configure security
    configure_security_headers(app)
    validate_input_length(app)
    configure_request_logging(app)
    register_error_handlers(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        raise AuthenticationError()

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(news_bp)
    app.register_blueprint(podcasts_bp)
    app.register_blueprint(forum_bp)
    app.register_blueprint(resources_bp)
    app.register_blueprint(toolbox_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(subscribers_bp)
    app.register_blueprint(objects_bp)  # /api/objects/upload and /objects/<path>
    app.register_blueprint(admin_bp)
    app.register_blueprint(community_bp)
    app.register_blueprint(polls_bp)

    # Register CLI commands
    from ledger.commands import register_commands
    register_commands(app)

    if app.config.get('AUTO_SEED'):
        _auto_seed(app)

    return app


def _auto_seed(app) -> None:
    from ledger.services.seed import seed_database

    try:
        with app.app_context():
            result = seed_database()
            app.logger.info(f"Startup seed: {result.message}")
    except Exception as e:
        app.logger.warning(f"Startup seed skipped: {e}")
