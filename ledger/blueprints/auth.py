"""Session authentication API."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from ledger.blueprints.common.params import json_body
from ledger.blueprints.common.serializers import serialize_user
from ledger.extensions import limiter
from ledger.forms import validate_payload
from ledger.forms.accounts import ChangePasswordForm, LoginForm, RegisterForm
from ledger.security import current_actor, login_required
from ledger.services.audit import log_security_event
from ledger.services.users import account_service

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/csrf', methods=['GET'])
def csrf_token():
    """Token for the X-CSRFToken header on mutating requests."""
    return jsonify({'csrf_token': generate_csrf()})


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    data = validate_payload(RegisterForm, json_body())
    user = account_service.register(data)
    login_user(user)
    current_app.logger.info(f"Registered new account {user.id}")
    return jsonify(serialize_user(user, private=True)), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute")
def login():
    data = validate_payload(LoginForm, json_body())
    user = account_service.authenticate(data['email'], data['password'])
    login_user(user)
    log_security_event(user, "login")
    return jsonify(serialize_user(user, private=True))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    user = current_actor()
    if user is not None:
        log_security_event(user, "logout")
    logout_user()
    return jsonify({'success': True})


@auth_bp.route('/user', methods=['GET'])
@login_required
def current():
    return jsonify(serialize_user(current_user, private=True))


@auth_bp.route('/change-password', methods=['POST'])
@login_required
def change_password():
    data = validate_payload(ChangePasswordForm, json_body())
    account_service.change_password(current_user, data['current_password'], data['new_password'])
    return jsonify({'success': True})
