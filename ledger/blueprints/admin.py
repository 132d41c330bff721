"""Administrative maintenance endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from ledger.blueprints.common.params import json_body
from ledger.errors import ValidationError
from ledger.security import current_actor, permission_required
from ledger.services.audit import log_admin_action
from ledger.services.counters import recount_counters
from ledger.services.seed import seed_database

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


@admin_bp.route('/seed-database', methods=['POST'])
@permission_required('seed.run')
def seed():
    """Insert demo content; ``{"force": true}`` purges existing content first."""
    force = json_body().get('force', False)
    if not isinstance(force, bool):
        raise ValidationError({'force': ['Must be true or false']})
    result = seed_database(force=force, user=current_actor())
    return jsonify(result.to_dict())


@admin_bp.route('/recount', methods=['POST'])
@permission_required('seed.run')
def recount():
    touched = recount_counters()
    log_admin_action(current_actor(), "counters_recounted", "database", metadata=touched, commit=True)
    return jsonify({'success': True, 'rows': touched})
