"""Community page data."""

from __future__ import annotations

from flask import Blueprint, jsonify

from ledger.blueprints.common.params import arg_int
from ledger.blueprints.common.serializers import serialize_user
from ledger.services import community

community_bp = Blueprint('community', __name__, url_prefix='/api/community')


@community_bp.route('/contributors', methods=['GET'])
def contributors():
    users = community.contributors(arg_int('limit', 10, minimum=1))
    return jsonify([serialize_user(u) for u in users])


@community_bp.route('/stats', methods=['GET'])
def stats():
    return jsonify(community.stats())
