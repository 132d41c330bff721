"""AI toolbox catalogue."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import json_body
from ledger.blueprints.common.serializers import serialize_toolbox_app
from ledger.blueprints.objects import finalize_from_request
from ledger.forms import validate_payload
from ledger.forms.content import ToolboxAppForm
from ledger.security import current_actor, permission_required
from ledger.services.toolbox import toolbox_service

toolbox_bp = Blueprint('toolbox', __name__, url_prefix='/api/toolbox')


@toolbox_bp.route('', methods=['GET'])
def list_apps():
    apps = toolbox_service.list(current_actor(), section=request.args.get('section'))
    return jsonify([serialize_toolbox_app(a) for a in apps])


@toolbox_bp.route('', methods=['POST'])
@permission_required('toolbox.manage')
def create_app():
    data = validate_payload(ToolboxAppForm, json_body())
    app = toolbox_service.create(data, current_actor())
    return jsonify(serialize_toolbox_app(app)), 201


@toolbox_bp.route('/images', methods=['PUT'])
@permission_required('toolbox.manage')
def finalize_toolbox_image():
    object_path = finalize_from_request(('toolbox-image',), 'image_url', 'imageURL')
    return jsonify({'object_path': object_path})


@toolbox_bp.route('/<app_id>', methods=['GET'])
def get_app(app_id):
    return jsonify(serialize_toolbox_app(toolbox_service.get_visible(app_id, current_actor())))


@toolbox_bp.route('/<app_id>', methods=['PUT', 'PATCH'])
@permission_required('toolbox.manage')
def update_app(app_id):
    data = validate_payload(ToolboxAppForm, json_body(), partial=request.method == 'PATCH')
    app = toolbox_service.update(app_id, data, current_actor())
    return jsonify(serialize_toolbox_app(app))


@toolbox_bp.route('/<app_id>', methods=['DELETE'])
@permission_required('toolbox.manage')
def delete_app(app_id):
    toolbox_service.delete(app_id, current_actor())
    return jsonify({'success': True})
