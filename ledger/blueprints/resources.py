"""Resource library."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import arg_bool, json_body, page_args
from ledger.blueprints.common.serializers import page, serialize_resource
from ledger.blueprints.objects import finalize_from_request
from ledger.forms import validate_payload
from ledger.forms.content import RatingForm, ResourceForm
from ledger.security import current_actor, permission_required
from ledger.services.resources import resource_service

resources_bp = Blueprint('resources', __name__, url_prefix='/api/resources')


@resources_bp.route('', methods=['GET'])
def list_resources():
    limit, offset = page_args()
    resources, total = resource_service.list(
        type=request.args.get('type'),
        category=request.args.get('category'),
        search=request.args.get('search'),
        free_only=arg_bool('free_only', False),
        limit=limit,
        offset=offset,
    )
    return jsonify(page(resources, total, limit, offset, serialize_resource))


@resources_bp.route('', methods=['POST'])
@permission_required('resource.create')
def create_resource():
    data = validate_payload(ResourceForm, json_body())
    resource = resource_service.create(data, current_actor())
    return jsonify(serialize_resource(resource)), 201


@resources_bp.route('/files', methods=['PUT'])
@permission_required('resource.create')
def finalize_resource_file():
    object_path = finalize_from_request(('resource-file',), 'file_url', 'fileURL')
    return jsonify({'object_path': object_path})


@resources_bp.route('/<resource_id>', methods=['GET'])
def get_resource(resource_id):
    return jsonify(serialize_resource(resource_service.get_or_404(resource_id)))


@resources_bp.route('/<resource_id>', methods=['PUT', 'PATCH'])
@permission_required('resource.update')
def update_resource(resource_id):
    data = validate_payload(ResourceForm, json_body(), partial=request.method == 'PATCH')
    resource = resource_service.update(resource_id, data, current_actor())
    return jsonify(serialize_resource(resource))


@resources_bp.route('/<resource_id>', methods=['DELETE'])
@permission_required('resource.delete')
def delete_resource(resource_id):
    resource_service.delete(resource_id, current_actor())
    return jsonify({'success': True})


@resources_bp.route('/<resource_id>/download', methods=['POST'])
def download_resource(resource_id):
    resource = resource_service.record_download(resource_id)
    return jsonify({'download_count': resource.download_count, 'url': resource.file_url or resource.url})


@resources_bp.route('/<resource_id>/rate', methods=['POST'])
@permission_required('resource.rate')
def rate_resource(resource_id):
    data = validate_payload(RatingForm, json_body())
    resource = resource_service.rate(resource_id, current_actor(), data['rating'])
    return jsonify(serialize_resource(resource))
