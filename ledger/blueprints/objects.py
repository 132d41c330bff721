"""Direct-to-storage uploads and policy-checked downloads."""

from __future__ import annotations

from flask import Blueprint, jsonify, redirect

from ledger.blueprints.common.params import json_body
from ledger.forms import validate_payload
from ledger.forms.objects import FinalizeUploadForm, UploadRequestForm
from ledger.security import current_actor, permission_required
from ledger.services.objects import download_url, finalize_upload, request_upload

objects_bp = Blueprint('objects', __name__)


def finalize_from_request(purposes: tuple[str, ...], *aliases: str) -> str:
    """Finalize the upload named in the request body and return its object path.

    The body carries ``url``; older clients send the same value under a
    field-specific name such as ``image_url``, listed in ``aliases``.
    """
    payload = json_body()
    url = payload.get('url')
    for alias in aliases:
        if url is None:
            url = payload.get(alias)
    data = validate_payload(FinalizeUploadForm, {'url': url})
    return finalize_upload(current_actor(), data['url'], purposes)


@objects_bp.route('/api/objects/upload', methods=['POST'])
@permission_required('upload.create')
def upload():
    data = validate_payload(UploadRequestForm, json_body())
    result = request_upload(
        current_actor(),
        data['purpose'],
        data['filename'],
        data['content_type'],
        data['size'],
    )
    return jsonify(result), 201


@objects_bp.route('/objects/<path:object_path>', methods=['GET'])
def serve(object_path):
    return redirect(download_url(object_path, current_actor()), code=302)
