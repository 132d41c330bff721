"""Newsletter subscriptions."""

from __future__ import annotations

from flask import Blueprint, jsonify

from ledger.blueprints.common.params import arg_bool, json_body, page_args
from ledger.blueprints.common.serializers import page, serialize_subscriber
from ledger.extensions import limiter
from ledger.forms import validate_payload
from ledger.forms.accounts import SubscribeForm, UnsubscribeForm
from ledger.security import current_actor, permission_required
from ledger.services.subscribers import subscriber_service

subscribers_bp = Blueprint('subscribers', __name__, url_prefix='/api/subscribers')


@subscribers_bp.route('', methods=['POST'])
@limiter.limit("10 per hour")
def subscribe():
    data = validate_payload(SubscribeForm, json_body())
    subscriber, created = subscriber_service.subscribe(data)
    return jsonify(serialize_subscriber(subscriber)), 201 if created else 200


@subscribers_bp.route('/unsubscribe', methods=['POST'])
@limiter.limit("10 per hour")
def unsubscribe():
    data = validate_payload(UnsubscribeForm, json_body())
    subscriber_service.unsubscribe(data['email'])
    return jsonify({'success': True})


@subscribers_bp.route('', methods=['GET'])
@permission_required('subscriber.manage')
def list_subscribers():
    limit, offset = page_args()
    subscribers, total = subscriber_service.list(
        active_only=arg_bool('active_only', False),
        limit=limit,
        offset=offset,
    )
    return jsonify(page(subscribers, total, limit, offset, serialize_subscriber))


@subscribers_bp.route('/<subscriber_id>', methods=['DELETE'])
@permission_required('subscriber.manage')
def delete_subscriber(subscriber_id):
    subscriber_service.delete(subscriber_id, current_actor())
    return jsonify({'success': True})
