"""Community polls."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import arg_bool, json_body
from ledger.blueprints.common.serializers import serialize_poll
from ledger.extensions import limiter
from ledger.forms import validate_payload
from ledger.forms.content import PollForm, PollVoteForm
from ledger.security import current_actor, login_required, permission_required
from ledger.services.polls import poll_service, tally, user_votes

polls_bp = Blueprint('polls', __name__, url_prefix='/api/polls')


def _render(polls):
    user = current_actor()
    ids = [p.id for p in polls]
    counts = tally(ids)
    mine = user_votes(ids, user)
    return [serialize_poll(p, counts[p.id], mine.get(p.id)) for p in polls]


@polls_bp.route('', methods=['GET'])
def list_polls():
    polls = poll_service.list(current_actor(), include_closed=arg_bool('include_closed', False))
    return jsonify(_render(polls))


@polls_bp.route('', methods=['POST'])
@permission_required('poll.create')
def create_poll():
    data = validate_payload(PollForm, json_body())
    poll = poll_service.create(data, current_actor())
    return jsonify(_render([poll])[0]), 201


@polls_bp.route('/<poll_id>', methods=['GET'])
def get_poll(poll_id):
    return jsonify(_render([poll_service.get_or_404(poll_id)])[0])


@polls_bp.route('/<poll_id>', methods=['PUT', 'PATCH'])
@login_required
def update_poll(poll_id):
    data = validate_payload(PollForm, json_body(), partial=request.method == 'PATCH')
    poll = poll_service.update(poll_id, data, current_actor())
    return jsonify(_render([poll])[0])


@polls_bp.route('/<poll_id>', methods=['DELETE'])
@login_required
def delete_poll(poll_id):
    poll_service.delete(poll_id, current_actor())
    return jsonify({'success': True})


@polls_bp.route('/<poll_id>/vote', methods=['POST'])
@limiter.limit("30 per minute")
@permission_required('poll.vote')
def vote(poll_id):
    data = validate_payload(PollVoteForm, json_body())
    result = poll_service.vote(poll_id, data['option_index'], current_actor())
    body = _render([result.poll])[0]
    body['counted'] = result.counted
    return jsonify(body)
