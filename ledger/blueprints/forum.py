"""Forum categories, discussions and threaded replies."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import arg_bool, device_token, json_body, page_args
from ledger.blueprints.common.serializers import (
    page,
    serialize_discussion,
    serialize_forum_category,
    serialize_reply,
)
from ledger.errors import ValidationError
from ledger.extensions import limiter
from ledger.forms import validate_payload
from ledger.forms.content import (
    DiscussionForm,
    ForumCategoryForm,
    ModerationForm,
    ReplyForm,
    ReplyUpdateForm,
)
from ledger.models import LikeTarget
from ledger.security import current_actor, login_required, permission_required
from ledger.services import likes
from ledger.services.forum import discussion_service, forum_category_service, reply_service

forum_bp = Blueprint('forum', __name__, url_prefix='/api/forum')


# ============= Categories =============

@forum_bp.route('/categories', methods=['GET'])
def list_categories():
    return jsonify([serialize_forum_category(c) for c in forum_category_service.list()])


@forum_bp.route('/categories', methods=['POST'])
@permission_required('forum_category.manage')
def create_category():
    data = validate_payload(ForumCategoryForm, json_body())
    category = forum_category_service.create(data, current_actor())
    return jsonify(serialize_forum_category(category)), 201


@forum_bp.route('/categories/<category_id>', methods=['GET'])
def get_category(category_id):
    return jsonify(serialize_forum_category(forum_category_service.get_or_404(category_id)))


@forum_bp.route('/categories/<category_id>', methods=['PUT', 'PATCH'])
@permission_required('forum_category.manage')
def update_category(category_id):
    data = validate_payload(ForumCategoryForm, json_body(), partial=request.method == 'PATCH')
    category = forum_category_service.update(category_id, data, current_actor())
    return jsonify(serialize_forum_category(category))


@forum_bp.route('/categories/<category_id>', methods=['DELETE'])
@permission_required('forum_category.manage')
def delete_category(category_id):
    forum_category_service.delete(category_id, current_actor())
    return jsonify({'success': True})


# ============= Discussions =============

@forum_bp.route('/discussions', methods=['GET'])
def list_discussions():
    limit, offset = page_args()
    discussions, total = discussion_service.list(
        current_actor(),
        category_id=request.args.get('category_id'),
        search=request.args.get('search'),
        featured=arg_bool('featured'),
        limit=limit,
        offset=offset,
    )
    return jsonify(page(discussions, total, limit, offset, serialize_discussion))


@forum_bp.route('/discussions', methods=['POST'])
@permission_required('discussion.create')
def create_discussion():
    data = validate_payload(DiscussionForm, json_body())
    discussion = discussion_service.create(data, current_actor())
    return jsonify(serialize_discussion(discussion)), 201


@forum_bp.route('/discussions/<discussion_id>', methods=['GET'])
def get_discussion(discussion_id):
    discussion = discussion_service.get_visible(discussion_id, current_actor())
    return jsonify(serialize_discussion(discussion))


@forum_bp.route('/discussions/<discussion_id>', methods=['PUT', 'PATCH'])
@login_required
def update_discussion(discussion_id):
    data = validate_payload(DiscussionForm, json_body(), partial=request.method == 'PATCH')
    discussion = discussion_service.update(discussion_id, data, current_actor())
    return jsonify(serialize_discussion(discussion))


@forum_bp.route('/discussions/<discussion_id>', methods=['DELETE'])
@login_required
def delete_discussion(discussion_id):
    discussion_service.delete(discussion_id, current_actor())
    return jsonify({'success': True})


@forum_bp.route('/discussions/<discussion_id>/moderation', methods=['PATCH'])
@permission_required('discussion.moderate')
def moderate_discussion(discussion_id):
    data = validate_payload(ModerationForm, json_body(), partial=True)
    discussion = discussion_service.moderate(discussion_id, data, current_actor())
    return jsonify(serialize_discussion(discussion))


@forum_bp.route('/discussions/<discussion_id>/like', methods=['POST'])
@limiter.limit("60 per minute")
def like_discussion(discussion_id):
    result = likes.like(LikeTarget.DISCUSSION, discussion_id, current_actor(), device_token())
    return jsonify(result.to_dict())


@forum_bp.route('/discussions/<discussion_id>/like', methods=['DELETE'])
@limiter.limit("60 per minute")
def unlike_discussion(discussion_id):
    result = likes.unlike(LikeTarget.DISCUSSION, discussion_id, current_actor(), device_token())
    return jsonify(result.to_dict())


# ============= Replies =============

@forum_bp.route('/replies', methods=['GET'])
def list_replies():
    discussion_id = request.args.get('discussion_id')
    if not discussion_id:
        raise ValidationError({'discussion_id': ['This field is required.']})
    replies = reply_service.list(discussion_id, current_actor())
    return jsonify([serialize_reply(r) for r in replies])


@forum_bp.route('/replies', methods=['POST'])
@permission_required('reply.create')
def create_reply():
    data = validate_payload(ReplyForm, json_body())
    reply = reply_service.create(data, current_actor())
    return jsonify(serialize_reply(reply)), 201


@forum_bp.route('/replies/<reply_id>', methods=['PUT', 'PATCH'])
@login_required
def update_reply(reply_id):
    data = validate_payload(ReplyUpdateForm, json_body(), partial=request.method == 'PATCH')
    reply = reply_service.update(reply_id, data, current_actor())
    return jsonify(serialize_reply(reply))


@forum_bp.route('/replies/<reply_id>', methods=['DELETE'])
@login_required
def delete_reply(reply_id):
    reply_service.delete(reply_id, current_actor())
    return jsonify({'success': True})


@forum_bp.route('/replies/<reply_id>/like', methods=['POST'])
@limiter.limit("60 per minute")
def like_reply(reply_id):
    result = likes.like(LikeTarget.REPLY, reply_id, current_actor(), device_token())
    return jsonify(result.to_dict())


@forum_bp.route('/replies/<reply_id>/like', methods=['DELETE'])
@limiter.limit("60 per minute")
def unlike_reply(reply_id):
    result = likes.unlike(LikeTarget.REPLY, reply_id, current_actor(), device_token())
    return jsonify(result.to_dict())
