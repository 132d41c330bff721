"""Member profiles, user administration and invitations."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from ledger.blueprints.common.params import arg_bool, json_body, page_args
from ledger.blueprints.common.serializers import page, serialize_invitation, serialize_user
from ledger.blueprints.objects import finalize_from_request
from ledger.errors import NotFoundError
from ledger.forms import validate_payload
from ledger.forms.accounts import InvitationForm, ProfileForm, RoleForm, StatusForm, UserForm
from ledger.security import current_actor, login_required, permission_required
from ledger.security.policy import user_can
from ledger.services.users import invitation_service, user_service

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


def _serialize_private(user):
    return serialize_user(user, private=True)


# ============= Own Profile =============

@users_bp.route('/me', methods=['PATCH'])
@login_required
def update_me():
    data = validate_payload(ProfileForm, json_body(), partial=True)
    user = user_service.update_profile(current_actor(), data)
    return jsonify(serialize_user(user, private=True))


@users_bp.route('/avatar', methods=['PUT'])
@permission_required('upload.create')
def update_avatar():
    object_path = finalize_from_request(('avatar',), 'profile_image_url', 'avatarURL')
    user = user_service.update_profile(current_actor(), {'profile_image_url': object_path})
    return jsonify({'object_path': object_path, 'user': serialize_user(user, private=True)})


# ============= Invitations =============

@users_bp.route('/invitations', methods=['GET'])
@permission_required('invitation.manage')
def list_invitations():
    invitations = invitation_service.list(pending_only=arg_bool('pending_only', False))
    return jsonify([serialize_invitation(i) for i in invitations])


@users_bp.route('/invitations', methods=['POST'])
@permission_required('invitation.manage')
def create_invitation():
    data = validate_payload(InvitationForm, json_body())
    invitation = invitation_service.invite(data['email'], data['role'], current_actor())
    return jsonify(serialize_invitation(invitation)), 201


@users_bp.route('/invitations/<invitation_id>/revoke', methods=['POST'])
@permission_required('invitation.manage')
def revoke_invitation(invitation_id):
    invitation = invitation_service.revoke(invitation_id, current_actor())
    return jsonify(serialize_invitation(invitation))


# ============= Administration =============

@users_bp.route('', methods=['GET'])
@permission_required('user.list')
def list_users():
    limit, offset = page_args()
    users, total = user_service.list(
        search=request.args.get('search'),
        role=request.args.get('role'),
        active=arg_bool('active'),
        limit=limit,
        offset=offset,
    )
    return jsonify(page(users, total, limit, offset, _serialize_private))


@users_bp.route('', methods=['POST'])
@permission_required('user.create')
def create_user():
    data = validate_payload(UserForm, json_body())
    user = user_service.create(data, current_actor())
    return jsonify(serialize_user(user, private=True)), 201


@users_bp.route('/<user_id>', methods=['GET'])
def get_user(user_id):
    """Public profile; admins and the member themself get the account fields."""
    viewer = current_actor()
    user = user_service.get_or_404(user_id)
    private = viewer is not None and (viewer.id == user.id or user_can(viewer, 'user.list'))
    if not user.active and not private:
        raise NotFoundError("User not found")
    return jsonify(serialize_user(user, private=private))


@users_bp.route('/<user_id>', methods=['PUT', 'PATCH'])
@permission_required('user.update')
def update_user(user_id):
    data = validate_payload(UserForm, json_body(), partial=request.method == 'PATCH')
    user = user_service.update(user_id, data, current_actor())
    return jsonify(serialize_user(user, private=True))


@users_bp.route('/<user_id>', methods=['DELETE'])
@permission_required('user.delete')
def delete_user(user_id):
    user_service.delete(user_id, current_actor())
    return jsonify({'success': True})


@users_bp.route('/<user_id>/role', methods=['PATCH'])
@permission_required('user.role')
def set_role(user_id):
    data = validate_payload(RoleForm, json_body())
    user = user_service.set_role(user_id, data['role'], current_actor())
    return jsonify(serialize_user(user, private=True))


@users_bp.route('/<user_id>/status', methods=['PATCH'])
@permission_required('user.status')
def set_status(user_id):
    data = validate_payload(StatusForm, json_body())
    user = user_service.set_active(user_id, data['is_active'], current_actor())
    return jsonify(serialize_user(user, private=True))
