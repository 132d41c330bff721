"""User accounts, roles and invitations."""

from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import func, or_, select, update

from ledger.errors import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from ledger.extensions import db
from ledger.models import (
    AuditLog,
    ForumDiscussion,
    ForumReply,
    Like,
    NewsArticle,
    NewsComment,
    Poll,
    PollVote,
    Resource,
    ResourceRating,
    StoredObject,
    User,
    UserInvitation,
    UserRole,
    utcnow,
)
from ledger.services.audit import log_admin_action, log_security_event
from ledger.services.crud import CRUDService, paginate, transaction
from ledger.services.email import send_welcome_email


def normalize_email(email: str) -> str:
    return (email or '').strip().lower()


def parse_role(value: UserRole | str) -> UserRole:
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(str(value).lower())
    except ValueError:
        raise ValidationError({'role': [f"Unknown role: {value}"]})


class UserService(CRUDService):
    label = 'User'

    def __init__(self):
        super().__init__(User)

    def find_by_email(self, email: str) -> User | None:
        return self.query().filter(User.email == normalize_email(email)).first()

    def list(
        self,
        search: str | None = None,
        role: str | None = None,
        active: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[User], int]:
        query = self.query()
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                User.email.ilike(pattern),
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
            ))
        if role:
            query = query.filter(User.role == parse_role(role))
        if active is not None:
            query = query.filter(User.active.is_(active))
        return paginate(query.order_by(User.created_at.desc()), limit, offset)

    def _prepare(self, data: dict[str, Any], instance: User | None) -> dict[str, Any]:
        if 'email' in data:
            email = normalize_email(data['email'])
            clash = self.find_by_email(email)
            if clash is not None and clash is not instance:
                raise ConflictError("A user with this email already exists")
            data['email'] = email
        if 'role' in data:
            if data['role']:
                data['role'] = parse_role(data['role'])
            else:
                data.pop('role')
        if 'is_active' in data:
            data['active'] = bool(data.pop('is_active'))
        if 'points' in data and data['points'] is None:
            data.pop('points')
        # Hashed in the after-create/update hooks
        data.pop('password', None)
        return data

    def _after_create(self, instance: User, data: dict[str, Any], user: Any) -> None:
        if data.get('password'):
            instance.set_password(data['password'])

    def _after_update(self, instance: User, data: dict[str, Any], user: Any) -> None:
        if data.get('password'):
            instance.set_password(data['password'])

    def update_profile(self, user: User, data: dict[str, Any]) -> User:
        """Let a member edit their own profile fields."""
        with transaction("update profile"):
            for key, value in data.items():
                setattr(user, key, value)
        return user

    def set_role(self, user_id: str, role: UserRole | str, actor: User) -> User:
        target = self.get_or_404(user_id)
        new_role = parse_role(role)
        if target.id == actor.id and new_role != UserRole.ADMIN:
            raise AuthorizationError("Administrators cannot demote themselves")

        old_role = target.role
        with transaction("change user role"):
            target.role = new_role
            log_admin_action(
                actor,
                "user_role_changed",
                "user",
                target.id,
                metadata={'from': old_role, 'to': new_role},
            )
        return target

    def set_active(self, user_id: str, is_active: bool, actor: User) -> User:
        target = self.get_or_404(user_id)
        if target.id == actor.id and not is_active:
            raise AuthorizationError("Administrators cannot deactivate themselves")

        with transaction("change user status"):
            target.active = bool(is_active)
            log_admin_action(
                actor,
                "user_activated" if is_active else "user_deactivated",
                "user",
                target.id,
            )
        return target

    def update(self, object_id: str, data: dict[str, Any], user: Any = None, skip_log: bool = False) -> User:
        if user is not None and str(object_id) == user.id:
            if data.get('role') and parse_role(data['role']) != user.role:
                raise AuthorizationError("Administrators cannot demote themselves")
            if data.get('is_active') is False:
                raise AuthorizationError("Administrators cannot deactivate themselves")
        return super().update(object_id, data, user, skip_log)

    def delete(self, object_id: str, user: Any = None, skip_log: bool = False) -> None:
        if user is not None and str(object_id) == user.id:
            raise AuthorizationError("Administrators cannot delete their own account")
        super().delete(object_id, user, skip_log)

    def _delete_dependents(self, instance: User) -> None:
        db.session.query(NewsComment).filter(NewsComment.author_id == instance.id).delete(synchronize_session=False)
        db.session.query(ResourceRating).filter(ResourceRating.user_id == instance.id).delete(synchronize_session=False)
        # Their poll votes go with them and the polls they voted in are recounted
        poll_ids = db.session.scalars(select(PollVote.poll_id).where(PollVote.user_id == instance.id)).all()
        db.session.query(PollVote).filter(PollVote.user_id == instance.id).delete(synchronize_session=False)
        if poll_ids:
            db.session.execute(
                update(Poll)
                .where(Poll.id.in_(poll_ids))
                .values(
                    total_votes=select(func.count(PollVote.id))
                    .where(PollVote.poll_id == Poll.id)
                    .scalar_subquery()
                )
            )
        # Likes stay counted on their targets; only the actor link is removed
        db.session.query(Like).filter(Like.user_id == instance.id).update(
            {Like.user_id: None}, synchronize_session=False
        )
        for model, column in (
            (NewsArticle, NewsArticle.author_id),
            (ForumDiscussion, ForumDiscussion.author_id),
            (ForumReply, ForumReply.author_id),
            (Resource, Resource.author_id),
            (Poll, Poll.created_by_id),
            (StoredObject, StoredObject.owner_id),
            (UserInvitation, UserInvitation.invited_by_id),
            (AuditLog, AuditLog.user_id),
        ):
            db.session.query(model).filter(column == instance.id).update({column: None}, synchronize_session=False)


class InvitationService(CRUDService):
    label = 'Invitation'

    def __init__(self):
        super().__init__(UserInvitation)

    def list(self, pending_only: bool = False) -> list[UserInvitation]:
        query = self.query()
        if pending_only:
            query = query.filter(UserInvitation.accepted_at.is_(None), UserInvitation.revoked_at.is_(None))
        return query.order_by(UserInvitation.created_at.desc()).all()

    def pending_for(self, email: str) -> UserInvitation | None:
        return self.query().filter(
            UserInvitation.email == normalize_email(email),
            UserInvitation.accepted_at.is_(None),
            UserInvitation.revoked_at.is_(None),
        ).first()

    def invite(self, email: str, role: UserRole | str, actor: User) -> UserInvitation:
        """
        Invite an email address to join with a given role.

        A previously revoked invitation for the same address is reissued.

        Raises:
            ConflictError: The address already has an account or a pending invitation
        """
        email = normalize_email(email)
        role = parse_role(role)
        if user_service.find_by_email(email) is not None:
            raise ConflictError("A user with this email already exists")

        invitation = self.query().filter(UserInvitation.email == email).first()
        if invitation is not None and invitation.is_pending:
            raise ConflictError("An invitation for this email is already pending")

        with transaction("invite user"):
            if invitation is None:
                invitation = UserInvitation(email=email)
                db.session.add(invitation)
            invitation.role = role
            invitation.invited_by_id = actor.id
            invitation.accepted_at = None
            invitation.revoked_at = None
            db.session.flush()
            log_admin_action(actor, "user_invited", "user_invitation", invitation.id, metadata={'role': role})
        return invitation

    def revoke(self, invitation_id: str, actor: User) -> UserInvitation:
        invitation = self.get_or_404(invitation_id)
        if invitation.accepted_at is not None:
            raise ConflictError("This invitation has already been accepted")
        if invitation.revoked_at is not None:
            return invitation

        with transaction("revoke invitation"):
            invitation.revoked_at = utcnow()
            log_admin_action(actor, "user_invitation_revoked", "user_invitation", invitation.id)
        return invitation


class AccountService:
    """Local email/password accounts."""

    def register(self, data: dict[str, Any]) -> User:
        """
        Register a new account.

        A pending invitation for the address decides the initial role and is
        marked accepted. The welcome email is sent after commit; a failed send
        is logged and does not affect the registration.

        Raises:
            ConflictError: The email is already registered
        """
        email = normalize_email(data['email'])
        if user_service.find_by_email(email) is not None:
            raise ConflictError("An account with this email already exists")

        invitation = invitation_service.pending_for(email)
        with transaction("register user"):
            user = User(
                email=email,
                first_name=data.get('first_name'),
                last_name=data.get('last_name'),
                role=invitation.role if invitation else UserRole.SUBSCRIBER,
                auth_provider='local',
            )
            user.set_password(data['password'])
            db.session.add(user)
            if invitation is not None:
                invitation.accepted_at = utcnow()

        if not send_welcome_email(user.email, user.first_name):
            current_app.logger.warning(f"Welcome email was not delivered to {user.email}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = user_service.find_by_email(email)
        if user is None or not user.check_password(password):
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("This account has been deactivated")
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not user.check_password(current_password):
            raise ValidationError({'current_password': ['Current password is incorrect']})
        with transaction("change password"):
            user.set_password(new_password)
        log_security_event(user, "password_changed")


user_service = UserService()
invitation_service = InvitationService()
account_service = AccountService()


__all__ = [
    'normalize_email',
    'parse_role',
    'UserService',
    'InvitationService',
    'AccountService',
    'user_service',
    'invitation_service',
    'account_service',
]
