"""Community polls.

Each member votes once per poll. Votes are rows in ``poll_vote`` guarded by a
(poll, user) unique constraint; ``total_votes`` moves in the same transaction
as the row and per-option tallies are counted from the rows when read.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone
from typing import Any

from flask import current_app
from sqlalchemy import func, or_, update

from ledger.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ledger.extensions import db
from ledger.models import Poll, PollVote, utcnow
from ledger.security.policy import user_can
from ledger.services.crud import CRUDService, transaction

MIN_OPTIONS = 2
MAX_OPTIONS = 10
MAX_OPTION_LENGTH = 200


def is_open(poll: Poll) -> bool:
    """Active and not past its expiry."""
    if not poll.is_active:
        return False
    if poll.expires_at is None:
        return True
    expires_at = poll.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at > utcnow()


def tally(poll_ids) -> dict[str, dict[int, int]]:
    """Votes per option index for each poll id."""
    poll_ids = list(poll_ids)
    counts: dict[str, dict[int, int]] = {poll_id: {} for poll_id in poll_ids}
    if not poll_ids:
        return counts
    rows = (
        db.session.query(PollVote.poll_id, PollVote.option_index, func.count(PollVote.id))
        .filter(PollVote.poll_id.in_(poll_ids))
        .group_by(PollVote.poll_id, PollVote.option_index)
        .all()
    )
    for poll_id, option_index, votes in rows:
        counts[poll_id][option_index] = votes
    return counts


def user_votes(poll_ids, user) -> dict[str, int]:
    """Option index the user picked, per poll they voted in."""
    poll_ids = list(poll_ids)
    if user is None or not poll_ids:
        return {}
    rows = (
        db.session.query(PollVote.poll_id, PollVote.option_index)
        .filter(PollVote.poll_id.in_(poll_ids), PollVote.user_id == user.id)
        .all()
    )
    return {poll_id: option_index for poll_id, option_index in rows}


@dataclass
class VoteResult:
    poll: Poll
    option_index: int
    counted: bool


class PollService(CRUDService):
    label = 'Poll'

    def __init__(self):
        super().__init__(Poll)

    def list(self, user=None, include_closed: bool = False) -> list[Poll]:
        """Open polls, newest first; moderators may ask for closed ones too."""
        query = self.query()
        if not (include_closed and user_can(user, 'poll.manage')):
            query = query.filter(
                Poll.is_active.is_(True),
                or_(Poll.expires_at.is_(None), Poll.expires_at > utcnow()),
            )
        return query.order_by(Poll.created_at.desc()).all()

    def create(self, data: dict[str, Any], user: Any = None, skip_log: bool = True) -> Poll:
        if user is not None:
            data = {**data, 'created_by_id': user.id}
        return super().create(data, user, skip_log)

    def update(self, object_id: str, data: dict[str, Any], user: Any = None, skip_log: bool = False) -> Poll:
        poll = self.get_or_404(object_id)
        self._ensure_can_manage(poll, user)
        if 'options' in data and poll.total_votes:
            raise ConflictError("Options cannot change once votes have been cast")
        return super().update(object_id, data, user, skip_log)

    def delete(self, object_id: str, user: Any = None, skip_log: bool = False) -> None:
        poll = self.get_or_404(object_id)
        self._ensure_can_manage(poll, user)
        super().delete(object_id, user, skip_log)

    def vote(self, poll_id: str, option_index: int, user) -> VoteResult:
        """
        Record ``user``'s vote; a second vote in the same poll is ignored.

        Raises:
            NotFoundError: Unknown poll
            ConflictError: The poll is closed
            ValidationError: No option at ``option_index``
        """
        poll = self.get_or_404(poll_id)
        if not is_open(poll):
            raise ConflictError("This poll is closed")
        if not 0 <= option_index < len(poll.options or []):
            raise ValidationError({'option_index': [f"Poll has no option {option_index}"]})

        existing = db.session.query(PollVote).filter_by(poll_id=poll.id, user_id=user.id).first()
        if existing is not None:
            return VoteResult(poll=poll, option_index=existing.option_index, counted=False)

        try:
            with transaction("vote in poll"):
                db.session.add(PollVote(poll_id=poll.id, user_id=user.id, option_index=option_index))
                db.session.flush()
                db.session.execute(
                    update(Poll).where(Poll.id == poll.id).values(total_votes=Poll.total_votes + 1)
                )
            counted = True
        except ConflictError:
            current_app.logger.info(f"Duplicate vote ignored for poll {poll.id} by user {user.id}")
            counted = False

        db.session.refresh(poll)
        return VoteResult(poll=poll, option_index=option_index, counted=counted)

    @staticmethod
    def _ensure_can_manage(poll: Poll, user) -> None:
        if poll.created_by_id is not None and poll.created_by_id == getattr(user, 'id', None):
            return
        if user_can(user, 'poll.manage'):
            return
        raise AuthorizationError("Only the poll's author or a moderator can change it")

    def _prepare(self, data: dict[str, Any], instance) -> dict[str, Any]:
        if 'options' in data or instance is None:
            options = [option.strip() for option in data.get('options') or [] if option.strip()]
            errors = []
            if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
                errors.append(f"Provide between {MIN_OPTIONS} and {MAX_OPTIONS} options")
            if len({option.lower() for option in options}) != len(options):
                errors.append("Options must be unique")
            if any(len(option) > MAX_OPTION_LENGTH for option in options):
                errors.append(f"Options are limited to {MAX_OPTION_LENGTH} characters")
            if errors:
                raise ValidationError({'options': errors})
            data['options'] = options
        if 'is_active' in data and data['is_active'] is None:
            data.pop('is_active')
        return data

    def _delete_dependents(self, instance: Poll) -> None:
        db.session.query(PollVote).filter(PollVote.poll_id == instance.id).delete(synchronize_session=False)


poll_service = PollService()


__all__ = ['MAX_OPTIONS', 'PollService', 'VoteResult', 'is_open', 'poll_service', 'tally', 'user_votes']
