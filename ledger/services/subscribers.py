"""Newsletter subscriptions (independent of user accounts)."""

from __future__ import annotations

from typing import Any

from ledger.errors import ConflictError, NotFoundError
from ledger.extensions import db
from ledger.models import Subscriber, utcnow
from ledger.services.crud import CRUDService, paginate, transaction


class SubscriberService(CRUDService):
    label = 'Subscriber'

    def __init__(self):
        super().__init__(Subscriber)

    def find_by_email(self, email: str) -> Subscriber | None:
        return self.query().filter(Subscriber.email == email.strip().lower()).first()

    def list(self, active_only: bool = False, limit: int | None = None, offset: int | None = None):
        query = self.query()
        if active_only:
            query = query.filter(Subscriber.is_active.is_(True))
        return paginate(query.order_by(Subscriber.created_at.desc()), limit, offset)

    def subscribe(self, data: dict[str, Any]) -> tuple[Subscriber, bool]:
        """
        Subscribe an email address.

        An inactive subscription for the same address is reactivated with the
        new preferences.

        Returns:
            (subscriber, created)

        Raises:
            ConflictError: The address already has an active subscription
        """
        email = data['email'].strip().lower()
        existing = self.find_by_email(email)
        if existing is not None and existing.is_active:
            raise ConflictError("This email is already subscribed")

        with transaction("subscribe"):
            if existing is None:
                subscriber = Subscriber(email=email)
                db.session.add(subscriber)
                created = True
            else:
                subscriber = existing
                subscriber.is_active = True
                created = False
            subscriber.categories = data.get('categories') or []
            subscriber.frequency = data.get('frequency') or 'weekly'
            subscriber.confirmed_at = utcnow()
        return subscriber, created

    def unsubscribe(self, email: str) -> Subscriber:
        subscriber = self.find_by_email(email)
        if subscriber is None:
            raise NotFoundError("No subscription for this email")
        with transaction("unsubscribe"):
            subscriber.is_active = False
        return subscriber


subscriber_service = SubscriberService()


__all__ = ['SubscriberService', 'subscriber_service']
