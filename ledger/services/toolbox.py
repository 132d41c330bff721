"""Toolbox applications shown on the controller and FP&A pages."""

from __future__ import annotations

from typing import Any

from ledger.errors import NotFoundError, ValidationError
from ledger.models import ToolboxApp, ToolboxSection, ToolboxStatus
from ledger.security.policy import user_can
from ledger.services.crud import CRUDService


class ToolboxService(CRUDService):
    label = 'Toolbox app'

    def __init__(self):
        super().__init__(ToolboxApp)

    def list(self, user=None, section: str | None = None) -> list[ToolboxApp]:
        """Active apps in display order; admins also see inactive ones."""
        query = self.query()
        if not user_can(user, 'toolbox.manage'):
            query = query.filter(ToolboxApp.is_active.is_(True))
        if section:
            query = query.filter(ToolboxApp.section == self._section(section))
        return query.order_by(ToolboxApp.display_order, ToolboxApp.name).all()

    def get_visible(self, app_id: str, user=None) -> ToolboxApp:
        app = self.get_or_404(app_id)
        if not app.is_active and not user_can(user, 'toolbox.manage'):
            raise NotFoundError("Toolbox app not found")
        return app

    @staticmethod
    def _section(value: str) -> ToolboxSection:
        try:
            return ToolboxSection(value)
        except ValueError:
            raise ValidationError({'section': [f"Unknown section: {value}"]})

    def _prepare(self, data: dict[str, Any], instance) -> dict[str, Any]:
        # Admins may move an app to any lifecycle status, not only the next one
        if data.get('section'):
            data['section'] = self._section(data['section'])
        else:
            data.pop('section', None)
        if data.get('status'):
            try:
                data['status'] = ToolboxStatus(data['status'])
            except ValueError:
                raise ValidationError({'status': [f"Unknown status: {data['status']}"]})
        else:
            data.pop('status', None)
        if 'display_order' in data and data['display_order'] is None:
            data.pop('display_order')
        return data


toolbox_service = ToolboxService()


__all__ = ['ToolboxService', 'toolbox_service']
