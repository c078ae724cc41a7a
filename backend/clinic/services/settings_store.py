# backend/clinic/services/settings_store.py

import logging
from typing import Optional

from clinic.models.settings import SystemSettings, SystemSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsStore:
    """Clinic-wide toggles edited from the admin settings page."""

    def __init__(self, initial: Optional[SystemSettings] = None):
        self._settings = (initial or SystemSettings()).model_copy()

    async def get_settings(self) -> SystemSettings:
        return self._settings.model_copy()

    async def update_settings(self, updates: SystemSettingsUpdate) -> SystemSettings:
        changes = updates.model_dump(exclude_unset=True)
        self._settings = self._settings.model_copy(update=changes)
        logger.info("System settings updated: %s", sorted(changes))
        return self._settings.model_copy()
