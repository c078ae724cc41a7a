# backend/clinic/services/logging_agent.py

import json
import logging
from typing import Any, List, Optional

from pydantic import BaseModel

from clinic.core.ids import IdProvider, UuidIdProvider, utc_now
from clinic.models.records import LogEntry, LogResult, LogStatus

logger = logging.getLogger(__name__)


def _snapshot(value: Any) -> Any:
    """Deep copy through a JSON round trip so later mutation cannot leak in."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    return json.loads(json.dumps(value))


class AuditLogger:
    """Append-only record of every agent invocation.

    Logging must never break the caller's flow: a payload that cannot be
    serialised is reported as ``logged=False`` instead of raising.
    """

    def __init__(self, id_provider: Optional[IdProvider] = None):
        self._entries: List[LogEntry] = []
        self._ids = id_provider or UuidIdProvider()

    async def log_interaction(
        self,
        agent_name: str,
        user_id: str,
        payload: Any,
        response: Any,
        success: bool = True,
    ) -> LogResult:
        try:
            entry = LogEntry(
                id=self._ids.new_id("LOG"),
                timestamp=utc_now(),
                agent_name=agent_name,
                user_id=user_id,
                payload=_snapshot(payload),
                response=_snapshot(response),
                status=LogStatus.SUCCESS if success else LogStatus.FAILURE,
            )
        except (TypeError, ValueError):
            logger.exception("Audit logging failed for %s (user=%s)", agent_name, user_id)
            return LogResult(logged=False, log_id="failed")

        self._entries.append(entry)
        logger.info(
            "[AI AUDIT LOG] %s user=%s status=%s id=%s",
            agent_name,
            user_id,
            entry.status.value,
            entry.id,
        )
        return LogResult(logged=True, log_id=entry.id)

    async def get_logs(self) -> List[LogEntry]:
        return [entry.model_copy(deep=True) for entry in self._entries]
