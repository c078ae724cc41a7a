"""Id and clock providers shared by the in-memory stores."""

import itertools
import threading
from datetime import datetime, timezone
from uuid import uuid4


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IdProvider:
    """Generates record ids such as ``CONS-...`` or ``APT-...``."""

    def new_id(self, prefix: str) -> str:
        raise NotImplementedError


class UuidIdProvider(IdProvider):
    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid4().hex[:12].upper()}"


class SequentialIdProvider(IdProvider):
    """Deterministic ids (``CONS-000001``), one counter per prefix."""

    def __init__(self):
        self._counters = {}
        self._lock = threading.Lock()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            counter = self._counters.setdefault(prefix, itertools.count(1))
            return f"{prefix}-{next(counter):06d}"
