"""Moderation history: an append-only log of publish/reject actions per event."""

import logging
from datetime import datetime

from events.domain import EventId, ModerationAction, ModerationLogEntry, PageRequest
from events.stores.interfaces import ModerationLogStore

logger = logging.getLogger(__name__)


class ModerationHistoryService:
    """Records moderation actions and reads them back newest first."""

    def __init__(self, store: ModerationLogStore) -> None:
        self._store = store

    def record(
        self,
        event_id: EventId,
        action: ModerationAction,
        note: str | None,
        acted_on: datetime,
    ) -> ModerationLogEntry:
        entry = self._store.append(event_id, action, note, acted_on)
        logger.info("Moderation %s recorded for event %s (entry %s)", action.value, event_id, entry.id)
        return entry

    def history(self, event_id: EventId, page: PageRequest) -> list[ModerationLogEntry]:
        """Return one page of entries, ordered by acted_on then ID, both descending."""
        return self._store.list_for_event(event_id, page)
