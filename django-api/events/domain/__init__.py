from events.domain.commands import (
    EventPatch,
    EventSearchFilters,
    ModeratorEventPatch,
    NewEvent,
    OwnerEventPatch,
)
from events.domain.enums import (
    EventState,
    ModerationAction,
    ModeratorStateAction,
    OwnerStateAction,
    RequestStatus,
)
from events.domain.models import Event, ModerationLogEntry, ParticipationRequest, StatusUpdateResult
from events.domain.value_objects import (
    Capacity,
    CategoryId,
    EventId,
    LifecyclePolicy,
    Location,
    PageRequest,
    RequestId,
    UserId,
)

__all__ = [
    "Event",
    "ParticipationRequest",
    "ModerationLogEntry",
    "StatusUpdateResult",
    "NewEvent",
    "EventPatch",
    "EventSearchFilters",
    "OwnerEventPatch",
    "ModeratorEventPatch",
    "EventState",
    "RequestStatus",
    "ModerationAction",
    "OwnerStateAction",
    "ModeratorStateAction",
    "EventId",
    "RequestId",
    "UserId",
    "CategoryId",
    "Capacity",
    "Location",
    "PageRequest",
    "LifecyclePolicy",
]
