from events.services.clock import Clock, SystemClock
from events.services.event_service import EventLifecycleService
from events.services.moderation_service import ModerationHistoryService
from events.services.request_service import RequestAdmissionService

__all__ = [
    "Clock",
    "SystemClock",
    "EventLifecycleService",
    "ModerationHistoryService",
    "RequestAdmissionService",
]
