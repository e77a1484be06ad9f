from events.handlers.views import (
    AdminEventDetailView,
    AdminEventListView,
    AdminModerationHistoryView,
    PublicEventDetailView,
    UserEventDetailView,
    UserEventListView,
    UserEventRequestsView,
    UserRequestCancelView,
    UserRequestListView,
)

__all__ = [
    "AdminEventDetailView",
    "AdminEventListView",
    "AdminModerationHistoryView",
    "PublicEventDetailView",
    "UserEventDetailView",
    "UserEventListView",
    "UserEventRequestsView",
    "UserRequestCancelView",
    "UserRequestListView",
]
