from django.urls import path

from events.handlers import (
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

urlpatterns = [
    path("users/<str:user_id>/events", UserEventListView.as_view(), name="user-event-list"),
    path(
        "users/<str:user_id>/events/<str:event_id>",
        UserEventDetailView.as_view(),
        name="user-event-detail",
    ),
    path(
        "users/<str:user_id>/events/<str:event_id>/requests",
        UserEventRequestsView.as_view(),
        name="user-event-requests",
    ),
    path("users/<str:user_id>/requests", UserRequestListView.as_view(), name="user-request-list"),
    path(
        "users/<str:user_id>/requests/<str:request_id>/cancel",
        UserRequestCancelView.as_view(),
        name="user-request-cancel",
    ),
    path("admin/events", AdminEventListView.as_view(), name="admin-event-list"),
    path("admin/events/<str:event_id>", AdminEventDetailView.as_view(), name="admin-event-detail"),
    path(
        "admin/events/<str:event_id>/moderation",
        AdminModerationHistoryView.as_view(),
        name="admin-moderation-history",
    ),
    path("events/<str:event_id>", PublicEventDetailView.as_view(), name="public-event-detail"),
]
