"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to the exception handler (handlers/errors.py)
- Never contain business logic
- Never expose internal error details

The acting user comes from the URL; authentication happens in front of this app.
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events import container
from events.domain.errors import InvalidPaginationError
from events.handlers.serializers import (
    AdminEventSearchSerializer,
    EventSerializer,
    ModerationLogEntrySerializer,
    NewEventSerializer,
    ParticipationRequestSerializer,
    StatusUpdateRequestSerializer,
    StatusUpdateResultSerializer,
    UpdateEventAdminSerializer,
    UpdateEventUserSerializer,
)


def _int_param(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidPaginationError(f"{name} must be an integer") from None


class UserEventListView(APIView):
    """Handler for GET/POST /api/users/{user_id}/events"""

    def get(self, request: Request, user_id: str) -> Response:
        events = container.event_lifecycle_service().list_owner_events(
            user_id,
            offset=_int_param(request, "from", 0),
            size=_int_param(request, "size", 10),
        )
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request, user_id: str) -> Response:
        serializer = NewEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = container.event_lifecycle_service().create_event(user_id, serializer.to_command())
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class UserEventDetailView(APIView):
    """Handler for GET/PATCH /api/users/{user_id}/events/{event_id}"""

    def get(self, request: Request, user_id: str, event_id: str) -> Response:
        event = container.event_lifecycle_service().get_owner_event(user_id, event_id)
        return Response(EventSerializer(event).data)

    def patch(self, request: Request, user_id: str, event_id: str) -> Response:
        serializer = UpdateEventUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = container.event_lifecycle_service().update_event_by_owner(
            user_id, event_id, serializer.to_command()
        )
        return Response(EventSerializer(event).data)


class UserEventRequestsView(APIView):
    """Handler for GET/PATCH /api/users/{user_id}/events/{event_id}/requests"""

    def get(self, request: Request, user_id: str, event_id: str) -> Response:
        requests = container.request_admission_service().list_requests_for_event(user_id, event_id)
        return Response(ParticipationRequestSerializer(requests, many=True).data)

    def patch(self, request: Request, user_id: str, event_id: str) -> Response:
        serializer = StatusUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.request_admission_service().bulk_update_status(
            user_id,
            event_id,
            serializer.validated_data["request_ids"],
            serializer.validated_data["status"],
        )
        return Response(StatusUpdateResultSerializer(result).data)


class UserRequestListView(APIView):
    """Handler for GET/POST /api/users/{user_id}/requests"""

    def get(self, request: Request, user_id: str) -> Response:
        requests = container.request_admission_service().list_requests_for_requester(user_id)
        return Response(ParticipationRequestSerializer(requests, many=True).data)

    def post(self, request: Request, user_id: str) -> Response:
        event_id = request.query_params.get("event_id")
        if not event_id:
            raise ValidationError({"event_id": ["This query parameter is required."]})
        participation = container.request_admission_service().create_request(user_id, event_id)
        return Response(
            ParticipationRequestSerializer(participation).data, status=status.HTTP_201_CREATED
        )


class UserRequestCancelView(APIView):
    """Handler for PATCH /api/users/{user_id}/requests/{request_id}/cancel"""

    def patch(self, request: Request, user_id: str, request_id: str) -> Response:
        participation = container.request_admission_service().cancel_request(user_id, request_id)
        return Response(ParticipationRequestSerializer(participation).data)


class AdminEventListView(APIView):
    """Handler for GET /api/admin/events"""

    def get(self, request: Request) -> Response:
        serializer = AdminEventSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        events = container.event_lifecycle_service().search_events_for_admin(
            **serializer.search_kwargs(),
            offset=_int_param(request, "from", 0),
            size=_int_param(request, "size", 10),
        )
        return Response(EventSerializer(events, many=True).data)


class AdminEventDetailView(APIView):
    """Handler for PATCH /api/admin/events/{event_id}"""

    def patch(self, request: Request, event_id: str) -> Response:
        serializer = UpdateEventAdminSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = container.event_lifecycle_service().update_event_by_moderator(
            event_id, serializer.to_command()
        )
        return Response(EventSerializer(event).data)


class AdminModerationHistoryView(APIView):
    """Handler for GET /api/admin/events/{event_id}/moderation"""

    def get(self, request: Request, event_id: str) -> Response:
        entries = container.event_lifecycle_service().get_moderation_history(
            event_id,
            offset=_int_param(request, "from", 0),
            size=_int_param(request, "size", 10),
        )
        return Response(ModerationLogEntrySerializer(entries, many=True).data)


class PublicEventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = container.event_lifecycle_service().get_published_event(event_id)
        return Response(EventSerializer(event).data)
