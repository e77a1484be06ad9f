"""Translate raw caller input into domain primitives.

Value objects raise ValueError; callers of services get domain validation
errors instead.
"""

from events.domain import CategoryId, EventId, EventState, PageRequest, RequestId, UserId
from events.domain.errors import InvalidFieldError, InvalidIdError, InvalidPaginationError


def parse_event_id(value: EventId | str) -> EventId:
    if isinstance(value, EventId):
        return value
    try:
        return EventId.from_string(value)
    except (TypeError, ValueError):
        raise InvalidIdError("event ID") from None


def parse_request_id(value: RequestId | str) -> RequestId:
    if isinstance(value, RequestId):
        return value
    try:
        return RequestId.from_string(value)
    except (TypeError, ValueError):
        raise InvalidIdError("request ID") from None


def parse_user_id(value: UserId | int | str) -> UserId:
    if isinstance(value, UserId):
        return value
    try:
        return UserId.from_string(value)
    except (TypeError, ValueError):
        raise InvalidIdError("user ID") from None


def parse_category_id(value: CategoryId | int | str) -> CategoryId:
    if isinstance(value, CategoryId):
        return value
    try:
        return CategoryId.from_string(value)
    except (TypeError, ValueError):
        raise InvalidIdError("category ID") from None


def parse_event_state(value: EventState | str) -> EventState:
    if isinstance(value, EventState):
        return value
    try:
        return EventState(value)
    except ValueError:
        raise InvalidFieldError(f"Unknown event state: {value}") from None


def parse_page(offset: int, size: int) -> PageRequest:
    try:
        return PageRequest(offset=offset, size=size)
    except (TypeError, ValueError) as exc:
        raise InvalidPaginationError(str(exc)) from None
