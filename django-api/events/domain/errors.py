"""Domain error codes for the events module.

Every error belongs to one of three kinds. Handlers map the kind to an HTTP
status; services never know about HTTP.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Broad error categories."""

    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION"


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_EVENT_DATE = "INVALID_EVENT_DATE"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_STATUS_UPDATE = "INVALID_STATUS_UPDATE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    EVENT_ALREADY_PUBLISHED = "EVENT_ALREADY_PUBLISHED"
    EVENT_NOT_PENDING = "EVENT_NOT_PENDING"
    PUBLISH_TOO_LATE = "PUBLISH_TOO_LATE"
    EVENT_NOT_PUBLISHED = "EVENT_NOT_PUBLISHED"
    SELF_PARTICIPATION = "SELF_PARTICIPATION"
    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    PARTICIPANT_LIMIT_REACHED = "PARTICIPANT_LIMIT_REACHED"
    LIMIT_BELOW_CONFIRMED = "LIMIT_BELOW_CONFIRMED"
    NOT_EVENT_INITIATOR = "NOT_EVENT_INITIATOR"
    REQUEST_NOT_PENDING = "REQUEST_NOT_PENDING"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    kind: ClassVar[ErrorKind]

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced object does not exist or is not visible to the caller."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(DomainError):
    """A business-rule precondition is violated."""

    kind = ErrorKind.CONFLICT


class ValidationError(DomainError):
    """Input is malformed."""

    kind = ErrorKind.VALIDATION


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: object) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class RequestNotFoundError(NotFoundError):
    """Raised when a participation request is not found or not owned by the caller."""

    def __init__(self, request_id: object) -> None:
        super().__init__(
            code=ErrorCode.REQUEST_NOT_FOUND,
            message="Participation request not found",
        )
        self.request_id = request_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: object) -> None:
        super().__init__(code=ErrorCode.USER_NOT_FOUND, message="User not found")
        self.user_id = user_id


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: object) -> None:
        super().__init__(code=ErrorCode.CATEGORY_NOT_FOUND, message="Category not found")
        self.category_id = category_id


class InvalidIdError(ValidationError):
    """Raised when an identifier is malformed."""

    def __init__(self, field: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ID, message=f"Invalid {field} format")
        self.field = field


class InvalidPaginationError(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PAGINATION, message=message)


class InvalidEventDateError(ValidationError):
    """Raised when the event date violates the minimum lead time."""

    def __init__(self, hours: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_DATE,
            message=f"Event date must be at least {hours} hour(s) from now",
        )


class InvalidFieldError(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_FIELD, message=message)


class InvalidStatusUpdateError(ValidationError):
    """Raised when a bulk status update request is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_STATUS_UPDATE, message=message)


class InvalidDateRangeError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE_RANGE,
            message="Range start must not be after range end",
        )


class EventAlreadyPublishedError(ConflictError):
    """Raised on any attempt to change a published event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_ALREADY_PUBLISHED,
            message="Published events cannot be changed",
        )


class EventNotPendingError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_PENDING,
            message="Only pending events can be published",
        )


class PublishTooLateError(ConflictError):
    def __init__(self, hours: int) -> None:
        super().__init__(
            code=ErrorCode.PUBLISH_TOO_LATE,
            message=f"Event must start at least {hours} hour(s) after publication",
        )


class EventNotPublishedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_PUBLISHED,
            message="Cannot participate in an unpublished event",
        )


class SelfParticipationError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SELF_PARTICIPATION,
            message="Event initiator cannot request participation",
        )


class DuplicateRequestError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REQUEST,
            message="Participation request already exists",
        )


class ParticipantLimitReachedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PARTICIPANT_LIMIT_REACHED,
            message="Participant limit has been reached",
        )


class LimitBelowConfirmedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.LIMIT_BELOW_CONFIRMED,
            message="Participant limit cannot be lower than confirmed requests",
        )


class NotEventInitiatorError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_EVENT_INITIATOR,
            message="Only the event initiator can change request statuses",
        )


class RequestNotPendingError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REQUEST_NOT_PENDING,
            message="Only pending requests can change status",
        )
