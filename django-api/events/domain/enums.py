"""Closed sets of states and actions."""

from enum import Enum


class EventState(Enum):
    """Event moderation state.

    PENDING -> PUBLISHED (moderator publishes)
    PENDING -> CANCELED (owner cancels review or moderator rejects)
    CANCELED -> PENDING (owner sends back to review)
    PUBLISHED is terminal.
    """

    PENDING = "PENDING"
    PUBLISHED = "PUBLISHED"
    CANCELED = "CANCELED"


class RequestStatus(Enum):
    """Participation request status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"


class ModerationAction(Enum):
    PUBLISH = "PUBLISH"
    REJECT = "REJECT"


class OwnerStateAction(Enum):
    """State actions available to the event owner."""

    SEND_TO_REVIEW = "SEND_TO_REVIEW"
    CANCEL_REVIEW = "CANCEL_REVIEW"


class ModeratorStateAction(Enum):
    """State actions available to a platform moderator."""

    PUBLISH_EVENT = "PUBLISH_EVENT"
    REJECT_EVENT = "REJECT_EVENT"
