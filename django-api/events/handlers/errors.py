"""Map exceptions to API error responses.

Installed as DRF's EXCEPTION_HANDLER. Domain errors map by kind, DRF errors
keep their status, anything else becomes a 500 without internal details.
"""

import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from events.domain.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}

_REASONS = {
    status.HTTP_400_BAD_REQUEST: "Incorrectly made request.",
    status.HTTP_404_NOT_FOUND: "The required object was not found.",
    status.HTTP_409_CONFLICT: "For the requested operation the conditions are not met.",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal server error",
}


def api_error(status_code: int, message: str, code: str, errors: list[str]) -> dict[str, object]:
    return {
        "status": status_code,
        "reason": _REASONS.get(status_code, "Request failed."),
        "message": message,
        "code": code,
        "errors": errors,
        "timestamp": timezone.now().strftime("%Y-%m-%d %H:%M:%S"),
    }


def _flatten(detail, prefix: str = "") -> list[str]:
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            messages.extend(_flatten(value, f"{prefix}{field}: "))
        return messages
    if isinstance(detail, list):
        return [m for item in detail for m in _flatten(item, prefix)]
    return [f"{prefix}{detail}"]


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    if isinstance(exc, DomainError):
        status_code = _STATUS_BY_KIND[exc.kind]
        logger.warning("%s %s", exc.code.value, exc.message)
        return Response(
            api_error(status_code, exc.message, exc.code.value, [exc.message]),
            status=status_code,
        )

    response = exception_handler(exc, context)
    if response is None:
        logger.error("Unhandled error in %s", context.get("view"), exc_info=exc)
        return Response(
            api_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An unexpected error occurred",
                "INTERNAL_ERROR",
                [],
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, DRFValidationError):
        errors = _flatten(exc.detail)
        logger.warning("Request validation failed: %s", "; ".join(errors))
        response.data = api_error(response.status_code, "; ".join(errors), "INVALID_REQUEST", errors)
    elif isinstance(exc, APIException):
        response.data = api_error(
            response.status_code, str(exc.detail), exc.default_code.upper(), [str(exc.detail)]
        )
    return response
