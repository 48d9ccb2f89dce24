"""
Response helpers for PlantOps views.

Errors share the ``{"error", "message", "details"}`` body produced by the
exception handler, so views that report a failure without raising look the
same to API clients.
"""

from typing import Any, Optional

from rest_framework import status
from rest_framework.response import Response

from core.common.error_codes import CommonAPIErrorCodes


def error_response(
    error_code: str,
    message: str,
    details: Optional[Any] = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    """Error body with an optional ``details`` entry."""
    body = {"error": error_code, "message": message}
    if details is not None:
        body["details"] = details
    return Response(body, status=status_code)


def not_found_response(
    message: str = "The requested resource was not found.", details: Optional[Any] = None
) -> Response:
    return error_response(
        CommonAPIErrorCodes.RESOURCE_NOT_FOUND, message, details, status.HTTP_404_NOT_FOUND
    )


def store_error_response(
    message: str = "The data store could not complete the request.", details: Optional[Any] = None
) -> Response:
    """
    503 for a store query that reported failure in its result.

    Lets clients tell "nothing found" apart from "could not look".
    """
    return error_response(
        CommonAPIErrorCodes.STORE_ERROR, message, details, status.HTTP_503_SERVICE_UNAVAILABLE
    )


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """
    Success body. Dict data is merged into the body, anything else goes under
    ``data``. ``message`` is added when given.
    """
    if isinstance(data, dict):
        body = dict(data)
    elif data is not None:
        body = {"data": data}
    else:
        body = {}

    if message is not None:
        body["message"] = message
    return Response(body, status=status_code)


def created_response(data: Any = None, message: str = "Resource created successfully.") -> Response:
    return success_response(data, message, status.HTTP_201_CREATED)
