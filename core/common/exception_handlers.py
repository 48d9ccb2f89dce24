"""
DRF exception handler for PlantOps.

Every error leaves the API as ``{"error": <code>, "message": ..., "details": ...}``
where ``error`` is one of CommonAPIErrorCodes.
"""

import logging
import traceback
from typing import Any, Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError as DjangoValidationError
from django.db.utils import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.common.error_codes import CommonAPIErrorCodes
from core.common.includes.store import StoreError

logger = logging.getLogger("plantops")

# DRF renders Http404 and Django's PermissionDenied itself, so they are
# coded here alongside the DRF exceptions.
ERROR_CODES_BY_EXCEPTION = (
    (Http404, CommonAPIErrorCodes.RESOURCE_NOT_FOUND),
    (PermissionDenied, CommonAPIErrorCodes.PERMISSION_DENIED),
    (drf_exceptions.NotAuthenticated, CommonAPIErrorCodes.AUTHENTICATION_ERROR),
    (drf_exceptions.AuthenticationFailed, CommonAPIErrorCodes.AUTHENTICATION_ERROR),
    (drf_exceptions.PermissionDenied, CommonAPIErrorCodes.AUTHORIZATION_ERROR),
    (drf_exceptions.NotFound, CommonAPIErrorCodes.RESOURCE_NOT_FOUND),
    (drf_exceptions.ParseError, CommonAPIErrorCodes.VALIDATION_ERROR),
    (drf_exceptions.ValidationError, CommonAPIErrorCodes.VALIDATION_ERROR),
    (drf_exceptions.MethodNotAllowed, CommonAPIErrorCodes.OPERATION_NOT_ALLOWED),
    (drf_exceptions.Throttled, CommonAPIErrorCodes.RATE_LIMIT_EXCEEDED),
)

SERVER_ERROR_CODES = (
    CommonAPIErrorCodes.INTERNAL_SERVER_ERROR,
    CommonAPIErrorCodes.DATABASE_ERROR,
    CommonAPIErrorCodes.STORE_ERROR,
)

AUTH_ERROR_CODES = (
    CommonAPIErrorCodes.AUTHENTICATION_ERROR,
    CommonAPIErrorCodes.AUTHORIZATION_ERROR,
    CommonAPIErrorCodes.PERMISSION_DENIED,
)


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Optional[Response]:
    """
    Format an exception raised inside a view.

    DRF exceptions (including the PlantOps APIException subclasses) are
    rendered by DRF first and then reshaped. Django and store exceptions that
    DRF does not know about are mapped here. Anything else becomes a 500.
    """
    request = context.get("request")
    where = f"{request.method} {request.path}" if request else "unknown request"

    response = exception_handler(exc, context)
    if response is not None:
        error_code = _get_error_code(exc)
        _log_exception(exc, error_code, where)

        body = {
            "error": error_code,
            "message": _get_error_message(exc, response.data),
        }
        details = _get_error_details(response.data)
        if details is not None:
            body["details"] = details
        response.data = body
        return response

    error_code, message, details, status_code = _map_unhandled(exc)
    _log_exception(exc, error_code, where)
    return Response(
        {"error": error_code, "message": message, "details": details},
        status=status_code,
    )


def _map_unhandled(exc: Exception) -> tuple[str, str, Any, int]:
    """Return (code, message, details, status) for exceptions DRF does not render."""
    if isinstance(exc, DjangoValidationError):
        details = exc.message_dict if hasattr(exc, "message_dict") else exc.messages
        return (
            CommonAPIErrorCodes.VALIDATION_ERROR,
            "Validation failed.",
            details,
            status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, StoreError):
        return (
            CommonAPIErrorCodes.STORE_ERROR,
            "The data store could not complete the request.",
            _internal_details(exc),
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    if isinstance(exc, DatabaseError):
        return (
            CommonAPIErrorCodes.DATABASE_ERROR,
            "A database error occurred.",
            _internal_details(exc),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    details = _internal_details(exc)
    if settings.DEBUG:
        details = {"exception": str(exc), "traceback": traceback.format_exc().split("\n")}
    return (
        CommonAPIErrorCodes.INTERNAL_SERVER_ERROR,
        "An unexpected error occurred.",
        details,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _internal_details(exc: Exception) -> str:
    return str(exc) if settings.DEBUG else "Please contact support."


def _get_error_code(exc: Exception) -> str:
    for exc_class, error_code in ERROR_CODES_BY_EXCEPTION:
        if isinstance(exc, exc_class):
            return error_code
    return getattr(exc, "default_code", None) or CommonAPIErrorCodes.INTERNAL_SERVER_ERROR


def _get_error_message(exc: Exception, data: Any) -> str:
    detail = getattr(exc, "detail", None)
    if isinstance(detail, str):
        return detail
    if isinstance(data, dict) and isinstance(data.get("detail"), str):
        return data["detail"]
    if isinstance(exc, drf_exceptions.ValidationError):
        return "Validation failed."
    return str(exc)


def _get_error_details(data: Any) -> Optional[dict[str, Any]]:
    """Field errors and any extra keys DRF rendered, without the plain message."""
    if isinstance(data, list):
        return {"errors": data}
    if not isinstance(data, dict):
        return None
    if isinstance(data.get("detail"), str):
        extra = {key: value for key, value in data.items() if key != "detail"}
        return extra or None
    return data


def _log_exception(exc: Exception, error_code: str, where: str) -> None:
    if error_code in SERVER_ERROR_CODES:
        logger.error(f"{error_code} in {where}: {exc.__class__.__name__}", exc_info=exc)
    elif error_code in AUTH_ERROR_CODES:
        logger.warning(f"{error_code} in {where}: {exc}")
    else:
        logger.info(f"{error_code} in {where}: {exc}")
