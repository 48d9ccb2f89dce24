"""
API exceptions raised by PlantOps views and models.

Each carries an HTTP status and one of CommonAPIErrorCodes, which the
exception handler puts in the ``error`` field of the response.
"""

from rest_framework import status
from rest_framework.exceptions import APIException

from core.common.error_codes import CommonAPIErrorCodes


class PlantOpsBaseException(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "An unexpected error occurred."
    default_code = CommonAPIErrorCodes.INTERNAL_SERVER_ERROR


class DuplicateEntityException(PlantOpsBaseException):
    """
    A task reference, or a PPM task for the same asset and due date, already
    exists.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The entity already exists."
    default_code = CommonAPIErrorCodes.DUPLICATE_ENTITY


class InvalidStatusTransitionException(PlantOpsBaseException):
    """
    A task was moved to a status it cannot reach. Completed is terminal.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This status change is not allowed."
    default_code = CommonAPIErrorCodes.INVALID_STATUS_TRANSITION
