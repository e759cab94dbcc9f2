"""
Error taxonomy shared by the quote, shipment and master-data apps.

Validation failures use DRF's ``serializers.ValidationError`` directly and
missing documents use ``NotFound``/``Http404``. The classes below cover the
cases DRF has no name for.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidTransition(APIException):
    """
    A workflow action that the current status does not allow
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This action is not allowed in the current status.'
    default_code = 'invalid_transition'

    def __init__(self, action=None, current_status=None, detail=None):
        self.action = action
        self.current_status = current_status
        if detail is None and action is not None:
            detail = f"Cannot {action} a quote with status '{current_status}'"
        super().__init__(detail=detail)


class PersistenceError(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'The document store could not complete the request.'
    default_code = 'persistence_error'


class CostLineNotFound(NotFound):
    default_detail = 'Cost line not found.'
    default_code = 'cost_line_not_found'

    def __init__(self, index=None, size=None):
        detail = None
        if index is not None:
            detail = f"No cost line at index {index} ({size} line{'s' if size != 1 else ''} present)"
        super().__init__(detail=detail)


def api_exception_handler(exc, context):
    """
    Convert store failures into PersistenceError before DRF renders them
    """
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(
            "Store failure in %s: %s",
            view.__class__.__name__ if view else 'unknown view',
            exc,
        )
        exc = PersistenceError(detail=f"Store error: {str(exc)[:120]}")

    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, InvalidTransition):
        response.data['action'] = exc.action
        response.data['status'] = exc.current_status
    return response
