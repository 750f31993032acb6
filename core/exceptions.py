"""
Error taxonomy of the API and the project-wide DRF exception handler.

Every error leaves the API as ``{"error": "<message>"}``. Field validation
errors add a ``details`` mapping; any other key passed to an exception through
``extra`` is merged into the envelope as well.
"""

import logging
from collections.abc import Mapping

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)


class ApiError(exceptions.APIException):
    """Base class carrying optional extra envelope fields."""

    def __init__(self, detail=None, extra=None):
        super().__init__(detail)
        self.extra = extra or {}


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'unauthenticated'


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Access denied'
    default_code = 'forbidden'


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'internal_error'


def missing_fields(data, fields):
    """Names from ``fields`` that are absent, null or blank in ``data``."""
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def require_fields(data, fields):
    if not isinstance(data, Mapping):
        raise BadRequest("Request body must be an object")
    missing = missing_fields(data, fields)
    if missing:
        raise BadRequest(
            f"Missing required fields: {', '.join(missing)}",
            extra={'missing': missing})


def _first_message(detail):
    """Dig the first human readable message out of a DRF error structure."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if key == 'non_field_errors':
                return message
            return f"{key}: {message}"
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else 'Invalid input'
    return str(detail)


def api_exception_handler(exc, context):
    """Convert every exception raised by a view into the error envelope."""
    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'unknown view'

    if isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = Forbidden()

    if isinstance(exc, exceptions.ValidationError):
        body = {'error': _first_message(exc.detail), 'details': exc.detail}
    elif isinstance(exc, exceptions.APIException):
        body = {'error': str(exc.detail)}
        body.update(getattr(exc, 'extra', {}))
    else:
        logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=exc)
        exc = InternalError()
        body = {'error': str(exc.detail)}

    headers = {}
    auth_header = getattr(exc, 'auth_header', None)
    if auth_header:
        headers['WWW-Authenticate'] = auth_header
    wait = getattr(exc, 'wait', None)
    if wait:
        headers['Retry-After'] = '%d' % wait

    set_rollback()
    return Response(body, status=exc.status_code, headers=headers)
