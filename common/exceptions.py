"""
Domain errors and the DRF exception handler for the Huddle API.

Services raise the exceptions defined here; the handler renders every
error into the same JSON envelope.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    NotAuthenticated,
    ValidationError as DRFValidationError,
)
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ValidationError(APIException):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'validation_error'


class AuthError(APIException):
    """Missing credentials or bad username/password."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication required.'
    default_code = 'authentication_failed'


class InvalidTokenError(AuthError):
    """A bearer token was presented but could not be verified."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Invalid or expired token.'
    default_code = 'token_invalid'


class ForbiddenError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'permission_denied'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'The requested resource was not found.'
    default_code = 'not_found'


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The resource already exists.'
    default_code = 'conflict'


class InternalError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'An unexpected error occurred. Please try again later.'
    default_code = 'internal_error'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent JSON error responses.

    Response format:
    {
        "success": false,
        "error": {
            "code": "error_code",
            "message": "Human-readable message",
            "details": { ... }  // optional, for field-level validation errors
        }
    }
    """
    # rest_framework.views imports the authentication classes, which import
    # this module.
    from rest_framework.views import exception_handler

    # Convert Django ValidationError to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.message_dict if hasattr(exc, 'message_dict') else exc.messages)

    # Store failures surface as InternalError
    if isinstance(exc, DatabaseError):
        logger.error(
            'Database error in %s',
            context.get('view', 'unknown view'),
            exc_info=exc,
        )
        exc = InternalError()

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is None:
        # Unhandled exception
        logger.exception(
            'Unhandled exception in %s',
            context.get('view', 'unknown view'),
            exc_info=exc,
        )
        return Response(
            {
                'success': False,
                'error': {
                    'code': InternalError.default_code,
                    'message': str(InternalError.default_detail),
                },
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    error_response = {
        'success': False,
        'error': _format_error(exc, response),
    }

    response.data = error_response
    return response


def _format_error(exc, response):
    """Format the error payload based on exception type."""
    if isinstance(exc, DRFValidationError):
        return {
            'code': 'validation_error',
            'message': 'Invalid input.',
            'details': response.data,
        }

    if isinstance(exc, Http404):
        return {
            'code': 'not_found',
            'message': 'The requested resource was not found.',
        }

    if isinstance(exc, NotAuthenticated):
        return {
            'code': AuthError.default_code,
            'message': str(AuthError.default_detail),
        }

    if isinstance(exc, InternalError):
        # Never leak internal detail to the caller.
        return {
            'code': InternalError.default_code,
            'message': str(InternalError.default_detail),
        }

    if isinstance(exc, APIException):
        return {
            'code': exc.default_code if hasattr(exc, 'default_code') else 'error',
            'message': str(exc.detail) if hasattr(exc, 'detail') else str(exc),
        }

    return {
        'code': 'error',
        'message': 'An error occurred.',
    }
