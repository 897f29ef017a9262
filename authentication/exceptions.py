# exceptions.py
from rest_framework.views import exception_handler
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError
from contextlib import contextmanager
import logging

logger = logging.getLogger(__name__)


class ConflictError(APIException):
    """Write refused because of existing data (duplicate name, record still referenced)"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The operation conflicts with existing data.'
    default_code = 'conflict'


class TransientError(APIException):
    """Backend or network failure; the same request may succeed later"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'The server could not complete the operation. Please try again later.'
    default_code = 'transient'


class UploadError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Image upload failed.'
    default_code = 'upload_failed'


@contextmanager
def backend_errors(action):
    """Turn database failures raised inside the block into API errors"""
    try:
        yield
    except IntegrityError as e:
        logger.warning(f"Integrity error while {action}: {e}")
        raise ConflictError("A record with these values already exists.") from e
    except DatabaseError as e:
        logger.error(f"Backend failure while {action}: {e}")
        raise TransientError() from e


def error_message(detail):
    """Flatten a DRF error detail (str, list or dict) into its first message"""
    if isinstance(detail, dict):
        for value in detail.values():
            return error_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return error_message(detail[0]) if detail else ''
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Render every API failure as {"error": "<message>"}
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        data = {'error': error_message(response.data)}
        if response.status_code == 400 and isinstance(response.data, (dict, list)):
            data['details'] = response.data
        if response.status_code >= 500:
            logger.error(f"Server error in {context.get('view').__class__.__name__}: {exc}")
        response.data = data

    # Handle Django ValidationError
    elif isinstance(exc, ValidationError):
        logger.warning(f"Validation Error: {exc}")
        response = Response({
            'error': exc.messages[0] if exc.messages else 'Validation error',
            'details': {'non_field_errors': exc.messages},
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle Django IntegrityError
    elif isinstance(exc, IntegrityError):
        logger.error(f"Integrity Error: {exc}")
        response = Response({
            'error': 'This operation violates database constraints',
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle unexpected errors
    else:
        logger.exception(f"Unexpected Error: {exc}")
        response = Response({
            'error': 'An unexpected error occurred',
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return response
