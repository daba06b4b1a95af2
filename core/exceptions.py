import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


def _flatten_messages(detail):
    """Collects every error string from a (possibly nested) DRF error structure."""
    if isinstance(detail, dict):
        messages = []
        for value in detail.values():
            messages.extend(_flatten_messages(value))
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for value in detail:
            messages.extend(_flatten_messages(value))
        return messages
    return [str(detail)]


def api_exception_handler(exc, context):
    """
    Renders every API error as ``{"success": false, "message": ...}``.

    DRF's default handler decides the status code for the exceptions it knows about (validation,
    authentication, permission, not found). Its body is then rewritten into the envelope;
    validation errors keep the per-field detail under ``errors``.

    Database errors that reach the view (for example the unique constraint on reviews losing a
    race) are not translated further: they are logged and answered with a generic 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, DatabaseError):
            view = context.get('view')
            logger.exception("Unhandled database error in %s", type(view).__name__)
            set_rollback()
            return Response(
                {'success': False, 'message': 'Server Error'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return None

    if isinstance(exc, ValidationError):
        body = {
            'success': False,
            'message': ', '.join(_flatten_messages(response.data)),
        }
        if isinstance(response.data, dict):
            body['errors'] = response.data
    else:
        detail = response.data.get('detail') if isinstance(response.data, dict) else response.data
        body = {'success': False, 'message': ', '.join(_flatten_messages(detail))}

    response.data = body
    return response
