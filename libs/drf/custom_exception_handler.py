import logging

import sentry_sdk
from drf_standardized_errors.handler import exception_handler as drf_exception_handler
from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ServiceUnavailableError(Exception):
    """Base class for storage failures the caller is expected to retry."""

    pass


def exception_handler(exc, context):
    if isinstance(exc, ServiceUnavailableError):
        sentry_sdk.capture_exception(exc)
        logger.error("Retryable service failure in %s: %s", context.get("view"), exc)
        return Response(
            {"type": "server_error", "errors": [{"code": "retry", "detail": str(exc), "attr": None}]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    # call drf_standardized_errors
    response = drf_exception_handler(exc, context)

    # If response is None --> raise the exception to let Sentry capture it
    if response is None:
        sentry_sdk.capture_exception(exc)
        raise exc

    # If status code is 5xx, capture the exception with Sentry
    if response.status_code >= 500:
        sentry_sdk.capture_exception(exc)

    return response
