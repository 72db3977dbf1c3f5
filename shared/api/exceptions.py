"""DRF exception handler for domain errors.

Views call straight into command handlers and services; whatever
``DomainError`` they raise is answered here with the status code the
error carries.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    if isinstance(exc, DomainError):
        if exc.status_code >= 500:
            logger.error(f"Unhandled domain failure: {exc.message}", exc_info=exc)
        return Response({"detail": exc.message}, status=exc.status_code)
    return drf_exception_handler(exc, context)
