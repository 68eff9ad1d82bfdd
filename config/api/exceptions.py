from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .responses import JSONValue, error_payload

if TYPE_CHECKING:
    from rest_framework.response import Response

logger = logging.getLogger(__name__)


def _to_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json_value(v) for v in value]
    return str(value)


def _message_for(detail: JSONValue, default: str) -> str:
    if isinstance(detail, dict):
        maybe = detail.get("detail")
        if isinstance(maybe, str):
            return maybe
        if isinstance(maybe, list) and maybe and isinstance(maybe[0], str):
            return maybe[0]
    if isinstance(detail, list) and detail and isinstance(detail[0], str):
        return detail[0]
    return default


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.exceptions import Throttled, ValidationError
    from rest_framework.response import Response
    from rest_framework.views import exception_handler as drf_exception_handler

    from prediction.errors import PredictionError

    if isinstance(exc, PredictionError):
        exc = ValidationError({"detail": str(exc)})

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            "api.unhandled_error view=%s",
            view.__class__.__name__ if view is not None else None,
            exc_info=exc,
        )
        return Response(
            error_payload("Internal server error"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = _to_json_value(response.data)

    if isinstance(exc, Throttled):
        errors: dict[str, JSONValue]
        if isinstance(detail, dict):
            errors = {**detail}
        else:
            errors = {"detail": detail}

        wait = getattr(exc, "wait", None)
        if wait is not None:
            errors["wait"] = wait

        response.data = error_payload("Too Many Requests", errors)
        return response

    default = (
        "Invalid request"
        if isinstance(exc, ValidationError)
        else "Request failed"
    )
    response.data = error_payload(_message_for(detail, default), detail)
    return response
