"""Response envelope shared by every API endpoint.

    success: {"status": 0, "message": str, "data": ..., "errors": null}
    failure: {"status": 1, "message": str, "data": null, "errors": ...}
"""

from __future__ import annotations

from typing import TypeAlias

from rest_framework import status
from rest_framework.response import Response

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


def error_payload(
    message: str, errors: JSONValue | None = None
) -> dict[str, JSONValue]:
    return {
        "status": 1,
        "message": message,
        "data": None,
        "errors": errors,
    }


def success_response(
    data: JSONValue | None,
    message: str = "OK",
    *,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    payload: dict[str, JSONValue] = {
        "status": 0,
        "message": message,
        "data": data,
        "errors": None,
    }
    return Response(payload, status=status_code)


def error_response(
    message: str,
    *,
    errors: JSONValue | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    return Response(error_payload(message, errors), status=status_code)
