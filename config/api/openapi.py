"""drf-spectacular helpers for documenting the response envelopes.

`config.api.responses` and the global exception handler wrap every API
response in the same JSON envelope; these builders produce matching
serializers for the OpenAPI schema only.
"""

from __future__ import annotations

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers
from rest_framework.serializers import Serializer


def _envelope(name: str, data: serializers.Field) -> Serializer:
    return inline_serializer(
        name=name,
        fields={
            "status": serializers.IntegerField(),
            "message": serializers.CharField(),
            "data": data,
            "errors": serializers.JSONField(allow_null=True),
        },
    )


def success_envelope_serializer(
    name: str,
    *,
    data: serializers.Field,
) -> Serializer:
    """Build an OpenAPI schema matching `success_response`."""

    return _envelope(name, data)


def error_envelope_serializer(name: str) -> Serializer:
    """Build an OpenAPI schema matching `custom_exception_handler`."""

    return _envelope(name, serializers.JSONField(allow_null=True))
