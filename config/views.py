"""Project-level non-DRF views.

The root endpoint doubles as a liveness check and lists the prediction
routes alongside the interactive API documentation.
"""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.urls import reverse


def home(request: HttpRequest) -> JsonResponse:
    """Return basic service metadata and documentation links."""
    return JsonResponse(
        {
            "ok": True,
            "service": "bloom-forecast",
            "docs": "/api/docs/",
            "redoc": "/api/redoc/",
            "endpoints": {
                "predict": reverse("ndvi-predict"),
                "forecast": reverse("ndvi-forecast"),
                "analysis": reverse("ndvi-analysis"),
            },
        }
    )
