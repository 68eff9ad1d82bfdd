from __future__ import annotations

from django.urls import path

from .views import NdviAnalysisView, NdviForecastView, NdviPredictView

urlpatterns = [
    path(
        "ndvi/predict/",
        NdviPredictView.as_view(),
        name="ndvi-predict",
    ),
    path(
        "ndvi/forecast/",
        NdviForecastView.as_view(),
        name="ndvi-forecast",
    ),
    path(
        "ndvi/analysis/",
        NdviAnalysisView.as_view(),
        name="ndvi-analysis",
    ),
]
