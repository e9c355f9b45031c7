"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/transform/", views.transform_api, name="transform_api"),
    path("api/options/", views.options_api, name="options_api"),
]
