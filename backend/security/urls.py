from __future__ import annotations

from django.urls import path

from . import views

urlpatterns = [
    path("status/", views.SecurityStatusView.as_view(), name="security-status"),
    path("arming/", views.ArmingStatusView.as_view(), name="security-arming"),
    path("alarm/", views.AlarmStatusView.as_view(), name="security-alarm"),
    path("sensors/", views.SensorsView.as_view(), name="security-sensors"),
    path("sensors/<int:sensor_id>/", views.SensorDetailView.as_view(), name="security-sensor-detail"),
    path("camera/frames/", views.CameraFrameView.as_view(), name="security-camera-frames"),
    path("events/", views.SecurityEventsView.as_view(), name="security-events"),
]
