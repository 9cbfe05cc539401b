from __future__ import annotations

from django.db import models

from security.domain import AlarmStatus, ArmingStatus, Sensor, SensorType


class SecurityEventType(models.TextChoices):
    ALARM_STATUS_CHANGED = "alarm_status_changed", "Alarm status changed"
    SENSOR_STATUS_CHANGED = "sensor_status_changed", "Sensor status changed"


class SecurityStateSnapshot(models.Model):
    arming_status = models.CharField(
        max_length=32, choices=ArmingStatus.choices, default=ArmingStatus.DISARMED
    )
    alarm_status = models.CharField(
        max_length=32, choices=AlarmStatus.choices, default=AlarmStatus.NO_ALARM
    )
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.arming_status}/{self.alarm_status}"


class SensorRecord(models.Model):
    name = models.CharField(max_length=150)
    sensor_type = models.CharField(max_length=16, choices=SensorType.choices)
    active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["name", "sensor_type"], name="sensor_records_unique_name_type"),
        ]
        indexes = [
            models.Index(fields=["active"], name="security_se_active_2c1f0e_idx"),
        ]
        ordering = ["name", "sensor_type"]

    def to_domain(self) -> Sensor:
        return Sensor(name=self.name, sensor_type=SensorType(self.sensor_type), active=self.active)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.name} ({self.sensor_type})"


class SecurityEvent(models.Model):
    event_type = models.CharField(max_length=32, choices=SecurityEventType.choices)
    alarm_status = models.CharField(
        max_length=32, choices=AlarmStatus.choices, null=True, blank=True
    )
    timestamp = models.DateTimeField()
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["event_type", "timestamp"], name="security_se_event_t_8d3b41_idx"),
            models.Index(fields=["timestamp"], name="security_se_timesta_5a7e92_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.event_type}:{self.timestamp}"
