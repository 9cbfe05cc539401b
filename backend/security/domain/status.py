from __future__ import annotations

from django.db import models


class ArmingStatus(models.TextChoices):
    DISARMED = "disarmed", "Disarmed"
    ARMED_HOME = "armed_home", "Armed home"
    ARMED_AWAY = "armed_away", "Armed away"


class AlarmStatus(models.TextChoices):
    NO_ALARM = "no_alarm", "No alarm"
    PENDING_ALARM = "pending_alarm", "Pending alarm"
    ALARM = "alarm", "Alarm"


class SensorType(models.TextChoices):
    DOOR = "door", "Door"
    WINDOW = "window", "Window"
    MOTION = "motion", "Motion"


ARMED_STATUSES = {
    ArmingStatus.ARMED_HOME,
    ArmingStatus.ARMED_AWAY,
}
