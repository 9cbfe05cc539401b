from __future__ import annotations

from dataclasses import dataclass

from security.domain import AlarmStatus, ArmingStatus
from security.domain.status import ARMED_STATUSES

# Confidence (percent) the vision service must reach before reporting a cat.
CAT_CONFIDENCE_THRESHOLD = 50.0


@dataclass(frozen=True)
class ArmingOutcome:
    alarm_status: AlarmStatus | None
    reset_sensors: bool


def on_arming_changed(arming_status: ArmingStatus) -> ArmingOutcome:
    if arming_status == ArmingStatus.DISARMED:
        return ArmingOutcome(alarm_status=AlarmStatus.NO_ALARM, reset_sensors=True)
    if arming_status in ARMED_STATUSES:
        return ArmingOutcome(alarm_status=None, reset_sensors=True)
    return ArmingOutcome(alarm_status=None, reset_sensors=False)


def on_alarm_requested(requested: AlarmStatus, *, sensors_already_active: bool) -> AlarmStatus:
    """
    Resolve a requested alarm status against the sensors that are already tripped.

    A pending alarm cannot resolve on its own while a sensor is stuck active,
    so such requests collapse to NO_ALARM.
    """

    if requested == AlarmStatus.PENDING_ALARM and sensors_already_active:
        return AlarmStatus.NO_ALARM
    return requested


def on_sensor_changed(
    *,
    arming_status: ArmingStatus,
    alarm_status: AlarmStatus,
    was_active: bool,
    active: bool,
) -> AlarmStatus | None:
    """
    Return the alarm status a sensor toggle leads to, or None to leave it alone.
    """

    if arming_status == ArmingStatus.DISARMED:
        return None

    if active:
        if alarm_status == AlarmStatus.PENDING_ALARM:
            return AlarmStatus.ALARM
        if alarm_status == AlarmStatus.NO_ALARM:
            return AlarmStatus.PENDING_ALARM
        return None

    if alarm_status == AlarmStatus.ALARM:
        return None
    if alarm_status == AlarmStatus.PENDING_ALARM:
        # Releasing a sensor that was never tripped while pending escalates.
        return AlarmStatus.NO_ALARM if was_active else AlarmStatus.ALARM
    return None


def on_image_processed(
    *,
    arming_status: ArmingStatus,
    cat_detected: bool,
    any_sensor_active: bool,
) -> AlarmStatus | None:
    if arming_status != ArmingStatus.ARMED_HOME:
        return None
    if cat_detected:
        return AlarmStatus.ALARM
    if any_sensor_active:
        return AlarmStatus.NO_ALARM
    return None
