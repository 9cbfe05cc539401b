from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

from django.db import transaction

from security.domain import AlarmStatus, ArmingStatus, Sensor
from security.models import SecurityStateSnapshot, SensorRecord


class SecurityRepository(Protocol):
    def atomic(self) -> AbstractContextManager: ...

    def get_arming_status(self) -> ArmingStatus: ...

    def set_arming_status(self, arming_status: ArmingStatus) -> None: ...

    def get_alarm_status(self) -> AlarmStatus: ...

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None: ...

    def get_sensors(self) -> set[Sensor]: ...

    def add_sensor(self, sensor: Sensor) -> None: ...

    def remove_sensor(self, sensor: Sensor) -> None: ...

    def update_sensor(self, sensor: Sensor) -> None: ...


def get_snapshot() -> SecurityStateSnapshot:
    snapshot = SecurityStateSnapshot.objects.order_by("id").first()
    if snapshot:
        return snapshot
    return SecurityStateSnapshot.objects.create(
        arming_status=ArmingStatus.DISARMED,
        alarm_status=AlarmStatus.NO_ALARM,
    )


def get_snapshot_for_update() -> SecurityStateSnapshot:
    snapshot = SecurityStateSnapshot.objects.select_for_update().order_by("id").first()
    if snapshot:
        return snapshot
    return get_snapshot()


class DjangoSecurityRepository:
    """
    ORM-backed repository.

    Status lives on a single `SecurityStateSnapshot` row created on first
    access; sensors are `SensorRecord` rows keyed by name + type. Every call
    hits the database, so sensors returned by `get_sensors` are detached
    copies and must go back through `update_sensor` to persist.

    `atomic()` opens a transaction and row-locks the snapshot, which
    serialises controller operations across worker processes on backends
    that support `SELECT ... FOR UPDATE`.
    """

    @contextmanager
    def atomic(self):
        with transaction.atomic():
            get_snapshot_for_update()
            yield

    def get_arming_status(self) -> ArmingStatus:
        return ArmingStatus(get_snapshot().arming_status)

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        snapshot = get_snapshot()
        snapshot.arming_status = arming_status
        snapshot.save(update_fields=["arming_status", "updated_at"])

    def get_alarm_status(self) -> AlarmStatus:
        return AlarmStatus(get_snapshot().alarm_status)

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        snapshot = get_snapshot()
        snapshot.alarm_status = alarm_status
        snapshot.save(update_fields=["alarm_status", "updated_at"])

    def get_sensors(self) -> set[Sensor]:
        return {record.to_domain() for record in SensorRecord.objects.all()}

    def add_sensor(self, sensor: Sensor) -> None:
        SensorRecord.objects.get_or_create(
            name=sensor.name,
            sensor_type=sensor.sensor_type,
            defaults={"active": sensor.active},
        )

    def remove_sensor(self, sensor: Sensor) -> None:
        SensorRecord.objects.filter(name=sensor.name, sensor_type=sensor.sensor_type).delete()

    def update_sensor(self, sensor: Sensor) -> None:
        SensorRecord.objects.update_or_create(
            name=sensor.name,
            sensor_type=sensor.sensor_type,
            defaults={"active": sensor.active},
        )
