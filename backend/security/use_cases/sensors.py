from __future__ import annotations

from config.domain_exceptions import NotFoundError
from security.domain import Sensor, SensorType
from security.models import SensorRecord
from security.services import get_security_service


class SensorNotFound(NotFoundError):
    pass


def _get_record(sensor_id: int) -> SensorRecord:
    try:
        return SensorRecord.objects.get(pk=sensor_id)
    except SensorRecord.DoesNotExist as exc:
        raise SensorNotFound("Sensor not found.") from exc


def get_sensor_record(*, sensor_id: int) -> SensorRecord:
    return _get_record(sensor_id)


def add_sensor(*, name: str, sensor_type: str) -> SensorRecord:
    sensor = Sensor(name=name, sensor_type=SensorType(sensor_type))
    with get_security_service().locked() as service:
        service.add_sensor(sensor)
        return SensorRecord.objects.get(name=sensor.name, sensor_type=sensor.sensor_type)


def change_sensor_activation(*, sensor_id: int, active: bool) -> SensorRecord:
    # The record is read under the lock so `was_active` reflects the last commit.
    with get_security_service().locked() as service:
        record = _get_record(sensor_id)
        service.change_sensor_activation_status(record.to_domain(), active)
        record.refresh_from_db()
        return record


def remove_sensor(*, sensor_id: int) -> None:
    with get_security_service().locked() as service:
        record = _get_record(sensor_id)
        service.remove_sensor(record.to_domain())
