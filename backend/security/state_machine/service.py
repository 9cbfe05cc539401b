from __future__ import annotations

import functools
import logging
import threading
from contextlib import ExitStack, contextmanager
from typing import TYPE_CHECKING, Iterable

from security.domain import AlarmStatus, ArmingStatus, Sensor

from . import transitions
from .errors import CollaboratorUnavailableError
from .listeners import StatusListener

if TYPE_CHECKING:
    from security.gateways.vision import VisionService
    from security.repositories import SecurityRepository

logger = logging.getLogger(__name__)


def _synchronized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.locked():
            return method(self, *args, **kwargs)

    return wrapper


@contextmanager
def _collaborator(name: str):
    try:
        yield
    except Exception as exc:
        logger.warning("%s call failed: %s", name, exc)
        raise CollaboratorUnavailableError(name) from exc


class SecurityService:
    """
    Reconciles arming, sensor and camera events into one alarm status.

    State lives in the repository; the service keeps only its listeners and
    a lock. Every public operation runs inside `locked()`, which holds the
    lock for the whole repository unit of work, so a write is committed
    before the next caller reads.
    """

    def __init__(
        self,
        *,
        repository: SecurityRepository,
        vision_service: VisionService,
        listeners: Iterable[StatusListener] = (),
    ):
        self._repository = repository
        self._vision_service = vision_service
        self._listeners: list[StatusListener] = []
        self._lock = threading.RLock()
        for listener in listeners:
            self.add_status_listener(listener)

    @contextmanager
    def locked(self):
        """
        Hold the controller lock and one repository unit of work.

        Callers that read back after a command (use cases returning the new
        status) wrap both in `locked()`; nested entries reuse the outer one.
        """
        with self._lock, ExitStack() as stack:
            with _collaborator("repository"):
                stack.enter_context(self._repository.atomic())
            yield self

    # Listeners

    def add_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            if any(existing is listener for existing in self._listeners):
                return
            self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._listeners = [existing for existing in self._listeners if existing is not listener]

    def _notify_alarm_status(self, alarm_status: AlarmStatus) -> None:
        for listener in list(self._listeners):
            listener.on_alarm_status_changed(alarm_status)

    def _notify_sensor_status(self) -> None:
        for listener in list(self._listeners):
            listener.on_sensor_status_changed()

    # Commands

    @_synchronized
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        arming_status = ArmingStatus(arming_status)
        outcome = transitions.on_arming_changed(arming_status)
        if outcome.alarm_status is not None:
            self._write_alarm_status(outcome.alarm_status)
        if outcome.reset_sensors:
            self._reset_sensors_inactive()
        with _collaborator("repository"):
            self._repository.set_arming_status(arming_status)
        logger.info("Arming status set to %s", arming_status)

    @_synchronized
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._apply_alarm_status(AlarmStatus(alarm_status))

    @_synchronized
    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        was_active = sensor.active
        sensor.active = active
        with _collaborator("repository"):
            self._repository.update_sensor(sensor)

        next_status = transitions.on_sensor_changed(
            arming_status=self._read_arming_status(),
            alarm_status=self._read_alarm_status(),
            was_active=was_active,
            active=active,
        )
        if next_status is None:
            logger.debug("Sensor %s set active=%s without alarm change", sensor.name, active)
        else:
            self._apply_alarm_status(next_status, changed_sensor=sensor)
        self._notify_sensor_status()

    @_synchronized
    def process_image(self, image: bytes) -> None:
        with _collaborator("vision service"):
            cat_detected = self._vision_service.image_contains_cat(
                image, transitions.CAT_CONFIDENCE_THRESHOLD
            )
        arming_status = self._read_arming_status()
        if arming_status != ArmingStatus.ARMED_HOME:
            logger.debug("Discarding camera result (cat=%s) while %s", cat_detected, arming_status)
            return
        next_status = transitions.on_image_processed(
            arming_status=arming_status,
            cat_detected=cat_detected,
            any_sensor_active=self._any_sensor_active(),
        )
        if next_status is not None:
            self._apply_alarm_status(next_status)

    @_synchronized
    def add_sensor(self, sensor: Sensor) -> None:
        with _collaborator("repository"):
            self._repository.add_sensor(sensor)

    @_synchronized
    def remove_sensor(self, sensor: Sensor) -> None:
        with _collaborator("repository"):
            self._repository.remove_sensor(sensor)

    # Reads

    @_synchronized
    def get_alarm_status(self) -> AlarmStatus:
        return self._read_alarm_status()

    @_synchronized
    def get_arming_status(self) -> ArmingStatus:
        return self._read_arming_status()

    @_synchronized
    def get_sensors(self) -> set[Sensor]:
        return self._read_sensors()

    # Internals

    def _apply_alarm_status(self, requested: AlarmStatus, *, changed_sensor: Sensor | None = None) -> None:
        # The sensor that produced this request does not count as already tripped.
        already_active = any(
            sensor.active for sensor in self._read_sensors() if sensor != changed_sensor
        )
        alarm_status = transitions.on_alarm_requested(requested, sensors_already_active=already_active)
        if alarm_status != requested:
            logger.info("Requested %s while a sensor is active; using %s", requested, alarm_status)
        self._write_alarm_status(alarm_status)

    def _write_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with _collaborator("repository"):
            self._repository.set_alarm_status(alarm_status)
        logger.info("Alarm status set to %s", alarm_status)
        self._notify_alarm_status(alarm_status)

    def _reset_sensors_inactive(self) -> None:
        for sensor in self._read_sensors():
            sensor.active = False
            with _collaborator("repository"):
                self._repository.update_sensor(sensor)
        self._notify_sensor_status()

    def _any_sensor_active(self) -> bool:
        return any(sensor.active for sensor in self._read_sensors())

    def _read_sensors(self) -> set[Sensor]:
        with _collaborator("repository"):
            return self._repository.get_sensors()

    def _read_arming_status(self) -> ArmingStatus:
        with _collaborator("repository"):
            return self._repository.get_arming_status()

    def _read_alarm_status(self) -> AlarmStatus:
        with _collaborator("repository"):
            return self._repository.get_alarm_status()
