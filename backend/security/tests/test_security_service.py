from __future__ import annotations

import threading
from contextlib import contextmanager
from unittest.mock import MagicMock, Mock, call

from django.test import SimpleTestCase

from security.domain import AlarmStatus, ArmingStatus, Sensor, SensorType
from security.state_machine import CAT_CONFIDENCE_THRESHOLD, CollaboratorUnavailableError, SecurityService
from security.tests.fakes import InMemorySecurityRepository, RecordingListener, StubVisionService


class SecurityServiceTestBase(SimpleTestCase):
    def setUp(self):
        self.door = Sensor(name="Front Door", sensor_type=SensorType.DOOR)
        self.window = Sensor(name="Back Window", sensor_type=SensorType.WINDOW)
        self.repository = InMemorySecurityRepository(
            arming_status=ArmingStatus.ARMED_HOME,
            sensors={self.door, self.window},
        )
        self.vision = StubVisionService()
        self.listener = RecordingListener()
        self.service = SecurityService(
            repository=self.repository,
            vision_service=self.vision,
            listeners=[self.listener],
        )


class ArmingTests(SecurityServiceTestBase):
    def test_disarm_clears_alarm_and_sensors_from_any_arming_status(self):
        for arming_status in ArmingStatus:
            with self.subTest(arming_status=arming_status):
                self.repository.arming_status = arming_status
                self.repository.alarm_status = AlarmStatus.ALARM
                self.door.active = True
                self.window.active = True

                self.service.set_arming_status(ArmingStatus.DISARMED)

                self.assertEqual(self.repository.arming_status, ArmingStatus.DISARMED)
                self.assertEqual(self.repository.alarm_status, AlarmStatus.NO_ALARM)
                self.assertFalse(any(sensor.active for sensor in self.repository.sensors))

    def test_disarm_notifies_alarm_then_one_sensor_batch(self):
        self.door.active = True
        self.service.set_arming_status(ArmingStatus.DISARMED)
        self.assertEqual(self.listener.alarm_statuses, [AlarmStatus.NO_ALARM])
        self.assertEqual(self.listener.sensor_changes, 1)

    def test_arming_clears_sensors_without_changing_alarm(self):
        for arming_status in (ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY):
            with self.subTest(arming_status=arming_status):
                self.repository.alarm_status = AlarmStatus.PENDING_ALARM
                self.repository.alarm_writes.clear()
                self.door.active = True
                self.window.active = True

                self.service.set_arming_status(arming_status)

                self.assertEqual(self.repository.arming_status, arming_status)
                self.assertEqual(self.repository.alarm_status, AlarmStatus.PENDING_ALARM)
                self.assertEqual(self.repository.alarm_writes, [])
                self.assertFalse(self.door.active)
                self.assertFalse(self.window.active)

    def test_arming_status_is_persisted_last(self):
        repository = MagicMock()
        repository.get_sensors.return_value = {self.door}
        service = SecurityService(repository=repository, vision_service=self.vision)

        service.set_arming_status(ArmingStatus.DISARMED)

        self.assertEqual(repository.method_calls[-1], call.set_arming_status(ArmingStatus.DISARMED))
        repository.set_alarm_status.assert_called_once_with(AlarmStatus.NO_ALARM)
        repository.update_sensor.assert_called_once_with(self.door)


class AlarmStatusTests(SecurityServiceTestBase):
    def test_pending_request_with_active_sensor_becomes_no_alarm(self):
        self.door.active = True
        self.service.set_alarm_status(AlarmStatus.PENDING_ALARM)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.NO_ALARM)
        self.assertEqual(self.listener.alarm_statuses, [AlarmStatus.NO_ALARM])

    def test_pending_request_without_active_sensor_is_kept(self):
        self.service.set_alarm_status(AlarmStatus.PENDING_ALARM)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.PENDING_ALARM)
        self.assertEqual(self.listener.alarm_statuses, [AlarmStatus.PENDING_ALARM])

    def test_explicit_override_notifies_every_listener(self):
        second = RecordingListener()
        self.service.add_status_listener(second)
        self.service.set_alarm_status(AlarmStatus.ALARM)
        self.assertEqual(self.listener.alarm_statuses, [AlarmStatus.ALARM])
        self.assertEqual(second.alarm_statuses, [AlarmStatus.ALARM])


class SensorActivationTests(SecurityServiceTestBase):
    def test_activation_from_no_alarm_goes_pending(self):
        self.service.change_sensor_activation_status(self.door, True)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.PENDING_ALARM)
        self.assertTrue(self.door.active)

    def test_activation_from_no_alarm_with_another_sensor_tripped_stays_clear(self):
        self.window.active = True
        self.service.change_sensor_activation_status(self.door, True)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.NO_ALARM)

    def test_activation_while_pending_goes_to_alarm(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.service.change_sensor_activation_status(self.door, True)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.ALARM)

    def test_reactivating_active_sensor_while_pending_goes_to_alarm(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.door.active = True
        self.service.change_sensor_activation_status(self.door, True)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.ALARM)

    def test_deactivating_active_sensor_while_pending_clears(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.door.active = True
        self.service.change_sensor_activation_status(self.door, False)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.NO_ALARM)

    def test_deactivating_inactive_sensor_while_pending_escalates(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.service.change_sensor_activation_status(self.door, False)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.ALARM)

    def test_alarm_survives_any_sequence_of_deactivations(self):
        self.repository.alarm_status = AlarmStatus.ALARM
        self.service.change_sensor_activation_status(self.door, True)
        self.service.change_sensor_activation_status(self.window, True)
        self.service.change_sensor_activation_status(self.door, False)
        self.service.change_sensor_activation_status(self.window, False)
        self.service.change_sensor_activation_status(self.window, False)

        self.assertEqual(self.repository.alarm_status, AlarmStatus.ALARM)
        self.assertEqual(self.repository.alarm_writes, [])

    def test_changes_while_disarmed_only_update_sensor(self):
        self.repository.arming_status = ArmingStatus.DISARMED
        self.service.change_sensor_activation_status(self.door, True)

        self.assertEqual(self.repository.alarm_status, AlarmStatus.NO_ALARM)
        self.assertEqual(self.repository.alarm_writes, [])
        self.assertIn(self.door, self.repository.sensors)
        self.assertTrue(self.door.active)

    def test_sensor_listeners_notified_even_without_alarm_change(self):
        self.repository.alarm_status = AlarmStatus.ALARM
        self.service.change_sensor_activation_status(self.door, True)
        self.assertEqual(self.listener.sensor_changes, 1)
        self.assertEqual(self.listener.alarm_statuses, [])

    def test_unknown_sensor_is_accepted(self):
        garage = Sensor(name="Garage", sensor_type=SensorType.MOTION)
        self.service.change_sensor_activation_status(garage, True)
        self.assertIn(garage, self.repository.sensors)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.PENDING_ALARM)

    def test_concurrent_activations_escalate_once_each(self):
        barrier = threading.Barrier(2)

        def activate(sensor):
            barrier.wait()
            self.service.change_sensor_activation_status(sensor, True)

        threads = [threading.Thread(target=activate, args=(sensor,)) for sensor in (self.door, self.window)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(self.repository.alarm_writes, [AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM])
        self.assertEqual(self.listener.sensor_changes, 2)


class ProcessImageTests(SecurityServiceTestBase):
    def test_queries_vision_service_with_fixed_threshold(self):
        vision = Mock()
        vision.image_contains_cat.return_value = True
        service = SecurityService(repository=self.repository, vision_service=vision)

        service.process_image(b"frame")

        vision.image_contains_cat.assert_called_once_with(b"frame", 50.0)
        self.assertEqual(CAT_CONFIDENCE_THRESHOLD, 50.0)

    def test_cat_while_armed_home_alarms_regardless_of_sensors(self):
        for door_active in (False, True):
            with self.subTest(door_active=door_active):
                self.repository.alarm_status = AlarmStatus.NO_ALARM
                self.door.active = door_active
                self.vision.cat = True
                self.service.process_image(b"frame")
                self.assertEqual(self.repository.alarm_status, AlarmStatus.ALARM)

    def test_no_cat_with_active_sensor_clears_alarm(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.door.active = True
        self.service.process_image(b"frame")
        self.assertEqual(self.repository.alarm_status, AlarmStatus.NO_ALARM)
        self.assertEqual(self.listener.alarm_statuses, [AlarmStatus.NO_ALARM])

    def test_no_cat_without_active_sensor_changes_nothing(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.service.process_image(b"frame")
        self.assertEqual(self.repository.alarm_status, AlarmStatus.PENDING_ALARM)
        self.assertEqual(self.repository.alarm_writes, [])

    def test_result_discarded_unless_armed_home(self):
        for arming_status in (ArmingStatus.DISARMED, ArmingStatus.ARMED_AWAY):
            for cat in (True, False):
                with self.subTest(arming_status=arming_status, cat=cat):
                    self.repository.arming_status = arming_status
                    self.repository.alarm_status = AlarmStatus.PENDING_ALARM
                    self.door.active = True
                    self.vision.cat = cat

                    self.service.process_image(b"frame")

                    self.assertEqual(self.repository.alarm_status, AlarmStatus.PENDING_ALARM)
        self.assertEqual(self.repository.alarm_writes, [])
        self.assertEqual(len(self.vision.calls), 4)


class PassThroughTests(SecurityServiceTestBase):
    def test_reads_come_from_repository(self):
        self.repository.alarm_status = AlarmStatus.PENDING_ALARM
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.PENDING_ALARM)
        self.assertEqual(self.service.get_arming_status(), ArmingStatus.ARMED_HOME)
        self.assertEqual(self.service.get_sensors(), {self.door, self.window})

    def test_add_and_remove_sensor_delegate(self):
        repository = MagicMock()
        service = SecurityService(repository=repository, vision_service=self.vision)
        service.add_sensor(self.door)
        service.remove_sensor(self.window)
        repository.add_sensor.assert_called_once_with(self.door)
        repository.remove_sensor.assert_called_once_with(self.window)

    def test_sensor_identity_is_name_and_type(self):
        self.service.add_sensor(Sensor(name="Front Door", sensor_type=SensorType.DOOR, active=True))
        self.service.add_sensor(Sensor(name="Front Door", sensor_type=SensorType.WINDOW))
        self.assertEqual(len(self.service.get_sensors()), 3)


class ListenerTests(SecurityServiceTestBase):
    def test_duplicate_listener_registered_once(self):
        self.service.add_status_listener(self.listener)
        self.service.set_alarm_status(AlarmStatus.ALARM)
        self.assertEqual(self.listener.alarm_statuses, [AlarmStatus.ALARM])

    def test_removed_listener_is_not_notified(self):
        self.service.remove_status_listener(self.listener)
        self.service.set_alarm_status(AlarmStatus.ALARM)
        self.service.change_sensor_activation_status(self.door, True)
        self.assertEqual(self.listener.alarm_statuses, [])
        self.assertEqual(self.listener.sensor_changes, 0)

    def test_listener_error_propagates_after_status_persisted(self):
        failing = Mock()
        failing.on_alarm_status_changed.side_effect = RuntimeError("listener down")
        self.service.add_status_listener(failing)

        with self.assertRaises(RuntimeError):
            self.service.set_alarm_status(AlarmStatus.ALARM)
        self.assertEqual(self.repository.alarm_status, AlarmStatus.ALARM)

    def test_listener_may_read_back_from_service(self):
        seen = []
        reader = Mock()
        reader.on_alarm_status_changed.side_effect = lambda status: seen.append(self.service.get_alarm_status())
        self.service.add_status_listener(reader)

        self.service.set_alarm_status(AlarmStatus.ALARM)

        self.assertEqual(seen, [AlarmStatus.ALARM])


class CollaboratorFailureTests(SecurityServiceTestBase):
    def test_repository_failure_is_wrapped(self):
        repository = MagicMock()
        repository.get_arming_status.side_effect = OSError("db down")
        service = SecurityService(repository=repository, vision_service=self.vision)

        with self.assertRaises(CollaboratorUnavailableError) as ctx:
            service.get_arming_status()
        self.assertEqual(ctx.exception.collaborator, "repository")
        self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_vision_failure_is_wrapped_and_alarm_untouched(self):
        vision = Mock()
        vision.image_contains_cat.side_effect = TimeoutError("classifier timeout")
        service = SecurityService(repository=self.repository, vision_service=vision)

        with self.assertRaises(CollaboratorUnavailableError) as ctx:
            service.process_image(b"frame")
        self.assertEqual(ctx.exception.collaborator, "vision service")
        self.assertEqual(self.repository.alarm_writes, [])

    def test_unit_of_work_failure_is_wrapped(self):
        repository = MagicMock()
        repository.atomic.side_effect = OSError("db down")
        service = SecurityService(repository=repository, vision_service=self.vision)

        with self.assertRaises(CollaboratorUnavailableError):
            service.set_alarm_status(AlarmStatus.ALARM)
        repository.set_alarm_status.assert_not_called()


class UnitOfWorkTests(SecurityServiceTestBase):
    def _record_unit_of_work(self, events, before_commit=None):
        @contextmanager
        def atomic():
            events.append("begin")
            yield
            if before_commit is not None:
                before_commit()
            events.append("commit")

        write = self.repository.set_alarm_status

        def set_alarm_status(alarm_status):
            events.append(alarm_status)
            write(alarm_status)

        self.repository.atomic = atomic
        self.repository.set_alarm_status = set_alarm_status

    def test_command_runs_in_one_unit_of_work(self):
        events = []
        self._record_unit_of_work(events)

        self.service.set_alarm_status(AlarmStatus.ALARM)

        self.assertEqual(events, ["begin", AlarmStatus.ALARM, "commit"])

    def test_nested_reads_share_the_outer_lock(self):
        with self.service.locked() as service:
            service.set_alarm_status(AlarmStatus.PENDING_ALARM)
            self.assertEqual(service.get_alarm_status(), AlarmStatus.PENDING_ALARM)

    def test_lock_is_held_until_commit(self):
        events = []
        committing = threading.Event()
        release = threading.Event()

        def before_commit():
            if not committing.is_set():
                committing.set()
                release.wait(5)

        self._record_unit_of_work(events, before_commit=before_commit)
        seen = []
        writer = threading.Thread(target=self.service.set_alarm_status, args=(AlarmStatus.ALARM,))
        reader = threading.Thread(target=lambda: seen.append(self.service.get_alarm_status()))

        writer.start()
        self.assertTrue(committing.wait(5))
        reader.start()
        reader.join(0.2)
        self.assertTrue(reader.is_alive())

        release.set()
        writer.join()
        reader.join()

        self.assertEqual(seen, [AlarmStatus.ALARM])
        self.assertEqual(events[:3], ["begin", AlarmStatus.ALARM, "commit"])
