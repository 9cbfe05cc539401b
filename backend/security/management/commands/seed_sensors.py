from __future__ import annotations

from django.core.management.base import BaseCommand

from security.domain import Sensor, SensorType
from security.models import SensorRecord
from security.services import get_security_service

DEMO_SENSORS = [
    ("Front Door", SensorType.DOOR),
    ("Back Door", SensorType.DOOR),
    ("Living Room Window", SensorType.WINDOW),
    ("Hallway Motion", SensorType.MOTION),
]


class Command(BaseCommand):
    help = "Create demo door, window and motion sensors."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every existing sensor before seeding.",
        )

    def handle(self, *args, **options):
        with get_security_service().locked() as service:
            if options["reset"]:
                deleted, _ = SensorRecord.objects.all().delete()
                self.stdout.write(f"- Removed {deleted} sensor(s)")
            for name, sensor_type in DEMO_SENSORS:
                service.add_sensor(Sensor(name=name, sensor_type=sensor_type))

        self.stdout.write(self.style.SUCCESS("Seeded demo sensors successfully."))
        for record in SensorRecord.objects.all():
            self.stdout.write(f"- {record.name} [{record.sensor_type}] active={record.active}")
