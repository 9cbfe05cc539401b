from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from security.use_cases.camera import EmptyCameraFrame, process_camera_frame


class Command(BaseCommand):
    help = "Run one camera image through cat detection and print the resulting status."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the image file.")

    def handle(self, *args, **options):
        path = Path(options["path"]).expanduser()
        try:
            image = path.read_bytes()
        except FileNotFoundError as exc:
            raise CommandError(f"Image file not found: {path}") from exc

        try:
            status = process_camera_frame(image=image)
        except EmptyCameraFrame as exc:
            raise CommandError(f"Image file is empty: {path}") from exc

        for key, value in status.as_dict().items():
            self.stdout.write(f"{key}={value}")
