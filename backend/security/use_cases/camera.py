from __future__ import annotations

import base64
from dataclasses import dataclass

from django.conf import settings

from config.domain_exceptions import ValidationError
from security.services import get_security_service
from security.use_cases.status import SecurityStatus, get_status


class EmptyCameraFrame(ValidationError):
    pass


@dataclass(frozen=True)
class FrameSubmission:
    queued: bool
    status: SecurityStatus | None = None


def process_camera_frame(*, image: bytes) -> SecurityStatus:
    if not image:
        raise EmptyCameraFrame("Camera frame is empty.")
    with get_security_service().locked() as service:
        service.process_image(image)
        return get_status()


def submit_camera_frame(*, image: bytes) -> FrameSubmission:
    if not image:
        raise EmptyCameraFrame("Camera frame is empty.")
    if getattr(settings, "SECURITY_PROCESS_FRAMES_ASYNC", False):
        from security.tasks import process_camera_frame_task

        process_camera_frame_task.delay(image_b64=base64.b64encode(image).decode("ascii"))
        return FrameSubmission(queued=True)
    return FrameSubmission(queued=False, status=process_camera_frame(image=image))
