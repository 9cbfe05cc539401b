from __future__ import annotations

import base64
import binascii
import logging

from celery import shared_task

from security.use_cases.camera import EmptyCameraFrame, process_camera_frame

logger = logging.getLogger(__name__)


@shared_task(bind=True, autoretry_for=(), retry_backoff=False)
def process_camera_frame_task(self, *, image_b64: str) -> dict[str, object]:
    try:
        image = base64.b64decode(image_b64.encode("ascii"), validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Rejected camera frame: %s", exc)
        return {"ok": False, "reason": "invalid_frame"}

    try:
        status = process_camera_frame(image=image)
    except EmptyCameraFrame:
        logger.warning("Rejected camera frame: empty payload")
        return {"ok": False, "reason": "empty_frame"}
    return {"ok": True, **status.as_dict()}
