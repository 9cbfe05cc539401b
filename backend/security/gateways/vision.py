from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class VisionService(Protocol):
    def image_contains_cat(self, image: bytes, confidence_threshold: float) -> bool:
        """
        Return True when `image` shows a cat with at least `confidence_threshold`
        percent confidence (e.g. 90.0 requires 90%).
        """
        ...


@dataclass
class FakeVisionService:
    """
    Development stand-in for a real classifier: answers at random.

    Pass `seed` for a reproducible sequence of answers.
    """

    seed: int | None = None
    _random: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._random = random.Random(self.seed)

    def image_contains_cat(self, image: bytes, confidence_threshold: float) -> bool:
        detected = self._random.random() * 100.0 >= confidence_threshold
        logger.debug(
            "Fake vision result: cat=%s (bytes=%s threshold=%s)",
            detected,
            len(image or b""),
            confidence_threshold,
        )
        return detected


DEFAULT_VISION_SERVICE = "security.gateways.vision.FakeVisionService"


def load_vision_service() -> VisionService:
    path = getattr(settings, "SECURITY_VISION_SERVICE", "") or DEFAULT_VISION_SERVICE
    factory = import_string(path)
    logger.info("Using vision service %s", path)
    return factory()
