"""Image classification stand-in for the external recognition service."""

import random
from typing import Any, Dict, Optional

import numpy as np
from PIL import Image

from ..logging_config import get_logger
from .interfaces import ImageClassifierInterface

logger = get_logger("image_classifier")


def load_image(image_path: str) -> np.ndarray:
    """Load an image file into an RGB frame array."""
    with Image.open(image_path) as image:
        frame = np.asarray(image.convert("RGB"), dtype=np.uint8)
    logger.debug(f"Loaded image {image_path} with shape {frame.shape}")
    return frame


class FakeImageClassifier(ImageClassifierInterface):
    """Classifier that reports a cat at random.

    A confidence score is drawn uniformly from [0, 1) for every image and a
    cat is reported when the score exceeds the threshold. Seed the generator
    for reproducible runs.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)
        self.images_processed = 0
        self.cats_detected = 0
        self.last_confidence: Optional[float] = None

    def contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        if image is None:
            raise ValueError("No image provided")

        threshold = max(0.0, min(1.0, confidence_threshold))
        confidence = self._random.random()

        self.images_processed += 1
        self.last_confidence = confidence
        detected = confidence > threshold
        if detected:
            self.cats_detected += 1

        logger.debug(f"Image classified: confidence={confidence:.3f}, "
                     f"threshold={threshold:.3f}, cat={detected}")
        return detected

    def get_stats(self) -> Dict[str, Any]:
        """Get classification statistics."""
        return {
            "images_processed": self.images_processed,
            "cats_detected": self.cats_detected,
            "last_confidence": self.last_confidence
        }
