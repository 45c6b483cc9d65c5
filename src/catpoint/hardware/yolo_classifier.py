"""
YOLO Cat Classifier

Uses a pretrained COCO model and only looks at the "cat" class.
"""

import time
from typing import Optional

import numpy as np
import structlog

# Ultralytics YOLO (optional "vision" extra)
try:
    from ultralytics import YOLO
    HAS_YOLO = True
except ImportError:
    HAS_YOLO = False

from .image_classifier import ImageClassifier

logger = structlog.get_logger()

CAT_CLASS_NAME = "cat"


class YoloCatClassifier(ImageClassifier):
    """
    YOLO-backed cat classifier

    - Detection restricted to the COCO cat class
    - Confidence threshold supplied per call
    """

    def __init__(
        self,
        model_name: str = "yolo11n.pt",
        device: str = "cpu",
    ):
        """
        Args:
            model_name: YOLO model name or weights path
            device: 'cpu' or 'cuda'
        """
        if not HAS_YOLO:
            raise RuntimeError("ultralytics not installed. Install: pip install catpoint[vision]")

        self.model_name = model_name
        self.device = device

        logger.info("Loading YOLO model", model=model_name, device=device)
        self.model = YOLO(model_name)

        if device == "cuda":
            self.model.to("cuda")

        # {0: 'person', 15: 'cat', ...}
        self.class_names = self.model.names
        self.cat_class_ids = [
            class_id for class_id, class_name in self.class_names.items()
            if class_name == CAT_CLASS_NAME
        ]
        if not self.cat_class_ids:
            raise RuntimeError(f"Model {model_name} has no '{CAT_CLASS_NAME}' class")

        # Stats
        self.frame_count = 0
        self.cat_frame_count = 0
        self.total_inference_time = 0.0

    def contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        start_time = time.time()

        results = self.model(
            image,
            conf=confidence_threshold,
            classes=self.cat_class_ids,
            verbose=False,
        )

        self.total_inference_time += time.time() - start_time
        self.frame_count += 1

        best: Optional[float] = None
        for result in results:
            boxes = result.boxes
            for class_id, confidence in zip(boxes.cls, boxes.conf):
                if int(class_id) not in self.cat_class_ids:
                    continue
                confidence = float(confidence)
                if confidence >= confidence_threshold and (best is None or confidence > best):
                    best = confidence

        found = best is not None
        if found:
            self.cat_frame_count += 1
        logger.debug("Classified frame", cat=found, confidence=best)
        return found

    def get_stats(self) -> dict:
        """Inference statistics."""
        avg_time = self.total_inference_time / self.frame_count if self.frame_count > 0 else 0
        return {
            "frame_count": self.frame_count,
            "cat_frame_count": self.cat_frame_count,
            "avg_inference_time_ms": avg_time * 1000,
        }
