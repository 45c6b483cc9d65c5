"""
Image Classifiers

Decide whether a camera frame contains a cat. The engine treats these as
black-box synchronous calls; failures propagate to the caller.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class ImageClassifier(ABC):
    """Cat classifier interface consumed by SecurityService."""

    @abstractmethod
    def contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        """
        Args:
            image: Camera frame
            confidence_threshold: Minimum confidence (0-1) for a positive answer

        Returns:
            True if a cat was found with at least the given confidence
        """
        pass


class FakeImageClassifier(ImageClassifier):
    """Answers at random. Stands in for a real classifier during development."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        return self._rng.random() > 0.5


class StaticImageClassifier(ImageClassifier):
    """Always gives the same answer; reassign ``result`` to change it."""

    def __init__(self, result: bool = False):
        self.result = result
        self.calls: int = 0

    def contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        self.calls += 1
        return self.result
