"""Catpoint Hardware - camera image classifiers"""

from .image_classifier import (
    ImageClassifier,
    FakeImageClassifier,
    StaticImageClassifier,
)

__all__ = [
    'ImageClassifier',
    'FakeImageClassifier',
    'StaticImageClassifier',
]
