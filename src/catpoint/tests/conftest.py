"""Shared fixtures for the Catpoint tests."""

from unittest.mock import Mock

import numpy as np
import pytest

from catpoint.domain import AlarmStatus, ArmingStatus, Sensor, SensorType
from catpoint.hardware import ImageClassifier
from catpoint.services import (
    RecordingStatusListener,
    SecurityRepository,
    SecurityService,
)


@pytest.fixture
def sensor():
    """Inactive door sensor."""
    return Sensor(name="Front Door", sensor_type=SensorType.DOOR)


@pytest.fixture
def repository():
    """Mock repository: disarmed, no alarm, no sensors."""
    repo = Mock(spec=SecurityRepository)
    repo.get_alarm_status.return_value = AlarmStatus.NO_ALARM
    repo.get_arming_status.return_value = ArmingStatus.DISARMED
    repo.get_sensors.return_value = set()
    return repo


@pytest.fixture
def image_classifier():
    classifier = Mock(spec=ImageClassifier)
    classifier.contains_cat.return_value = False
    return classifier


@pytest.fixture
def service(repository, image_classifier):
    return SecurityService(repository, image_classifier)


@pytest.fixture
def recorder(service):
    listener = RecordingStatusListener()
    service.add_status_listener(listener)
    return listener


@pytest.fixture
def frame():
    return np.zeros((128, 128, 3), dtype=np.uint8)
