"""
Tests for structlog configuration
"""

import json

import pytest
import structlog

from catpoint.log_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_output(capsys):
    configure_logging("DEBUG", json_output=True)

    structlog.get_logger().info("Alarm status changed", status="alarm")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "Alarm status changed"
    assert record["status"] == "alarm"
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filter(capsys):
    configure_logging("WARNING", json_output=True)

    structlog.get_logger().info("Sensor updated")

    assert capsys.readouterr().out == ""


def test_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("LOUD")
