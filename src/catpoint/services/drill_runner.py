"""
Catpoint Drill Runner

Executes scripted scenarios (drills) from a JSON drill book against a fresh
SecurityService with an in-memory repository and a static image classifier.
Used to check the alarm rules end to end without hardware.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import numpy as np
import structlog

from ..domain.enums import AlarmStatus, ArmingStatus, SensorType
from ..domain.models import Sensor
from ..hardware.image_classifier import StaticImageClassifier
from .listeners import RecordingStatusListener
from .repository import InMemorySecurityRepository
from .security_service import SecurityService

logger = structlog.get_logger()

# Frames are opaque to the engine; the static classifier ignores content
BLANK_FRAME = np.zeros((128, 128, 3), dtype=np.uint8)


# =============================================================================
# Drill Case Structures
# =============================================================================

@dataclass
class DrillStep:
    """Single step of a drill case."""
    action: str  # activate | deactivate | reconcile | arm | image
    sensor_id: Optional[str] = None
    arming_status: Optional[str] = None
    cat: Optional[bool] = None


@dataclass
class DrillExpectation:
    """Expected results from drill case."""
    alarm_status: Optional[str] = None
    arming_status: Optional[str] = None
    notifications: Optional[list[str]] = None
    must_not_reach: list[str] = field(default_factory=list)
    active_sensors: list[str] = field(default_factory=list)
    inactive_sensors: list[str] = field(default_factory=list)


@dataclass
class DrillCase:
    """A single drill case."""
    case_id: str
    title: str
    steps: list[DrillStep]
    expected: DrillExpectation
    arming_status: str = ArmingStatus.DISARMED.value
    alarm_status: str = AlarmStatus.NO_ALARM.value
    active_sensors: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass
class DrillResult:
    """Result of running a single drill."""
    case_id: str
    passed: bool = False
    failures: list[str] = field(default_factory=list)
    notifications: list[str] = field(default_factory=list)
    final_alarm_status: Optional[str] = None
    final_arming_status: Optional[str] = None
    duration_ms: float = 0


# =============================================================================
# Drill Runner
# =============================================================================

class DrillRunner:
    """Runs drill cases against SecurityService."""

    def __init__(self, drills_path: Optional[Union[str, Path]] = None):
        self.sensor_defs: dict[str, dict] = {}
        self.cases: list[DrillCase] = []

        if drills_path:
            self.load_drills(drills_path)

    def load_drills(self, path: Union[str, Path]) -> None:
        """Load drills from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        self.load_cases(data)
        logger.info("Drills loaded", path=str(path), cases=len(self.cases))

    def load_cases(self, data: dict) -> None:
        """Load sensor definitions and cases from an already parsed drill book."""
        self.sensor_defs.update(data.get("sensors", {}))
        for case_data in data.get("cases", []):
            self.cases.append(self._parse_case(case_data))

    def _parse_case(self, data: dict) -> DrillCase:
        """Parse a drill case from JSON."""
        steps = [
            DrillStep(
                action=step.get("action", ""),
                sensor_id=step.get("sensorId"),
                arming_status=step.get("armingStatus"),
                cat=step.get("cat"),
            )
            for step in data.get("steps", [])
        ]

        expected_data = data.get("expected", {})
        expected = DrillExpectation(
            alarm_status=expected_data.get("alarmStatus"),
            arming_status=expected_data.get("armingStatus"),
            notifications=expected_data.get("notifications"),
            must_not_reach=expected_data.get("mustNotReach", []),
            active_sensors=expected_data.get("activeSensors", []),
            inactive_sensors=expected_data.get("inactiveSensors", []),
        )

        return DrillCase(
            case_id=data.get("caseId", "UNKNOWN"),
            title=data.get("title", ""),
            steps=steps,
            expected=expected,
            arming_status=data.get("armingStatus", ArmingStatus.DISARMED.value),
            alarm_status=data.get("alarmStatus", AlarmStatus.NO_ALARM.value),
            active_sensors=data.get("activeSensors", []),
            tags=data.get("tags", []),
        )

    def _build_sensors(self, case: DrillCase) -> list[Sensor]:
        sensors = []
        for sensor_id, sensor_def in self.sensor_defs.items():
            sensors.append(Sensor(
                sensor_id=sensor_id,
                name=sensor_def.get("name", sensor_id),
                sensor_type=SensorType(sensor_def.get("sensorType", SensorType.DOOR.value)),
                active=sensor_def.get("active", False) or sensor_id in case.active_sensors,
            ))
        return sensors

    def run_case(self, case: DrillCase) -> DrillResult:
        """Run a single drill case."""
        start_time = time.time()
        result = DrillResult(case_id=case.case_id)
        failures: list[str] = [
            f"Unknown sensor: {sensor_id}"
            for sensor_id in case.active_sensors
            if sensor_id not in self.sensor_defs
        ]

        try:
            repository = InMemorySecurityRepository(
                alarm_status=AlarmStatus(case.alarm_status),
                arming_status=ArmingStatus(case.arming_status),
                sensors=self._build_sensors(case),
            )
        except ValueError as e:
            result.failures = [f"Invalid setup: {e}"]
            result.duration_ms = (time.time() - start_time) * 1000
            return result

        classifier = StaticImageClassifier()
        service = SecurityService(repository, classifier)
        recorder = RecordingStatusListener()
        service.add_status_listener(recorder)

        for index, step in enumerate(case.steps):
            failure = self._run_step(service, repository, classifier, step)
            if failure:
                failures.append(f"Step {index}: {failure}")

        result.notifications = [status.value for status in recorder.notifications]
        result.final_alarm_status = service.get_alarm_status().value
        result.final_arming_status = service.get_arming_status().value

        failures.extend(self._validate_case(case, result, repository))

        result.failures = failures
        result.passed = len(failures) == 0
        result.duration_ms = (time.time() - start_time) * 1000

        logger.debug("Drill finished", case_id=case.case_id, passed=result.passed)
        return result

    def _run_step(
        self,
        service: SecurityService,
        repository: InMemorySecurityRepository,
        classifier: StaticImageClassifier,
        step: DrillStep,
    ) -> Optional[str]:
        """Apply one step. Returns a failure message, or None."""
        if step.action in ("activate", "deactivate", "reconcile"):
            sensor = repository.get_sensor(step.sensor_id) if step.sensor_id else None
            if sensor is None:
                return f"Unknown sensor: {step.sensor_id}"
            active = {"activate": True, "deactivate": False, "reconcile": None}[step.action]
            service.change_sensor_activation_status(sensor, active)

        elif step.action == "arm":
            try:
                arming_status = ArmingStatus(step.arming_status)
            except ValueError:
                return f"Unknown arming status: {step.arming_status}"
            service.set_arming_status(arming_status)

        elif step.action == "image":
            if step.cat is None:
                return "Missing cat flag"
            classifier.result = bool(step.cat)
            service.process_image(BLANK_FRAME)

        else:
            return f"Unknown action: {step.action}"

        return None

    def _validate_case(
        self,
        case: DrillCase,
        result: DrillResult,
        repository: InMemorySecurityRepository,
    ) -> list[str]:
        """Validate result against expectations."""
        failures = []
        exp = case.expected

        if exp.alarm_status and exp.alarm_status != result.final_alarm_status:
            failures.append(
                f"Alarm status: expected {exp.alarm_status}, got {result.final_alarm_status}"
            )

        if exp.arming_status and exp.arming_status != result.final_arming_status:
            failures.append(
                f"Arming status: expected {exp.arming_status}, got {result.final_arming_status}"
            )

        if exp.notifications is not None and exp.notifications != result.notifications:
            failures.append(
                f"Notifications: expected {exp.notifications}, got {result.notifications}"
            )

        for status in exp.must_not_reach:
            if status in result.notifications:
                failures.append(f"Alarm status {status} was reached but should not have been")

        for sensor_id, expected_active in (
            [(s, True) for s in exp.active_sensors] + [(s, False) for s in exp.inactive_sensors]
        ):
            sensor = repository.get_sensor(sensor_id)
            if sensor is None:
                failures.append(f"Unknown sensor in expectations: {sensor_id}")
            elif sensor.active != expected_active:
                failures.append(
                    f"Sensor {sensor_id}: expected active={expected_active}, got {sensor.active}"
                )

        return failures

    def run_all(self, tags: Optional[list[str]] = None) -> list[DrillResult]:
        """Run all drill cases (optionally filtered by tags)."""
        results = []

        for case in self.cases:
            if tags:
                if not any(tag in case.tags for tag in tags):
                    continue

            results.append(self.run_case(case))

        return results

    def get_summary(self, results: list[DrillResult]) -> dict:
        """Get summary of drill run."""
        passed = sum(1 for r in results if r.passed)
        failed = sum(1 for r in results if not r.passed)

        return {
            "total": len(results),
            "passed": passed,
            "failed": failed,
            "pass_rate": f"{100 * passed / len(results):.1f}%" if results else "N/A",
            "failures": [
                {"case_id": r.case_id, "failures": r.failures}
                for r in results if not r.passed
            ],
        }
