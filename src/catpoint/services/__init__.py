"""Catpoint Services"""

from .repository import SecurityRepository, InMemorySecurityRepository
from .listeners import StatusListener, RecordingStatusListener
from .security_service import SecurityService, SecurityServiceConfig
from .drill_runner import (
    DrillRunner,
    DrillCase,
    DrillStep,
    DrillResult,
    DrillExpectation,
)

__all__ = [
    # State store
    'SecurityRepository',
    'InMemorySecurityRepository',
    # Listeners
    'StatusListener',
    'RecordingStatusListener',
    # Alarm engine
    'SecurityService',
    'SecurityServiceConfig',
    # Drill Runner
    'DrillRunner',
    'DrillCase',
    'DrillStep',
    'DrillResult',
    'DrillExpectation',
]
