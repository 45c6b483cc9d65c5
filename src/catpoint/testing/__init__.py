"""Catpoint testing helpers - standard configuration and drill book"""

from .standard_config import (
    create_standard_sensors,
    create_standard_repository,
    default_drills_path,
)

__all__ = [
    'create_standard_sensors',
    'create_standard_repository',
    'default_drills_path',
]
