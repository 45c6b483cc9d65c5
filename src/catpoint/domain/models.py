"""
Catpoint Core Models

Sensor snapshot model. Uses Pydantic for validation.

Sensors are immutable: changing the active flag produces a new snapshot
which has to be written back to the state store explicitly.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import SensorType


class Sensor(BaseModel):
    """A binary sensor monitored by the system.

    Identity is ``sensor_id``: two snapshots of the same sensor compare
    equal (and hash equal) even when their ``active`` flags differ.
    """
    model_config = ConfigDict(frozen=True)

    sensor_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    sensor_type: SensorType
    active: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Sensor name must not be blank')
        return v

    def with_active(self, active: bool) -> "Sensor":
        """Return a copy of this sensor with the given active flag."""
        return self.model_copy(update={"active": active})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __hash__(self) -> int:
        return hash(self.sensor_id)

    def __lt__(self, other: "Sensor") -> bool:
        return (self.name, self.sensor_type.value, self.sensor_id) < (
            other.name, other.sensor_type.value, other.sensor_id
        )
