"""Data models for entity rendering."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

AttributeValue = Any

UNAVAILABLE_STATE = "unavailable"


class ColorClass(str, Enum):
    """Semantic color class of an entity state."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    UNAVAILABLE = "unavailable"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class FormattedValue:
    """Display text for an entity value."""

    text: str
    is_percentage: bool = False


class EntityRecord(BaseModel):
    """Snapshot of a Home Assistant entity as returned by ``/api/states/<id>``.

    Attribute lookups never assume a key exists: the typed accessors return
    ``None`` (or the default) for absent keys and for values of the wrong type.
    """

    entity_id: str = Field(..., description="Entity id in '<domain>.<name>' form")
    state: str = Field(default=UNAVAILABLE_STATE, description="Raw state string")
    attributes: dict[str, AttributeValue] = Field(
        default_factory=dict, description="Ordered attribute map"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def placeholder(cls, entity_id: str) -> "EntityRecord":
        """Degraded record used when an entity could not be fetched."""
        return cls(entity_id=entity_id, state=UNAVAILABLE_STATE, attributes={})

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "EntityRecord":
        """Build a record from a Home Assistant state document.

        Unknown keys (``last_changed``, ``context``...) are ignored. A missing
        or null attribute map becomes empty and a non-string state is
        stringified.
        """
        data = dict(payload)
        state = data.get("state")
        data["state"] = UNAVAILABLE_STATE if state is None else str(state)
        if not isinstance(data.get("attributes"), dict):
            data["attributes"] = {}
        return cls.model_validate(data)

    @property
    def domain(self) -> str:
        """Text before the first '.' of the entity id."""
        return self.entity_id.split(".", 1)[0]

    @property
    def unit(self) -> str:
        unit = self.attributes.get("unit_of_measurement")
        return unit if isinstance(unit, str) else ""

    @property
    def is_available(self) -> bool:
        return self.state != UNAVAILABLE_STATE

    @property
    def display_name(self) -> str:
        return self.string_attribute("friendly_name") or self.entity_id

    def string_attribute(self, key: str) -> Optional[str]:
        value = self.attributes.get(key)
        return value if isinstance(value, str) else None

    def number_attribute(self, key: str) -> Optional[float]:
        """Return a finite numeric attribute as float, None otherwise.

        Booleans are not treated as numbers even though ``bool`` subclasses
        ``int``.
        """
        value = self.attributes.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        value = float(value)
        return value if math.isfinite(value) else None
