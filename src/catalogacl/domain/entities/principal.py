"""Principal entity - an authenticatable identity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Principal:
    """Principal - identity that gains catalog privileges through roles."""

    name: str
    create_timestamp: datetime
    last_update_timestamp: datetime
    properties: dict[str, str] = field(default_factory=dict)
    entity_version: int = 1
