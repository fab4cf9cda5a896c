"""Principal role entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class PrincipalRole:
    """Principal role - named group of principals, bound to catalog roles."""

    name: str
    create_timestamp: datetime
    last_update_timestamp: datetime
    properties: dict[str, str] = field(default_factory=dict)
    entity_version: int = 1
