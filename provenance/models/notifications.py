"""
Registry Notifications
Payloads emitted to notification sinks after each accepted transition
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any

from provenance.models.enums import EventType


@dataclass(frozen=True)
class ProductCreated:
    product_id: int
    name: str
    manufacturer: str

    event_type = EventType.PRODUCT_CREATED

    def to_dict(self) -> Dict[str, Any]:
        return {'event_type': self.event_type.value, **asdict(self)}


@dataclass(frozen=True)
class ProductTransferred:
    product_id: int
    from_owner: str
    to_owner: str
    location: str

    event_type = EventType.PRODUCT_TRANSFERRED

    def to_dict(self) -> Dict[str, Any]:
        return {'event_type': self.event_type.value, **asdict(self)}


@dataclass(frozen=True)
class ProductVerified:
    product_id: int
    verifier: str

    event_type = EventType.PRODUCT_VERIFIED

    def to_dict(self) -> Dict[str, Any]:
        return {'event_type': self.event_type.value, **asdict(self)}
