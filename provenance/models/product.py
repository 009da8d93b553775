# models/product.py
from dataclasses import dataclass, field, replace
from typing import Tuple, Optional, Dict, Any

from provenance.models.enums import CheckpointKind


@dataclass(frozen=True)
class Checkpoint:
    """One entry of a product's audit log"""
    kind: CheckpointKind
    timestamp: int
    location: Optional[str] = None
    actor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "timestamp": self.timestamp,
            "location": self.location,
            "actor": self.actor
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Checkpoint":
        return cls(
            kind=CheckpointKind(data["kind"]),
            timestamp=int(data["timestamp"]),
            location=data.get("location"),
            actor=data.get("actor")
        )


@dataclass(frozen=True)
class Product:
    """
    Custody record for a single physical item.

    Instances are immutable: every accepted transition produces a new record
    with one more checkpoint, so a stored product is always a consistent
    snapshot.
    """
    id: int
    name: str
    manufacturer_name: str
    manufacturing_timestamp: int
    current_location: str
    current_owner: str
    is_verified: bool = False
    checkpoints: Tuple[Checkpoint, ...] = field(default_factory=tuple)

    @property
    def revision(self) -> int:
        """Number of accepted operations applied to this product"""
        return len(self.checkpoints)

    def evolve(self, checkpoint: Checkpoint, **changes) -> "Product":
        """Return a copy with ``changes`` applied and ``checkpoint`` appended"""
        return replace(self, checkpoints=self.checkpoints + (checkpoint,), **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database storage"""
        return {
            "_id": self.id,
            "name": self.name,
            "manufacturer_name": self.manufacturer_name,
            "manufacturing_timestamp": self.manufacturing_timestamp,
            "current_location": self.current_location,
            "current_owner": self.current_owner,
            "is_verified": self.is_verified,
            "checkpoints": [checkpoint.to_dict() for checkpoint in self.checkpoints],
            "revision": self.revision
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=int(data["_id"]),
            name=data["name"],
            manufacturer_name=data["manufacturer_name"],
            manufacturing_timestamp=int(data["manufacturing_timestamp"]),
            current_location=data.get("current_location", ""),
            current_owner=data["current_owner"],
            is_verified=bool(data.get("is_verified", False)),
            checkpoints=tuple(Checkpoint.from_dict(c) for c in data.get("checkpoints", []))
        )
