# models/enums.py
from enum import Enum

class Role(Enum):
    MANUFACTURER = "manufacturer"
    VERIFIER = "verifier"

class CheckpointKind(Enum):
    CREATED = "created"
    TRANSFERRED = "transferred"
    VERIFIED = "verified"

class EventType(Enum):
    PRODUCT_CREATED = "product_created"
    PRODUCT_TRANSFERRED = "product_transferred"
    PRODUCT_VERIFIED = "product_verified"
