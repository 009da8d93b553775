from .enums import Role, CheckpointKind, EventType
from .product import Product, Checkpoint
from .notifications import ProductCreated, ProductTransferred, ProductVerified

__all__ = [
    'Role', 'CheckpointKind', 'EventType',
    'Product', 'Checkpoint',
    'ProductCreated', 'ProductTransferred', 'ProductVerified',
]
