"""
Registry State Stores
Holds the administrator, role memberships and product records behind one lock
"""

import logging
import threading
from typing import Dict, List, Optional, Set

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from provenance.core.exceptions import AlreadyInitialized, ConcurrentModification
from provenance.models.enums import Role
from provenance.models.product import Product

logger = logging.getLogger(__name__)


class StateStore:
    """
    Storage interface shared by the access control and registry services.

    ``lock`` is the single mutual-exclusion boundary for the whole registry:
    services hold it across every check-then-mutate sequence and every read.
    """

    def __init__(self):
        self.lock = threading.RLock()

    # Access control state
    def get_administrator(self) -> Optional[str]:
        raise NotImplementedError

    def set_administrator(self, identity: str) -> None:
        """Record the administrator; raises AlreadyInitialized if one exists"""
        raise NotImplementedError

    def has_role(self, identity: str, role: Role) -> bool:
        raise NotImplementedError

    def set_role(self, identity: str, role: Role, member: bool) -> None:
        raise NotImplementedError

    # Products
    def count_products(self) -> int:
        raise NotImplementedError

    def get_product(self, product_id: int) -> Optional[Product]:
        raise NotImplementedError

    def list_products(self, offset: int = 0, limit: int = 50) -> List[Product]:
        raise NotImplementedError

    def insert_product(self, product: Product) -> None:
        raise NotImplementedError

    def replace_product(self, product: Product, expected_revision: int) -> None:
        """Store ``product`` only if the stored revision still equals ``expected_revision``"""
        raise NotImplementedError

    def ping(self) -> bool:
        return True


class InMemoryStateStore(StateStore):
    """Process-local store; the default backend and the one tests use"""

    def __init__(self):
        super().__init__()
        self._administrator: Optional[str] = None
        self._roles: Dict[Role, Set[str]] = {
            Role.MANUFACTURER: set(),
            Role.VERIFIER: set()
        }
        self._products: Dict[int, Product] = {}

    def get_administrator(self) -> Optional[str]:
        return self._administrator

    def set_administrator(self, identity: str) -> None:
        with self.lock:
            if self._administrator is not None:
                raise AlreadyInitialized("Access control is already initialized")
            self._administrator = identity

    def has_role(self, identity: str, role: Role) -> bool:
        return identity in self._roles[role]

    def set_role(self, identity: str, role: Role, member: bool) -> None:
        with self.lock:
            if member:
                self._roles[role].add(identity)
            else:
                self._roles[role].discard(identity)

    def count_products(self) -> int:
        return len(self._products)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def list_products(self, offset: int = 0, limit: int = 50) -> List[Product]:
        with self.lock:
            ids = range(offset + 1, min(offset + limit, len(self._products)) + 1)
            return [self._products[i] for i in ids]

    def insert_product(self, product: Product) -> None:
        with self.lock:
            if product.id in self._products:
                raise ConcurrentModification(f"Product {product.id} already exists")
            self._products[product.id] = product

    def replace_product(self, product: Product, expected_revision: int) -> None:
        with self.lock:
            current = self._products.get(product.id)
            if current is None or current.revision != expected_revision:
                raise ConcurrentModification(f"Product {product.id} changed concurrently")
            self._products[product.id] = product


class MongoStateStore(StateStore):
    """
    MongoDB-backed store.

    Every write touches exactly one document, so each accepted transition is
    committed atomically. Cross-process races surface as ConcurrentModification:
    inserts rely on the unique ``_id`` and replacements compare the stored
    ``revision`` (checkpoint count).
    """

    META_ID = 'access_control'

    def __init__(self, db):
        super().__init__()
        self.db = db
        self.products = db.products
        self.roles = db.roles
        self.meta = db.registry_meta

    def get_administrator(self) -> Optional[str]:
        doc = self.meta.find_one({'_id': self.META_ID})
        return doc.get('administrator') if doc else None

    def set_administrator(self, identity: str) -> None:
        try:
            self.meta.insert_one({'_id': self.META_ID, 'administrator': identity})
        except DuplicateKeyError:
            raise AlreadyInitialized("Access control is already initialized")

    def has_role(self, identity: str, role: Role) -> bool:
        doc = self.roles.find_one({'_id': identity})
        return bool(doc and doc.get(role.value))

    def set_role(self, identity: str, role: Role, member: bool) -> None:
        # Revoking never creates a document for an unknown identity
        self.roles.update_one(
            {'_id': identity},
            {'$set': {role.value: member}},
            upsert=member
        )

    def count_products(self) -> int:
        return self.products.count_documents({})

    def get_product(self, product_id: int) -> Optional[Product]:
        doc = self.products.find_one({'_id': product_id})
        return Product.from_dict(doc) if doc else None

    def list_products(self, offset: int = 0, limit: int = 50) -> List[Product]:
        cursor = self.products.find({}).sort('_id', ASCENDING).skip(offset).limit(limit)
        return [Product.from_dict(doc) for doc in cursor]

    def insert_product(self, product: Product) -> None:
        try:
            self.products.insert_one(product.to_dict())
        except DuplicateKeyError:
            raise ConcurrentModification(f"Product {product.id} already exists")

    def replace_product(self, product: Product, expected_revision: int) -> None:
        result = self.products.replace_one(
            {'_id': product.id, 'revision': expected_revision},
            product.to_dict()
        )
        if result.matched_count == 0:
            raise ConcurrentModification(f"Product {product.id} changed concurrently")

    def ping(self) -> bool:
        try:
            self.db.command('ping')
            return True
        except PyMongoError as e:
            logger.error(f"Database ping failed: {e}")
            return False
