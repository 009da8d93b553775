"""
Product Registry Service
Creation, ownership transfer and verification of products, each gated by
access control and recorded as one checkpoint plus one notification
"""

import logging
from functools import wraps
from typing import List

from provenance.core.exceptions import (
    RegistryError, NotFound, Unauthorized, InvalidArgument, AlreadyVerified
)
from provenance.models.enums import CheckpointKind
from provenance.models.notifications import ProductCreated, ProductTransferred, ProductVerified
from provenance.models.product import Product, Checkpoint
from provenance.services.access_control_service import AccessControlService
from provenance.services.notification_service import NotificationSink, NullNotificationSink
from provenance.services.state_store import StateStore
from provenance.utils.date_helpers import MonotonicClock
from provenance.utils.formatters import render_checkpoints
from provenance.utils.identity import to_identity, require_identity

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def logs_rejections(operation: str):
    """Log rejected calls at WARNING before re-raising them"""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RegistryError as e:
                logger.warning(f"{operation} rejected: {type(e).__name__}: {e.message}")
                raise
        return wrapper
    return decorator


def _required_text(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{field_name} is required")
    return value.strip()


class ProductRegistryService:
    """
    The three custody transitions plus read access.

    Every operation runs inside ``store.lock``: preconditions are checked
    against the current record, the new record is committed with a single
    store write, and the notification is published only after that write
    succeeds. A rejected call leaves the store exactly as it was.
    """

    def __init__(self, store: StateStore, access_control: AccessControlService,
                 notifier: NotificationSink = None, clock=None):
        self.store = store
        self.access_control = access_control
        self.notifier = notifier or NullNotificationSink()
        self.clock = clock or MonotonicClock()

    @logs_rejections('create_product')
    def create_product(self, name: str, manufacturer_name: str, initial_location: str,
                       caller) -> int:
        """
        Register a new product owned by its creator

        Returns:
            The assigned product id

        Raises:
            Unauthorized: Caller is not a manufacturer
            InvalidArgument: Name or manufacturer name is empty, or location is not text
        """
        with self.store.lock:
            creator = self.access_control.require_manufacturer(caller)
            name = _required_text(name, 'name')
            manufacturer_name = _required_text(manufacturer_name, 'manufacturer_name')
            if initial_location is None:
                initial_location = ''
            if not isinstance(initial_location, str):
                raise InvalidArgument("initial_location must be text")
            location = initial_location.strip()

            now = self.clock()
            product_id = self.store.count_products() + 1
            product = Product(
                id=product_id,
                name=name,
                manufacturer_name=manufacturer_name,
                manufacturing_timestamp=now,
                current_location=location,
                current_owner=creator,
                checkpoints=(Checkpoint(CheckpointKind.CREATED, now, location=location, actor=creator),)
            )
            self.store.insert_product(product)

            logger.info(f"Product {product_id} '{name}' created by {creator} at {location or '-'}")
            self._publish(ProductCreated(product_id, name, manufacturer_name))

        return product_id

    @logs_rejections('transfer_product')
    def transfer_product(self, product_id: int, new_owner, new_location: str, caller) -> Product:
        """
        Hand a product to a new owner at a new location

        Raises:
            NotFound: Unknown product id
            Unauthorized: Caller is not the current owner
            InvalidArgument: Null new owner or empty location
        """
        with self.store.lock:
            product = self._load(product_id)
            if to_identity(caller) != product.current_owner:
                raise Unauthorized(f"Caller is not the current owner of product {product.id}")
            recipient = require_identity(new_owner, 'new_owner')
            location = _required_text(new_location, 'new_location')

            now = self.clock()
            updated = product.evolve(
                Checkpoint(CheckpointKind.TRANSFERRED, now, location=location, actor=recipient),
                current_owner=recipient,
                current_location=location
            )
            self.store.replace_product(updated, product.revision)

            logger.info(f"Product {product.id} transferred {product.current_owner} -> {recipient} at {location}")
            self._publish(ProductTransferred(product.id, product.current_owner, recipient, location))

        return updated

    @logs_rejections('verify_product')
    def verify_product(self, product_id: int, caller) -> Product:
        """
        Mark a product as verified; allowed once per product

        Raises:
            NotFound: Unknown product id
            Unauthorized: Caller is not a verifier
            AlreadyVerified: Product was verified before
        """
        with self.store.lock:
            product = self._load(product_id)
            verifier = self.access_control.require_verifier(caller)
            if product.is_verified:
                raise AlreadyVerified(f"Product {product.id} is already verified")

            now = self.clock()
            updated = product.evolve(
                Checkpoint(CheckpointKind.VERIFIED, now, actor=verifier),
                is_verified=True
            )
            self.store.replace_product(updated, product.revision)

            logger.info(f"Product {product.id} verified by {verifier}")
            self._publish(ProductVerified(product.id, verifier))

        return updated

    # Reads

    def get_product(self, product_id: int) -> Product:
        with self.store.lock:
            return self._load(product_id)

    def get_total_products(self) -> int:
        with self.store.lock:
            return self.store.count_products()

    def get_checkpoint_log(self, product_id: int) -> List[str]:
        return render_checkpoints(self.get_product(product_id))

    def list_products(self, offset: int = 0, limit: int = 50) -> List[Product]:
        offset = max(int(offset), 0)
        limit = min(max(int(limit), 0), MAX_PAGE_SIZE)
        with self.store.lock:
            return self.store.list_products(offset, limit)

    def _load(self, product_id) -> Product:
        # bool is an int subclass but never a valid id
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise NotFound(f"Product {product_id} does not exist")

        if product_id < 1 or product_id > self.store.count_products():
            raise NotFound(f"Product {product_id} does not exist")

        product = self.store.get_product(product_id)
        if product is None:
            raise NotFound(f"Product {product_id} does not exist")
        return product

    def _publish(self, notification):
        try:
            self.notifier.publish(notification)
        except Exception as e:
            logger.error(f"Notification sink failed for {notification.event_type.value}: {e}")
