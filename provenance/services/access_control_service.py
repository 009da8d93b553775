"""
Access Control Service
Owns the administrator identity and the manufacturer/verifier authorization sets
"""

import logging
from typing import Dict, Optional

from provenance.core.exceptions import AlreadyInitialized, Unauthorized
from provenance.models.enums import Role
from provenance.services.state_store import StateStore
from provenance.utils.identity import to_identity, require_identity

logger = logging.getLogger(__name__)


class AccessControlService:
    """Answers role questions and mutates role membership under administrator authority"""

    def __init__(self, store: StateStore):
        self.store = store

    def initialize(self, admin_identity: str) -> str:
        """
        Set the administrator and grant it both roles

        Args:
            admin_identity: Address of the administrator

        Returns:
            The normalized administrator address

        Raises:
            InvalidArgument: If the address is a null identity
            AlreadyInitialized: If an administrator already exists
        """
        admin = require_identity(admin_identity, 'admin_identity')

        with self.store.lock:
            if self.store.get_administrator() is not None:
                raise AlreadyInitialized("Access control is already initialized")
            # Role upserts are idempotent; the administrator record is written last
            self.store.set_role(admin, Role.MANUFACTURER, True)
            self.store.set_role(admin, Role.VERIFIER, True)
            self.store.set_administrator(admin)

        logger.info(f"Access control initialized with administrator {admin}")
        return admin

    def get_administrator(self) -> Optional[str]:
        with self.store.lock:
            return self.store.get_administrator()

    # Predicates

    def is_administrator(self, identity) -> bool:
        address = to_identity(identity)
        if address is None:
            return False
        with self.store.lock:
            return self.store.get_administrator() == address

    def is_manufacturer(self, identity) -> bool:
        return self._has_role(identity, Role.MANUFACTURER)

    def is_verifier(self, identity) -> bool:
        return self._has_role(identity, Role.VERIFIER)

    def roles_of(self, identity) -> Dict[str, bool]:
        """Role flags for a single identity"""
        with self.store.lock:
            return {
                'administrator': self.is_administrator(identity),
                'manufacturer': self.is_manufacturer(identity),
                'verifier': self.is_verifier(identity)
            }

    def _has_role(self, identity, role: Role) -> bool:
        address = to_identity(identity)
        if address is None:
            return False
        with self.store.lock:
            return self.store.has_role(address, role)

    # Guards

    def require_administrator(self, caller) -> str:
        if not self.is_administrator(caller):
            raise Unauthorized("Caller is not the administrator")
        return to_identity(caller)

    def require_manufacturer(self, caller) -> str:
        if not self.is_manufacturer(caller):
            raise Unauthorized("Caller is not an authorized manufacturer")
        return to_identity(caller)

    def require_verifier(self, caller) -> str:
        if not self.is_verifier(caller):
            raise Unauthorized("Caller is not an authorized verifier")
        return to_identity(caller)

    # Administrative surface

    def grant_manufacturer(self, identity, caller) -> str:
        return self._set_membership(identity, Role.MANUFACTURER, True, caller)

    def revoke_manufacturer(self, identity, caller) -> Optional[str]:
        return self._set_membership(identity, Role.MANUFACTURER, False, caller)

    def grant_verifier(self, identity, caller) -> str:
        return self._set_membership(identity, Role.VERIFIER, True, caller)

    def revoke_verifier(self, identity, caller) -> Optional[str]:
        return self._set_membership(identity, Role.VERIFIER, False, caller)

    def _set_membership(self, identity, role: Role, member: bool, caller) -> Optional[str]:
        with self.store.lock:
            admin = self.require_administrator(caller)

            if member:
                address = require_identity(identity)
            else:
                # Revoking a null identity is a no-op
                address = to_identity(identity)
                if address is None:
                    return None

            self.store.set_role(address, role, member)

        action = 'granted' if member else 'revoked'
        logger.info(f"{admin} {action} {role.value} role for {address}")
        return address
