"""
Identity Helpers
Caller identities are Ethereum account addresses, compared in checksum form
"""

from typing import Optional

from web3 import Web3

from provenance.core.exceptions import InvalidArgument

ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'


def to_identity(value) -> Optional[str]:
    """
    Normalize a caller reference to its checksum address

    Returns:
        Checksum address, or None for a null identity (missing, malformed or zero)
    """
    if not isinstance(value, str) or not value.strip():
        return None

    value = value.strip()
    if not Web3.is_address(value):
        return None

    # Mixed-case input must carry a valid EIP-55 checksum
    digits = value[2:] if value[:2].lower() == '0x' else value
    if digits != digits.lower() and digits != digits.upper():
        if not Web3.is_checksum_address(value):
            return None

    address = Web3.to_checksum_address(value)
    if address == ZERO_ADDRESS:
        return None
    return address


def require_identity(value, field_name: str = 'identity') -> str:
    """Normalize ``value`` or raise InvalidArgument for a null identity"""
    address = to_identity(value)
    if address is None:
        raise InvalidArgument(f"{field_name} must be a non-zero account address")
    return address


def is_null_identity(value) -> bool:
    return to_identity(value) is None
