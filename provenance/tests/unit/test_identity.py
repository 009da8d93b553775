# tests/unit/test_identity.py
import pytest

from provenance.core.exceptions import InvalidArgument
from provenance.utils.identity import to_identity, require_identity, is_null_identity, ZERO_ADDRESS

CHECKSUMMED = '0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed'


def test_checksums_lowercase_address():
    assert to_identity(CHECKSUMMED.lower()) == CHECKSUMMED


def test_strips_whitespace():
    assert to_identity(f"  {CHECKSUMMED}\n") == CHECKSUMMED


@pytest.mark.parametrize('value', [None, '', '   ', 'alice', '0x1234', 12345, ZERO_ADDRESS])
def test_null_identities(value):
    assert to_identity(value) is None
    assert is_null_identity(value)


def test_bad_checksum_is_rejected():
    # Mixed case with a wrong checksum is not a valid address
    assert to_identity('0x5AAeb6053F3E94C9b9A09f33669435E7Ef1BeAed') is None


def test_require_identity_names_field():
    with pytest.raises(InvalidArgument, match='new_owner'):
        require_identity(ZERO_ADDRESS, 'new_owner')
    assert require_identity(CHECKSUMMED) == CHECKSUMMED


def test_uppercase_address_is_checksummed():
    assert to_identity('0x' + CHECKSUMMED[2:].upper()) == CHECKSUMMED


@pytest.mark.parametrize('value', [
    '0xFB6916095ca1df60bB79Ce92cE3Ea74c37c5d359',
    '0x5aaeb6053F3E94C9b9A09f33669435E7Ef1BeAed',
])
def test_mixed_case_must_match_checksum(value):
    assert to_identity(value) is None


def test_valid_mixed_case_checksum_is_accepted():
    assert to_identity('0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359') == '0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359'
