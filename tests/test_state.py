import pytest

from recordprog.errors import ProgramError, ProgramErrorKind
from recordprog.pubkey import Pubkey
from recordprog.state import (
    CURRENT_VERSION,
    WRITABLE_START_INDEX,
    RecordData,
    unpack_record_data,
)

TEST_VERSION = 1
TEST_PUBKEY = Pubkey(bytes([100] * 32))
TEST_BYTES = bytes([42] * 8)
TEST_RECORD_DATA = RecordData(version=TEST_VERSION, authority=TEST_PUBKEY)


def test_serialize_data():
    expected = bytes([TEST_VERSION]) + TEST_PUBKEY.to_bytes()
    assert TEST_RECORD_DATA.pack() == expected
    assert unpack_record_data(expected) == TEST_RECORD_DATA


def test_deserialize_invalid_slice():
    expected = bytes([TEST_VERSION]) + TEST_PUBKEY.to_bytes() + TEST_BYTES
    with pytest.raises(ProgramError) as info:
        unpack_record_data(expected)
    assert info.value == ProgramError(ProgramErrorKind.INVALID_ARGUMENT)


def test_deserialize_short_slice():
    with pytest.raises(ProgramError) as info:
        unpack_record_data(bytes(WRITABLE_START_INDEX - 1))
    assert info.value.kind is ProgramErrorKind.INVALID_ARGUMENT


def test_layout_constants():
    assert WRITABLE_START_INDEX == 33
    assert RecordData.WRITABLE_START_INDEX == WRITABLE_START_INDEX
    assert RecordData.CURRENT_VERSION == CURRENT_VERSION == 1
    assert len(TEST_RECORD_DATA.pack()) == RecordData.SIZE


def test_is_initialized():
    assert TEST_RECORD_DATA.is_initialized() is True
    assert RecordData(version=0, authority=TEST_PUBKEY).is_initialized() is False
    assert RecordData(version=2, authority=TEST_PUBKEY).is_initialized() is False


def test_zeroed_header_is_uninitialized():
    header = unpack_record_data(bytes(WRITABLE_START_INDEX))
    assert header.version == 0
    assert header.authority == Pubkey(bytes(32))
    assert header.is_initialized() is False


def test_version_must_fit_in_byte():
    with pytest.raises(ValueError):
        RecordData(version=256, authority=TEST_PUBKEY)