import struct

import pytest

from recordprog.errors import ProgramError, ProgramErrorKind
from recordprog.instruction import (
    AccountMeta,
    CloseAccount,
    Initialize,
    Instruction,
    Reallocate,
    SetAuthority,
    Write,
    close_account,
    initialize,
    pack_instruction,
    reallocate,
    set_authority,
    unpack_instruction,
    write,
)
from recordprog.pubkey import Pubkey, program_id

TEST_BYTES = bytes([42] * 8)
RECORD = Pubkey(bytes([1] * 32))
AUTHORITY = Pubkey(bytes([2] * 32))
OTHER = Pubkey(bytes([3] * 32))

INVALID = ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)


def meta(pubkey, signer=False, writable=False):
    return AccountMeta(pubkey, is_signer=signer, is_writable=writable)


@pytest.mark.parametrize(
    "instruction, expected",
    [
        (Initialize(), bytes([0])),
        (
            Write(offset=0, data=TEST_BYTES),
            bytes([1])
            + (0).to_bytes(8, "little")
            + len(TEST_BYTES).to_bytes(4, "little")
            + TEST_BYTES,
        ),
        (SetAuthority(), bytes([2])),
        (CloseAccount(), bytes([3])),
        (Reallocate(data_length=16), bytes([4]) + (16).to_bytes(8, "little")),
    ],
)
def test_serialize(instruction, expected):
    assert pack_instruction(instruction) == expected
    assert unpack_instruction(expected) == instruction


@pytest.mark.parametrize(
    "data",
    [
        bytes([12]) + TEST_BYTES,
        b"",
        bytes([1]) + bytes(7),
        bytes([1]) + bytes(8) + bytes(3),
        bytes([1]) + bytes(8) + struct.pack("<I", 5) + bytes(4),
        bytes([4]) + bytes(7),
    ],
)
def test_invalid_data_is_rejected(data):
    with pytest.raises(ProgramError) as info:
        unpack_instruction(data)
    assert info.value == INVALID


def test_write_ignores_trailing_bytes():
    data = bytes([1]) + struct.pack("<Q", 7) + struct.pack("<I", 2) + b"abcdef"
    assert unpack_instruction(data) == Write(offset=7, data=b"ab")


def test_write_round_trip_large_offset():
    instruction = Write(offset=2**64 - 1, data=b"")
    assert unpack_instruction(pack_instruction(instruction)) == instruction


@pytest.mark.parametrize(
    "make",
    [lambda: Write(offset=-1, data=b""), lambda: Reallocate(data_length=2**64)],
)
def test_out_of_range_fields_are_rejected(make):
    with pytest.raises(ValueError):
        make()


@pytest.mark.parametrize(
    "built, accounts, decoded",
    [
        (
            initialize(RECORD, AUTHORITY),
            (meta(RECORD, writable=True), meta(AUTHORITY)),
            Initialize(),
        ),
        (
            write(RECORD, AUTHORITY, 0, TEST_BYTES),
            (meta(RECORD, writable=True), meta(AUTHORITY, signer=True)),
            Write(offset=0, data=TEST_BYTES),
        ),
        (
            set_authority(RECORD, AUTHORITY, OTHER),
            (meta(RECORD, writable=True), meta(AUTHORITY, signer=True), meta(OTHER)),
            SetAuthority(),
        ),
        (
            close_account(RECORD, AUTHORITY, OTHER),
            (
                meta(RECORD, writable=True),
                meta(AUTHORITY, signer=True),
                meta(OTHER, writable=True),
            ),
            CloseAccount(),
        ),
        (
            reallocate(RECORD, AUTHORITY, 16),
            (meta(RECORD, writable=True), meta(AUTHORITY, signer=True)),
            Reallocate(data_length=16),
        ),
    ],
)
def test_builders(built, accounts, decoded):
    assert built == Instruction(program_id(), accounts, pack_instruction(decoded))
    assert unpack_instruction(built.data) == decoded


def test_initialize_builder_data():
    assert initialize(RECORD, AUTHORITY).data == bytes([0])


def test_pack_rejects_foreign_object():
    with pytest.raises(TypeError):
        pack_instruction("initialize")