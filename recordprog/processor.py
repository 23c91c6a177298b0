"""Instruction processing for record accounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from recordprog.errors import ProgramError, ProgramErrorKind, RecordError
from recordprog.instruction import (
    CloseAccount,
    Initialize,
    Reallocate,
    SetAuthority,
    Write,
    unpack_instruction,
)
from recordprog.pubkey import Pubkey
from recordprog.state import CURRENT_VERSION, WRITABLE_START_INDEX, RecordData, unpack_record_data

log = logging.getLogger(__name__)

MAX_PERMITTED_DATA_INCREASE = 10 * 1024
MAX_PERMITTED_DATA_LENGTH = 10 * 1024 * 1024
_U64_MAX = 2**64 - 1


@dataclass(eq=False)
class AccountInfo:
    """An account handed to the program: its key, flags, lamports and data."""

    key: Pubkey
    is_signer: bool = False
    is_writable: bool = False
    lamports: int = 0
    data: bytearray = field(default_factory=bytearray)
    owner: Pubkey | None = None
    _original_length: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.data = bytearray(self.data)
        self._original_length = len(self.data)

    @property
    def data_len(self) -> int:
        """Current length of the account data."""
        return len(self.data)

    def resize(self, new_length: int) -> None:
        """Grow (zero-filled) or shrink the account data to new_length bytes."""
        if (
            new_length < 0
            or new_length > MAX_PERMITTED_DATA_LENGTH
            or new_length > self._original_length + MAX_PERMITTED_DATA_INCREASE
        ):
            raise ProgramError(ProgramErrorKind.INVALID_REALLOC)
        current = len(self.data)
        if new_length < current:
            del self.data[new_length:]
        elif new_length > current:
            self.data.extend(bytes(new_length - current))


def _next_account(accounts: Iterator[AccountInfo]) -> AccountInfo:
    try:
        return next(accounts)
    except StopIteration:
        raise ProgramError(ProgramErrorKind.NOT_ENOUGH_ACCOUNT_KEYS) from None


def _read_header(info: AccountInfo) -> RecordData:
    if len(info.data) < WRITABLE_START_INDEX:
        raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA)
    return unpack_record_data(info.data[:WRITABLE_START_INDEX])


def _initialized_header(info: AccountInfo, message: str) -> RecordData:
    header = _read_header(info)
    if not header.is_initialized():
        log.info(message)
        raise ProgramError(ProgramErrorKind.UNINITIALIZED_ACCOUNT)
    return header


def _store_header(info: AccountInfo, header: RecordData) -> None:
    info.data[:WRITABLE_START_INDEX] = header.pack()


def _check_authority(authority_info: AccountInfo, expected: Pubkey) -> None:
    if authority_info.key != expected:
        log.info("Incorrect record authority provided")
        raise RecordError.INCORRECT_AUTHORITY.to_program_error()
    if not authority_info.is_signer:
        log.info("Record authority signature missing")
        raise ProgramError(ProgramErrorKind.MISSING_REQUIRED_SIGNATURE)


def process_instruction(
    program_id: Pubkey, accounts: Sequence[AccountInfo], data: bytes
) -> None:
    """Run one record instruction against the given accounts; raise ProgramError on failure."""
    instruction = unpack_instruction(data)
    remaining = iter(accounts)

    match instruction:
        case Initialize():
            log.info("RecordInstruction::Initialize")
            data_info = _next_account(remaining)
            authority_info = _next_account(remaining)
            header = _read_header(data_info)
            if header.is_initialized():
                log.info("Record account already initialized")
                raise ProgramError(ProgramErrorKind.ACCOUNT_ALREADY_INITIALIZED)
            _store_header(data_info, RecordData(CURRENT_VERSION, authority_info.key))

        case Write(offset=offset, data=payload):
            log.info("RecordInstruction::Write")
            data_info = _next_account(remaining)
            authority_info = _next_account(remaining)
            header = _initialized_header(data_info, "Record account not initialized")
            _check_authority(authority_info, header.authority)
            start = WRITABLE_START_INDEX + offset
            end = start + len(payload)
            if end > len(data_info.data):
                raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
            data_info.data[start:end] = payload

        case SetAuthority():
            log.info("RecordInstruction::SetAuthority")
            data_info = _next_account(remaining)
            authority_info = _next_account(remaining)
            new_authority_info = _next_account(remaining)
            header = _initialized_header(data_info, "Record account not initialized")
            _check_authority(authority_info, header.authority)
            header.authority = new_authority_info.key
            _store_header(data_info, header)

        case CloseAccount():
            log.info("RecordInstruction::CloseAccount")
            data_info = _next_account(remaining)
            authority_info = _next_account(remaining)
            destination_info = _next_account(remaining)
            header = _initialized_header(data_info, "Record not initialized")
            _check_authority(authority_info, header.authority)
            total = destination_info.lamports + data_info.lamports
            if total > _U64_MAX:
                raise RecordError.OVERFLOW.to_program_error()
            data_info.lamports = 0
            destination_info.lamports = total

        case Reallocate(data_length=data_length):
            log.info("RecordInstruction::Reallocate")
            data_info = _next_account(remaining)
            authority_info = _next_account(remaining)
            header = _initialized_header(data_info, "Record not initialized")
            _check_authority(authority_info, header.authority)
            needed = RecordData.SIZE + data_length
            if data_info.data_len >= needed:
                log.info("no additional reallocation needed")
                return
            log.info("reallocating +%d bytes", needed - data_info.data_len)
            data_info.resize(needed)