"""Errors raised by the record program."""

from __future__ import annotations

from enum import Enum, IntEnum

RECORD_ERROR_TYPE = "Record Error"


class ProgramErrorKind(Enum):
    """Kinds of failure a program instruction can report."""

    CUSTOM = "Custom program error"
    INVALID_ARGUMENT = "The arguments provided to a program instruction were invalid"
    INVALID_INSTRUCTION_DATA = "An instruction's data contents was invalid"
    INVALID_ACCOUNT_DATA = "An account's data contents was invalid"
    ACCOUNT_DATA_TOO_SMALL = "An account's data was too small"
    MISSING_REQUIRED_SIGNATURE = "A signature was required but not found"
    ACCOUNT_ALREADY_INITIALIZED = (
        "An initialize instruction was sent to an account that has already "
        "been initialized"
    )
    UNINITIALIZED_ACCOUNT = (
        "An attempt to operate on an account that hasn't been initialized"
    )
    NOT_ENOUGH_ACCOUNT_KEYS = "The instruction expected additional account keys"
    INVALID_REALLOC = "Failed to reallocate account data"
    ARITHMETIC_OVERFLOW = "Program arithmetic overflowed"


class ProgramError(Exception):
    """A failed instruction, identified by its kind and, for custom errors, a code."""

    def __init__(self, kind: ProgramErrorKind, code: int | None = None) -> None:
        if kind is ProgramErrorKind.CUSTOM:
            if code is None or not 0 <= code < 2**32:
                raise ValueError("a custom program error needs a 32-bit code")
        elif code is not None:
            raise ValueError("only custom program errors carry a code")
        self.kind = kind
        self.code = code
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.kind is ProgramErrorKind.CUSTOM:
            return f"{self.kind.value}: {self.code:#x}"
        return self.kind.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProgramError):
            return NotImplemented
        return (self.kind, self.code) == (other.kind, other.code)

    def __hash__(self) -> int:
        return hash((self.kind, self.code))

    def __repr__(self) -> str:
        if self.kind is ProgramErrorKind.CUSTOM:
            return f"ProgramError({self.kind.name}, {self.code})"
        return f"ProgramError({self.kind.name})"


_RECORD_ERROR_MESSAGES = {
    0: "Incorrect authority provided on update or delete",
    1: "Calculation overflow",
}


class RecordError(IntEnum):
    """Errors specific to the record program."""

    INCORRECT_AUTHORITY = 0
    OVERFLOW = 1

    def __str__(self) -> str:
        return _RECORD_ERROR_MESSAGES[int(self)]

    def to_program_error(self) -> ProgramError:
        """Return the custom program error carrying this error's code."""
        return ProgramError(ProgramErrorKind.CUSTOM, int(self))