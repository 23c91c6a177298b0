# recordprog

`recordprog` models a small "record" program in plain Python. A record
account begins with a 33-byte header. The header holds a version byte and the
32-byte public key of the authority that may change the account. Everything
after the header is free-form data, and only the authority can write it.

## Modules

- `recordprog.pubkey` provides the `Pubkey` type, which is an immutable
  32-byte key. `str()` gives its base58 form. The module also has
  `encode_base58`, `decode_base58` and `parse_pubkey`, plus `program_id()`,
  which returns the program's own address.
- `recordprog.errors` provides `ProgramError`, an exception whose `kind` is a
  `ProgramErrorKind` and which has a `code` for custom errors. It also has
  `RecordError`, an `IntEnum` of the program's own error codes
  (`INCORRECT_AUTHORITY` is 0 and `OVERFLOW` is 1). Call
  `RecordError.to_program_error()` to get the matching custom `ProgramError`.
- `recordprog.state` provides `RecordData`, the account header, with
  `is_initialized()` and `pack()`. Use `unpack_record_data()` to read a header
  from exactly 33 bytes.
- `recordprog.instruction` defines the five instructions: `Initialize`,
  `Write`, `SetAuthority`, `CloseAccount` and `Reallocate`. It encodes and
  decodes them with `pack_instruction` and `unpack_instruction`. The builders
  `initialize`, `write`, `set_authority`, `close_account` and `reallocate`
  each return an `Instruction` with its `AccountMeta` list.
- `recordprog.processor` provides `AccountInfo`, an in-memory account with a
  key, signer and writable flags, lamports and a `bytearray` of data. It also
  provides `process_instruction()`, which decodes instruction bytes and applies
  them to a list of accounts.

## Installation

```
pip install recordprog
```

## Example

```python
from recordprog.instruction import initialize, write
from recordprog.processor import AccountInfo, process_instruction
from recordprog.pubkey import Pubkey, program_id
from recordprog.state import unpack_record_data

record_key = Pubkey(bytes([1] * 32))
authority_key = Pubkey(bytes([2] * 32))

record = AccountInfo(key=record_key, data=bytearray(33 + 8), lamports=1_000)
authority = AccountInfo(key=authority_key, is_signer=True)

init = initialize(record_key, authority_key)
process_instruction(program_id(), [record, authority], init.data)

update = write(record_key, authority_key, 0, b"\x2a" * 8)
process_instruction(program_id(), [record, authority], update.data)

header = unpack_record_data(bytes(record.data[:33]))
assert header.authority == authority_key
assert bytes(record.data[33:]) == b"\x2a" * 8
```

## Errors

When something goes wrong, `process_instruction` raises a `ProgramError`, and
its `kind` tells you which case it was:

- `INVALID_INSTRUCTION_DATA`: the instruction bytes are malformed.
- `NOT_ENOUGH_ACCOUNT_KEYS`: too few accounts were passed.
- `INVALID_ACCOUNT_DATA`: the account data is shorter than the header.
- `ACCOUNT_ALREADY_INITIALIZED` or `UNINITIALIZED_ACCOUNT`: the account is in
  the wrong state for the instruction.
- `MISSING_REQUIRED_SIGNATURE`: the authority has not signed.
- `ACCOUNT_DATA_TOO_SMALL`: the write would go past the end of the data.
- `INVALID_REALLOC`: `Reallocate` would grow an account beyond the allowed
  limits.

Two failures are specific to the record program and arrive as `CUSTOM` errors
whose `code` comes from `RecordError`: a wrong authority, and a lamport
overflow on `CloseAccount`. Progress messages go to the standard `logging`
logger `recordprog.processor`.

## What this package does not do

Everything runs in memory on the `AccountInfo` objects you pass in. The
package does not connect to a network node. It does not create, sign or send
transactions, and it does not load keypairs. It has no command-line tool and
does not store accounts between runs.

## Running the tests

```
pip install -e .[test]
pytest
```