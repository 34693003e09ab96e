"""
Signing digest and witness placement for transaction requests.

The digest is SHA256 over the chain id (u64, big-endian) followed by the
canonical encoding of the request with its witnesses left out. Integers are
u64 big-endian, 32-byte values are written raw and must be exactly 32 bytes
long, and variable-length byte strings are length-prefixed and zero-padded to
a multiple of 8 bytes.
Input tx pointers are zeroed because the network assigns them after signing.
"""

from __future__ import annotations

import struct

from loguru import logger

from fuelwallet.address import Address
from fuelwallet.hasher import sha256
from fuelwallet.signer import InvalidInputError
from fuelwallet.transactions.request import (
    ChangeOutput,
    CoinInput,
    CoinOutput,
    ContractInput,
    ContractOutput,
    CreateTransactionRequest,
    MessageInput,
    ScriptTransactionRequest,
    TransactionInput,
    TransactionOutput,
    TransactionRequest,
    VariableOutput,
)

U64_MAX = 2**64 - 1
B256_LENGTH = 32


class UnknownOwnerError(Exception):
    """Raised when writing a witness for an address that owns no input."""

    pass


class WitnessConflictError(Exception):
    """Raised when a witness slot is not held by exactly one owner."""

    pass


def encode_u64(value: int) -> bytes:
    if not 0 <= value <= U64_MAX:
        raise InvalidInputError(f"Value out of u64 range: {value}")
    return struct.pack(">Q", value)


def encode_b256(value: bytes, name: str = "value") -> bytes:
    if len(value) != B256_LENGTH:
        raise InvalidInputError(f"Invalid {name} length: {len(value)}, expected {B256_LENGTH}")
    return bytes(value)


def encode_bytes(data: bytes) -> bytes:
    padding = -len(data) % 8
    return encode_u64(len(data)) + data + b"\x00" * padding


def _encode_input(tx_input: TransactionInput) -> bytes:
    if isinstance(tx_input, CoinInput):
        return b"".join(
            [
                encode_u64(tx_input.type),
                encode_bytes(tx_input.id),
                tx_input.owner.to_bytes(),
                encode_u64(tx_input.amount),
                encode_b256(tx_input.asset_id, "asset_id"),
                encode_u64(0),  # tx_pointer.block_height
                encode_u64(0),  # tx_pointer.tx_index
                encode_u64(tx_input.witness_index),
                encode_u64(tx_input.maturity),
                encode_bytes(tx_input.predicate),
                encode_bytes(tx_input.predicate_data),
            ]
        )

    if isinstance(tx_input, MessageInput):
        return b"".join(
            [
                encode_u64(tx_input.type),
                tx_input.sender.to_bytes(),
                tx_input.recipient.to_bytes(),
                encode_u64(tx_input.amount),
                encode_b256(tx_input.nonce, "nonce"),
                encode_u64(tx_input.witness_index),
                encode_bytes(tx_input.data),
                encode_bytes(tx_input.predicate),
                encode_bytes(tx_input.predicate_data),
            ]
        )

    if isinstance(tx_input, ContractInput):
        return b"".join(
            [
                encode_u64(tx_input.type),
                encode_b256(tx_input.contract_id, "contract_id"),
                encode_u64(0),
                encode_u64(0),
            ]
        )

    raise InvalidInputError(f"Unsupported input type: {type(tx_input).__name__}")


def _encode_output(output: TransactionOutput) -> bytes:
    if isinstance(output, CoinOutput):
        return (
            encode_u64(output.type)
            + output.to.to_bytes()
            + encode_u64(output.amount)
            + encode_b256(output.asset_id, "asset_id")
        )
    if isinstance(output, ChangeOutput):
        return (
            encode_u64(output.type)
            + output.to.to_bytes()
            + encode_b256(output.asset_id, "asset_id")
        )
    if isinstance(output, ContractOutput):
        return encode_u64(output.type) + encode_u64(output.input_index)
    if isinstance(output, VariableOutput):
        return encode_u64(output.type)

    raise InvalidInputError(f"Unsupported output type: {type(output).__name__}")


def encode_for_signing(tx: TransactionRequest) -> bytes:
    """Canonical encoding of every signable field of tx (witnesses excluded)"""
    parts = [encode_u64(tx.type), encode_u64(tx.gas_price), encode_u64(tx.maturity)]

    if isinstance(tx, ScriptTransactionRequest):
        parts += [
            encode_u64(tx.gas_limit),
            encode_bytes(tx.script),
            encode_bytes(tx.script_data),
        ]
    elif isinstance(tx, CreateTransactionRequest):
        parts += [
            encode_u64(tx.bytecode_witness_index),
            encode_b256(tx.salt, "salt"),
            encode_u64(len(tx.storage_slots)),
        ]
        for slot in sorted(tx.storage_slots, key=lambda s: s.key):
            parts += [
                encode_b256(slot.key, "storage slot key"),
                encode_b256(slot.value, "storage slot value"),
            ]

    parts.append(encode_u64(len(tx.inputs)))
    parts += [_encode_input(i) for i in tx.inputs]

    parts.append(encode_u64(len(tx.outputs)))
    parts += [_encode_output(o) for o in tx.outputs]

    return b"".join(parts)


def compute_signing_digest(tx: TransactionRequest, chain_id: int) -> bytes:
    """
    Compute the chain-bound digest a signer proves control over.

    Args:
        tx: Transaction request
        chain_id: Consensus chain id (u64)

    Returns:
        32-byte SHA256 digest
    """
    return sha256(encode_u64(chain_id) + encode_for_signing(tx))


def resolve_witness_index(tx: TransactionRequest, owner: Address) -> int | None:
    """
    Witness slot owned by owner, taken from the first of its inputs.

    Returns None if owner controls no input.

    Raises:
        WitnessConflictError: If inputs of owner point at different slots, or
            the slot is also used by another owner or holds contract bytecode
    """
    index: int | None = None
    for position, tx_input in enumerate(tx.inputs):
        if tx_input.witness_owner != owner:
            continue
        if index is None:
            index = tx_input.witness_index
        elif tx_input.witness_index != index:
            raise WitnessConflictError(
                f"Input {position} of {owner.to_b256()} uses witness {tx_input.witness_index}, "
                f"earlier input uses witness {index}"
            )

    if index is None:
        return None

    for position, tx_input in enumerate(tx.inputs):
        other = tx_input.witness_owner
        if other is not None and other != owner and tx_input.witness_index == index:
            raise WitnessConflictError(
                f"Witness {index} of {owner.to_b256()} is also used by input {position} "
                f"owned by {other.to_b256()}"
            )

    if isinstance(tx, CreateTransactionRequest) and tx.bytecode_witness_index == index:
        raise WitnessConflictError(
            f"Witness {index} of {owner.to_b256()} holds the contract bytecode"
        )
    return index


def set_witness_at_owner(tx: TransactionRequest, owner: Address, signature: bytes) -> None:
    """
    Write signature into the witness slot owned by owner.

    Grows the witness list with empty witnesses if needed. Writing again for
    the same owner replaces the slot.

    Raises:
        UnknownOwnerError: If owner controls no input of tx
        WitnessConflictError: If the owner's slot is shared or holds bytecode
    """
    index = resolve_witness_index(tx, owner)
    if index is None:
        raise UnknownOwnerError(f"Address {owner.to_b256()} owns no input of the transaction")

    tx.update_witness(index, signature)
    logger.debug(f"Set witness {index} for {owner.to_b256()}")
