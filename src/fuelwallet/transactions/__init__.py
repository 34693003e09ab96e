"""
Transaction requests and their signing codec.
"""

from fuelwallet.transactions.codec import (
    UnknownOwnerError,
    WitnessConflictError,
    compute_signing_digest,
    encode_for_signing,
    resolve_witness_index,
    set_witness_at_owner,
)
from fuelwallet.transactions.request import (
    ChangeOutput,
    CoinInput,
    CoinOutput,
    ContractInput,
    ContractOutput,
    CreateTransactionRequest,
    MessageInput,
    ScriptTransactionRequest,
    StorageSlot,
    TransactionRequest,
    TxPointer,
    VariableOutput,
    transaction_requestify,
)

__all__ = [
    "ChangeOutput",
    "CoinInput",
    "CoinOutput",
    "ContractInput",
    "ContractOutput",
    "CreateTransactionRequest",
    "MessageInput",
    "ScriptTransactionRequest",
    "StorageSlot",
    "TransactionRequest",
    "TxPointer",
    "UnknownOwnerError",
    "VariableOutput",
    "WitnessConflictError",
    "compute_signing_digest",
    "encode_for_signing",
    "resolve_witness_index",
    "set_witness_at_owner",
    "transaction_requestify",
]
