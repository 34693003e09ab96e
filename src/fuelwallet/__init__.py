"""
fuelwallet - Signing core for Fuel client wallets

Signs messages and transactions with a single private key, writes signatures
into transaction witnesses and submits through a pluggable provider.
"""

__version__ = "0.1.0"

from fuelwallet.account import Account, ProviderNotSetError
from fuelwallet.address import Address
from fuelwallet.config import WalletSettings, get_settings, setup_logging
from fuelwallet.hasher import hash_message, sha256
from fuelwallet.provider import (
    CallResult,
    EstimateTransactionParams,
    Provider,
    ProviderError,
    ProviderSendTxParams,
    TransactionResponse,
)
from fuelwallet.signer import InvalidInputError, InvalidKeyError, Signer, verify_signature
from fuelwallet.transactions import (
    CreateTransactionRequest,
    ScriptTransactionRequest,
    TransactionRequest,
    UnknownOwnerError,
    WitnessConflictError,
    compute_signing_digest,
    resolve_witness_index,
    set_witness_at_owner,
    transaction_requestify,
)
from fuelwallet.wallet import KeystoreEncryptor, WalletUnlocked

__all__ = [
    "Account",
    "Address",
    "CallResult",
    "CreateTransactionRequest",
    "EstimateTransactionParams",
    "InvalidInputError",
    "InvalidKeyError",
    "KeystoreEncryptor",
    "Provider",
    "ProviderError",
    "ProviderNotSetError",
    "ProviderSendTxParams",
    "ScriptTransactionRequest",
    "Signer",
    "TransactionRequest",
    "TransactionResponse",
    "UnknownOwnerError",
    "WalletSettings",
    "WalletUnlocked",
    "WitnessConflictError",
    "compute_signing_digest",
    "get_settings",
    "hash_message",
    "resolve_witness_index",
    "set_witness_at_owner",
    "setup_logging",
    "sha256",
    "transaction_requestify",
    "verify_signature",
]
