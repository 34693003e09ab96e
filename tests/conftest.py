"""
Pytest configuration and fixtures for wallet tests.
"""

from __future__ import annotations

import hashlib

import pytest

from fuelwallet.provider import CallResult, Provider, TransactionResponse
from fuelwallet.transactions.request import (
    CoinInput,
    ScriptTransactionRequest,
    TransactionRequest,
)
from fuelwallet.wallet import WalletUnlocked

TEST_CHAIN_ID = 0


class RecordingProvider(Provider):
    """
    In-memory provider recording every call in order.

    estimate_tx_dependencies adds a variable output, so tests can check that
    the signature covers what estimation changed.
    """

    def __init__(self, chain_id: int = TEST_CHAIN_ID):
        self.chain_id = chain_id
        self.calls: list[tuple[str, dict]] = []
        self.fail_with: Exception | None = None

    async def get_chain_id(self) -> int:
        self.calls.append(("get_chain_id", {}))
        return self.chain_id

    async def estimate_tx_dependencies(self, tx: TransactionRequest) -> TransactionRequest:
        self.calls.append(("estimate_tx_dependencies", {"witnesses": list(tx.witnesses)}))
        tx.add_variable_outputs(1)
        return tx

    async def send_transaction(
        self,
        tx: TransactionRequest,
        *,
        await_execution: bool = False,
        estimate_tx_dependencies: bool = True,
    ) -> TransactionResponse:
        self.calls.append(
            (
                "send_transaction",
                {
                    "await_execution": await_execution,
                    "estimate_tx_dependencies": estimate_tx_dependencies,
                    "witnesses": list(tx.witnesses),
                },
            )
        )
        if self.fail_with is not None:
            raise self.fail_with
        return TransactionResponse(id=tx.get_transaction_id(self.chain_id), status="submitted")

    async def call(
        self,
        tx: TransactionRequest,
        *,
        utxo_validation: bool = False,
        estimate_tx_dependencies: bool = True,
    ) -> CallResult:
        self.calls.append(
            (
                "call",
                {
                    "utxo_validation": utxo_validation,
                    "estimate_tx_dependencies": estimate_tx_dependencies,
                    "witnesses": list(tx.witnesses),
                },
            )
        )
        if self.fail_with is not None:
            raise self.fail_with
        return CallResult(receipts=[{"type": "Return", "val": 0}])

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def private_key() -> bytes:
    """Deterministic test private key"""
    return hashlib.sha256(b"fuelwallet test key").digest()


@pytest.fixture
def other_private_key() -> bytes:
    return hashlib.sha256(b"fuelwallet other key").digest()


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def wallet(private_key: bytes, provider: RecordingProvider) -> WalletUnlocked:
    return WalletUnlocked(private_key, provider)


@pytest.fixture
def other_wallet(other_private_key: bytes, provider: RecordingProvider) -> WalletUnlocked:
    return WalletUnlocked(other_private_key, provider)


@pytest.fixture
def owned_tx(wallet: WalletUnlocked) -> ScriptTransactionRequest:
    """Transaction with a single coin input owned by the wallet and no witnesses."""
    tx = ScriptTransactionRequest(gas_limit=100_000, script=b"\x24\x04\x00\x00")
    tx.inputs.append(CoinInput(id=b"\xaa" * 33, owner=wallet.address, amount=1_000))
    tx.add_coin_output(bytes(range(32)), amount=500)
    tx.add_change_output(wallet.address)
    return tx
