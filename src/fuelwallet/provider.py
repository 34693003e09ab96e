"""
Provider interface.

The provider is the wallet's only path to the network: chain parameters,
dependency estimation, submission and simulation all go through it. Its
implementations own transport, retries and caching.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from fuelwallet.transactions.request import TransactionRequest


class ProviderError(Exception):
    """Base error for provider implementations. The wallet never wraps or retries it."""

    pass


@dataclass
class TransactionResponse:
    id: str
    status: str | None = None
    receipts: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class CallResult:
    receipts: list[dict[str, Any]] = field(default_factory=list)


class ProviderSendTxParams(BaseModel):
    estimate_tx_dependencies: bool = Field(
        default=True,
        description="Let the provider resolve missing dependencies before signing",
    )
    await_execution: bool = Field(
        default=False,
        description="Wait for the transaction to be executed before returning",
    )

    model_config = {"frozen": True}


class EstimateTransactionParams(BaseModel):
    estimate_tx_dependencies: bool = Field(
        default=True,
        description="Let the provider resolve missing dependencies before signing",
    )
    utxo_validation: bool = Field(
        default=True,
        description="Validate inputs against the UTXO set during simulation",
    )

    model_config = {"frozen": True}


class Provider(ABC):
    """
    Abstract provider interface.
    """

    @abstractmethod
    async def get_chain_id(self) -> int:
        """Get the consensus chain id"""

    @abstractmethod
    async def estimate_tx_dependencies(self, tx: TransactionRequest) -> TransactionRequest:
        """
        Resolve missing dependencies (variable outputs, contract inputs) of tx.

        May mutate tx in place. Returns the request to continue with.
        """

    @abstractmethod
    async def send_transaction(
        self,
        tx: TransactionRequest,
        *,
        await_execution: bool = False,
        estimate_tx_dependencies: bool = True,
    ) -> TransactionResponse:
        """Submit a witnessed transaction"""

    @abstractmethod
    async def call(
        self,
        tx: TransactionRequest,
        *,
        utxo_validation: bool = False,
        estimate_tx_dependencies: bool = True,
    ) -> CallResult:
        """Dry-run a witnessed transaction without committing it"""

    async def close(self) -> None:
        """Close provider connection"""
        pass
