"""
Unlocked wallet: signs messages and transactions with an in-memory key and
submits witnessed transactions through the provider.

Per submission attempt the order is fixed:

    dependency estimation (optional) -> witness population -> send or call

Estimating after witnessing would change the inputs the signature commits to,
so the wallet always tells the provider not to estimate again.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from loguru import logger

from fuelwallet.account import Account
from fuelwallet.address import Address
from fuelwallet.hasher import hash_message
from fuelwallet.provider import (
    CallResult,
    EstimateTransactionParams,
    Provider,
    ProviderSendTxParams,
    TransactionResponse,
)
from fuelwallet.signer import Signer
from fuelwallet.transactions.codec import compute_signing_digest, set_witness_at_owner
from fuelwallet.transactions.request import TransactionRequest, transaction_requestify

if TYPE_CHECKING:
    from fuelwallet.config import WalletSettings

TransactionRequestLike = TransactionRequest | Mapping[str, Any]


class KeystoreEncryptor(Protocol):
    def __call__(self, private_key: str, address: Address, password: str) -> str: ...


class WalletUnlocked(Account):
    """
    Wallet holding a private key.

    The signer is created once from the key and reused for every signature.
    Transaction requests passed in are mutated in place: witnesses are written
    into the caller's object and a failed submission does not undo them.
    """

    DEFAULT_PATH = "m/44'/1179993420'/0'/0/0"

    def __init__(
        self,
        private_key: bytes | str,
        provider: Provider | None = None,
        keystore_encryptor: KeystoreEncryptor | None = None,
        send_params: ProviderSendTxParams | None = None,
        simulate_params: EstimateTransactionParams | None = None,
    ):
        self.signer = Signer(private_key)
        super().__init__(self.signer.address, provider)
        self.keystore_encryptor = keystore_encryptor
        self.send_params = send_params or ProviderSendTxParams()
        self.simulate_params = simulate_params or EstimateTransactionParams()

    @classmethod
    def generate(
        cls, provider: Provider | None = None, entropy: bytes | None = None
    ) -> WalletUnlocked:
        """Create a wallet with a freshly generated private key"""
        return cls(Signer.generate_private_key(entropy), provider)

    @classmethod
    def from_settings(
        cls, settings: WalletSettings, provider: Provider | None = None
    ) -> WalletUnlocked:
        if settings.private_key is None:
            raise ValueError("No private key configured (set FUEL_WALLET_PRIVATE_KEY)")

        return cls(
            settings.private_key.get_secret_value(),
            provider,
            send_params=settings.send_params(),
            simulate_params=settings.simulate_params(),
        )

    @property
    def public_key(self) -> bytes:
        return self.signer.public_key

    def sign_message(self, message: str) -> bytes:
        """
        Sign a personal message.

        Returns:
            64-byte compact signature over hash_message(message)
        """
        return self.signer.sign(hash_message(message))

    async def sign_transaction(self, transaction_request_like: TransactionRequestLike) -> bytes:
        """
        Sign a transaction for the provider's chain.

        Returns:
            64-byte compact signature over the transaction id
        """
        transaction_request = transaction_requestify(transaction_request_like)
        chain_id = await self.provider.get_chain_id()
        digest = compute_signing_digest(transaction_request, chain_id)

        logger.debug(f"Signing transaction 0x{digest.hex()} on chain {chain_id}")
        return self.signer.sign(digest)

    async def populate_transaction_witnesses_signature(
        self, transaction_request_like: TransactionRequestLike
    ) -> TransactionRequest:
        """Sign the transaction and write the signature into this wallet's witness slot"""
        transaction_request = transaction_requestify(transaction_request_like)
        signature = await self.sign_transaction(transaction_request)

        set_witness_at_owner(transaction_request, self.address, signature)
        return transaction_request

    async def send_transaction(
        self,
        transaction_request_like: TransactionRequestLike,
        params: ProviderSendTxParams | None = None,
    ) -> TransactionResponse:
        """
        Witness and submit a transaction.

        Args:
            transaction_request_like: Request to submit
            params: Estimation and execution options, defaults to the wallet's

        Returns:
            The provider's transaction response
        """
        params = params or self.send_params
        transaction_request = transaction_requestify(transaction_request_like)

        if params.estimate_tx_dependencies:
            transaction_request = await self.provider.estimate_tx_dependencies(
                transaction_request
            )

        witnessed = await self.populate_transaction_witnesses_signature(transaction_request)

        logger.info(f"Sending transaction from {self.address.to_b256()}")
        return await self.provider.send_transaction(
            witnessed,
            await_execution=params.await_execution,
            estimate_tx_dependencies=False,
        )

    async def simulate_transaction(
        self,
        transaction_request_like: TransactionRequestLike,
        params: EstimateTransactionParams | None = None,
    ) -> CallResult:
        """
        Witness a transaction and dry-run it through the provider.

        Returns:
            The provider's call result
        """
        params = params or self.simulate_params
        transaction_request = transaction_requestify(transaction_request_like)

        if params.estimate_tx_dependencies:
            transaction_request = await self.provider.estimate_tx_dependencies(
                transaction_request
            )

        witnessed = await self.populate_transaction_witnesses_signature(transaction_request)

        logger.info(f"Simulating transaction from {self.address.to_b256()}")
        return await self.provider.call(
            witnessed,
            utxo_validation=params.utxo_validation,
            estimate_tx_dependencies=False,
        )

    def encrypt(self, password: str) -> str:
        """Encrypt the private key with the configured keystore encryptor"""
        if self.keystore_encryptor is None:
            raise ValueError("No keystore encryptor configured")
        return self.keystore_encryptor(self.signer.private_key, self.address, password)
