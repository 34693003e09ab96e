"""
Configuration management using pydantic-settings.
"""

from __future__ import annotations

import sys

from loguru import logger
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from fuelwallet.provider import EstimateTransactionParams, ProviderSendTxParams


class WalletSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FUEL_WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    private_key: SecretStr | None = None

    estimate_tx_dependencies: bool = True
    await_execution: bool = False
    utxo_validation: bool = True

    log_level: str = "INFO"

    def send_params(self) -> ProviderSendTxParams:
        return ProviderSendTxParams(
            estimate_tx_dependencies=self.estimate_tx_dependencies,
            await_execution=self.await_execution,
        )

    def simulate_params(self) -> EstimateTransactionParams:
        return EstimateTransactionParams(
            estimate_tx_dependencies=self.estimate_tx_dependencies,
            utxo_validation=self.utxo_validation,
        )


def get_settings() -> WalletSettings:
    return WalletSettings()


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
