"""
Account base: an address plus an optional provider.
"""

from __future__ import annotations

from fuelwallet.address import Address
from fuelwallet.provider import Provider


class ProviderNotSetError(Exception):
    pass


class Account:
    def __init__(self, address: Address | str | bytes, provider: Provider | None = None):
        self.address = Address.from_dynamic_input(address)
        self._provider = provider

    @property
    def provider(self) -> Provider:
        if self._provider is None:
            raise ProviderNotSetError("Provider not set")
        return self._provider

    def connect(self, provider: Provider) -> Provider:
        """Use a different provider for this account"""
        self._provider = provider
        return provider

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(address={self.address.to_b256()})"
