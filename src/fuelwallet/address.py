"""
Wallet address type.

An address is the SHA256 of the 64-byte uncompressed public key (without the
0x04 prefix). It renders either as 0x-prefixed hex (b256) or as bech32 with
the "fuel" human readable part.
"""

from __future__ import annotations

import bech32

from fuelwallet.hasher import sha256

ADDRESS_LENGTH = 32
BECH32_HRP = "fuel"


class Address:
    __slots__ = ("_value",)

    def __init__(self, value: bytes):
        if len(value) != ADDRESS_LENGTH:
            raise ValueError(f"Invalid address length: {len(value)}, expected {ADDRESS_LENGTH}")
        self._value = bytes(value)

    @classmethod
    def from_public_key(cls, public_key: bytes) -> Address:
        """Address of a 64-byte public key"""
        if len(public_key) != 64:
            raise ValueError(f"Invalid public key length: {len(public_key)}, expected 64")
        return cls(sha256(public_key))

    @classmethod
    def from_b256(cls, b256: str) -> Address:
        try:
            value = bytes.fromhex(b256.removeprefix("0x"))
        except ValueError as e:
            raise ValueError(f"Invalid b256 address: {b256}") from e
        return cls(value)

    @classmethod
    def from_bech32(cls, address: str) -> Address:
        hrp, data = bech32.bech32_decode(address)
        if hrp != BECH32_HRP or data is None:
            raise ValueError(f"Invalid bech32 address: {address}")

        decoded = bech32.convertbits(data, 5, 8, False)
        if decoded is None:
            raise ValueError(f"Invalid bech32 address: {address}")
        return cls(bytes(decoded))

    @classmethod
    def from_dynamic_input(cls, address: Address | str | bytes) -> Address:
        """Normalize an Address, raw bytes, b256 hex or bech32 string"""
        if isinstance(address, Address):
            return address
        if isinstance(address, (bytes, bytearray)):
            return cls(bytes(address))
        if not isinstance(address, str):
            raise ValueError(f"Unsupported address type: {type(address).__name__}")
        if address.startswith(BECH32_HRP + "1"):
            return cls.from_bech32(address)
        return cls.from_b256(address)

    def to_bytes(self) -> bytes:
        return self._value

    def to_b256(self) -> str:
        return "0x" + self._value.hex()

    def to_bech32(self) -> str:
        data = bech32.convertbits(self._value, 8, 5)
        return bech32.bech32_encode(BECH32_HRP, data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.to_bech32()

    def __repr__(self) -> str:
        return f"Address({self.to_b256()})"
