"""
secp256k1 key holder producing compact 64-byte signatures.
"""

from __future__ import annotations

import secrets

from coincurve import PrivateKey, PublicKey

from fuelwallet.address import Address
from fuelwallet.hasher import sha256

# secp256k1 curve order
SECP256K1_N = int("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16)

PRIVATE_KEY_LENGTH = 32
DIGEST_LENGTH = 32
SIGNATURE_LENGTH = 64


class InvalidKeyError(Exception):
    pass


class InvalidInputError(Exception):
    pass


def _private_key_bytes(private_key: bytes | str) -> bytes:
    if isinstance(private_key, str):
        try:
            private_key = bytes.fromhex(private_key.removeprefix("0x"))
        except ValueError as e:
            raise InvalidKeyError("Private key is not valid hex") from e

    if len(private_key) != PRIVATE_KEY_LENGTH:
        raise InvalidKeyError(
            f"Invalid private key length: {len(private_key)}, expected {PRIVATE_KEY_LENGTH}"
        )

    if not 0 < int.from_bytes(private_key, "big") < SECP256K1_N:
        raise InvalidKeyError("Private key is outside the secp256k1 scalar range")

    return bytes(private_key)


def _check_digest(digest: bytes) -> None:
    if len(digest) != DIGEST_LENGTH:
        raise InvalidInputError(f"Invalid digest length: {len(digest)}, expected {DIGEST_LENGTH}")


def _compact_to_recoverable(signature: bytes) -> bytes:
    """Unfold r || s(with recovery bit) into coincurve's r || s || v layout"""
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidInputError(
            f"Invalid signature length: {len(signature)}, expected {SIGNATURE_LENGTH}"
        )
    recovery_id = signature[32] >> 7
    s = bytes([signature[32] & 0x7F]) + signature[33:]
    return signature[:32] + s + bytes([recovery_id])


class Signer:
    """
    Holds a single private key and signs 32-byte digests with it.

    The public key is the 64-byte uncompressed point (no 0x04 prefix) and the
    address is its SHA256. Signatures are r || s where the top bit of s carries
    the recovery id; libsecp256k1 always produces a low s, so that bit is free.
    """

    def __init__(self, private_key: bytes | str):
        secret = _private_key_bytes(private_key)
        try:
            self._private_key = PrivateKey(secret)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid private key: {e}") from e

        self._public_key = self._private_key.public_key.format(compressed=False)[1:]
        self._address = Address.from_public_key(self._public_key)

    @property
    def private_key(self) -> str:
        """Private key as 0x-prefixed hex, for keystore encryption only."""
        return "0x" + self._private_key.secret.hex()

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @property
    def compressed_public_key(self) -> bytes:
        return self._private_key.public_key.format(compressed=True)

    @property
    def address(self) -> Address:
        return self._address

    def derive_public_key(self) -> bytes:
        return self._public_key

    def derive_address(self) -> Address:
        return self._address

    def sign(self, digest: bytes) -> bytes:
        """
        Sign a 32-byte digest.

        Args:
            digest: Pre-hashed data, signed as-is (no extra hashing)

        Returns:
            64-byte compact signature

        Raises:
            InvalidInputError: If the digest is not 32 bytes
        """
        _check_digest(digest)

        recoverable = self._private_key.sign_recoverable(digest, hasher=None)
        r, s, recovery_id = recoverable[:32], recoverable[32:64], recoverable[64]

        s = bytes([s[0] | (recovery_id << 7)]) + s[1:]
        return r + s

    @staticmethod
    def recover_public_key(digest: bytes, signature: bytes) -> bytes:
        """Recover the 64-byte public key that produced a compact signature"""
        _check_digest(digest)
        recoverable = _compact_to_recoverable(signature)
        try:
            public_key = PublicKey.from_signature_and_message(recoverable, digest, hasher=None)
        except ValueError as e:
            raise InvalidInputError(f"Failed to recover public key: {e}") from e
        return public_key.format(compressed=False)[1:]

    @staticmethod
    def recover_address(digest: bytes, signature: bytes) -> Address:
        return Address.from_public_key(Signer.recover_public_key(digest, signature))

    @staticmethod
    def extend_public_key(public_key: bytes) -> bytes:
        """Convert a compressed (33) or prefixed (65) public key to the 64-byte form"""
        try:
            point = PublicKey(public_key)
        except ValueError as e:
            raise InvalidInputError(f"Invalid public key: {e}") from e
        return point.format(compressed=False)[1:]

    @staticmethod
    def generate_private_key(entropy: bytes | None = None) -> bytes:
        """Generate a random private key, optionally mixing in caller entropy"""
        while True:
            extra = entropy if entropy is not None else secrets.token_bytes(32)
            candidate = sha256(secrets.token_bytes(32) + extra)
            if 0 < int.from_bytes(candidate, "big") < SECP256K1_N:
                return candidate

    def __repr__(self) -> str:
        return f"Signer(address={self._address.to_b256()})"


def verify_signature(public_key: bytes, digest: bytes, signature: bytes) -> bool:
    """
    Check a compact signature against a 64-byte public key.

    Returns:
        True if the signature recovers to public_key
    """
    try:
        return Signer.recover_public_key(digest, signature) == public_key
    except InvalidInputError:
        return False
