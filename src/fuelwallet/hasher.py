"""
Hash functions used for signing.
"""

from __future__ import annotations

import hashlib

MESSAGE_PREFIX = b"\x19Fuel Signed Message:\n"


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def hash_message(message: str | bytes) -> bytes:
    """
    Hash a message using the wallet's personal message format.

    Format: SHA256("\\x19Fuel Signed Message:\\n" + str(len(message)) + message)

    The prefix keeps a signed message from ever being a valid transaction
    signature, since transaction digests are computed over a different preimage.
    """
    msg_bytes = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    return sha256(MESSAGE_PREFIX + str(len(msg_bytes)).encode("ascii") + msg_bytes)
