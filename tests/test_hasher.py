"""
Tests for fuelwallet.hasher
"""

import hashlib

from fuelwallet.hasher import MESSAGE_PREFIX, hash_message, sha256


def test_sha256_empty():
    expected = bytes.fromhex("e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855")
    assert sha256(b"") == expected


def test_hash_message_format():
    expected = hashlib.sha256(MESSAGE_PREFIX + b"5hello").digest()
    assert hash_message("hello") == expected


def test_hash_message_uses_byte_length():
    # "é" is two bytes in UTF-8
    expected = hashlib.sha256(MESSAGE_PREFIX + b"2" + "é".encode()).digest()
    assert hash_message("é") == expected


def test_hash_message_accepts_bytes():
    assert hash_message(b"hello") == hash_message("hello")


def test_hash_message_is_not_plain_sha256():
    assert hash_message("hello") != sha256(b"hello")
