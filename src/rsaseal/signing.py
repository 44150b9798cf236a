"""RSA signing and verification over message digests.

Signing a message means signing its SHA-256 digest, `s = h(m)^d mod n`, and verifying re-encrypts the signature and
compares it with a fresh digest of the supplied message. Working on digests rather than raw messages stops the
textbook forgery where an adversary picks any `s` and ships `s^e mod n` as the "message": finding a message that
hashes to that value is infeasible.

Typical usage example:

    s = sign(b"Hi there!", sec)
    if verify(b"Hi there!", s, pub):
        ...
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import hashlib

from rsaseal.errors import ConversionError
from rsaseal.keys import PUBLIC_EXPONENT
from rsaseal.keys import PublicKey
from rsaseal.keys import SecretKey
from rsaseal.rsa import bytes_to_integer
from rsaseal.rsa import decrypt

HASH_NAME = "sha256"
DIGEST_SIZE: int = hashlib.new(HASH_NAME).digest_size


class Verification(enum.Enum):
    """Outcome of a signature check. Only ACCEPT is truthy."""
    ACCEPT = "accept"
    REJECT = "reject"

    def __bool__(self) -> bool:
        return self is Verification.ACCEPT


def digest(message: bytes) -> bytes:
    """Hashes the message with the signature hash, SHA-256."""
    return hashlib.new(HASH_NAME, message).digest()


def sign(message: bytes, secret_key: SecretKey) -> bytes:
    """Signs the digest of the message with the secret key.

    Args:
        message: The message to sign.
        secret_key: The signer's secret key.

    Returns:
        The signature, minimal-length big-endian.

    Raises:
        ConversionError: If the modulus is too small to carry the digest unreduced.
        BadKey: If the secret key is inconsistent.
    """
    h = digest(message)
    if bytes_to_integer(h) >= secret_key.n:
        raise ConversionError(f"A {secret_key.n.bit_length()}-bit key cannot sign a {DIGEST_SIZE * 8}-bit digest.")
    return decrypt(h, secret_key)


def verify(message: bytes, signature: bytes, public_key: PublicKey) -> Verification:
    """Verifies the signature against the message and the signer's public key.

    Args:
        message: The message the signature claims to cover.
        signature: The signature to check.
        public_key: The signer's public key.

    Returns:
        Verification.ACCEPT if `s^e mod n` equals the digest of the message, Verification.REJECT otherwise. A digest
        that is not below the modulus can never be matched and is always rejected.
    """
    expected = bytes_to_integer(digest(message))
    if expected >= public_key.n:
        return Verification.REJECT
    recovered = bytes_to_integer(signature).modpow(PUBLIC_EXPONENT, public_key.n)
    if recovered == expected:
        return Verification.ACCEPT
    return Verification.REJECT
