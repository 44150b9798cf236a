"""Provides core textbook RSA confidentiality: encryption and decryption of raw byte strings.

Textbook RSA has no padding, is deterministic and is not semantically secure. Byte strings are marshalled to
integers big-endian and back, always through `bytes_to_integer` and `integer_to_bytes`.

Typical usage example:

    pub, sec = keygen(2048)
    c = encrypt(b"Hi there!", pub)
    r = decrypt(c, sec)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from rsaseal.bignum import BigInt
from rsaseal.errors import ConversionError
from rsaseal.keys import private_exponent
from rsaseal.keys import PUBLIC_EXPONENT
from rsaseal.keys import PublicKey
from rsaseal.keys import SecretKey


def bytes_to_integer(msg: bytes) -> BigInt:
    """Converts a byte string to its unsigned big-endian integer representative.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return BigInt.from_bytes(msg)


def integer_to_bytes(msg: BigInt | int, fixedlen: int | None = None) -> bytes:
    """Converts an integer to bytes, minimal length unless a fixed length is asked for.

    Args:
        msg: The integer to unmarshal.
        fixedlen: Optional target length of the byte string, left-padded with zeros.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        ConversionError: If the integer is negative or does not fit into `fixedlen` bytes.
    """
    encoded = BigInt(msg).to_bytes()
    if fixedlen is None:
        return encoded
    if encoded == b"\x00":
        encoded = b""
    if len(encoded) > fixedlen:
        raise ConversionError(f"Integer needs {len(encoded)} bytes, more than the fixed {fixedlen}")
    return encoded.rjust(fixedlen, b"\x00")


def encrypt(plaintext: bytes, public_key: PublicKey) -> bytes:
    """Encrypts the plaintext as `m^e mod n`.

    A plaintext whose integer is not below `n` is reduced modulo `n` and cannot be recovered. That is inherent to
    textbook RSA, so it only raises a RuntimeWarning.

    Args:
        plaintext: The message to encrypt.
        public_key: The receiver's public key.

    Returns:
        The ciphertext, minimal-length big-endian.
    """
    m = bytes_to_integer(plaintext)
    if m >= public_key.n:
        warnings.warn("Plaintext is not below the modulus and will not survive decryption.", RuntimeWarning)
    return integer_to_bytes(m.modpow(PUBLIC_EXPONENT, public_key.n))


def decrypt(ciphertext: bytes, secret_key: SecretKey) -> bytes:
    """Decrypts the ciphertext as `c^d mod n`, deriving `d` from the secret primes.

    Args:
        ciphertext: The ciphertext to decrypt.
        secret_key: The receiver's secret key.

    Returns:
        The plaintext, minimal-length big-endian. Leading zero bytes of the original are not restored.

    Raises:
        BadKey: If the secret key is inconsistent.
    """
    d = private_exponent(secret_key)
    c = bytes_to_integer(ciphertext)
    return integer_to_bytes(c.modpow(d, secret_key.n))
