"""Textbook RSA in an Academic Sense, with sign-then-encrypt messaging on top.

Provides an arbitrary-precision integer facade, the modular inverse, key generation under the fixed public exponent
3, unpadded encryption and decryption, SHA-256 digest signing and verification, and DER envelopes that are signed by
the sender and then encrypted to the receiver. Textbook RSA is not semantically secure; use it to learn, not to
protect.

Typical usage example:

    alice, bob = keygen(1024), keygen(4096)
    c = pack(b"Hi there!", alice, bob.public)
    m = unpack(c, bob.secret)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaseal.bignum import BigInt
from rsaseal.bignum import random_prime
from rsaseal.envelope import decode_envelope
from rsaseal.envelope import encode_envelope
from rsaseal.envelope import EnvelopeRecord
from rsaseal.envelope import pack
from rsaseal.envelope import unpack
from rsaseal.errors import BadKey
from rsaseal.errors import ConversionError
from rsaseal.errors import KeyGenerationError
from rsaseal.errors import NotInvertible
from rsaseal.errors import PrimeSourceError
from rsaseal.errors import RSASealError
from rsaseal.errors import SerializationError
from rsaseal.errors import Underflow
from rsaseal.errors import VerificationRejected
from rsaseal.keys import keygen
from rsaseal.keys import KeyPair
from rsaseal.keys import private_exponent
from rsaseal.keys import PUBLIC_EXPONENT
from rsaseal.keys import PublicKey
from rsaseal.keys import SecretKey
from rsaseal.modular import inverse
from rsaseal.rsa import decrypt
from rsaseal.rsa import encrypt
from rsaseal.signing import sign
from rsaseal.signing import Verification
from rsaseal.signing import verify

__version__ = "0.0.1"
__all__ = [
    "BigInt",
    "random_prime",
    "inverse",
    "PUBLIC_EXPONENT",
    "PublicKey",
    "SecretKey",
    "KeyPair",
    "keygen",
    "private_exponent",
    "encrypt",
    "decrypt",
    "sign",
    "verify",
    "Verification",
    "EnvelopeRecord",
    "encode_envelope",
    "decode_envelope",
    "pack",
    "unpack",
    "RSASealError",
    "Underflow",
    "NotInvertible",
    "ConversionError",
    "BadKey",
    "SerializationError",
    "VerificationRejected",
    "KeyGenerationError",
    "PrimeSourceError",
]
