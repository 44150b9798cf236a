"""Sign-then-encrypt secure messaging built from the confidentiality and authenticity primitives.

The sender signs the message, bundles message, signature and its own public key into a DER encoded envelope and
encrypts the whole envelope to the receiver. Signature and sender identity therefore travel hidden; the receiver
only authenticates after a successful decryption.

Typical usage example:

    c = pack(b"Hi there!", alice, bob.public)
    m = unpack(c, bob.secret)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import logging

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from rsaseal.errors import ConversionError
from rsaseal.errors import SerializationError
from rsaseal.errors import VerificationRejected
from rsaseal.keys import KeyPair
from rsaseal.keys import PUBLIC_EXPONENT
from rsaseal.keys import PublicKey
from rsaseal.keys import SecretKey
from rsaseal.rsa import bytes_to_integer
from rsaseal.rsa import decrypt
from rsaseal.rsa import encrypt
from rsaseal.rsa import integer_to_bytes
from rsaseal.signing import DIGEST_SIZE
from rsaseal.signing import sign
from rsaseal.signing import verify

logger = logging.getLogger(__name__)


class Envelope(univ.Sequence):
    """Signed message wrapper, the sender key borrows the PKCS#1 RSAPublicKey structure."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("message", univ.OctetString()),
        namedtype.NamedType("signature", univ.OctetString()),
        namedtype.NamedType("sender", rfc8017.RSAPublicKey()),
    )


@dataclasses.dataclass(frozen=True)
class EnvelopeRecord:
    """Decoded envelope contents.

    Attributes:
        message: The payload.
        signature: The sender's signature over the payload, padded to the sender key's byte size.
        sender: The sender's public key.
    """
    message: bytes
    signature: bytes
    sender: PublicKey


def encode_envelope(record: EnvelopeRecord) -> bytes:
    """Serializes an envelope record to DER.

    Args:
        record: The envelope to serialize.

    Returns:
        The DER encoding.
    """
    sender = rfc8017.RSAPublicKey()
    sender["modulus"] = int(record.sender.n)
    sender["publicExponent"] = record.sender.e
    pld = Envelope()
    pld["message"] = record.message
    pld["signature"] = record.signature
    pld["sender"] = sender
    return encoder.encode(pld)


def decode_envelope(data: bytes) -> EnvelopeRecord:
    """Deserializes a DER envelope.

    Args:
        data: The DER encoding.

    Returns:
        The decoded envelope record.

    Raises:
        SerializationError: If the bytes are not a well-formed envelope for this scheme.
    """
    if not data:
        raise SerializationError("Empty envelope.")
    try:
        pld, rest = decoder.decode(data, asn1Spec=Envelope())
        message = bytes(pld["message"])
        signature = bytes(pld["signature"])
        modulus = int(pld["sender"]["modulus"])
        exponent = int(pld["sender"]["publicExponent"])
    except (error.PyAsn1Error, TypeError, ValueError) as err:
        raise SerializationError("Malformed envelope.") from err
    if rest:
        raise SerializationError("Trailing bytes after envelope.")
    if exponent != PUBLIC_EXPONENT:
        raise SerializationError(f"Unsupported sender exponent {exponent}.")
    if modulus < 1 << DIGEST_SIZE * 8:
        raise SerializationError("Sender modulus is too small to carry a signature.")
    return EnvelopeRecord(message, signature, PublicKey(modulus))


def pack(message: bytes, sender: KeyPair, receiver: PublicKey) -> bytes:
    """Signs the message, wraps it with the sender identity and encrypts the result to the receiver.

    Args:
        message: The payload.
        sender: The sender's key pair. The secret half signs, the public half travels in the envelope.
        receiver: The receiver's public key.

    Returns:
        The ciphertext.

    Raises:
        BadKey: If the sender's secret key is inconsistent.
        ConversionError: If the sender key is too small to sign or the envelope is too large for the receiver's
            modulus.
    """
    signature = integer_to_bytes(bytes_to_integer(sign(message, sender.secret)), sender.public.byte_size())
    serial = encode_envelope(EnvelopeRecord(message, signature, sender.public))
    if bytes_to_integer(serial) >= receiver.n:
        raise ConversionError(
            f"Envelope of {len(serial)} bytes does not fit a {receiver.bit_size()}-bit receiver key.")
    logger.debug("Packed %d byte message into %d byte envelope", len(message), len(serial))
    return encrypt(serial, receiver)


def unpack(ciphertext: bytes, receiver: SecretKey) -> bytes:
    """Decrypts an envelope, checks the sender signature and returns the payload.

    Args:
        ciphertext: Output of `pack`.
        receiver: The receiver's secret key.

    Returns:
        The authenticated message.

    Raises:
        BadKey: If the receiver's secret key is inconsistent.
        SerializationError: If the decrypted bytes are not an envelope (e.g. a wrong receiver key).
        VerificationRejected: If the signature does not match the message and sender.
    """
    serial = decrypt(ciphertext, receiver)
    record = decode_envelope(serial)
    logger.debug("Unpacked %d byte envelope", len(serial))
    if not verify(record.message, record.signature, record.sender):
        logger.info("Envelope signature rejected for sender of %d bits", record.sender.bit_size())
        raise VerificationRejected("Envelope signature does not match its message.", record)
    return record.message
