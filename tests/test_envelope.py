# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from pyasn1.codec.der import encoder
import pytest

from rsaseal import envelope
from rsaseal import keys
from rsaseal import rsa as rsau
from rsaseal import signing
from rsaseal.errors import BadKey
from rsaseal.errors import ConversionError
from rsaseal.errors import SerializationError
from rsaseal.errors import VerificationRejected

standard_payload = b"The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""


@pytest.fixture(scope="module")
def sender() -> keys.KeyPair:
    return keys.keygen(512)


@pytest.fixture(scope="module")
def receiver() -> keys.KeyPair:
    return keys.keygen(2048)


def seal_record(record: envelope.EnvelopeRecord, receiver_pub: keys.PublicKey) -> bytes:
    """Encrypts a hand-built envelope, bypassing the signing step of pack."""
    return rsau.encrypt(envelope.encode_envelope(record), receiver_pub)


@pytest.mark.parametrize("message", [b"", b"\x00leading zero", b"Hi there!", standard_payload])
def test_pack_unpack(sender, receiver, message):
    ciphertext = envelope.pack(message, sender, receiver.public)
    assert envelope.unpack(ciphertext, receiver.secret) == message


def test_pack_hides_envelope(sender, receiver):
    ciphertext = envelope.pack(standard_payload, sender, receiver.public)
    assert standard_payload not in ciphertext
    assert sender.public.n.to_bytes() not in ciphertext


def test_pack_contents(sender, receiver):
    ciphertext = envelope.pack(b"Hi there!", sender, receiver.public)
    record = envelope.decode_envelope(rsau.decrypt(ciphertext, receiver.secret))
    assert record.message == b"Hi there!"
    assert record.sender == sender.public
    assert len(record.signature) == sender.public.byte_size()
    assert signing.verify(record.message, record.signature, sender.public)


def test_pack_too_large(sender, receiver):
    with pytest.raises(ConversionError, match="does not fit"):
        envelope.pack(b"A" * receiver.public.byte_size(), sender, receiver.public)


def test_pack_bad_sender_key(receiver):
    bad_secret = keys.SecretKey(2**127 - 1, 2**521 - 1)
    bad = keys.KeyPair(bad_secret.public_key(), bad_secret)
    with pytest.raises(BadKey):
        envelope.pack(b"Hi there!", bad, receiver.public)


def test_unpack_wrong_receiver(sender, receiver):
    stranger = keys.keygen(2048)
    ciphertext = envelope.pack(standard_payload, sender, receiver.public)
    with pytest.raises((BadKey, SerializationError)):
        envelope.unpack(ciphertext, stranger.secret)


def test_unpack_bad_receiver_key(sender, receiver):
    ciphertext = envelope.pack(b"Hi there!", sender, receiver.public)
    with pytest.raises(BadKey):
        envelope.unpack(ciphertext, keys.SecretKey(61, 53))


def test_unpack_tampered_message(sender, receiver, caplog):
    signature = rsau.integer_to_bytes(rsau.bytes_to_integer(signing.sign(b"Pay Bob 10", sender.secret)),
                                      sender.public.byte_size())
    tampered = envelope.EnvelopeRecord(b"Pay Eve 10", signature, sender.public)
    with caplog.at_level(logging.INFO, logger="rsaseal.envelope"), pytest.raises(VerificationRejected) as exc:
        envelope.unpack(seal_record(tampered, receiver.public), receiver.secret)
    assert exc.value.record == tampered
    assert any("rejected" in r.getMessage() for r in caplog.records)


def test_unpack_impersonation(sender, receiver):
    impostor = keys.keygen(512)
    signature = signing.sign(standard_payload, impostor.secret)
    claimed = envelope.EnvelopeRecord(standard_payload, signature, sender.public)
    with pytest.raises(VerificationRejected):
        envelope.unpack(seal_record(claimed, receiver.public), receiver.secret)


def test_envelope_codec(sender):
    record = envelope.EnvelopeRecord(b"Hi there!", b"\x00\x01\x02", sender.public)
    encoded = envelope.encode_envelope(record)
    assert encoded[:1] == b"\x30"
    assert envelope.decode_envelope(encoded) == record


@pytest.mark.parametrize("data", [b"", b"\x00", b"\x30\x03\x04\x01", b"Hi there!", b"\x30\x00"])
def test_decode_malformed(data):
    with pytest.raises(SerializationError):
        envelope.decode_envelope(data)


def test_decode_trailing_bytes(sender):
    encoded = envelope.encode_envelope(envelope.EnvelopeRecord(b"Hi", b"\x01", sender.public))
    with pytest.raises(SerializationError, match="Trailing"):
        envelope.decode_envelope(encoded + b"\x00")


@pytest.mark.parametrize("modulus,exponent", [
    (187, 65537),
    (187, 1),
    (0, 3),
    (-187, 3),
    (1, 3),
    (2**256 - 1, 3),
])
def test_decode_validates_sender(modulus, exponent):
    pld = envelope.Envelope()
    pld["message"] = b"Hi"
    pld["signature"] = b"\x01"
    pld["sender"]["modulus"] = modulus
    pld["sender"]["publicExponent"] = exponent
    with pytest.raises(SerializationError):
        envelope.decode_envelope(encoder.encode(pld))


@pytest.mark.parametrize("modulus", [1, 2, 3, 187])
def test_unpack_degenerate_sender(receiver, modulus):
    forged = envelope.EnvelopeRecord(b"Pay Eve 1000000", b"\x00", keys.PublicKey(modulus))
    with pytest.raises(SerializationError, match="too small"):
        envelope.unpack(seal_record(forged, receiver.public), receiver.secret)


def test_decode_accepts_smallest_signing_modulus():
    smallest = keys.PublicKey(2**256 + 1)
    record = envelope.EnvelopeRecord(b"Hi", b"\x01", smallest)
    assert envelope.decode_envelope(envelope.encode_envelope(record)) == record
