"""Exception taxonomy shared by every layer of the package.

Each error also derives from the builtin exception a caller would reach for first, so `except ValueError` keeps
working around conversion, key and envelope faults.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSASealError(Exception):
    """Base class for all errors raised by rsaseal."""


class Underflow(RSASealError, ArithmeticError):
    """An unsigned subtraction would have produced a negative value."""


class NotInvertible(RSASealError, ArithmeticError):
    """The value shares a factor with the modulus, so no modular inverse exists."""


class ConversionError(RSASealError, ValueError):
    """A value is outside the range representable by its target type."""


class BadKey(RSASealError, ValueError):
    """A secret key is inconsistent; no private exponent can be derived from it."""


class SerializationError(RSASealError, ValueError):
    """Envelope bytes could not be decoded."""


class VerificationRejected(RSASealError):
    """The envelope signature does not match its message and sender.

    Attributes:
        record: The decoded envelope which failed verification.
    """

    def __init__(self, message: str, record=None) -> None:
        super().__init__(message)
        self.record = record


class KeyGenerationError(RSASealError, RuntimeError):
    """Key generation gave up, either through the attempt ceiling or the deadline."""


class PrimeSourceError(KeyGenerationError):
    """The random prime source failed to produce a prime within its candidate budget."""
