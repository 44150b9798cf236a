"""Arbitrary-precision integer facade that the RSA layers are written against.

A single immutable `BigInt` carries an unbounded value together with an explicit view: unsigned (the default) or
signed. Unsigned values never wrap; a subtraction that would go negative raises `Underflow` instead. Storage is
Python's native integer, primality is delegated to sympy and prime candidates come from the system CSPRNG.

Typical usage example:

    p = random_prime(512)
    m = BigInt.from_bytes(b"Hi there!")
    c = m.modpow(3, p)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import functools
import logging
import math
import secrets

import sympy

from rsaseal.errors import ConversionError
from rsaseal.errors import PrimeSourceError
from rsaseal.errors import Underflow

logger = logging.getLogger(__name__)

_CANDIDATES_PER_BIT: int = 5


def _raw(value: "BigInt | int") -> tuple[int, bool]:
    """Unwraps an operand into its native value and whether it is a signed view."""
    if isinstance(value, BigInt):
        return value._value, value._signed
    if isinstance(value, int) and not isinstance(value, bool):
        return value, False
    raise ConversionError(f"Cannot use {type(value).__name__} as a big integer operand")


@functools.total_ordering
class BigInt:
    """Immutable arbitrary-precision integer with an explicit signed or unsigned view.

    Mixing views in arithmetic yields a signed result; plain ints count as unsigned operands.

    Attributes:
        signed: Whether this is the signed view. Unsigned values are always non-negative.
    """

    __slots__ = ("_value", "_signed")

    def __init__(self, value: "BigInt | int" = 0, signed: bool = False) -> None:
        raw, _ = _raw(value)
        if not signed and raw < 0:
            raise ConversionError(f"{raw} cannot be held by an unsigned big integer")
        object.__setattr__(self, "_value", raw)
        object.__setattr__(self, "_signed", signed)

    def __setattr__(self, name, value):
        raise AttributeError("BigInt is immutable")

    def __delattr__(self, name):
        raise AttributeError("BigInt is immutable")

    @property
    def signed(self) -> bool:
        """Whether this is the signed view."""
        return self._signed

    def as_signed(self) -> "BigInt":
        """Returns the signed view of this value."""
        return self if self._signed else BigInt(self._value, signed=True)

    def as_unsigned(self) -> "BigInt":
        """Narrows to the unsigned view.

        Raises:
            ConversionError: If the value is negative.
        """
        if not self._signed:
            return self
        return BigInt(self._value)

    def _result(self, value: int, other_signed: bool) -> "BigInt":
        signed = self._signed or other_signed
        if not signed and value < 0:
            raise Underflow(f"Unsigned result {value} is negative")
        return BigInt(value, signed)

    def __add__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(self._value + raw, sgn)

    __radd__ = __add__

    def __sub__(self, other: "BigInt | int") -> "BigInt":
        """Checked subtraction, fails instead of wrapping on the unsigned view.

        Raises:
            Underflow: If both operands are unsigned and the subtrahend is larger.
        """
        raw, sgn = _raw(other)
        return self._result(self._value - raw, sgn)

    def __rsub__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(raw - self._value, sgn)

    def __mul__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(self._value * raw, sgn)

    __rmul__ = __mul__

    def __floordiv__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(self._value // raw, sgn)

    def __rfloordiv__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(raw // self._value, sgn)

    def __mod__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(self._value % raw, sgn)

    def __rmod__(self, other: "BigInt | int") -> "BigInt":
        raw, sgn = _raw(other)
        return self._result(raw % self._value, sgn)

    def __neg__(self) -> "BigInt":
        return BigInt(-self._value, signed=True)

    def __eq__(self, other) -> bool:
        if isinstance(other, BigInt):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, BigInt):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        if self._signed:
            return f"BigInt({self._value}, signed=True)"
        return f"BigInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def modpow(self, exponent: "BigInt | int", modulus: "BigInt | int") -> "BigInt":
        """Modular exponentiation `self^exponent mod modulus`.

        Args:
            exponent: Non-negative exponent.
            modulus: Positive modulus.

        Returns:
            The unsigned result in `[0, modulus)`.

        Raises:
            ValueError: If the exponent is negative or the modulus is not positive.
        """
        exp, _ = _raw(exponent)
        mod, _ = _raw(modulus)
        if exp < 0:
            raise ValueError("Exponent must be non-negative")
        if mod <= 0:
            raise ValueError("Modulus must be positive")
        return BigInt(pow(self._value, exp, mod))

    def gcd(self, other: "BigInt | int") -> "BigInt":
        """Returns the non-negative greatest common divisor with `other`."""
        raw, _ = _raw(other)
        return BigInt(math.gcd(self._value, raw))

    def is_coprime(self, other: "BigInt | int") -> bool:
        """Checks whether the greatest common divisor with `other` is 1."""
        return self.gcd(other) == 1

    def bit_length(self) -> int:
        """Returns the number of bits needed to represent the absolute value."""
        return self._value.bit_length()

    def is_prime(self) -> bool:
        """Primality verification, delegated to sympy (Baillie-PSW for large values)."""
        return bool(sympy.isprime(self._value))

    def to_bytes(self) -> bytes:
        """Encodes as unsigned big-endian of minimal length. Zero encodes as a single zero byte.

        Raises:
            ConversionError: If the value is negative.
        """
        if self._value < 0:
            raise ConversionError("Negative values have no unsigned byte encoding")
        return self._value.to_bytes(max(1, (self._value.bit_length() + 7) // 8), byteorder="big", signed=False)

    @classmethod
    def from_bytes(cls, data: bytes) -> "BigInt":
        """Decodes unsigned big-endian bytes. Leading zero bytes are ignored."""
        return cls(int.from_bytes(data, byteorder="big", signed=False))


def random_prime(bits: int) -> BigInt:
    """Draws a random prime of exactly `bits` bits.

    Candidates come from `secrets.randbits` with the two top bits forced, so a product of two primes drawn this way
    has exactly the summed bit length, and the low bit forced to keep candidates odd.

    Args:
        bits: The bit length of the prime. Must be at least 2.

    Returns:
        A prime as an unsigned BigInt.

    Raises:
        ValueError: If `bits` is below 2.
        PrimeSourceError: If no prime was found in `5 * bits` candidates.
    """
    if bits < 2:
        raise ValueError("A prime needs at least 2 bits")
    mask = (1 << bits - 1) | (1 << bits - 2) | 1
    cap = bits * _CANDIDATES_PER_BIT
    for _ in range(cap):
        candidate = BigInt(secrets.randbits(bits) | mask)
        if candidate.is_prime():
            return candidate
    logger.warning("No %d-bit prime found in %d candidates", bits, cap)
    raise PrimeSourceError(f"Ran an improbable {cap} candidates with no prime found. Check system random generator.")
