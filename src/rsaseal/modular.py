"""Modular arithmetic helpers, chiefly the modular inverse via the extended Euclidean algorithm.

The Bezout recurrence is run as an explicit loop so cryptographic-size moduli never run into the recursion limit.

Typical usage example:

    d = inverse(3, 160)  # BigInt(107)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaseal.bignum import BigInt
from rsaseal.errors import NotInvertible


def bezout(x: BigInt | int, modulus: BigInt | int) -> tuple[BigInt, BigInt]:
    """Runs the extended Euclidean algorithm, tracking only the coefficient of `x`.

    Such that `t*x = r (mod modulus)` with `r = gcd(x, modulus)`. The coefficient `t` passes through negative
    values, hence the signed view throughout.

    Args:
        x: The value to invert.
        modulus: The modulus.

    Returns:
        Tuple of (gcd, Bezout coefficient of `x`), both as signed BigInts.
    """
    t, new_t = BigInt(0, signed=True), BigInt(1, signed=True)
    r, new_r = BigInt(modulus).as_signed(), BigInt(x).as_signed()
    while new_r != 0:
        quotient = r // new_r
        t, new_t = new_t, t - quotient * new_t
        r, new_r = new_r, r - quotient * new_r
    return r, t


def inverse(x: BigInt | int, modulus: BigInt | int) -> BigInt:
    """Calculates the modular inverse `x^(-1) (mod modulus)`.

    Args:
        x: Positive value to invert.
        modulus: Positive modulus.

    Returns:
        The unsigned inverse, in range `[0, modulus)`.

    Raises:
        ValueError: If either input is not positive.
        NotInvertible: If `gcd(x, modulus) != 1`.
    """
    x, modulus = BigInt(x), BigInt(modulus)
    if x == 0 or modulus == 0:
        raise ValueError("Both the value and the modulus must be positive")
    r, t = bezout(x, modulus)
    if r != 1 or modulus == 1:
        raise NotInvertible(f"{x} is not invertible modulo {modulus}")
    if t < 0:
        t = t + modulus
    return t.as_unsigned()
