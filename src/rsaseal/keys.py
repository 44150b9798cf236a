"""Key types and key pair generation under the fixed public exponent.

Key pairs are drawn by resampling prime pairs until every structural constraint holds: distinct primes, a modulus no
wider than requested, and a totient coprime to the public exponent. The private exponent is never stored; it is
derived on demand from the secret primes.

Typical usage example:

    pub, sec = keygen(2048)
    d = private_exponent(sec)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import logging
import time
import typing

from rsaseal import bignum
from rsaseal import modular
from rsaseal.bignum import BigInt
from rsaseal.errors import BadKey
from rsaseal.errors import KeyGenerationError
from rsaseal.errors import NotInvertible
from rsaseal.errors import Underflow

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = 3
MIN_KEY_SIZE: int = 16
ATTEMPTS_FLOOR: int = 64


def _as_bigint(value: BigInt | int) -> BigInt:
    return value if isinstance(value, BigInt) else BigInt(value)


@dataclasses.dataclass(frozen=True)
class PublicKey:
    """The freely shareable half of a key pair.

    Attributes:
        n: The modulus `p*q`.
    """
    n: BigInt

    def __post_init__(self) -> None:
        object.__setattr__(self, "n", _as_bigint(self.n))

    @property
    def e(self) -> int:
        """The public exponent, always `PUBLIC_EXPONENT`."""
        return PUBLIC_EXPONENT

    def bit_size(self) -> int:
        """Returns the bit length of the modulus."""
        return self.n.bit_length()

    def byte_size(self) -> int:
        """Returns the number of bytes needed to hold any value below the modulus."""
        return (self.n.bit_length() + 7) // 8


@dataclasses.dataclass(frozen=True)
class SecretKey:
    """The secret half of a key pair, the two primes behind the modulus.

    Attributes:
        p: Secret prime 1.
        q: Secret prime 2.
    """
    p: BigInt
    q: BigInt

    def __post_init__(self) -> None:
        object.__setattr__(self, "p", _as_bigint(self.p))
        object.__setattr__(self, "q", _as_bigint(self.q))

    def __repr__(self) -> str:
        return f"SecretKey(<{self.n.bit_length()}-bit, hidden>)"

    @property
    def n(self) -> BigInt:
        """The modulus `p*q`, derived from the primes."""
        return self.p * self.q

    def public_key(self) -> PublicKey:
        """Derives the matching public key."""
        return PublicKey(self.n)


class KeyPair(typing.NamedTuple):
    """A public and secret key belonging together.

    Attributes:
        public: The public key, shared with peers.
        secret: The secret key, kept by its owner.
    """
    public: PublicKey
    secret: SecretKey


def _totient(p: BigInt, q: BigInt) -> BigInt:
    return (p - 1) * (q - 1)


def private_exponent(secret_key: SecretKey) -> BigInt:
    """Derives the private exponent `d = e^(-1) mod (p-1)(q-1)`.

    Args:
        secret_key: The key to derive from.

    Returns:
        The private exponent.

    Raises:
        BadKey: If the key is inconsistent and `d` does not exist.
    """
    try:
        return modular.inverse(PUBLIC_EXPONENT, _totient(secret_key.p, secret_key.q))
    except (NotInvertible, Underflow, ValueError) as err:
        raise BadKey("Cannot derive a private exponent from this key") from err


def _rejection(p: BigInt, q: BigInt, budget: int) -> str | None:
    """Names why a candidate pair is unusable, or None if it is acceptable."""
    if p == q:
        return "duplicate primes"
    if p.bit_length() + q.bit_length() > budget:
        return "oversized primes"
    if not BigInt(PUBLIC_EXPONENT).is_coprime(_totient(p, q)):
        return "exponent not coprime to totient"
    return None


def keygen(bit_size: int, *, max_attempts: int | None = None, deadline: float | None = None) -> KeyPair:
    """Generates an RSA key pair whose modulus has `bit_size` bits.

    The size is split into `floor(bit_size/2)` and `ceil(bit_size/2)` bit primes, redrawn together until they
    satisfy the key invariants. Bad candidates are expected and silently retried; only the attempt ceiling, the
    deadline or a prime source failure end the search with an error.

    Args:
        bit_size: Target size of the modulus in bits. Must be at least `MIN_KEY_SIZE`.
        max_attempts: Maximum candidate pairs to draw. Defaults to `max(ATTEMPTS_FLOOR, bit_size)`.
        deadline: Optional time budget in seconds, checked between attempts.

    Returns:
        A new KeyPair.

    Raises:
        ValueError: If `bit_size` or `max_attempts` is out of range.
        KeyGenerationError: If the attempt ceiling or the deadline is exhausted.
        PrimeSourceError: If the prime source fails.
    """
    if bit_size < MIN_KEY_SIZE:
        raise ValueError(f"Key size must be at least {MIN_KEY_SIZE} bits.")
    if max_attempts is None:
        max_attempts = max(ATTEMPTS_FLOOR, bit_size)
    if max_attempts < 1:
        raise ValueError("max_attempts must be positive.")
    p_size = bit_size // 2
    q_size = bit_size - p_size
    expiry = None if deadline is None else time.monotonic() + deadline
    logger.info("Generating a %d-bit key pair", bit_size)
    for attempt in range(1, max_attempts + 1):
        if expiry is not None and time.monotonic() > expiry:
            raise KeyGenerationError(f"Key generation deadline of {deadline}s passed after {attempt - 1} attempts.")
        p = bignum.random_prime(p_size)
        q = bignum.random_prime(q_size)
        reason = _rejection(p, q, p_size + q_size)
        if reason is not None:
            logger.debug("Candidate pair %d rejected: %s", attempt, reason)
            continue
        logger.info("Key pair accepted after %d attempt(s)", attempt)
        return KeyPair(PublicKey(p * q), SecretKey(p, q))
    raise KeyGenerationError(f"No acceptable prime pair found in {max_attempts} attempts.")
