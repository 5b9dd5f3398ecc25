"""
Domain-separated keccak hashes for the secp256k1 VRF.

Every hash that feeds the protocol starts with one of three 32-byte
prefixes held by :data:`curve.SECP256K1`:

    1  hash-to-curve input
    2  challenge scalar  c = H(h, pk, γ, v, address(u))
    3  VRF output        β = H(γ)

so outputs for the three roles are independent even on identical data.
Byte order and padding match VRF.sol exactly; any deviation breaks
interoperability with the on-chain verifier.

Keccak-256 is the pre-standard SHA-3 (Ethereum flavour) provided by
pycryptodome, *not* ``hashlib.sha3_256``.
"""

from __future__ import annotations

import logging

from Crypto.Hash import keccak

from .curve import Point, SECP256K1
from .errors import FormatError, HashToCurveError
from .field import (
    fixed_hash,
    int_to_min_bytes,
    is_curve_x_ordinate,
    square_root,
    uint256_to_bytes32,
    y_squared,
)

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 256
ADDRESS_BYTES = 20


def keccak256(*parts: bytes) -> bytes:
    """Keccak-256 over the concatenation of *parts*."""
    h = keccak.new(digest_bits=256)
    for part in parts:
        h.update(bytes(part))
    return h.digest()


# ── field hash / hash-to-curve ──────────────────────────────────────────
def field_hash(message: bytes) -> int:
    """
    Hash *message* to an element of F_p.

    Rehashes the 32-byte form of the candidate until it falls below p
    (rejection sampling; p is within 2^-224 of 2^256 so one round is
    almost always enough).
    """
    p = SECP256K1.field_prime
    rv = int.from_bytes(fixed_hash(keccak256(message)), "big")
    while rv >= p:
        rv = int.from_bytes(fixed_hash(keccak256(fixed_hash(int_to_min_bytes(rv)))), "big")
    return rv


def hash_to_curve(
    point: Point,
    seed: int,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Point:
    """
    Deterministically map  (point, seed)  to a curve point with even y.

    Try-and-increment: each candidate x is the field hash of the previous
    one until x³ + 7 is a square.  Each try succeeds with probability
    about 1/2, so *max_attempts* bounds the work on adversarial input.

    Raises
    ------
    FormatError
        *seed* is negative or wider than 256 bits, or *point* is not a
        finite curve point.
    HashToCurveError
        No x-ordinate was found within *max_attempts* candidates.
    """
    if not isinstance(seed, int) or seed < 0 or seed.bit_length() > 256:
        raise FormatError("bad input to hash-to-curve", context={"field": "seed"})
    if not isinstance(point, Point) or point.is_inf():
        raise FormatError("bad input to hash-to-curve", context={"field": "point"})
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    x = field_hash(
        SECP256K1.hash_to_curve_prefix
        + point.to_bytes_long()
        + uint256_to_bytes32(seed)
    )
    attempts = 1
    while not is_curve_x_ordinate(x):
        if attempts >= max_attempts:
            raise HashToCurveError(
                "hash-to-curve exceeded attempt limit",
                context={"attempts": attempts},
            )
        x = field_hash(fixed_hash(int_to_min_bytes(x)))
        attempts += 1
    log.debug("hash_to_curve: x-ordinate found after %d attempt(s)", attempts)

    y = square_root(y_squared(x))
    # Choose even y
    if y % 2 == 1:
        y = SECP256K1.field_prime - y
    result = Point.from_coordinates(x, y)
    if not result.is_on_curve():
        raise FormatError("hash-to-curve produced a point off the curve")
    return result


# ── challenge / output hashes ───────────────────────────────────────────
def point_address(point: Point) -> bytes:
    """Rightmost 160 bits of keccak(x ‖ y): the point's Ethereum address."""
    return keccak256(point.to_bytes_long())[-ADDRESS_BYTES:]


def scalar_from_curve_points(
    h: Point,
    pk: Point,
    gamma: Point,
    u_witness: bytes,
    v: Point,
) -> int:
    r"""
    Fiat-Shamir challenge  c = H₂(h, pk, γ, v, address(u)).

    Note the argument order differs from the hash order: VRF.sol takes
    ``uWitness`` before ``v`` but hashes ``v`` first.
    """
    digest = keccak256(
        SECP256K1.scalar_from_curve_prefix,
        h.to_bytes_long(),
        pk.to_bytes_long(),
        gamma.to_bytes_long(),
        v.to_bytes_long(),
        u_witness,
    )
    return int.from_bytes(digest, "big")


def vrf_output(gamma: Point) -> int:
    """VRF output  β = H₃(γ)  as an integer."""
    return int.from_bytes(
        keccak256(SECP256K1.vrf_output_prefix, gamma.to_bytes_long()), "big"
    )
