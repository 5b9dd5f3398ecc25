"""
Base-field utilities for F_p  (p = secp256k1 field prime).

Quadratic-residue test, square roots and the fixed-width byte helpers
that the VRF hashes depend on.  Point arithmetic lives in
:pymod:`curve`; nothing here touches libsecp256k1.
"""

from __future__ import annotations

from .curve import SECP256K1, CURVE_B
from .errors import FormatError

HASH_LENGTH = 32


# ── square test / root in F_p ───────────────────────────────────────────
def is_square(x: int) -> bool:
    """Euler's criterion:  x^{(p-1)/2} ≡ 1 (mod p)."""
    p = SECP256K1.field_prime
    return pow(x % p, SECP256K1.euler_exponent, p) == 1


def square_root(x: int) -> int:
    """
    x^{(p+1)/4} mod p.

    Valid because p ≡ 3 (mod 4).  Only meaningful when ``is_square(x)``.
    """
    p = SECP256K1.field_prime
    return pow(x % p, SECP256K1.sqrt_exponent, p)


def y_squared(x: int) -> int:
    """Right-hand side of the curve equation,  x³ + 7  mod p."""
    p = SECP256K1.field_prime
    return (pow(x, 3, p) + CURVE_B) % p


def is_curve_x_ordinate(x: int) -> bool:
    return is_square(y_squared(x))


# ── fixed-width byte helpers ────────────────────────────────────────────
def left_pad_bytes(data: bytes, length: int) -> bytes:
    """Left-pad with zero bytes to *length*; longer input is returned as is."""
    data = bytes(data)
    if len(data) >= length:
        return data
    return b"\x00" * (length - len(data)) + data


def int_to_min_bytes(value: int) -> bytes:
    """Minimal big-endian encoding (``b""`` for zero)."""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def uint256_to_bytes32(value: int) -> bytes:
    """
    Serialise a uint256 as exactly 32 big-endian bytes.

    Raises ``FormatError`` if *value* is negative or too big to marshal.
    """
    if value < 0:
        raise FormatError("negative value cannot be marshalled to uint256")
    raw = int_to_min_bytes(value)
    if len(raw) > HASH_LENGTH:
        raise FormatError(
            "too big to marshal to uint256",
            context={"bytes": len(raw)},
        )
    return left_pad_bytes(raw, HASH_LENGTH)


def fixed_hash(data: bytes) -> bytes:
    """
    Normalise *data* to exactly 32 bytes.

    Longer input keeps its rightmost 32 bytes; shorter input is
    left-padded with zeros.
    """
    data = bytes(data)
    if len(data) > HASH_LENGTH:
        return data[-HASH_LENGTH:]
    return left_pad_bytes(data, HASH_LENGTH)
