"""
Elliptic curve arithmetic on secp256k1 via libsecp256k1.

Group operations (scalar multiplication, point addition, on-curve
validation) are delegated to the C library ``coincurve``, which wraps
Bitcoin Core's libsecp256k1.  Only the protocol-level VRF steps are
reproduced in Python; the arithmetic itself stays in vetted code.

Install
-------
    pip install coincurve>=18.0.0

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
- Chainlink VRF.sol  on-chain verifier this package interoperates with
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .errors import FormatError

# ── secp256k1 constants ─────────────────────────────────────────────────
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
CURVE_B = 7
SCALAR_BYTES = 32
COORD_BYTES = 32
LONG_BYTES = 2 * COORD_BYTES


# ── Scalar  (Z_q, reduced on construction) ──────────────────────────────
class Scalar:
    """Element of  Z_q  where *q* = ``ORDER``."""

    __slots__ = ("_v",)

    def __init__(self, value: int) -> None:
        self._v = value % ORDER

    def to_bytes(self) -> bytes:
        return self._v.to_bytes(SCALAR_BYTES, "big")

    def is_zero(self) -> bool:
        return self._v == 0

    def __mul__(self, o):
        if isinstance(o, Point):
            return o._smul(self)
        return NotImplemented

    def __repr__(self) -> str:
        h = hex(self._v)
        return f"Scalar(0x{h[2:10]}…)" if len(h) > 14 else f"Scalar({h})"


# ── Point  (secp256k1 group element via libsecp256k1) ───────────────────
class Point:
    """
    Affine point on secp256k1.

    The identity (point at infinity) is represented by a flag rather than
    a ``coincurve.PublicKey``; libsecp256k1 cannot serialise it, and the
    VRF linear combinations can produce it from adversarial input.
    """

    __slots__ = ("_pk", "_inf")

    def __init__(self, *, pk: Optional[_PK] = None, infinity: bool = False):
        self._pk: Optional[_PK] = pk
        self._inf: bool = infinity

    # constructors -----------------------------------------------------------
    @classmethod
    def generator(cls) -> Point:
        """Standard base point *G*."""
        return cls(pk=_SK(b"\x00" * 31 + b"\x01").public_key)

    @classmethod
    def identity(cls) -> Point:
        return cls(infinity=True)

    @classmethod
    def from_coordinates(cls, x: int, y: int) -> Point:
        """
        Build a point from affine coordinates.

        libsecp256k1 rejects coordinates that do not satisfy
        y² = x³ + 7; since the cofactor is 1 that is also the subgroup
        check.  Raises ``FormatError`` for anything it refuses.
        """
        if not (0 <= x < FIELD_PRIME and 0 <= y < FIELD_PRIME):
            raise FormatError(
                "point coordinate out of field range",
                context={"x": hex(x), "y": hex(y)},
            )
        raw = b"\x04" + x.to_bytes(COORD_BYTES, "big") + y.to_bytes(COORD_BYTES, "big")
        try:
            return cls(pk=_PK(raw))
        except ValueError as e:
            raise FormatError(
                "point requested from invalid coordinates",
                context={"x": hex(x), "y": hex(y)},
            ) from e

    # serialisation ----------------------------------------------------------
    def to_bytes_long(self) -> bytes:
        """64-byte  x ‖ y  big-endian, the encoding VRF.sol hashes."""
        if self._inf:
            return b"\x00" * LONG_BYTES
        return self._pk.format(compressed=False)[1:]  # type: ignore[union-attr]

    @property
    def x(self) -> int:
        if self._inf:
            return 0
        raw = self._pk.format(compressed=False)  # type: ignore[union-attr]
        return int.from_bytes(raw[1:33], "big")

    @property
    def y(self) -> int:
        if self._inf:
            return 0
        raw = self._pk.format(compressed=False)  # type: ignore[union-attr]
        return int.from_bytes(raw[33:65], "big")

    def coordinates(self) -> Tuple[int, int]:
        return self.x, self.y

    def is_inf(self) -> bool:
        return self._inf

    def is_on_curve(self) -> bool:
        """Recheck  y² ≡ x³ + 7 (mod p)  in pure Python."""
        if self._inf:
            return False
        x, y = self.coordinates()
        return (y * y - (pow(x, 3, FIELD_PRIME) + CURVE_B)) % FIELD_PRIME == 0

    # group operations -------------------------------------------------------
    def _smul(self, s: Scalar) -> Point:
        """Scalar multiplication  s · self  (C speed)."""
        if self._inf or s.is_zero():
            return Point.identity()
        return Point(pk=self._pk.multiply(s.to_bytes()))  # type: ignore[union-attr]

    def __neg__(self) -> Point:
        if self._inf:
            return self
        raw = bytearray(self._pk.format(compressed=True))  # type: ignore
        raw[0] ^= 0x01            # 0x02 ↔ 0x03 flip parity
        return Point(pk=_PK(bytes(raw)))

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        if self._inf:
            return o
        if o._inf:
            return self
        # P + (-P) = O
        if self._pk.format() == (-o)._pk.format():  # type: ignore
            return Point.identity()
        return Point(pk=_PK.combine_keys(
            [self._pk, o._pk]))  # type: ignore[list-item]

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if self._inf and o._inf:
            return True
        if self._inf or o._inf:
            return False
        return self._pk.format() == o._pk.format()  # type: ignore

    def __repr__(self) -> str:
        if self._inf:
            return "Point(∞)"
        return f"Point(0x{self.x:064x})"[:42] + "…)"


# ── curve context ───────────────────────────────────────────────────────
@dataclass(frozen=True)
class CurveContext:
    """
    Immutable secp256k1 parameters shared by every verification.

    The three prefixes are the 32-byte big-endian encodings of 1, 2 and 3
    and keep the hash-to-curve, challenge and output hashes apart.
    """

    field_prime: int
    group_order: int
    generator: Point
    euler_exponent: int
    sqrt_exponent: int
    hash_to_curve_prefix: bytes
    scalar_from_curve_prefix: bytes
    vrf_output_prefix: bytes

    @classmethod
    def secp256k1(cls) -> CurveContext:
        return cls(
            field_prime=FIELD_PRIME,
            group_order=ORDER,
            generator=Point.generator(),
            euler_exponent=(FIELD_PRIME - 1) // 2,
            sqrt_exponent=(FIELD_PRIME + 1) // 4,
            hash_to_curve_prefix=(1).to_bytes(32, "big"),
            scalar_from_curve_prefix=(2).to_bytes(32, "big"),
            vrf_output_prefix=(3).to_bytes(32, "big"),
        )


# ── module-level singletons ─────────────────────────────────────────────
SECP256K1 = CurveContext.secp256k1()
G = SECP256K1.generator
