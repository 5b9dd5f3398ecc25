"""
Off-chain verification of secp256k1 VRF proofs.

A proof  (pk, γ, c, s, seed, output)  is accepted iff, with
h = HashToCurve(pk, seed):

    u = c·pk + s·G
    v = c·γ  + s·h
    c == H₂(h, pk, γ, v, address(u))
    output == H₃(γ)

This is the same check VRF.sol performs on-chain (Chainlink's ECVRF
variant: keccak hashes, try-and-increment hash-to-curve, 160-bit
witness for u), so a proof accepted here is accepted there.

Verification never answers ``False``: malformed input raises
``FormatError`` and a failed equation raises ``ProofInvalidError``
whose ``reason`` names the check.

References
----------
- Goldberg, Reyzin, et al.  "Verifiable Random Functions (VRFs)",
  draft-irtf-cfrg-vrf.
- Chainlink  contracts/src/v0.8/vrf/VRF.sol
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple, Union

from .curve import Point, Scalar, G, SECP256K1
from .errors import FormatError, ProofInvalidError
from .field import HASH_LENGTH, uint256_to_bytes32
from .hash import (
    DEFAULT_MAX_ATTEMPTS,
    hash_to_curve,
    point_address,
    scalar_from_curve_points,
    vrf_output,
)

log = logging.getLogger(__name__)

_HEX_WORD = re.compile(r"^[0-9a-fA-F]{64}$")

# wire name -> attribute name
_WIRE_FIELDS = (
    ("publicX", "public_x"),
    ("publicY", "public_y"),
    ("gammaX", "gamma_x"),
    ("gammaY", "gamma_y"),
    ("c", "c"),
    ("s", "s"),
    ("seed", "seed"),
    ("output", "output"),
)


def _parse_word(name: str, value: Any) -> int:
    """64 hex characters (``0x`` optional) → int."""
    if not isinstance(value, str):
        raise FormatError(f"{name} must be a string", context={"field": name})
    s = value.strip()
    if s.startswith("0x"):
        s = s[2:]
    if not _HEX_WORD.match(s):
        raise FormatError(
            f"{name} must be 64 hex characters long, excluding 0x prefix",
            context={"field": name, "length": len(s)},
        )
    return int(s, 16)


# ── Proof ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Proof:
    """
    A VRF proof as delivered by the backend.

    Coordinates and scalars are kept as plain integers; nothing is
    range-checked or put on the curve until :func:`check_well_formed`.
    """

    public_x: int
    public_y: int
    gamma_x: int
    gamma_y: int
    c: int
    s: int
    seed: int
    output: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Proof:
        """
        Parse the wire shape ``{publicX, publicY, gammaX, gammaY, c, s,
        seed, output}``.

        Each value is 64 hex characters with an optional lowercase ``0x``
        prefix; surrounding whitespace is trimmed.  The backend query
        envelope ``{"requestId": ..., "proof": {...}}`` is unwrapped.
        """
        if not isinstance(data, Mapping):
            raise FormatError("vrf proof must be an object")
        inner = data.get("proof")
        if isinstance(inner, Mapping):
            data = inner
        missing = [wire for wire, _ in _WIRE_FIELDS if wire not in data]
        if missing:
            raise FormatError(
                f"vrf proof missing fields: {', '.join(missing)}",
                context={"missing": missing},
            )
        return cls(**{attr: _parse_word(wire, data[wire]) for wire, attr in _WIRE_FIELDS})

    def to_dict(self) -> Dict[str, str]:
        return {wire: f"{getattr(self, attr):064x}" for wire, attr in _WIRE_FIELDS}

    @property
    def public_key(self) -> Point:
        return Point.from_coordinates(self.public_x, self.public_y)

    @property
    def gamma(self) -> Point:
        return Point.from_coordinates(self.gamma_x, self.gamma_y)

    @property
    def randomness(self) -> bytes:
        """The VRF output as 32 big-endian bytes."""
        return uint256_to_bytes32(self.output)

    @property
    def output_hex(self) -> str:
        return self.randomness.hex()


ProofLike = Union[Proof, Mapping[str, Any]]


# ── structural checks ───────────────────────────────────────────────────

def check_well_formed(proof: Proof) -> Tuple[Point, Point]:
    """
    Range-check the scalars and decode  (pk, γ).

    Scalars are checked first so an out-of-range c or s is rejected
    before libsecp256k1 is touched.
    """
    n = SECP256K1.group_order
    for name, value in (("c", proof.c), ("s", proof.s)):
        if not 0 <= value < n:
            raise FormatError(
                "badly-formatted proof",
                context={"field": name, "detail": "not below group order"},
            )
    if proof.output < 0 or proof.output.bit_length() > 8 * HASH_LENGTH:
        raise FormatError(
            "badly-formatted proof",
            context={"field": "output", "detail": "does not fit in 32 bytes"},
        )
    try:
        pk = proof.public_key
        gamma = proof.gamma
    except FormatError as e:
        raise FormatError(
            "badly-formatted proof",
            context={"detail": e.message, **e.context},
        ) from e
    return pk, gamma


def well_formed(proof: Proof) -> bool:
    try:
        check_well_formed(proof)
    except FormatError:
        return False
    return True


def linear_combination(c: int, p1: Point, s: int, p2: Point) -> Point:
    """c·p1 + s·p2  with both scalars reduced mod q."""
    return (Scalar(c) * p1) + (Scalar(s) * p2)


# ── verification ────────────────────────────────────────────────────────

def verify_proof(
    proof: ProofLike,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> bool:
    """
    Verify a VRF proof; return ``True`` or raise.

    Parameters
    ----------
    proof : Proof | Mapping
        Parsed proof, or its wire form (see :meth:`Proof.from_dict`).
    max_attempts : int
        Try-and-increment budget for hash-to-curve.

    Raises
    ------
    FormatError
        Malformed hex, invalid point, c/s not below the group order,
        output wider than 32 bytes, or hash-to-curve exhausted.
    ProofInvalidError
        ``reason`` is ``disallowed-equality``, ``c-mismatch`` or
        ``output-mismatch``.
    """
    if not isinstance(proof, Proof):
        proof = Proof.from_dict(proof)

    pk, gamma = check_well_formed(proof)
    h = hash_to_curve(pk, proof.seed, max_attempts)

    # VRF.sol rejects c·γ == s·h
    if Scalar(proof.c) * gamma == Scalar(proof.s) * h:
        raise ProofInvalidError(
            "disallowed degenerate proof",
            reason=ProofInvalidError.DISALLOWED_EQUALITY,
        )

    u = linear_combination(proof.c, pk, proof.s, G)
    v = linear_combination(proof.c, gamma, proof.s, h)

    derived_c = scalar_from_curve_points(h, pk, gamma, point_address(u), v)
    if derived_c != proof.c:
        log.info("vrf proof rejected: c mismatch (seed=%064x)", proof.seed)
        raise ProofInvalidError(
            "invalid proof: challenge c does not match",
            reason=ProofInvalidError.C_MISMATCH,
        )

    if vrf_output(gamma) != proof.output:
        log.info("vrf proof rejected: output mismatch (seed=%064x)", proof.seed)
        raise ProofInvalidError(
            "invalid proof: output does not match gamma",
            reason=ProofInvalidError.OUTPUT_MISMATCH,
        )

    log.debug("vrf proof verified (seed=%064x)", proof.seed)
    return True
