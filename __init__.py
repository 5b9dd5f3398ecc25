"""
secpvrf: off-chain verification of secp256k1 VRF proofs.

Checks proofs produced by an ECVRF oracle exactly the way the on-chain
VRF.sol verifier does, and derives the request ids that tie randomness
requests to their proofs.

- **Hash-to-curve** by keccak try-and-increment, even-y canonical form
- **Proof verification**  c == H(h, pk, γ, c·γ + s·h, addr(c·pk + s·G))
- **Request ids**  keccak256 over the fixed-order request fields

Quick start
-----------
::

    from secpvrf import verify_proof, generate_request_id

    request_id = generate_request_id({
        "version": 1,
        "targetAgentId": "2c7302fd-d3fd-44aa-be38-256b94ae1680",
        "clientSeed": "1234",
        "requestTimestamp": 1739800571,
        "callbackUri": "http://127.0.0.1:8713/api/vrf/proof",
    })

    # proof = {"publicX": ..., "publicY": ..., "gammaX": ..., ...}
    assert verify_proof(proof)       # raises on any failure
"""

__version__ = "0.1.0"

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    ErrorCode,
    VRFError,
    FormatError,
    HashToCurveError,
    ProofInvalidError,
    BackendError,
)

# ── curve / field ───────────────────────────────────────────────────────
from .curve import Scalar, Point, CurveContext, SECP256K1, G, ORDER, FIELD_PRIME
from .field import (
    is_square,
    square_root,
    y_squared,
    left_pad_bytes,
    fixed_hash,
    uint256_to_bytes32,
)

# ── hashing ─────────────────────────────────────────────────────────────
from .hash import (
    keccak256,
    field_hash,
    hash_to_curve,
    point_address,
    scalar_from_curve_points,
    vrf_output,
)

# ── verification / request ids ──────────────────────────────────────────
from .proofs import Proof, check_well_formed, well_formed, linear_combination, verify_proof
from .request import RequestParams, generate_request_id

from .config import VRFConfig

__all__ = [
    "__version__",
    # errors
    "ErrorCode", "VRFError", "FormatError", "HashToCurveError",
    "ProofInvalidError", "BackendError",
    # curve
    "Scalar", "Point", "CurveContext", "SECP256K1", "G", "ORDER", "FIELD_PRIME",
    # field
    "is_square", "square_root", "y_squared", "left_pad_bytes",
    "fixed_hash", "uint256_to_bytes32",
    # hashing
    "keccak256", "field_hash", "hash_to_curve", "point_address",
    "scalar_from_curve_points", "vrf_output",
    # proofs / requests
    "Proof", "check_well_formed", "well_formed", "linear_combination",
    "verify_proof", "RequestParams", "generate_request_id",
    # config
    "VRFConfig",
]
