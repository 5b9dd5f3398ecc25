"""
Structured exceptions for VRF proof verification and request ids.

Every error carries a stable integer code so callers (CLI, RPC layers,
tests) can classify failures without string-matching:

- ``FormatError``        : malformed hex, wrong length, invalid point,
                           out-of-range scalar or seed.
- ``HashToCurveError``   : try-and-increment gave up after the configured
                           number of attempts.
- ``ProofInvalidError``  : well-formed proof that fails a verification
                           equation; ``reason`` names which one.
- ``BackendError``       : reserved for the network collaborator; the core
                           never raises it, only lets it through.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(IntEnum):
    """Stable error codes for VRF exceptions."""
    VRF_GENERIC   = 3000
    FORMAT        = 3001
    HASH_TO_CURVE = 3002
    PROOF_INVALID = 3003
    BACKEND       = 3004


class VRFError(Exception):
    """
    Base class for every error raised by this package.

    Parameters
    ----------
    message : str
        Human-readable description.
    code : ErrorCode | int
        Stable code for programmatic handling.
    context : Mapping[str, Any] | None
        Optional structured fields, kept small.
    """

    default_code: ErrorCode = ErrorCode.VRF_GENERIC

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: int = int(code if code is not None else self.default_code)
        self.context: Dict[str, Any] = dict(context) if context else {}

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        tail = f" context={self.context}" if self.context else ""
        return f"[{self.code}] {self.message}{tail}"

    def to_dict(self) -> Dict[str, Any]:
        """Structured view suitable for logs or JSON output."""
        out: Dict[str, Any] = {
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
        }
        if self.context:
            out["context"] = dict(self.context)
        return out


class FormatError(VRFError, ValueError):
    """Input could not be parsed into valid curve points or scalars."""

    default_code = ErrorCode.FORMAT


class HashToCurveError(FormatError):
    """No curve x-ordinate found within the attempt budget."""

    default_code = ErrorCode.HASH_TO_CURVE


class ProofInvalidError(VRFError):
    """
    Structurally valid proof that fails verification.

    ``reason`` is one of ``disallowed-equality``, ``c-mismatch`` or
    ``output-mismatch``.
    """

    default_code = ErrorCode.PROOF_INVALID

    DISALLOWED_EQUALITY = "disallowed-equality"
    C_MISMATCH = "c-mismatch"
    OUTPUT_MISMATCH = "output-mismatch"

    def __init__(self, message: str, *, reason: str, **kwargs: Any) -> None:
        context = dict(kwargs.pop("context", None) or {})
        context.setdefault("reason", reason)
        super().__init__(message, context=context, **kwargs)
        self.reason = reason


class BackendError(VRFError):
    """Failure reported by the VRF backend service."""

    default_code = ErrorCode.BACKEND


__all__ = [
    "ErrorCode",
    "VRFError",
    "FormatError",
    "HashToCurveError",
    "ProofInvalidError",
    "BackendError",
]
