"""
Deterministic correlation ids for VRF requests.

The id binds a randomness request to the proof that later answers it:

    request_id = keccak256( u64(version) ‖ utf8(target_agent_id)
                            ‖ bytes(client_seed) ‖ u64(request_timestamp)
                            ‖ utf8(callback_uri) )

rendered as 64 lowercase hex characters without a prefix.  The backend
recomputes the same digest, so field order and widths are fixed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from .errors import FormatError
from .hash import keccak256

_HEX = re.compile(r"^[0-9a-fA-F]*$")
_U64_MAX = (1 << 64) - 1
_U8_MAX = 0xFF


def _strip_0x(value: str) -> str:
    value = value.strip()
    return value[2:] if value.startswith("0x") else value


def hex_to_bytes(name: str, value: str) -> bytes:
    """Decode an even-length hex string, ``0x`` optional."""
    if not isinstance(value, str):
        raise FormatError(f"{name} must be a string", context={"field": name})
    s = _strip_0x(value)
    if len(s) % 2 or not _HEX.match(s):
        raise FormatError(f"{name} must be a valid hex byte string", context={"field": name})
    return bytes.fromhex(s)


def _u64(name: str, value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise FormatError(f"{name} must be an unsigned 64-bit integer", context={"field": name})
    return value.to_bytes(8, "big")


@dataclass(frozen=True)
class RequestParams:
    """The hashed subset of a VRF request; field order is the hash order."""

    version: int
    target_agent_id: str
    client_seed: str
    request_timestamp: int
    callback_uri: str

    _KEYS = (
        ("version", "version"),
        ("targetAgentId", "target_agent_id"),
        ("clientSeed", "client_seed"),
        ("requestTimestamp", "request_timestamp"),
        ("callbackUri", "callback_uri"),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RequestParams:
        """Accepts camelCase (SDK) or snake_case (backend) keys."""
        kwargs: Dict[str, Any] = {}
        for camel, snake in cls._KEYS:
            if camel in data:
                kwargs[snake] = data[camel]
            elif snake in data:
                kwargs[snake] = data[snake]
            else:
                raise FormatError(f"vrf request missing field: {camel}", context={"field": camel})
        return cls(**kwargs)

    def encode(self) -> bytes:
        """Concatenated preimage of the request id."""
        if isinstance(self.version, bool) or not isinstance(self.version, int) \
                or not 0 <= self.version <= _U8_MAX:
            raise FormatError("version must be a uint8", context={"field": "version"})
        for name in ("target_agent_id", "callback_uri"):
            if not isinstance(getattr(self, name), str):
                raise FormatError(f"{name} must be a string", context={"field": name})
        return b"".join((
            _u64("version", self.version),
            self.target_agent_id.encode("utf-8"),
            hex_to_bytes("client_seed", self.client_seed),
            _u64("request_timestamp", self.request_timestamp),
            self.callback_uri.encode("utf-8"),
        ))

    def request_id(self) -> str:
        return keccak256(self.encode()).hex()

    def to_request_body(self, key_hash: str) -> Dict[str, Any]:
        """
        Body for the backend's ``POST /api/vrf/request``.

        *key_hash* selects the VRF provider key and is not part of the id.
        """
        kh = _strip_0x(key_hash) if isinstance(key_hash, str) else ""
        if len(kh) != 64 or not _HEX.match(kh):
            raise FormatError("key_hash must be 64 hex characters", context={"field": "key_hash"})
        return {
            "version": self.version,
            "target_agent_id": self.target_agent_id,
            "client_seed": self.client_seed,
            "key_hash": kh,
            "request_timestamp": self.request_timestamp,
            "request_id": self.request_id(),
            "callback_uri": self.callback_uri,
        }


def generate_request_id(params: Union[RequestParams, Mapping[str, Any]]) -> str:
    """Request id for *params* as 64 lowercase hex characters."""
    if not isinstance(params, RequestParams):
        params = RequestParams.from_dict(params)
    return params.request_id()
