"""
Configuration for the VRF verifier.

Dataclass-based, validated, dependency-free.  Values come from defaults
or from environment variables (prefix ``SECPVRF_``):

    SECPVRF_MAX_HASH_TO_CURVE_ATTEMPTS   try-and-increment budget (>= 1)
    SECPVRF_LOG_LEVEL                    DEBUG / INFO / WARNING / ERROR / CRITICAL
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from .hash import DEFAULT_MAX_ATTEMPTS

ENV_PREFIX = "SECPVRF_"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class VRFConfig:
    """
    max_hash_to_curve_attempts: candidates hash-to-curve may try before
        giving up.  Each succeeds with probability ~1/2, so the default
        only trips on adversarial input.
    log_level: level the CLI configures the root logger with.
    """

    max_hash_to_curve_attempts: int = DEFAULT_MAX_ATTEMPTS
    log_level: str = "WARNING"

    def validate(self) -> None:
        if self.max_hash_to_curve_attempts < 1:
            raise ValueError("max_hash_to_curve_attempts must be >= 1")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> VRFConfig:
        env = os.environ if environ is None else environ
        cfg = cls()

        raw = env.get(f"{prefix}MAX_HASH_TO_CURVE_ATTEMPTS")
        if raw is not None and raw.strip():
            try:
                cfg.max_hash_to_curve_attempts = int(raw.strip())
            except ValueError as e:
                raise ValueError(
                    f"{prefix}MAX_HASH_TO_CURVE_ATTEMPTS must be an integer, got {raw!r}"
                ) from e

        level = env.get(f"{prefix}LOG_LEVEL")
        if level is not None and level.strip():
            cfg.log_level = level.strip().upper()

        cfg.validate()
        return cfg


__all__ = ["VRFConfig", "ENV_PREFIX"]
