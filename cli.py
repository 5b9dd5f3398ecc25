"""
secpvrf command line.

Verify a VRF proof fetched from the backend, or compute the request id
for a randomness request before submitting it.

Examples:
  # Verify a proof JSON (bare proof or {"requestId", "proof"} envelope):
  secpvrf verify proof.json
  curl -s "$VRF_URL/api/vrf/query?request_id=$ID" | jq .result | secpvrf verify -

  # Request id only:
  secpvrf request-id --version 1 --target-agent-id 2c7302fd-... \\
      --client-seed 1234 --callback-uri http://127.0.0.1:8713/api/vrf/proof

  # Full submission body (adds key_hash and request_id):
  secpvrf request-id ... --key-hash 969b0a11...

Exit codes for ``verify``: 0 valid, 1 proof rejected, 2 malformed input.

Environment:
  SECPVRF_LOG_LEVEL, SECPVRF_MAX_HASH_TO_CURVE_ATTEMPTS (see config.py)
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, Dict, Optional

import typer

from .config import VRFConfig
from .errors import FormatError, ProofInvalidError
from .proofs import Proof, verify_proof
from .request import RequestParams

log = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_MALFORMED = 2

app = typer.Typer(
    name="secpvrf",
    help="Verify secp256k1 VRF proofs and derive VRF request ids.",
    no_args_is_help=True,
    add_completion=False,
)


def _load_json(path: str) -> Dict[str, Any]:
    if path == "-":
        txt = sys.stdin.read()
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                txt = f.read()
        except OSError as e:
            typer.echo(f"malformed: cannot read {path}: {e}")
            raise typer.Exit(EXIT_MALFORMED)
    try:
        obj = json.loads(txt)
    except json.JSONDecodeError as e:
        typer.echo(f"malformed: invalid JSON in proof file: {e}")
        raise typer.Exit(EXIT_MALFORMED)
    if not isinstance(obj, dict):
        typer.echo("malformed: top-level JSON must be an object")
        raise typer.Exit(EXIT_MALFORMED)
    return obj


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override SECPVRF_LOG_LEVEL (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    try:
        cfg = VRFConfig.from_env()
        if log_level:
            cfg.log_level = log_level.upper()
            cfg.validate()
    except ValueError as e:
        raise typer.BadParameter(str(e))
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = cfg


@app.command("verify")
def verify_cmd(
    ctx: typer.Context,
    proof_file: str = typer.Argument(..., help="Proof JSON file, or '-' for stdin."),
) -> None:
    """Verify a VRF proof against its public key and seed."""
    cfg: VRFConfig = ctx.obj or VRFConfig()
    obj = _load_json(proof_file)
    try:
        proof = Proof.from_dict(obj)
        verify_proof(proof, max_attempts=cfg.max_hash_to_curve_attempts)
    except ProofInvalidError as e:
        log.warning("proof rejected: %s", e.reason)
        typer.echo(f"invalid: {e.reason}: {e.message}")
        raise typer.Exit(EXIT_INVALID)
    except FormatError as e:
        log.warning("proof malformed: %s", e)
        typer.echo(f"malformed: {e.message}")
        raise typer.Exit(EXIT_MALFORMED)

    log.info("proof verified for seed %064x", proof.seed)
    typer.echo("valid")
    if isinstance(obj.get("requestId"), str):
        typer.echo(f"request_id: {obj['requestId']}")
    typer.echo(f"output: {proof.output_hex}")


@app.command("request-id")
def request_id_cmd(
    version: int = typer.Option(1, "--version", help="Request format version (uint8)."),
    target_agent_id: str = typer.Option(..., "--target-agent-id", help="Target agent UUIDv4."),
    client_seed: str = typer.Option(..., "--client-seed", help="Client seed, hex."),
    callback_uri: str = typer.Option(..., "--callback-uri", help="URL the proof is posted back to."),
    timestamp: Optional[int] = typer.Option(
        None, "--timestamp", help="Unix seconds; defaults to now."
    ),
    key_hash: Optional[str] = typer.Option(
        None, "--key-hash", help="Provider key hash; prints the full request body as JSON."
    ),
) -> None:
    """Compute the request id (or full request body) for a VRF request."""
    params = RequestParams(
        version=version,
        target_agent_id=target_agent_id.strip(),
        client_seed=client_seed.strip(),
        request_timestamp=int(time.time()) if timestamp is None else timestamp,
        callback_uri=callback_uri.strip(),
    )
    try:
        if key_hash is None:
            typer.echo(params.request_id())
        else:
            typer.echo(json.dumps(params.to_request_body(key_hash), indent=2))
    except FormatError as e:
        typer.echo(f"malformed: {e.message}")
        raise typer.Exit(EXIT_MALFORMED)


if __name__ == "__main__":  # pragma: no cover
    app()
