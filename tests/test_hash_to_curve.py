import pytest

import secpvrf.hash as hash_mod
from secpvrf import (
    FIELD_PRIME,
    FormatError,
    G,
    HashToCurveError,
    Point,
    Scalar,
    field_hash,
    hash_to_curve,
    keccak256,
    point_address,
)

SEEDS = [0, 1, 2**255 + 17, 2**256 - 1, 0x847BF2C5404DA462A157FE569BA535BD6F24E6056C957C975AE5D9EF5E1BFA73]


def test_keccak256_known_answers() -> None:
    # Ethereum keccak, not NIST SHA3-256
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    assert keccak256(b"ab", b"c") == keccak256(b"abc")


def test_field_hash_in_range() -> None:
    for msg in (b"", b"vrf", bytes(64)):
        assert 0 <= field_hash(msg) < FIELD_PRIME


@pytest.mark.parametrize("seed", SEEDS)
def test_result_on_curve_with_even_y(seed: int) -> None:
    for k in (1, 2, 0xDEADBEEF):
        h = hash_to_curve(Scalar(k) * G, seed)
        assert h.is_on_curve()
        assert h.y % 2 == 0


def test_deterministic_and_seed_sensitive() -> None:
    pk = Scalar(42) * G
    assert hash_to_curve(pk, 7) == hash_to_curve(pk, 7)
    assert hash_to_curve(pk, 7) != hash_to_curve(pk, 8)
    assert hash_to_curve(pk, 7) != hash_to_curve(Scalar(43) * G, 7)


@pytest.mark.parametrize("seed", [-1, 2**256])
def test_rejects_bad_seed(seed: int) -> None:
    with pytest.raises(FormatError, match="bad input to hash-to-curve"):
        hash_to_curve(G, seed)


def test_rejects_identity_point() -> None:
    with pytest.raises(FormatError):
        hash_to_curve(Point.identity(), 1)


def test_attempt_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def never(x: int) -> bool:
        calls.append(x)
        return False

    monkeypatch.setattr(hash_mod, "is_curve_x_ordinate", never)
    with pytest.raises(HashToCurveError) as info:
        hash_to_curve(G, 1, max_attempts=5)
    assert len(calls) == 5
    assert info.value.context["attempts"] == 5
    # still a FormatError for callers that only distinguish input problems
    assert isinstance(info.value, FormatError)


def test_point_address_is_20_bytes() -> None:
    addr = point_address(G)
    assert len(addr) == 20
    assert addr == keccak256(G.to_bytes_long())[12:]


def test_point_address_of_generator() -> None:
    # Ethereum address of private key 1
    assert point_address(G).hex() == "7e5f4552091a69125d5dfcb7b8c2659029395bdf"
