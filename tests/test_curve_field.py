import pytest

from secpvrf import (
    FIELD_PRIME,
    ORDER,
    SECP256K1,
    FormatError,
    G,
    Point,
    Scalar,
    fixed_hash,
    is_square,
    left_pad_bytes,
    linear_combination,
    square_root,
    uint256_to_bytes32,
    y_squared,
)

GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8


# ── curve context ───────────────────────────────────────────────────────

def test_context_constants() -> None:
    assert SECP256K1.field_prime == FIELD_PRIME
    assert SECP256K1.group_order == ORDER
    assert SECP256K1.generator.coordinates() == (GX, GY)
    assert SECP256K1.euler_exponent == (FIELD_PRIME - 1) // 2
    assert SECP256K1.sqrt_exponent == (FIELD_PRIME + 1) // 4
    assert FIELD_PRIME % 4 == 3


def test_domain_prefixes() -> None:
    assert SECP256K1.hash_to_curve_prefix == b"\x00" * 31 + b"\x01"
    assert SECP256K1.scalar_from_curve_prefix == b"\x00" * 31 + b"\x02"
    assert SECP256K1.vrf_output_prefix == b"\x00" * 31 + b"\x03"


def test_context_is_frozen() -> None:
    with pytest.raises(Exception):
        SECP256K1.field_prime = 7  # type: ignore[misc]


# ── point arithmetic ────────────────────────────────────────────────────

def test_generator_on_curve() -> None:
    assert G.is_on_curve()
    assert G.to_bytes_long() == GX.to_bytes(32, "big") + GY.to_bytes(32, "big")


def test_order_times_generator_is_identity() -> None:
    assert (Scalar(ORDER) * G).is_inf()
    assert (Scalar(ORDER - 1) * G) == -G
    assert (G + (-G)).is_inf()


def test_linear_combination_matches_scalar_mult() -> None:
    assert linear_combination(1, G, 1, G) == Scalar(2) * G
    assert linear_combination(3, G, 4, G) == Scalar(7) * G
    assert linear_combination(0, G, 0, G).is_inf()
    assert linear_combination(ORDER + 5, G, 0, G) == Scalar(5) * G


def test_from_coordinates_rejects_off_curve() -> None:
    with pytest.raises(FormatError):
        Point.from_coordinates(GX, GY + 1)
    with pytest.raises(FormatError):
        Point.from_coordinates(0, 0)
    with pytest.raises(FormatError):
        Point.from_coordinates(FIELD_PRIME, GY)


def test_from_coordinates_roundtrip() -> None:
    p = Scalar(12345) * G
    assert Point.from_coordinates(*p.coordinates()) == p


def test_identity_serialises_as_zeros() -> None:
    assert Point.identity().to_bytes_long() == b"\x00" * 64


def test_point_serialises_as_long_form_only() -> None:
    assert G.to_bytes_long() == GX.to_bytes(32, "big") + GY.to_bytes(32, "big")
    assert not hasattr(G, "to_bytes")
    assert not hasattr(G, "to_bytes_compressed")


def test_scalar_multiplication_needs_a_scalar() -> None:
    with pytest.raises(TypeError):
        3 * G
    assert Scalar(3) * G == G + G + G


# ── field math ──────────────────────────────────────────────────────────

def test_is_square() -> None:
    assert is_square(4)
    assert is_square(y_squared(GX))
    # p ≡ 3 (mod 4) so -1 is a non-residue
    assert not is_square(FIELD_PRIME - 1)
    assert not is_square(0)


def test_square_root() -> None:
    r = square_root(y_squared(GX))
    assert r in (GY, FIELD_PRIME - GY)
    assert (square_root(49) ** 2) % FIELD_PRIME == 49


def test_left_pad_bytes() -> None:
    assert left_pad_bytes(b"\x01\x02", 4) == b"\x00\x00\x01\x02"
    assert left_pad_bytes(b"\x01\x02\x03", 2) == b"\x01\x02\x03"
    assert left_pad_bytes(b"", 3) == b"\x00\x00\x00"


def test_fixed_hash() -> None:
    assert fixed_hash(b"\x02") == b"\x00" * 31 + b"\x02"
    long = bytes(range(40))
    assert fixed_hash(long) == long[-32:]
    assert fixed_hash(bytes(32)) == bytes(32)


def test_uint256_to_bytes32() -> None:
    assert uint256_to_bytes32(0) == bytes(32)
    assert uint256_to_bytes32(2**256 - 1) == b"\xff" * 32
    with pytest.raises(FormatError):
        uint256_to_bytes32(2**256)
    with pytest.raises(FormatError):
        uint256_to_bytes32(-1)
