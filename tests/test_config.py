import pytest

from secpvrf import VRFConfig


def test_defaults() -> None:
    cfg = VRFConfig()
    cfg.validate()
    assert cfg.max_hash_to_curve_attempts == 256
    assert cfg.log_level == "WARNING"


def test_from_env() -> None:
    cfg = VRFConfig.from_env(environ={
        "SECPVRF_MAX_HASH_TO_CURVE_ATTEMPTS": " 64 ",
        "SECPVRF_LOG_LEVEL": "debug",
    })
    assert cfg.max_hash_to_curve_attempts == 64
    assert cfg.log_level == "DEBUG"
    assert cfg.to_dict() == {"max_hash_to_curve_attempts": 64, "log_level": "DEBUG"}


def test_validate_does_not_rewrite_fields() -> None:
    cfg = VRFConfig(log_level="debug")
    cfg.validate()
    assert cfg.log_level == "debug"


def test_from_env_ignores_blank_values() -> None:
    cfg = VRFConfig.from_env(environ={"SECPVRF_LOG_LEVEL": "  "})
    assert cfg == VRFConfig()


def test_custom_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYVRF_MAX_HASH_TO_CURVE_ATTEMPTS", "9")
    assert VRFConfig.from_env(prefix="MYVRF_").max_hash_to_curve_attempts == 9


@pytest.mark.parametrize(
    "env",
    [
        {"SECPVRF_MAX_HASH_TO_CURVE_ATTEMPTS": "many"},
        {"SECPVRF_MAX_HASH_TO_CURVE_ATTEMPTS": "0"},
        {"SECPVRF_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_env(env: dict) -> None:
    with pytest.raises(ValueError):
        VRFConfig.from_env(environ=env)
