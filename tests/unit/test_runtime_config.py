"""Tests for environment-driven runtime configuration."""

from pathlib import Path

from kvx.cli import build_parser, runtime_from_args
from kvx.shared.app.runtime import DEFAULT_AZ_TIMEOUT_S, RuntimeConfig


def test_defaults(monkeypatch) -> None:
    for name in ("KVX_MOCK", "KVX_DEBUG", "KVX_LOG_FILE", "KVX_AZ_PATH", "KVX_AZ_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    runtime = RuntimeConfig.from_env()
    assert runtime == RuntimeConfig()
    assert runtime.az_timeout_s == DEFAULT_AZ_TIMEOUT_S


def test_env_values(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("KVX_MOCK", "yes")
    monkeypatch.setenv("KVX_DEBUG", "1")
    monkeypatch.setenv("KVX_LOG_FILE", str(tmp_path / "kvx.log"))
    monkeypatch.setenv("KVX_AZ_PATH", "/opt/az/bin/az")
    monkeypatch.setenv("KVX_AZ_TIMEOUT", "5")
    runtime = RuntimeConfig.from_env()
    assert runtime.mock is True
    assert runtime.debug_mode is True
    assert runtime.log_file == Path(tmp_path / "kvx.log")
    assert runtime.az_path == "/opt/az/bin/az"
    assert runtime.az_timeout_s == 5.0


def test_invalid_timeout_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("KVX_AZ_TIMEOUT", "soon")
    assert RuntimeConfig.from_env().az_timeout_s == DEFAULT_AZ_TIMEOUT_S
    monkeypatch.setenv("KVX_AZ_TIMEOUT", "-1")
    assert RuntimeConfig.from_env().az_timeout_s == DEFAULT_AZ_TIMEOUT_S


def test_cli_flags_override_env() -> None:
    args = build_parser().parse_args(["--mock", "--debug"])
    runtime = runtime_from_args(args, RuntimeConfig())
    assert runtime.mock is True
    assert runtime.debug_mode is True
    assert runtime.smoke_test is False
