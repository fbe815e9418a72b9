"""Tests for the az CLI backed store using a fake subprocess."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from kvx.domains.vaults.store import azure_cli
from kvx.domains.vaults.store.azure_cli import AzureCliSecretStore
from kvx.domains.vaults.store.base import (
    AzureCliError,
    AzureCliNotFoundError,
    SecretStoreError,
    VaultDiscoveryError,
)
from tests.helpers import make_vault


class FakeProcess:
    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0, hang: bool = False):
        self._stdout = stdout.encode()
        self._stderr = stderr.encode()
        self.returncode = returncode
        self._hang = hang
        self.killed = False

    async def communicate(self):
        if self._hang:
            await asyncio.sleep(10)
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True

    async def wait(self) -> int:
        return self.returncode


class FakeAz:
    """Answers az invocations from a list of (argv prefix, FakeProcess) rules."""

    def __init__(self) -> None:
        self.rules: list[tuple[tuple[str, ...], FakeProcess]] = []
        self.invocations: list[list[str]] = []
        self.file_contents: dict[str, str] = {}

    def on(self, *prefix: str, **kwargs) -> FakeProcess:
        process = FakeProcess(**kwargs)
        self.rules.append((prefix, process))
        return process

    async def __call__(self, *command, stdout=None, stderr=None):
        argv = list(command[1:])
        self.invocations.append(argv)
        if "--file" in argv:
            path = argv[argv.index("--file") + 1]
            self.file_contents[path] = Path(path).read_text(encoding="utf-8")
        for prefix, process in self.rules:
            if tuple(argv[: len(prefix)]) == prefix:
                return process
        raise AssertionError(f"unexpected az call: {argv}")


@pytest.fixture
def fake_az(monkeypatch):
    fake = FakeAz()
    monkeypatch.setattr(azure_cli.asyncio, "create_subprocess_exec", fake)
    return fake


def _vault_json(name: str, sub: str) -> dict:
    return {
        "id": f"/subscriptions/{sub}/resourceGroups/rg/providers/Microsoft.KeyVault/vaults/{name}",
        "name": name,
        "location": "westeurope",
        "properties": {"vaultUri": f"https://{name}.vault.azure.net/"},
    }


@pytest.mark.asyncio
async def test_list_vaults_spans_subscriptions_and_skips_failures(fake_az) -> None:
    fake_az.on("account", "list", stdout=json.dumps([{"id": "s1"}, {"id": "s2"}, {"id": "s3"}]))
    fake_az.on("keyvault", "list", "--subscription", "s1", stdout=json.dumps([_vault_json("zeta", "s1")]))
    fake_az.on(
        "keyvault", "list", "--subscription", "s2",
        stdout=json.dumps([_vault_json("alpha", "s2"), _vault_json("zeta", "s1")]),
    )
    fake_az.on("keyvault", "list", "--subscription", "s3", stderr="AuthorizationFailed", returncode=1)

    vaults = await AzureCliSecretStore().list_vaults()

    assert [v.name for v in vaults] == ["alpha", "zeta"]


@pytest.mark.asyncio
async def test_list_vaults_wraps_account_failure(fake_az) -> None:
    fake_az.on("account", "list", stderr="Please run 'az login'", returncode=1)
    with pytest.raises(VaultDiscoveryError, match="az login"):
        await AzureCliSecretStore().list_vaults()


@pytest.mark.asyncio
async def test_get_secret_value(fake_az) -> None:
    fake_az.on("keyvault", "secret", "show", stdout=json.dumps({"value": "s3cret"}))
    value = await AzureCliSecretStore().get_secret_value(make_vault("alpha-kv"), "api-key")
    assert value == "s3cret"
    assert fake_az.invocations[0][:6] == ["keyvault", "secret", "show", "--vault-name", "alpha-kv", "--name"]


@pytest.mark.asyncio
async def test_get_secret_value_failure_raises_store_error(fake_az) -> None:
    fake_az.on("keyvault", "secret", "show", stderr="Forbidden", returncode=1)
    with pytest.raises(SecretStoreError) as excinfo:
        await AzureCliSecretStore().get_secret_value(make_vault("alpha-kv"), "api-key")
    assert isinstance(excinfo.value, AzureCliError)
    assert excinfo.value.returncode == 1
    assert "Forbidden" in str(excinfo.value)


@pytest.mark.asyncio
async def test_set_secret_value_passes_value_through_temp_file(fake_az) -> None:
    fake_az.on("keyvault", "secret", "set")
    await AzureCliSecretStore().set_secret_value(make_vault("alpha-kv"), "api-key", "top secret")

    argv = fake_az.invocations[0]
    assert "top secret" not in argv
    path = argv[argv.index("--file") + 1]
    assert fake_az.file_contents[path] == "top secret"
    assert not Path(path).exists()


@pytest.mark.asyncio
async def test_list_secret_metadata(fake_az) -> None:
    fake_az.on(
        "keyvault", "secret", "list",
        stdout=json.dumps([{"name": "b", "attributes": {"enabled": True}}, {"id": "https://x/secrets/a"}]),
    )
    secrets = await AzureCliSecretStore().list_secret_metadata(make_vault("alpha-kv"))
    assert [s.name for s in secrets] == ["b", "a"]


@pytest.mark.asyncio
async def test_timeout_kills_process(fake_az) -> None:
    process = fake_az.on("keyvault", "secret", "delete", hang=True)
    store = AzureCliSecretStore(timeout=0.01)
    with pytest.raises(AzureCliError, match="timed out"):
        await store.delete_secret(make_vault("alpha-kv"), "api-key")
    assert process.killed


@pytest.mark.asyncio
async def test_missing_executable(monkeypatch) -> None:
    async def _missing(*args, **kwargs):
        raise FileNotFoundError("az")

    monkeypatch.setattr(azure_cli.asyncio, "create_subprocess_exec", _missing)
    with pytest.raises(AzureCliNotFoundError):
        await AzureCliSecretStore().delete_secret(make_vault("alpha-kv"), "x")


@pytest.mark.asyncio
async def test_check_available_requires_az_on_path(monkeypatch) -> None:
    monkeypatch.setattr(azure_cli.shutil, "which", lambda name: None)
    with pytest.raises(AzureCliNotFoundError, match="aka.ms/azure-cli"):
        await AzureCliSecretStore().check_available()
