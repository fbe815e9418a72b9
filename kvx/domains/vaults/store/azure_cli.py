"""Azure Key Vault store backed by the ``az`` CLI.

Authentication is whatever ``az login`` established; this module never
handles credentials itself. Every command runs as a subprocess with JSON
output and a hard timeout.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from kvx.domains.vaults.domain.models import SecretRef, VaultRef, dedupe_and_sort_vaults
from kvx.domains.vaults.store.base import (
    AzureCliError,
    AzureCliNotFoundError,
    VaultDiscoveryError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0
AZ_NOT_FOUND_MESSAGE = "Azure CLI not found. Install it from https://aka.ms/azure-cli and run 'az login'."


class AzureCliSecretStore:
    """SecretStore that shells out to ``az``."""

    def __init__(self, az_path: str = "az", timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.az_path = az_path
        self.timeout = timeout

    async def check_available(self) -> None:
        if shutil.which(self.az_path) is None:
            raise AzureCliNotFoundError(AZ_NOT_FOUND_MESSAGE)
        await self._run(["--version"], parse_json=False)

    async def list_vaults(self) -> list[VaultRef]:
        try:
            subscriptions = await self._run(["account", "list", "-o", "json"])
        except AzureCliError as exc:
            raise VaultDiscoveryError(f"Failed to list Azure subscriptions. Run 'az login'. ({exc})") from exc
        if not subscriptions:
            return []

        results = await asyncio.gather(
            *(
                self._run(["keyvault", "list", "--subscription", str(sub["id"]), "-o", "json"])
                for sub in subscriptions
                if sub.get("id")
            ),
            return_exceptions=True,
        )
        vaults: list[VaultRef] = []
        for result in results:
            if isinstance(result, BaseException):
                # One inaccessible subscription should not hide the others.
                logger.warning("Skipping subscription: %s", result)
                continue
            vaults.extend(VaultRef.from_dict(item) for item in result or [])
        return dedupe_and_sort_vaults(vaults)

    async def list_secret_metadata(self, vault: VaultRef) -> list[SecretRef]:
        items = await self._run(["keyvault", "secret", "list", "--vault-name", vault.name, "-o", "json"])
        return [SecretRef.from_dict(item) for item in items or []]

    async def get_secret_value(self, vault: VaultRef, name: str) -> str | None:
        data = await self._run(
            ["keyvault", "secret", "show", "--vault-name", vault.name, "--name", name, "-o", "json"]
        )
        if not isinstance(data, dict):
            return None
        return data.get("value")

    async def set_secret_value(self, vault: VaultRef, name: str, value: str) -> None:
        # Pass the value through a private temp file so it never shows up in argv.
        fd, raw_path = tempfile.mkstemp(prefix="kvx-", suffix=".secret")
        path = Path(raw_path)
        try:
            os.chmod(path, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            await self._run(
                [
                    "keyvault", "secret", "set",
                    "--vault-name", vault.name,
                    "--name", name,
                    "--file", str(path),
                    "--encoding", "utf-8",
                    "-o", "none",
                ],
                parse_json=False,
            )
        finally:
            path.unlink(missing_ok=True)

    async def delete_secret(self, vault: VaultRef, name: str) -> None:
        await self._run(
            ["keyvault", "secret", "delete", "--vault-name", vault.name, "--name", name, "-o", "none"],
            parse_json=False,
        )

    async def close(self) -> None:
        return None

    async def _run(self, args: Sequence[str], *, parse_json: bool = True) -> Any:
        """Run one ``az`` command and return its decoded JSON output."""
        command = [self.az_path, *args]
        logger.debug("az %s", " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise AzureCliNotFoundError(AZ_NOT_FOUND_MESSAGE) from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            process.kill()
            await process.wait()
            raise AzureCliError(command, f"az {args[0]} timed out after {self.timeout:g}s") from exc

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip() or f"az exited with {process.returncode}"
            raise AzureCliError(command, message, process.returncode)

        if not parse_json:
            return None
        text = stdout.decode("utf-8", errors="replace").strip()
        if not text:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise AzureCliError(command, f"Unexpected output from az: {exc}") from exc
