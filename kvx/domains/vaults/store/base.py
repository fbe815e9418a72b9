"""Secret store protocol and error types."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from kvx.domains.vaults.domain.models import SecretRef, VaultRef


class SecretStoreError(Exception):
    """Base error for anything the remote store rejects."""


class AzureCliNotFoundError(SecretStoreError):
    """The ``az`` executable is missing from PATH."""


class AzureCliError(SecretStoreError):
    """An ``az`` command exited non-zero or timed out."""

    def __init__(self, command: Sequence[str], message: str, returncode: int | None = None):
        self.command = list(command)
        self.returncode = returncode
        super().__init__(message)


class VaultDiscoveryError(SecretStoreError):
    """Vaults could not be listed (usually a missing or expired ``az login``)."""


class SecretStoreProtocol(Protocol):
    """Async contract every secret backend satisfies."""

    async def check_available(self) -> None:
        """Raise SecretStoreError if the backend cannot be used at all."""
        ...

    async def list_vaults(self) -> list[VaultRef]:
        """Return vaults deduplicated by id and sorted by name."""
        ...

    async def list_secret_metadata(self, vault: VaultRef) -> list[SecretRef]: ...

    async def get_secret_value(self, vault: VaultRef, name: str) -> str | None: ...

    async def set_secret_value(self, vault: VaultRef, name: str, value: str) -> None: ...

    async def delete_secret(self, vault: VaultRef, name: str) -> None: ...

    async def close(self) -> None: ...
