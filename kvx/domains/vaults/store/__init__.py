"""Secret store backends."""

from .azure_cli import AzureCliSecretStore
from .base import (
    AzureCliError,
    AzureCliNotFoundError,
    SecretStoreError,
    SecretStoreProtocol,
    VaultDiscoveryError,
)
from .memory import InMemorySecretStore, build_demo_store

__all__ = [
    "AzureCliError",
    "AzureCliNotFoundError",
    "AzureCliSecretStore",
    "InMemorySecretStore",
    "SecretStoreError",
    "SecretStoreProtocol",
    "VaultDiscoveryError",
    "build_demo_store",
]
