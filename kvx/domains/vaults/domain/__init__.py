"""Vault domain exports."""

from .models import SecretRef, VaultRef, dedupe_and_sort_vaults, find_vault_by_name, parse_timestamp

__all__ = [
    "SecretRef",
    "VaultRef",
    "dedupe_and_sort_vaults",
    "find_vault_by_name",
    "parse_timestamp",
]
