"""Vault and secret domain models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class VaultRef:
    """A discovered Key Vault. Identity is the ARM resource id."""

    name: str
    uri: str
    id: str
    location: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VaultRef:
        """Build from an ``az keyvault list`` entry."""
        name = str(data.get("name", ""))
        properties = data.get("properties") or {}
        uri = properties.get("vaultUri") or f"https://{name}.vault.azure.net"
        return cls(
            name=name,
            uri=str(uri),
            id=str(data.get("id") or uri),
            location=data.get("location") or None,
        )


@dataclass(frozen=True)
class SecretRef:
    """Secret metadata. The value is fetched separately."""

    name: str
    content_type: str | None = None
    enabled: bool | None = None
    created_on: datetime | None = None
    updated_on: datetime | None = None
    expires_on: datetime | None = None
    tags: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SecretRef:
        """Build from an ``az keyvault secret list`` entry."""
        name = data.get("name")
        if not name:
            # Older CLI builds only return the secret id.
            name = str(data.get("id", "")).rstrip("/").rsplit("/", 1)[-1]
        attributes = data.get("attributes") or {}
        return cls(
            name=str(name),
            content_type=data.get("contentType") or None,
            enabled=attributes.get("enabled"),
            created_on=parse_timestamp(attributes.get("created")),
            updated_on=parse_timestamp(attributes.get("updated")),
            expires_on=parse_timestamp(attributes.get("expires")),
            tags=dict(data.get("tags") or {}),
        )


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp as emitted by the Azure CLI."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def dedupe_and_sort_vaults(vaults: Iterable[VaultRef]) -> list[VaultRef]:
    """Drop duplicate vaults (same id) and sort by name."""
    seen: set[str] = set()
    unique: list[VaultRef] = []
    for vault in vaults:
        if vault.id in seen:
            continue
        seen.add(vault.id)
        unique.append(vault)
    unique.sort(key=lambda v: (v.name.casefold(), v.name))
    return unique


def find_vault_by_name(vaults: Iterable[VaultRef], name: str) -> VaultRef | None:
    """Case-insensitive exact match on vault name."""
    wanted = name.strip().casefold()
    if not wanted:
        return None
    for vault in vaults:
        if vault.name.casefold() == wanted:
            return vault
    return None
