"""Text rendering for vault and secret entries (UI-agnostic)."""

from __future__ import annotations

import json
from datetime import datetime

from kvx.domains.vaults.domain.models import SecretRef, VaultRef

VALUE_UNAVAILABLE = "(no value or access denied)"
VALUE_EMPTY = "(empty)"
VALUE_NOT_LOADED = "(press Enter to load)"

SECRETS_HINT = "Select a secret to view details. Press Enter on a secret to load its value."
VAULTS_HINT = "Select a Key Vault on the left, then browse secrets. Use filter to narrow results."


def format_date(value: datetime | None) -> str:
    """Format as ``YYYY-MM-DD HH:MM`` in local time."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M")


def format_tags(tags: dict[str, str] | None) -> str:
    if not tags:
        return ""
    return ", ".join(f"{key}={value}" for key, value in tags.items())


def vault_description(vault: VaultRef) -> str:
    return f"location: {vault.location}" if vault.location else vault.uri


def secret_description(secret: SecretRef) -> str:
    parts = []
    if secret.enabled is False:
        parts.append("(disabled)")
    if secret.content_type:
        parts.append(secret.content_type)
    if secret.updated_on:
        parts.append(f"· {format_date(secret.updated_on)}")
    return " ".join(parts)


def _metadata_lines(secret: SecretRef, *, full: bool) -> list[str]:
    lines = [f"Name: {secret.name}"]
    if secret.content_type:
        lines.append(f"Content Type: {secret.content_type}")
    if secret.enabled is not None:
        lines.append(f"Enabled: {'Yes' if secret.enabled else 'No'}")
    if secret.updated_on:
        lines.append(f"Updated: {format_date(secret.updated_on)}")
    if full and secret.created_on:
        lines.append(f"Created: {format_date(secret.created_on)}")
    if full and secret.expires_on:
        lines.append(f"Expires: {format_date(secret.expires_on)}")
    tags = format_tags(dict(secret.tags))
    if tags:
        lines.append(f"Tags: {tags}")
    return lines


def format_value(value: str | None) -> str:
    """Render a secret value, pretty-printing JSON documents."""
    if value is None:
        return VALUE_UNAVAILABLE
    if value == "":
        return VALUE_EMPTY
    if value.lstrip().startswith(("{", "[")):
        try:
            return json.dumps(json.loads(value), indent=2, ensure_ascii=False)
        except ValueError:
            return value
    return value


def render_secret_preview(secret: SecretRef) -> str:
    """Metadata-only preview shown while moving through the list."""
    lines = _metadata_lines(secret, full=False)
    lines.extend(["", f"Value: {VALUE_NOT_LOADED}"])
    return "\n".join(lines)


def render_secret_detail(secret: SecretRef, value: str | None) -> str:
    """Full detail including the (possibly unavailable) value."""
    lines = _metadata_lines(secret, full=True)
    lines.extend(["", "Value:", format_value(value)])
    return "\n".join(lines)
