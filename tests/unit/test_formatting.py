"""Tests for secret and vault text rendering."""

from datetime import datetime

from kvx.domains.vaults.app.formatting import (
    VALUE_EMPTY,
    VALUE_UNAVAILABLE,
    format_value,
    render_secret_detail,
    render_secret_preview,
    secret_description,
    vault_description,
)
from kvx.domains.vaults.domain.models import SecretRef, VaultRef


def test_format_value_placeholders() -> None:
    assert format_value(None) == VALUE_UNAVAILABLE
    assert format_value("") == VALUE_EMPTY
    assert format_value("plain") == "plain"


def test_format_value_pretty_prints_json() -> None:
    assert format_value('{"a": 1}') == '{\n  "a": 1\n}'
    assert format_value("{not json") == "{not json"


def test_preview_does_not_include_value() -> None:
    secret = SecretRef("api-key", content_type="text/plain", enabled=True)
    text = render_secret_preview(secret)
    assert "Name: api-key" in text
    assert "Content Type: text/plain" in text
    assert text.endswith("Value: (press Enter to load)")


def test_detail_includes_value_and_tags() -> None:
    secret = SecretRef("api-key", tags={"env": "prod"})
    text = render_secret_detail(secret, "s3cret")
    assert "Tags: env=prod" in text
    assert text.endswith("Value:\ns3cret")


def test_descriptions() -> None:
    disabled = SecretRef("old", enabled=False, updated_on=datetime(2024, 5, 6, 7, 8))
    assert secret_description(disabled) == "(disabled) · 2024-05-06 07:08"
    assert vault_description(VaultRef("kv", "https://kv", "id", "eastus")) == "location: eastus"
    assert vault_description(VaultRef("kv", "https://kv", "id")) == "https://kv"
