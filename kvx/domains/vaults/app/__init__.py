"""Vault application services."""

from .value_cache import SecretValueCache

__all__ = ["SecretValueCache"]
