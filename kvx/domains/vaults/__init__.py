"""Vault browsing domain: models, stores and value caching."""
