"""Per-vault secret value cache with single-flight fetches."""

from __future__ import annotations

import asyncio
import logging

from kvx.domains.vaults.domain.models import VaultRef
from kvx.domains.vaults.store.base import SecretStoreError, SecretStoreProtocol

logger = logging.getLogger(__name__)


class SecretValueCache:
    """Memoize secret values for the active vault.

    A cached ``None`` means the fetch failed or was denied; it is never
    retried until the cache is invalidated. An empty string is a real value.
    Concurrent ``get`` calls for the same uncached name share one fetch.
    """

    def __init__(self, store: SecretStoreProtocol) -> None:
        self._store = store
        self._vault: VaultRef | None = None
        self._values: dict[str, str | None] = {}
        self._inflight: dict[str, asyncio.Future[str | None]] = {}
        self._generation = 0

    def bind(self, vault: VaultRef | None) -> None:
        """Scope the cache to a vault, clearing it if the vault changed."""
        same = (
            vault is not None
            and self._vault is not None
            and vault.id == self._vault.id
        )
        if not same:
            self.invalidate_all()
        self._vault = vault

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def peek(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str | None) -> None:
        self._values[name] = value

    def discard(self, name: str) -> None:
        self._values.pop(name, None)

    def invalidate_all(self) -> None:
        self._values.clear()
        self._inflight.clear()
        self._generation += 1

    async def get(self, name: str) -> str | None:
        if name in self._values:
            return self._values[name]
        pending = self._inflight.get(name)
        if pending is not None:
            return await asyncio.shield(pending)
        vault = self._vault
        if vault is None:
            return None

        loop = asyncio.get_running_loop()
        future: asyncio.Future[str | None] = loop.create_future()
        self._inflight[name] = future
        generation = self._generation
        try:
            value = await self._store.get_secret_value(vault, name)
        except SecretStoreError as exc:
            logger.info("Value of %s unavailable: %s", name, exc)
            value = None
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Followers re-raise; mark retrieved for the no-follower case.
            future.exception()
            raise
        finally:
            if self._inflight.get(name) is future:
                del self._inflight[name]

        # A vault switch while we were waiting makes this result stale.
        if generation == self._generation:
            self._values[name] = value
        if not future.done():
            future.set_result(value)
        return value
