"""Command-line entry point for kvx."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from kvx import __version__
from kvx.shared.app import RuntimeConfig, configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvx",
        description="Browse and edit Azure Key Vault secrets from the terminal.",
    )
    parser.add_argument("--mock", action="store_true", help="Use built-in demo vaults instead of the Azure CLI")
    parser.add_argument("--debug", action="store_true", help="Log debug output to the Textual console")
    parser.add_argument(
        "--smoke-test",
        action="store_true",
        help="Start the UI headless, exit immediately and print SMOKE_OK",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def runtime_from_args(args: argparse.Namespace, base: RuntimeConfig | None = None) -> RuntimeConfig:
    """CLI flags override the environment."""
    runtime = base or RuntimeConfig.from_env()
    return replace(
        runtime,
        mock=runtime.mock or args.mock,
        debug_mode=runtime.debug_mode or args.debug,
        smoke_test=args.smoke_test,
    )


def run_smoke_test(runtime: RuntimeConfig) -> int:
    """Boot the app headless against an empty store and exit."""
    from kvx.domains.shell.app.main import KvxApp
    from kvx.domains.vaults.store.memory import InMemorySecretStore

    async def _auto_pilot(pilot) -> None:
        pilot.app.exit(return_code=0)

    try:
        app = KvxApp(store=InMemorySecretStore(), runtime=runtime, discover_on_mount=False)
        app.run(headless=True, auto_pilot=_auto_pilot)
    except Exception as exc:
        logger.exception("Smoke test failed")
        print(f"Smoke test failed: {exc}", file=sys.stderr)
        return 1
    if app.return_code:
        print(f"Smoke test failed: exit code {app.return_code}", file=sys.stderr)
        return 1
    print("SMOKE_OK")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    runtime = runtime_from_args(args)
    configure_logging(runtime)

    if runtime.smoke_test:
        return run_smoke_test(runtime)

    from kvx.domains.shell.app.main import KvxApp
    from kvx.domains.vaults.store import (
        AzureCliSecretStore,
        SecretStoreError,
        build_demo_store,
    )

    if runtime.mock:
        store = build_demo_store()
    else:
        store = AzureCliSecretStore(runtime.az_path, timeout=runtime.az_timeout_s)
        try:
            asyncio.run(store.check_available())
        except SecretStoreError as exc:
            print(str(exc), file=sys.stderr)
            return 1

    logger.info("Starting kvx %s (mock=%s)", __version__, runtime.mock)
    app = KvxApp(store=store, runtime=runtime)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    raise SystemExit(main())
