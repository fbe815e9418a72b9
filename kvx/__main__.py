"""Allow running as ``python -m kvx``."""

from kvx.cli import main

raise SystemExit(main())
