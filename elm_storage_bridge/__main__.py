from __future__ import annotations

from elm_storage_bridge.cli import main

raise SystemExit(main())
