from __future__ import annotations

from elm_storage_bridge.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
