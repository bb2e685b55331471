from __future__ import annotations

from bfvm.cli import main

raise SystemExit(main())
