from __future__ import annotations

from arrsync.main import run

run()
