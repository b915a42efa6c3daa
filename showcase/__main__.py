"""Run the command line via ``python -m showcase``."""

from __future__ import annotations

from showcase.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
