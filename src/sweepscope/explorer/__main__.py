"""Module entrypoint for `python -m sweepscope.explorer`."""

from __future__ import annotations

import sys

from .app import run_explorer


def main() -> int:
    data_dir = sys.argv[1] if len(sys.argv) > 1 else None
    return run_explorer(data_dir)


if __name__ == "__main__":
    sys.exit(main())
