from __future__ import annotations

import sys

from mdeditor.app import run_app


def main() -> int:
    """Entrypoint for `python -m mdeditor`, the `mdeditor` script and the root main.py."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
