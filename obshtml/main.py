from __future__ import annotations

import sys

from obshtml.app import run_app


def main() -> int:
    """Console entrypoint, also `python -m obshtml.main`."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
