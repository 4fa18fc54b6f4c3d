from __future__ import annotations
import sys
from memohub.app import run_app


def main() -> int:
    """Module entrypoint for `python -m memohub.main` and the `memohub` console script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
