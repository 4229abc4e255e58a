"""Module entry point for python -m car_sharing."""

from __future__ import annotations

from car_sharing.app import main


if __name__ == "__main__":
    raise SystemExit(main())
