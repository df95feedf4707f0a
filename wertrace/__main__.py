"""Module entrypoint for running wertrace as ``python -m wertrace``."""

from __future__ import annotations

from wertrace.cli import main


if __name__ == "__main__":
    main()
