"""Module entrypoint for running nameprep as ``python -m nameprep``."""

from __future__ import annotations

from nameprep.cli import main


if __name__ == "__main__":
    main()
