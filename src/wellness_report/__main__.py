"""Punto de entrada: ``python -m wellness_report``."""

from __future__ import annotations

import logging

from wellness_report.cli import main

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    raise SystemExit(main())
