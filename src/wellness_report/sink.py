"""Escritura del PDF a disco con adquisición acotada del recurso."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportResult:
    """Outcome of writing a report: a path on success, an error otherwise."""

    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.path is not None and self.error is None


def default_output_dir() -> Path:
    """Caller-default destination (``~/Documents``)."""
    return Path.home() / "Documents"


@contextmanager
def atomic_output(path: Path) -> Iterator[BinaryIO]:
    """Open a temporary sibling of `path` and move it into place on success.

    The temporary file is removed on every exit path, so a failed write
    never leaves a partial report behind.
    """
    tmp = path.with_name(f".{path.name}.part")
    try:
        with tmp.open("wb") as fh:
            yield fh
        tmp.replace(path)
    finally:
        tmp.unlink(missing_ok=True)


class ReportSink:
    """Writes finished report bytes into a directory."""

    def __init__(self, out_dir: Path) -> None:
        """Create a sink.

        Args:
            out_dir: Destination directory; created on first write.
        """
        self._out_dir = out_dir

    def write(self, data: bytes, filename: str) -> ReportResult:
        """Write `data` to ``out_dir/filename``.

        Args:
            data: Complete document bytes.
            filename: Target file name (no directories).

        Returns:
            ReportResult with the final path, or with the error message when
            the destination could not be created or written.
        """
        out_path = self._out_dir / filename
        try:
            self._out_dir.mkdir(parents=True, exist_ok=True)
            with atomic_output(out_path) as fh:
                fh.write(data)
        except OSError as exc:
            logger.error("Failed to write report %s: %s", out_path, exc)
            return ReportResult(error=f"{type(exc).__name__}: {exc}")
        logger.info("Report written to %s (%d bytes)", out_path, len(data))
        return ReportResult(path=out_path)
