"""Clases base para fuentes de instantáneas."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from wellness_report.model import ReportSnapshot


@dataclass(frozen=True)
class SourcePaths:
    """Directory a source reads its exports from."""

    root: Path


class DataSource(ABC):
    """Something that can produce a ReportSnapshot from files on disk."""

    def __init__(self, paths: SourcePaths) -> None:
        """Create a data source.

        Args:
            paths: Source paths configuration.
        """
        self._paths = paths

    def validate(self) -> None:
        """Validate that the export directory exists.

        Raises:
            FileNotFoundError: If the root folder is missing.
        """
        if not self._paths.root.is_dir():
            raise FileNotFoundError(str(self._paths.root))

    def newest(self, pattern: str) -> Path:
        """Return the newest file under root matching `pattern` (by mtime).

        Raises:
            FileNotFoundError: If nothing matches.
        """
        files = sorted(
            self._paths.root.glob(pattern),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No {pattern} in {self._paths.root}")
        return files[0]

    @abstractmethod
    def load(self) -> ReportSnapshot:
        """Build the snapshot from the newest export."""
