"""CLI para generar el informe PDF de bienestar a partir de una instantánea."""

from __future__ import annotations

import argparse
from pathlib import Path

from wellness_report.document import generate_report
from wellness_report.sink import default_output_dir
from wellness_report.sources.snapshot import SnapshotPaths, SnapshotSource


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Informe de bienestar de una página (PDF) desde snapshot_*.json."
    )
    parser.add_argument(
        "--base-dir",
        default=str(Path.cwd()),
        help="Directorio con snapshot_*.json y agp.csv opcional (default: cwd).",
    )
    parser.add_argument(
        "--out-dir",
        default=str(default_output_dir()),
        help="Directorio de salida (default: ~/Documents).",
    )
    parser.add_argument(
        "--filename",
        default=None,
        help="Nombre del PDF (default: wellness-report-<uuid>.pdf).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the report CLI.

    Returns:
        Exit code (0 on success, 1 when the PDF could not be written).
    """
    ns = parse_args(argv)
    base = Path(ns.base_dir).expanduser().resolve()

    source = SnapshotSource(SnapshotPaths(root=base))
    source.validate()

    snapshot_file = source.newest_json()
    agp_file = source.agp_csv()
    snapshot = source.load_snapshot(snapshot_file, agp_file)

    result = generate_report(
        snapshot, Path(ns.out_dir).expanduser(), filename=ns.filename
    )
    if not result.ok:
        print(f"ERROR: {result.error}")
        return 1

    print(f"OK: Snapshot file: {snapshot_file}")
    print(f"OK: AGP file: {agp_file or '-'}")
    print(f"OK: Output: {result.path}")
    return 0
