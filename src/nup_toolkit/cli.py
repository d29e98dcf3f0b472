"""
Command line front end for the NUP Toolkit.

Commands:
    compose  Tile the pages of one or more PDFs onto n-up sheets
    plan     Show the grid and paper a page size would get

Example:
    nup-toolkit compose slides.pdf notes.pdf --pages-per-sheet 4 -o out/
    nup-toolkit plan --width 300 --height 400 --pages-per-sheet 4
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from nup_toolkit import __version__
from nup_toolkit.batch import BatchCoordinator, CompositionWorker, DocumentRecord, DocumentStatus
from nup_toolkit.common import (
    MAX_UPLOAD_BYTES,
    SettingsStore,
    format_size,
    get_settings_path,
    looks_like_pdf,
    output_filename,
)
from nup_toolkit.composer import CompositionSettings, PaperSizeMode
from nup_toolkit.composer.layout import (
    SUPPORTED_PAGES_PER_SHEET,
    resolve_grid,
    score_all,
    select_paper_size,
)

logger = logging.getLogger("nup_toolkit")

PAPER_CHOICES = [mode.value for mode in PaperSizeMode]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nup-toolkit",
        description="Compose PDF pages onto n-up sheets",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    compose = sub.add_parser("compose", help="Compose PDFs onto n-up sheets")
    compose.add_argument("files", nargs="+", type=Path, help="Source PDF files")
    compose.add_argument("--output", "-o", type=Path, default=None,
                         help="Output directory (default: last used, else current directory)")
    _add_layout_arguments(compose)
    compose.add_argument("--rotation", type=int, choices=[0, 90, 180, 270], default=None,
                         help="Rotation applied to every page")
    compose.add_argument("--border-width", type=float, default=None,
                         help="Cell border width in points (0 = no border)")
    compose.add_argument("--save-defaults", action="store_true",
                         help="Remember these settings for later runs")
    compose.add_argument("--settings-file", type=Path, default=None,
                         help="Settings file (default: app data directory)")

    plan = sub.add_parser("plan", help="Show the grid and paper chosen for a page size")
    plan.add_argument("--width", type=float, required=True, help="Source page width (pt)")
    plan.add_argument("--height", type=float, required=True, help="Source page height (pt)")
    _add_layout_arguments(plan)

    return parser


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--pages-per-sheet", "-n", type=int, default=None,
                        choices=list(SUPPORTED_PAGES_PER_SHEET),
                        help="Source pages per output sheet")
    parser.add_argument("--paper-size", "-p", choices=PAPER_CHOICES, default=None,
                        help="Output paper size (auto picks the best fit)")


def _merge_settings(base: CompositionSettings, args: argparse.Namespace) -> CompositionSettings:
    """Overlay command line options on stored defaults."""
    return CompositionSettings(
        pages_per_sheet=_pick(args.pages_per_sheet, base.pages_per_sheet),
        rotation_degrees=_pick(getattr(args, "rotation", None), base.rotation_degrees),
        border_width=_pick(getattr(args, "border_width", None), base.border_width),
        paper_size=_pick(args.paper_size, base.paper_size),
    )


def _pick(value, default):
    return default if value is None else value


def _read_inputs(paths: Sequence[Path]) -> List[Tuple[str, bytes]]:
    """Read source files, skipping anything that is not a usable PDF."""
    inputs = []
    for path in paths:
        try:
            size = path.stat().st_size
            if size > MAX_UPLOAD_BYTES:
                logger.warning(
                    f"Skipping {path.name}: {format_size(size)} exceeds "
                    f"{format_size(MAX_UPLOAD_BYTES)} limit"
                )
                continue
            data = path.read_bytes()
        except OSError as e:
            logger.warning(f"Skipping {path}: {e}")
            continue
        if not looks_like_pdf(data):
            logger.warning(f"Skipping {path.name}: not a PDF file")
            continue
        inputs.append((path.name, data))
    return inputs


async def compose_batch(
    inputs: Sequence[Tuple[str, bytes]],
    settings: CompositionSettings,
) -> List[DocumentRecord]:
    """
    Run every input through one worker and return the settled records.

    Args:
        inputs: (name, bytes) pairs
        settings: Settings applied to every document

    Returns:
        Records in input order, each ready or errored.
    """
    async with CompositionWorker() as worker:
        batch = BatchCoordinator(worker, settings=settings)
        for name, data in inputs:
            await batch.register(name, data)
        await batch.wait_settled()
        logger.debug(f"Batch finished with status {batch.status.value}")
        return batch.records


def _write_outputs(records: Sequence[DocumentRecord], output_dir: Path) -> int:
    """Write ready outputs and print one status line per record; returns failures."""
    output_dir.mkdir(parents=True, exist_ok=True)
    failures = 0
    for record in records:
        size = format_size(record.byte_size)
        if record.status is DocumentStatus.READY:
            target = output_dir / output_filename(record.name)
            target.write_bytes(record.result_bytes)
            print(f"  {record.name} ({size}) -> {target}")
        else:
            failures += 1
            print(f"  {record.name} ({size}) FAILED: {record.error_message}")
    return failures


def _run_compose(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    store = SettingsStore(args.settings_file or get_settings_path())
    try:
        settings = _merge_settings(store.get_composition_settings(), args)
    except ValueError as e:
        parser.error(str(e))

    output_dir = args.output or Path(store.get_output_dir() or ".")
    inputs = _read_inputs(args.files)
    if not inputs:
        print("No PDF files to compose")
        return 1

    logger.info(
        f"Composing {len(inputs)} document(s): {settings.pages_per_sheet} per sheet, "
        f"rotation {settings.rotation_degrees}, border {settings.border_width:g}pt, "
        f"paper {settings.paper_size.value}"
    )
    records = asyncio.run(compose_batch(inputs, settings))
    failures = _write_outputs(records, output_dir)

    if args.save_defaults:
        store.set_composition_settings(settings)
        store.set_output_dir(str(output_dir.resolve()))

    skipped = len(args.files) - len(inputs)
    print(f"\n{len(records) - failures} composed, {failures} failed, {skipped} skipped")
    return 0 if failures == 0 and skipped == 0 else 1


def _run_plan(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    pages_per_sheet = _pick(args.pages_per_sheet, 1)
    mode = PaperSizeMode(_pick(args.paper_size, PaperSizeMode.AUTO.value))
    grid = resolve_grid(pages_per_sheet)
    try:
        paper = select_paper_size(mode, args.width, args.height, grid)
    except ValueError as e:
        parser.error(str(e))

    print(f"Grid:  {grid.columns} x {grid.rows} ({grid.tiles_per_sheet} per sheet)")
    print(f"Paper: {paper.width:g} x {paper.height:g} pt")
    if mode.is_auto:
        print("\nCandidates:")
        for candidate in score_all(args.width, args.height, grid):
            orientation = "landscape" if candidate.paper.is_landscape else "portrait"
            marker = "*" if candidate.paper == paper else " "
            print(
                f" {marker} {candidate.size.value:<8} {orientation:<9} "
                f"scale {candidate.scale:6.3f}  util {candidate.utilization:6.3f}  "
                f"score {candidate.score:6.3f}"
            )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command == "compose":
        return _run_compose(args, parser)
    return _run_plan(args, parser)


if __name__ == "__main__":
    sys.exit(main())
