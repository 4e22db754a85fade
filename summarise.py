#!/usr/bin/env python3
"""
summarise.py
Summarise the colours of images as weighted colour bars and HSV lattice maps.

Usage:
  python summarise.py INPUT --outdir DIR --levels N --accumulation --no-gathering --split [stepped|distance] --debug

Outputs:
  <stem>_gather.png  : common colours on the top half, extreme colours on the
                       bottom half, bar widths proportional to pixel count.
  <stem>_lattice.png : with --accumulation, one hue x saturation strip per
                       value level, brightest level on top.

Input:
  Any Pillow-readable image. Fully transparent pixels are ignored by both
  engines: they are not counted as extreme colours and never seed the
  lattice, so a cut-out's empty background does not show up in the bars.

Notes:
  Engines live in colour_summary.lattice and colour_summary.gathering.
  Shared logging/formatting helpers come from colour_summary.utils.
  CPU bound. ThreadPoolExecutor is used for folders (--jobs); engine [debug]
  lines are collected per file and printed with that file's report.
"""

from __future__ import annotations

import argparse
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import UnidentifiedImageError

from colour_summary.constants import (
    GATHER_SPLIT_POLICY,
    LATTICE_CONNECTIVITY,
    LATTICE_DEFAULT_LEVELS,
    RENDER_HEIGHT,
    RENDER_MAX_SIZE,
    RENDER_MIN_SIZE,
    RENDER_REPORT_TOP,
    RENDER_WIDTH,
)
from colour_summary.core_types import GatheringResult, U8Image, clamp_value
from colour_summary.image_io import IMAGE_EXTS, load_visible_pixels, save_png_rgb
from colour_summary.render import compose_gather_panel, stack_levels
from colour_summary.result import SummaryResult, gathering_totals, summarise
from colour_summary.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_percentage,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
    weighted_colour_report,
)

OUTPUT_SUFFIXES = ("_gather", "_lattice")


# CLI args & small helpers


@dataclass(frozen=True)
class RunOptions:
    outdir: Optional[Path]
    levels: int
    accumulation: bool
    gathering: bool
    split: str
    connectivity: int
    top: int
    width: int
    height: int
    debug: bool


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for colour summarising.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs (defaults to next to each input)
        levels: value levels in the lattice output
        accumulation: bool, run the lattice accumulator
        no_gathering: bool, skip the hue gathering passes
        split: "stepped" | "distance"
        connectivity: 6 | 18
        top: colours listed per gathering pass
        width / height: size of the gathering panel (clamped 200..4000)
        jobs: parallel file workers
        debug: bool for verbose engine details
    """
    parser = argparse.ArgumentParser(
        prog="summarise",
        description="Summarise image colours as weighted bars and HSV lattice maps.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--levels",
        type=int,
        default=LATTICE_DEFAULT_LEVELS,
        help="Value levels in the lattice output.",
    )
    parser.add_argument(
        "--accumulation",
        "--acc",
        dest="accumulation",
        action="store_true",
        help="Also build the HSV lattice output.",
    )
    parser.add_argument(
        "--no-gathering",
        "--ng",
        dest="no_gathering",
        action="store_true",
        help="Skip the weighted colour bars.",
    )
    parser.add_argument(
        "--split",
        choices=["stepped", "distance"],
        default=GATHER_SPLIT_POLICY,
        help="Cluster split rule inside a hue band.",
    )
    parser.add_argument(
        "--connectivity",
        type=int,
        choices=[6, 18],
        default=LATTICE_CONNECTIVITY,
        help="Lattice flood neighbourhood.",
    )
    parser.add_argument(
        "--top", type=int, default=RENDER_REPORT_TOP, help="Colours listed per pass"
    )
    parser.add_argument("--width", type=int, default=RENDER_WIDTH, help="Panel width")
    parser.add_argument("--height", type=int, default=RENDER_HEIGHT, help="Panel height")
    parser.add_argument("--jobs", type=int, default=1, help="Files processed in parallel")
    parser.add_argument("--debug", action="store_true", help="Verbose engine details")
    args = parser.parse_args(argv)
    if args.levels < 1:
        parser.error("--levels must be >= 1")
    return args


def _options_from_args(args: argparse.Namespace) -> RunOptions:
    return RunOptions(
        outdir=args.outdir,
        levels=int(args.levels),
        accumulation=bool(args.accumulation),
        gathering=not args.no_gathering,
        split=args.split,
        connectivity=int(args.connectivity),
        top=int(args.top),
        width=int(clamp_value(args.width, RENDER_MIN_SIZE, RENDER_MAX_SIZE)),
        height=int(clamp_value(args.height, RENDER_MIN_SIZE, RENDER_MAX_SIZE)),
        debug=bool(args.debug),
    )


def _output_paths(src_path: Path, outdir: Optional[Path]) -> Tuple[Path, Path]:
    base = outdir if outdir is not None else src_path.parent
    return (
        base / f"{src_path.stem}_gather.png",
        base / f"{src_path.stem}_lattice.png",
    )


def _log_gathering(title: str, result: GatheringResult, top: int) -> None:
    log(
        f"{title}: {len(result)} colours | pixels={result.total_weight:,}"
    )
    for hex_code, weight, share in weighted_colour_report(result, top):
        log(f"  {hex_code}  {weight:,}  {format_percentage(share)}")


# Per-file processing


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    result: Optional[SummaryResult]
    failure: Optional[str]
    size: Tuple[int, int]
    load_secs: float
    engine_secs: float
    debug_lines: Tuple[str, ...] = ()


def _analyse_file(src_path: Path, opts: RunOptions) -> FileOutcome:
    """
    Load and run the engines. Reporting is left to _write_and_report().
    May run on a worker thread, so engine [debug] lines are collected rather
    than printed.
    """
    t_start = time.perf_counter()
    try:
        pixels, size = load_visible_pixels(src_path)
    except (UnidentifiedImageError, OSError) as e:
        return FileOutcome(
            src_path, None, f'Failed to load image data for "{src_path.stem}" ({e})', (0, 0), 0.0, 0.0
        )
    except ValueError as e:
        return FileOutcome(src_path, None, str(e), (0, 0), 0.0, 0.0)
    t_loaded = time.perf_counter()

    debug_lines: List[str] = []
    result = summarise(
        pixels,
        accumulation=opts.accumulation,
        gathering=opts.gathering,
        levels=opts.levels,
        connectivity=opts.connectivity,
        split_policy=opts.split,
        debug=opts.debug,
        log_debug=debug_lines.append,
    )
    t_engines = time.perf_counter()
    return FileOutcome(
        src_path,
        result,
        None,
        size,
        t_loaded - t_start,
        t_engines - t_loaded,
        tuple(debug_lines),
    )


def _save_output(path: Path, rgb: U8Image) -> bool:
    try:
        save_png_rgb(path, rgb)
    except OSError as e:
        error(f'Failed to write "{path.name}" ({e})')
        return False
    return True


def _write_and_report(outcome: FileOutcome, opts: RunOptions) -> bool:
    """
    Render, save and report one analysed file.
    Returns False when the image could not be used or its outputs not written.
    """
    print_banner(outcome.path.name)
    if outcome.failure is not None or outcome.result is None:
        error(outcome.failure or "no result")
        return False
    result = outcome.result
    t_start = time.perf_counter()

    if opts.debug:
        width, height = outcome.size
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Visible", result.pixel_count),
                    ("Load", format_seconds_compact(outcome.load_secs)),
                    ("Engines", format_seconds_compact(outcome.engine_secs)),
                ]
            )
        )
        for line in outcome.debug_lines:
            debug_log(line)

    gather_path, lattice_path = _output_paths(outcome.path, opts.outdir)
    if result.has_gathering:
        panel = compose_gather_panel(result.common, result.extreme, opts.width, opts.height)
        if not _save_output(gather_path, panel):
            return False
        log(f"Wrote {gather_path.name} | size={opts.width}x{opts.height}")
        _log_gathering("Common", result.common, opts.top)
        _log_gathering("Extreme", result.extreme, opts.top)
        if opts.debug:
            common_total, extreme_total = gathering_totals(result)
            debug_log(
                key_value_pairs_to_string(
                    [("Common", common_total), ("Extreme", extreme_total)]
                )
            )
    if result.accumulation is not None:
        strips = stack_levels(result.accumulation.images)
        if not _save_output(lattice_path, strips):
            return False
        log(
            f"Wrote {lattice_path.name} | levels={len(result.accumulation)} | "
            f"seeds={result.accumulation.seed_count:,}"
        )
    save_secs = time.perf_counter() - t_start

    log(f"Total pixels: {result.pixel_count:,}")
    total = outcome.load_secs + outcome.engine_secs + save_secs
    if opts.debug:
        debug_log(
            f"Total {format_total_duration_compact(total)}  "
            f"(load={format_seconds_compact(outcome.load_secs)}, "
            f"engines={format_seconds_compact(outcome.engine_secs)}, "
            f"save={format_seconds_compact(save_secs)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(total)}")
    return True


def _is_output_artifact(path: Path) -> bool:
    return path.stem.endswith(OUTPUT_SUFFIXES)


def collect_images(folder: Path) -> List[Path]:
    """Image files directly inside `folder`, excluding our own outputs, by name."""
    files = [
        p
        for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTS and not _is_output_artifact(p)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode --jobs runs the engines on
    worker threads while reports are written in file-name order.
    Returns the exit status.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    opts = _options_from_args(args)

    print_config_line(
        "run",
        [
            ("Accumulation", opts.accumulation),
            ("Gathering", opts.gathering),
            ("Levels", opts.levels),
            ("Split", opts.split),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if opts.outdir is not None:
        opts.outdir.mkdir(parents=True, exist_ok=True)

    if not src.is_dir():
        return 0 if _write_and_report(_analyse_file(src, opts), opts) else 1

    files = collect_images(src)
    if not files:
        warn(f"no images in {src}")
        return 0
    if opts.debug:
        debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", args.jobs)]))

    failures = 0
    if args.jobs <= 1:
        for p in files:
            failures += 0 if _write_and_report(_analyse_file(p, opts), opts) else 1
    else:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [ex.submit(_analyse_file, p, opts) for p in files]
            for fut in futures:
                failures += 0 if _write_and_report(fut.result(), opts) else 1
    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
