"""Command-line interface for eink_image.

Supports a progress-bar mode for interactive use and a JSON mode for
scripting.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

VERSION = "0.2.0"

logger = logging.getLogger(__name__)


def _threshold(value: str) -> int:
    level = int(value)
    if not 0 <= level <= 255:
        raise argparse.ArgumentTypeError(f"threshold must be 0-255, got {level}")
    return level


def _gamma(value: str) -> float:
    gamma = float(value)
    if gamma <= 0:
        raise argparse.ArgumentTypeError(f"gamma must be > 0, got {gamma}")
    return gamma


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eink-image",
        description="Convert images for optimal eink display rendering.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    parser.add_argument(
        "-i", "--input",
        required=True,
        metavar="FILE",
        help="Input image file.",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Output image file. Defaults to <input>_eink.png.",
    )
    parser.add_argument(
        "-c", "--contrast",
        type=float,
        default=1.3,
        metavar="LEVEL",
        help="Contrast enhancement level, 0.0 to 2.0 (default: 1.3).",
    )
    parser.add_argument(
        "--no-dither",
        action="store_true",
        help="Disable Floyd-Steinberg dithering.",
    )
    parser.add_argument(
        "--diffusion",
        type=float,
        default=0.8,
        metavar="AMOUNT",
        help="Error diffusion amount, 0.0 to 1.0 (default: 0.8).",
    )
    parser.add_argument(
        "-g", "--gamma",
        type=_gamma,
        default=2.2,
        help="Gamma correction value (default: 2.2).",
    )
    parser.add_argument(
        "-t", "--threshold",
        type=_threshold,
        default=128,
        metavar="LEVEL",
        help="Dithering threshold, 0 to 255 (default: 128).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly, no progress bar).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error (with --json).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def _auto_output_path(input_path: Path) -> Path:
    """Generate default output path from input."""
    return input_path.parent / f"{input_path.stem}_eink.png"


def _fail(message: str, code: str, is_json: bool, debug: bool = False) -> NoReturn:
    """Report an error on stderr and exit with code 1."""
    if is_json:
        if debug:
            import traceback
            traceback.print_exc(file=sys.stderr)
        err = {"status": "error", "error": message, "code": code}
        print(json.dumps(err), file=sys.stderr)
    else:
        Console(stderr=True).print(f"[red]Error processing image:[/red] {message}")
    sys.exit(1)


def _make_progress() -> Progress:
    return Progress(
        SpinnerColumn(style="green"),
        TimeElapsedColumn(),
        BarColumn(bar_width=40, style="blue", complete_style="cyan"),
        MofNCompleteColumn(),
        TextColumn("{task.description}"),
        console=Console(stderr=True),
        transient=False,
    )


def _run(args: argparse.Namespace) -> None:
    """Load, process and save one image."""
    from eink_image.core.processor import Settings, process_image
    from eink_image.core.reader import open_image
    from eink_image.core.writer import save_image

    is_json = args.json
    input_path = Path(args.input).resolve()
    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = _auto_output_path(input_path)

    settings = Settings(
        contrast=args.contrast,
        gamma=args.gamma,
        dither=not args.no_dither,
        diffusion=args.diffusion,
        threshold=args.threshold,
    )
    logger.debug("settings: %s", settings)

    progress = _make_progress()
    task = progress.add_task("Loading image...", total=100)

    def on_progress(position: int, message: str) -> None:
        progress.update(task, completed=position, description=message)

    show_progress = not is_json
    if show_progress:
        progress.start()

    try:
        try:
            img = open_image(input_path)
        except FileNotFoundError as e:
            _fail(str(e), "FILE_NOT_FOUND", is_json)
        except (ValueError, OSError) as e:
            _fail(str(e), "INVALID_INPUT", is_json, args.debug)

        on_progress(20, "Converting to grayscale...")
        try:
            result = process_image(img, settings, on_progress)
        except Exception as e:
            _fail(str(e), "PROCESSING_ERROR", is_json, args.debug)

        on_progress(90, "Saving output...")
        try:
            save_image(result, output_path)
        except (ValueError, OSError) as e:
            _fail(str(e), "WRITE_FAILED", is_json, args.debug)

        on_progress(100, "Image processed successfully!")
    finally:
        if show_progress:
            progress.stop()

    if not is_json:
        print(f"Output saved to: {output_path}")
        return

    height, width = result.shape
    white = int((result == 255).sum())
    report = {
        "status": "success",
        "input": str(input_path),
        "output": str(output_path),
        "settings": settings.describe(),
        "metadata": {
            "width": width,
            "height": height,
            "input_mode": img.mode,
            "black_pixels": width * height - white,
            "white_pixels": white,
            "output_format": output_path.suffix.lstrip("."),
        },
    }
    print(json.dumps(report, indent=2))


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _run(args)


if __name__ == "__main__":
    main()
