"""
footline CLI entry point.

Detects lines in an image file.

Usage:
    python -m footline image.png                     # Print detected lines
    python -m footline image.png --rows 3 --cols 3   # Use a 3x3 subimage grid
    python -m footline image.png -o lines.png        # Save annotated image
    python -m footline --help                        # Show help
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import cv2

from .core.config import Config
from .core.detector import LineDetector
from .core.errors import FootlineError
from .utils.visualization import draw_lines, draw_tile_grid

logger = logging.getLogger("footline")


def setup_logging(config: Config, verbose: bool = False) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = logging.DEBUG if verbose else getattr(logging, log_config.get("level", "INFO"))

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = log_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=handlers,
    )


def build_detector_config(config: Config, args: argparse.Namespace) -> dict:
    """Merge command-line overrides into the detector section."""
    detector_config = dict(config["detector"])
    if args.rows is not None:
        detector_config["vertical_divisions"] = args.rows
    if args.cols is not None:
        detector_config["horizontal_divisions"] = args.cols
    if args.threshold is not None:
        detector_config["threshold_edge"] = args.threshold
    if args.workers is not None:
        detector_config["workers"] = args.workers
    return detector_config


def run_detection(config: Config, args: argparse.Namespace) -> int:
    """Detect lines in one image and report them. Returns the exit code."""
    image = cv2.imread(str(args.image), cv2.IMREAD_GRAYSCALE)
    if image is None:
        logger.error(f"Could not read image: {args.image}")
        return 1

    try:
        detector = LineDetector(build_detector_config(config, args))
        lines = detector.detect(image)
    except FootlineError as e:
        logger.error(f"Detection failed: {e}")
        return 1

    if args.json:
        print(json.dumps([line.to_dict() for line in lines], indent=2))
    else:
        for i, line in enumerate(lines):
            d = line.to_dict()
            print(
                f"{i:3d}: point=({d['x']:.1f}, {d['y']:.1f}) "
                f"angle={d['angle_deg']:.1f}deg votes={d['votes']:.0f}"
            )

    if args.output:
        output_config = config["output"]
        color = tuple(output_config.get("line_color", [0, 0, 255]))
        annotated = draw_lines(
            image, lines, color=color, thickness=output_config.get("line_thickness", 1)
        )
        if args.show_grid:
            draw_tile_grid(annotated, detector.tiles)
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(str(args.output), annotated)
        logger.info(f"Annotated image saved: {args.output}")

    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="footline - Subimage Foot-of-Norm Line Detector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image", type=Path, help="Input image")
    parser.add_argument("--config", type=str, help="Path to config directory")
    parser.add_argument("--rows", type=int, help="Number of subimage rows")
    parser.add_argument("--cols", type=int, help="Number of subimage columns")
    parser.add_argument("--threshold", type=float, help="Edge intensity threshold")
    parser.add_argument("--workers", type=int, help="Threads used for subimages")
    parser.add_argument("-o", "--output", type=Path, help="Save annotated image here")
    parser.add_argument("--show-grid", action="store_true", help="Draw subimage grid")
    parser.add_argument("--json", action="store_true", help="Print lines as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    config_dir = Path(args.config) if args.config else None
    try:
        config = Config(config_dir)
    except FootlineError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config, args.verbose)

    sys.exit(run_detection(config, args))


if __name__ == "__main__":
    main()
