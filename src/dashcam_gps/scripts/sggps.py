#!/usr/bin/env python3
"""
Dashcam MOV to GPX Script

Extracts the GPS records hidden in dashcam MOV recordings and writes one GPX
track next to each input.

Usage:
    sggps [--overwrite] [--verbose] <input.MOV> [<input.MOV> ...]

Example:
    sggps --overwrite CLIP0001.MOV CLIP0002.MOV
"""

import argparse
import logging
import sys
from pathlib import Path

from dashcam_gps.exceptions import DashcamGPSError
from dashcam_gps.gpx_writer import write_gpx
from dashcam_gps.processing.extract_gps_logs import extract_gps_logs
from dashcam_gps.recording_file import check_output_path, gpx_path_for
from dashcam_gps.utils import setup_logging

logger = logging.getLogger(__name__)


def process(mov_path: Path, overwrite: bool) -> Path:
    """Convert one recording; nothing is written unless every record decodes."""
    gpx_path = gpx_path_for(mov_path)
    check_output_path(gpx_path, overwrite)

    logger.info("Processing %s", mov_path.name)
    with open(mov_path, "rb") as mov_file:
        gps_logs = extract_gps_logs(mov_file)

    write_gpx(gps_logs, gpx_path)
    return gpx_path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert dashcam MOV GPS telemetry to GPX"
    )
    parser.add_argument("paths", nargs="*", type=Path, help="MOV files to convert")
    parser.add_argument(
        "--overwrite", action="store_true", help="overwrite any existing gpx file"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if not args.paths:
        parser.print_usage(sys.stderr)
        return 2

    setup_logging(args.verbose)

    failed = 0
    for mov_path in args.paths:
        try:
            process(mov_path, args.overwrite)
        except (DashcamGPSError, OSError) as exc:
            logger.error("%s: %s", mov_path, exc)
            failed += 1

    if failed:
        logger.error("%d of %d files failed", failed, len(args.paths))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
