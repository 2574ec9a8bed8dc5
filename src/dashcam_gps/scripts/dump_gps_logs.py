#!/usr/bin/env python3
"""
GPS Record Dumper

Decodes the GPS records of dashcam MOV recordings and dumps the raw record
fields, without unit conversion, to one CSV per recording.  Each row also
records the audio chunk offset and the window the record was read from,
which helps when checking a new camera model against the expected layout.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

import pandas as pd

from dashcam_gps.config import config
from dashcam_gps.exceptions import DashcamGPSError
from dashcam_gps.processing.audio_offsets import collect_audio_offsets
from dashcam_gps.processing.extract_gps_logs import read_gps_log
from dashcam_gps.processing.gps_log import GPSLog
from dashcam_gps.utils import setup_logging

logger = logging.getLogger(__name__)


def dump_gps_logs(mov_path: Path) -> pd.DataFrame:
    """Return one row per audio chunk with the raw fields of its GPS record."""
    rows = []
    with open(mov_path, "rb") as mov_file:
        for audio_offset in collect_audio_offsets(mov_file):
            gps_log = read_gps_log(mov_file, audio_offset)
            row = dataclasses.asdict(gps_log)
            row["magic"] = gps_log.magic.decode("latin1")
            row["audio_offset"] = audio_offset
            row["window_start"] = audio_offset + config.WINDOW.DISPLACEMENT
            rows.append(row)

    columns = ["audio_offset", "window_start"] + [
        f.name for f in dataclasses.fields(GPSLog)
    ]
    return pd.DataFrame(rows, columns=columns)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Dump raw dashcam GPS records to CSV")
    parser.add_argument("paths", nargs="+", type=Path, help="MOV files to dump")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the CSV files (default: next to each input)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    failed = 0
    for mov_path in args.paths:
        out_dir = args.output_dir or mov_path.parent
        csv_path = out_dir / f"{mov_path.stem}_gps.csv"
        try:
            df = dump_gps_logs(mov_path)
        except (DashcamGPSError, OSError) as exc:
            logger.error("%s: %s", mov_path, exc)
            failed += 1
            continue

        out_dir.mkdir(parents=True, exist_ok=True)
        df.to_csv(csv_path, index=False)
        logger.info(" - %s: %d records", csv_path.name, len(df))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
