"""
GPS telemetry extraction: locates and decodes the GPS records a dashcam
hides between the audio samples of its MOV recordings.

#### Locating the records

Each audio chunk listed in the sound track's ``stco`` table (see
:mod:`dashcam_gps.processing.audio_offsets`) is followed, ``0x10000`` bytes
later, by a ``0x8000`` byte window that holds one GPS record.  The window
starts with an atom-shaped 8-byte prefix (size + type), so it is walked with
the ordinary atom walker and the record is read from the start of the first
atom's content.

#### Record layout (little-endian)

| Offset | Size | Field |
|-------:|-----:|-------|
| 0 | 4 | magic, ``"GPS "`` |
| 4 | 36 | reserved |
| 40 | 24 | hour, minute, second, year - 2000, month, day (uint32) |
| 64 | 1 | status |
| 65 | 1 | latitude hemisphere, ``N`` / ``S`` |
| 66 | 1 | longitude hemisphere, ``E`` / ``W`` |
| 67 | 1 | padding |
| 68 | 16 | latitude, longitude (DDDMM.mmmm), speed (knots), bearing (float32) |

Should a window hold more than one atom-shaped prefix, every one of them is
decoded and the last one wins.
"""

from __future__ import annotations

import logging
import time
from typing import BinaryIO

from dashcam_gps.config import config
from dashcam_gps.exceptions import (
    InvalidMagicError,
    MissingRecordError,
    NoAudioOffsetsError,
)
from dashcam_gps.processing.atoms import AtomPath, SectionReader, visit_atoms
from dashcam_gps.processing.audio_offsets import collect_audio_offsets
from dashcam_gps.processing.gps_log import GPS_LOG_SIZE, GPSLog

logger = logging.getLogger(__name__)


class GPSLogDecoder:
    """Visitor decoding the GPS record at the start of each atom it is handed."""

    def __init__(self, magic: str | None = None):
        self.magic = (magic if magic is not None else config.WINDOW.MAGIC).encode(
            "latin1"
        )
        self.gps_log: GPSLog | None = None

    def visit(self, path: AtomPath, section: SectionReader) -> None:
        start = section.position
        gps_log = GPSLog.unpack(section.read_exact(GPS_LOG_SIZE, "GPS record"))
        if gps_log.magic != self.magic:
            raise InvalidMagicError(
                f"Not a GPS block: magic {gps_log.magic!r}, expected {self.magic!r}",
                offset=start,
                path=path,
            )
        self.gps_log = gps_log


def read_gps_log(source: BinaryIO, audio_offset: int) -> GPSLog:
    """Decode the GPS record belonging to the audio chunk at *audio_offset*."""
    window_start = audio_offset + config.WINDOW.DISPLACEMENT
    window = SectionReader(source, window_start, config.WINDOW.LENGTH)

    decoder = GPSLogDecoder()
    visit_atoms(decoder, window)

    if decoder.gps_log is None:
        raise MissingRecordError(
            f"No GPS record in the window following audio chunk 0x{audio_offset:x}",
            offset=window_start,
        )
    return decoder.gps_log


def extract_gps_logs(source: BinaryIO, require_points: bool = False) -> list[GPSLog]:
    """Extract every GPS record from an open MOV file.

    Parameters
    ----------
    source:
        MOV file opened in binary mode; it is only read.
    require_points:
        Raise :class:`NoAudioOffsetsError` instead of returning an empty
        list when the file has no sound track chunk offsets.

    Returns
    -------
    list[GPSLog]
        One record per audio chunk, in chunk offset table order.
    """
    t_start = time.monotonic()

    audio_offsets = collect_audio_offsets(source)
    if not audio_offsets:
        if require_points:
            raise NoAudioOffsetsError("No sound track chunk offsets found")
        logger.warning("No sound track chunk offsets found, no GPS records")
        return []

    gps_logs = []
    for audio_offset in audio_offsets:
        gps_log = read_gps_log(source, audio_offset)
        logger.debug(
            "Chunk 0x%x: %02d:%02d:%02d %s%.4f %s%.4f",
            audio_offset,
            gps_log.hour,
            gps_log.minute,
            gps_log.second,
            gps_log.latitude_spec,
            gps_log.latitude,
            gps_log.longitude_spec,
            gps_log.longitude,
        )
        gps_logs.append(gps_log)

    logger.debug(
        "Decoded %d GPS records in %.2f s", len(gps_logs), time.monotonic() - t_start
    )
    return gps_logs
