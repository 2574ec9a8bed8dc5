"""
Audio chunk offsets of a MOV recording.

The camera interleaves its GPS records with the audio samples, so the first
step is to find where the audio chunks live.  The sound track's chunk offset
table sits at::

    moov > trak > mdia > minf > stbl > stco     (depth 6)

and the track is recognised as a sound track by its sound media header::

    moov > trak > mdia > minf > smhd            (depth 5)

which precedes ``stbl`` inside ``minf``.
"""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO

import numpy as np

from dashcam_gps.processing.atoms import AtomPath, SectionReader, visit_atoms

logger = logging.getLogger(__name__)

SOUND_MEDIA_HEADER = "smhd"
VIDEO_MEDIA_HEADER = "vmhd"
CHUNK_OFFSET_TABLE = "stco"

MEDIA_HEADER_DEPTH = 5
SAMPLE_TABLE_DEPTH = 6


def read_chunk_offsets(section: SectionReader) -> list[int]:
    """Decode an ``stco`` atom body into a list of absolute file offsets."""
    section.read_exact(4, "stco version/flags")
    (entry_count,) = struct.unpack(">I", section.read_exact(4, "stco entry count"))
    raw = section.read_exact(4 * entry_count, f"{entry_count} stco entries")
    return np.frombuffer(raw, dtype=">u4").astype(np.int64).tolist()


class AudioOffsetCollector:
    """Visitor collecting the chunk offsets of the sound track.

    ``in_sound`` is recomputed from the path shape on every visit: it is set
    by a depth-5 ``smhd`` and cleared by anything shallower than depth 5 or
    by a ``vmhd``.  Only the last sound track table seen is kept.
    """

    def __init__(self):
        self.in_sound = False
        self.audio_offsets: list[int] = []

    def visit(self, path: AtomPath, section: SectionReader) -> None:
        current = path[-1]
        if len(path) == MEDIA_HEADER_DEPTH and current == SOUND_MEDIA_HEADER:
            self.in_sound = True
        elif len(path) < MEDIA_HEADER_DEPTH or current == VIDEO_MEDIA_HEADER:
            self.in_sound = False
        elif (
            self.in_sound
            and len(path) == SAMPLE_TABLE_DEPTH
            and current == CHUNK_OFFSET_TABLE
        ):
            if self.audio_offsets:
                logger.debug(
                    "Replacing %d audio chunk offsets with the table at 0x%x",
                    len(self.audio_offsets),
                    section.base,
                )
            self.audio_offsets = read_chunk_offsets(section)


def collect_audio_offsets(source: BinaryIO) -> list[int]:
    """Walk the whole of *source* and return its audio chunk offsets."""
    collector = AudioOffsetCollector()
    visit_atoms(collector, source)
    logger.debug("Found %d audio chunk offsets", len(collector.audio_offsets))
    return collector.audio_offsets
