"""
Exception classes for dashcam_gps

Every error raised while decoding a recording derives from
:class:`DashcamGPSError`.  Decode errors carry the absolute byte offset and,
where known, the atom path that triggered them, so a failing file can be
inspected with a hex editor.
"""

from __future__ import annotations

from typing import Sequence


class DashcamGPSError(Exception):
    """
    Base exception for all dashcam_gps errors.

    Args:
        message: Descriptive error message
        offset: Absolute byte offset in the source file, if known
        path: Atom path (root first) being decoded, if known
    """

    def __init__(
        self,
        message: str = "",
        *,
        offset: int | None = None,
        path: Sequence[str] | None = None,
    ):
        self.message = message
        self.offset = offset
        self.path = list(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        context = []
        if self.path:
            context.append("/".join(self.path))
        if self.offset is not None:
            context.append(f"offset 0x{self.offset:x}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class TruncatedReadError(DashcamGPSError):
    """
    Raised when the file ends before a decode step has the bytes it needs.

    This covers atom headers, chunk offset tables and GPS records alike, so
    it derives from the base class rather than from :class:`AtomError` or
    :class:`GPSLogError`.
    """


# ---------------------------------------------------------------------------
# Container (atom) errors
# ---------------------------------------------------------------------------


class AtomError(DashcamGPSError):
    """Raised when the atom structure of a file cannot be decoded."""


class UnsupportedSizeEncodingError(AtomError):
    """Raised for atoms using the 64-bit extended size form (size == 1)."""


class MalformedAtomError(AtomError):
    """Raised when an atom declares a size smaller than its own header."""


# ---------------------------------------------------------------------------
# Telemetry errors
# ---------------------------------------------------------------------------


class GPSLogError(DashcamGPSError):
    """Raised when a GPS record cannot be located or decoded."""


class InvalidMagicError(GPSLogError):
    """Raised when a candidate GPS record does not start with ``GPS ``."""


class MissingRecordError(GPSLogError):
    """Raised when a telemetry window holds no record at all."""


class NoAudioOffsetsError(GPSLogError):
    """Raised when a file has no sound track chunk offsets and points are required."""


# ---------------------------------------------------------------------------
# Recording file errors
# ---------------------------------------------------------------------------


class RecordingFileError(DashcamGPSError):
    """Raised for input/output path problems in the command-line tools."""


class InvalidInputError(RecordingFileError):
    """Raised when an input path is not a MOV recording."""


class OutputExistsError(RecordingFileError):
    """Raised when the output file exists and overwriting was not requested."""
