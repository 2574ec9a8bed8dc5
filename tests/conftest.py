"""Builders for synthetic MOV files."""

from __future__ import annotations

import io
import struct
import time

import pytest

GPS_LOG_FORMAT = "<4s36x6IBcc1x4f"
WINDOW_DISPLACEMENT = 0x10000
WINDOW_LENGTH = 0x8000


def atom(atom_type: str, payload: bytes = b"", size: int | None = None) -> bytes:
    if size is None:
        size = len(payload) + 8
    return struct.pack(">I4s", size, atom_type.encode("latin1")) + payload


def stco(offsets, entry_count: int | None = None) -> bytes:
    if entry_count is None:
        entry_count = len(offsets)
    body = struct.pack(">II", 0, entry_count)
    body += struct.pack(f">{len(offsets)}I", *offsets)
    return atom("stco", body)


def track(media_header: str, offsets) -> bytes:
    """``trak > mdia > minf > {media_header, stbl > stco}``."""
    minf = atom(media_header, bytes(8)) + atom(
        "stbl", atom("stsd", bytes(8)) + stco(offsets)
    )
    return atom(
        "trak",
        atom("tkhd", bytes(16))
        + atom("mdia", atom("mdhd", bytes(8)) + atom("minf", minf)),
    )


def gps_record(
    hour=10,
    minute=5,
    second=30,
    year=21,
    month=6,
    day=1,
    status=ord("A"),
    latitude_spec=b"N",
    longitude_spec=b"W",
    latitude=3725.1234,
    longitude=12157.5678,
    speed=5.0,
    bearing=90.0,
    magic=b"GPS ",
) -> bytes:
    return struct.pack(
        GPS_LOG_FORMAT,
        magic,
        hour,
        minute,
        second,
        year,
        month,
        day,
        status,
        latitude_spec,
        longitude_spec,
        latitude,
        longitude,
        speed,
        bearing,
    )


def gps_window(record: bytes) -> bytes:
    """A telemetry window: one ``free`` atom spanning the whole window."""
    window = atom("free", record, size=WINDOW_LENGTH)
    return window + bytes(WINDOW_LENGTH - len(window))


def build_mov(audio_offsets, windows: dict[int, bytes], video_offsets=(7, 8)) -> bytes:
    """A MOV with a video and a sound track, followed by an ``mdat`` to EOF.

    *windows* maps audio chunk offsets to window contents, placed at
    ``offset + WINDOW_DISPLACEMENT``.
    """
    moov = atom(
        "moov",
        atom("mvhd", bytes(16))
        + track("vmhd", video_offsets)
        + track("smhd", audio_offsets),
    )
    head = atom("ftyp", b"qt  \x00\x00\x00\x00") + moov + atom("mdat", size=0)

    end = len(head)
    for offset, window in windows.items():
        end = max(end, offset + WINDOW_DISPLACEMENT + len(window))

    buf = bytearray(end)
    buf[: len(head)] = head
    for offset, window in windows.items():
        start = offset + WINDOW_DISPLACEMENT
        assert start >= len(head)
        buf[start : start + len(window)] = window
    return bytes(buf)


@pytest.fixture
def local_tz(monkeypatch):
    """Run with the process time zone set to UTC+3 (no DST)."""
    monkeypatch.setenv("TZ", "TST-3")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def two_point_mov() -> io.BytesIO:
    return io.BytesIO(
        build_mov(
            [0x10000, 0x1000],
            {
                0x10000: gps_window(gps_record(hour=11)),
                0x1000: gps_window(gps_record(hour=12)),
            },
        )
    )
