"""GPS record layout written by the camera next to its audio samples."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime

# magic, 36 reserved, hour..day, status, lat spec, lon spec, pad, lat, lon, speed, bearing
_GPS_LOG = struct.Struct("<4s36x6IBcc1x4f")

GPS_LOG_SIZE = _GPS_LOG.size  # 84


@dataclass(frozen=True)
class GPSLog:
    """One decoded GPS record.

    Coordinates are in the camera's decimal-minutes encoding (``DDDMM.mmmm``),
    speed is in knots and bearing in degrees.  Time fields are local civil
    time as set on the camera.
    """

    magic: bytes
    hour: int
    minute: int
    second: int
    year: int  # years since 2000
    month: int
    day: int
    status: int
    latitude_spec: str  # "N" / "S"
    longitude_spec: str  # "E" / "W"
    latitude: float
    longitude: float
    speed: float
    bearing: float

    @classmethod
    def unpack(cls, data: bytes) -> GPSLog:
        (
            magic,
            hour,
            minute,
            second,
            year,
            month,
            day,
            status,
            lat_spec,
            lon_spec,
            latitude,
            longitude,
            speed,
            bearing,
        ) = _GPS_LOG.unpack(data[:GPS_LOG_SIZE])
        return cls(
            magic=magic,
            hour=hour,
            minute=minute,
            second=second,
            year=year,
            month=month,
            day=day,
            status=status,
            latitude_spec=lat_spec.decode("latin1"),
            longitude_spec=lon_spec.decode("latin1"),
            latitude=latitude,
            longitude=longitude,
            speed=speed,
            bearing=bearing,
        )

    def local_datetime(self) -> datetime:
        """Naive timestamp of the record.

        Raises ``ValueError`` or ``OverflowError`` when the fields are not a
        valid date.
        """
        return datetime(
            2000 + self.year, self.month, self.day, self.hour, self.minute, self.second
        )
