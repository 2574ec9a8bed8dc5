"""Track point model and unit conversions for decoded GPS records."""

from __future__ import annotations

import datetime
import logging
import math

import pydantic

from dashcam_gps.config import config
from dashcam_gps.processing.gps_log import GPSLog

logger = logging.getLogger(__name__)


def to_decimal_degrees(spec: str, value: float) -> float:
    """Convert a ``DDDMM.mmmm`` coordinate to signed decimal degrees.

    >>> round(to_decimal_degrees("W", 12157.5678), 5)
    -121.95946
    """
    frac, deg = math.modf(value / 100)
    result = deg + frac / 0.6
    if spec in ("S", "W"):
        result = -result
    return result


def knots_to_ms(speed: float) -> float:
    return speed * config.TRACK_POINT.KNOTS_TO_MS


def local_time(gps_log: GPSLog) -> datetime.datetime | None:
    """Timestamp of *gps_log* in the local zone of this process.

    The camera clock is set to local civil time, so the record's fields are
    interpreted in the zone the conversion runs in.
    """
    try:
        naive = gps_log.local_datetime()
    except (ValueError, OverflowError):
        logger.warning(
            "Invalid record date %04d-%02d-%02d %02d:%02d:%02d, point left without time",
            2000 + gps_log.year,
            gps_log.month,
            gps_log.day,
            gps_log.hour,
            gps_log.minute,
            gps_log.second,
        )
        return None
    # Offset in effect on the record's date (DST-aware), not the offset the
    # zone has at conversion time
    return naive.astimezone()


class TrackPoint(pydantic.BaseModel):
    """One GPX track point, in WGS 84 degrees and SI units."""

    model_config = pydantic.ConfigDict(frozen=True)

    latitude: float
    longitude: float
    time: datetime.datetime | None = None
    speed_ms: float
    course: float | None = None
    """Bearing in degrees; ``None`` when the camera reports no usable heading."""

    @classmethod
    def from_gps_log(cls, gps_log: GPSLog) -> TrackPoint:
        # At low speeds a 0 bearing means unknown
        has_course = (
            gps_log.speed > config.TRACK_POINT.COURSE_MIN_SPEED_KNOTS
            or gps_log.bearing > config.TRACK_POINT.COURSE_MIN_BEARING
        )
        return cls(
            latitude=to_decimal_degrees(gps_log.latitude_spec, gps_log.latitude),
            longitude=to_decimal_degrees(gps_log.longitude_spec, gps_log.longitude),
            time=local_time(gps_log),
            speed_ms=knots_to_ms(gps_log.speed),
            course=gps_log.bearing if has_course else None,
        )
