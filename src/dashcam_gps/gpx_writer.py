"""GPX 1.1 output for decoded GPS records."""

from __future__ import annotations

import logging
import pathlib
import xml.etree.ElementTree as ET
from typing import Sequence

import gpxpy
import gpxpy.gpx

from dashcam_gps.config import config
from dashcam_gps.gps_data import TrackPoint
from dashcam_gps.processing.gps_log import GPSLog

logger = logging.getLogger(__name__)

GPXTPX_NS = "http://www.garmin.com/xmlschemas/TrackPointExtension/v2"

_SCHEMA_LOCATIONS = [
    "http://www.topografix.com/GPX/1/1",
    "http://www.topografix.com/GPX/1/1/gpx.xsd",
    GPXTPX_NS,
    "http://www8.garmin.com/xmlschemas/TrackPointExtensionv2.xsd",
]


def _track_point_extension(point: TrackPoint) -> ET.Element:
    """``<gpxtpx:TrackPointExtension>`` carrying speed (m/s) and course."""
    extension = ET.Element(f"{{{GPXTPX_NS}}}TrackPointExtension")
    ET.SubElement(extension, f"{{{GPXTPX_NS}}}speed").text = f"{point.speed_ms:.6f}"
    if point.course is not None:
        ET.SubElement(extension, f"{{{GPXTPX_NS}}}course").text = f"{point.course:.6f}"
    return extension


def build_gpx(gps_logs: Sequence[GPSLog]) -> gpxpy.gpx.GPX:
    """Build a single-track, single-segment GPX with one point per record."""
    gpx = gpxpy.gpx.GPX()
    gpx.creator = config.GPX_CREATOR
    gpx.nsmap["gpxtpx"] = GPXTPX_NS
    gpx.schema_locations = list(_SCHEMA_LOCATIONS)

    track = gpxpy.gpx.GPXTrack()
    gpx.tracks.append(track)
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)

    for gps_log in gps_logs:
        point = TrackPoint.from_gps_log(gps_log)
        gpx_point = gpxpy.gpx.GPXTrackPoint(
            latitude=round(point.latitude, 6),
            longitude=round(point.longitude, 6),
            time=point.time,
        )
        gpx_point.extensions.append(_track_point_extension(point))
        segment.points.append(gpx_point)

    return gpx


def write_gpx(gps_logs: Sequence[GPSLog], gpx_path: pathlib.Path) -> None:
    gpx = build_gpx(gps_logs)
    gpx_path.write_text(gpx.to_xml(version="1.1"), encoding="utf-8")
    logger.info("Wrote %d track points to %s", len(gps_logs), gpx_path.name)
