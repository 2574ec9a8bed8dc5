import gpxpy
import pytest
from conftest import gps_record

from dashcam_gps.gpx_writer import GPXTPX_NS, build_gpx, write_gpx
from dashcam_gps.processing.gps_log import GPSLog


@pytest.fixture
def gps_logs():
    return [
        GPSLog.unpack(gps_record(second=1, speed=5.0, bearing=90.0)),
        GPSLog.unpack(gps_record(second=2, speed=0.0, bearing=0.0, latitude_spec=b"S")),
    ]


def test_one_point_per_record(gps_logs, local_tz):
    gpx = build_gpx(gps_logs)

    (track,) = gpx.tracks
    (segment,) = track.segments
    assert [p.time.second for p in segment.points] == [1, 2]
    assert segment.points[0].latitude == pytest.approx(37.418723, abs=1e-4)
    assert segment.points[1].latitude == pytest.approx(-37.418723, abs=1e-4)
    assert segment.points[0].longitude == pytest.approx(-121.959463, abs=1e-4)


def test_speed_and_course_extension(gps_logs):
    xml = build_gpx(gps_logs).to_xml(version="1.1")

    assert f'xmlns:gpxtpx="{GPXTPX_NS}"' in xml
    assert xml.count("<gpxtpx:speed>") == 2
    assert "<gpxtpx:speed>2.572220</gpxtpx:speed>" in xml
    # Stationary point without bearing has no course
    assert xml.count("<gpxtpx:course>") == 1
    assert "<gpxtpx:course>90.000000</gpxtpx:course>" in xml


def test_write_gpx_round_trips_through_gpxpy(gps_logs, tmp_path, local_tz):
    gpx_path = tmp_path / "CLIP0001.gpx"

    write_gpx(gps_logs, gpx_path)

    with open(gpx_path) as f:
        parsed = gpxpy.parse(f)
    points = parsed.tracks[0].segments[0].points
    assert len(points) == 2
    assert points[0].time.utcoffset().total_seconds() == 3 * 3600


def test_empty_record_list(tmp_path):
    gpx_path = tmp_path / "empty.gpx"

    write_gpx([], gpx_path)

    parsed = gpxpy.parse(gpx_path.read_text())
    assert parsed.tracks[0].segments[0].points == []
