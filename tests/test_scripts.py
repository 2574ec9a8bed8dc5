import gpxpy
import pandas as pd
import pytest
from conftest import build_mov, gps_record, gps_window

from dashcam_gps.scripts import dump_gps_logs, sggps


@pytest.fixture
def mov_path(tmp_path, two_point_mov):
    path = tmp_path / "CLIP0001.MOV"
    path.write_bytes(two_point_mov.getvalue())
    return path


@pytest.fixture
def bad_mov_path(tmp_path):
    path = tmp_path / "CLIP0002.MOV"
    path.write_bytes(build_mov([0x1000], {0x1000: gps_window(gps_record(magic=b"XXXX"))}))
    return path


def test_sggps_converts_recording(mov_path):
    assert sggps.main([str(mov_path)]) == 0

    gpx_path = mov_path.with_suffix(".gpx")
    with open(gpx_path) as f:
        points = gpxpy.parse(f).tracks[0].segments[0].points
    assert [p.time.hour for p in points] == [11, 12]


def test_sggps_refuses_to_overwrite(mov_path):
    gpx_path = mov_path.with_suffix(".gpx")
    gpx_path.write_text("keep me")

    assert sggps.main([str(mov_path)]) == 1
    assert gpx_path.read_text() == "keep me"

    assert sggps.main(["--overwrite", str(mov_path)]) == 0
    assert "<trkpt" in gpx_path.read_text()


def test_sggps_failure_does_not_stop_other_inputs(bad_mov_path, mov_path):
    assert sggps.main([str(bad_mov_path), str(mov_path)]) == 1

    assert not bad_mov_path.with_suffix(".gpx").exists()
    assert mov_path.with_suffix(".gpx").exists()


def test_sggps_rejects_non_mov(tmp_path):
    mp4_path = tmp_path / "clip.mp4"
    mp4_path.write_bytes(b"")

    assert sggps.main([str(mp4_path)]) == 1


def test_sggps_missing_file(tmp_path):
    assert sggps.main([str(tmp_path / "missing.MOV")]) == 1


def test_sggps_without_arguments_prints_usage(capsys):
    assert sggps.main([]) == 2
    assert "usage:" in capsys.readouterr().err


def test_dump_gps_logs(mov_path):
    df = dump_gps_logs.dump_gps_logs(mov_path)

    assert list(df.columns[:3]) == ["audio_offset", "window_start", "magic"]
    assert df["audio_offset"].tolist() == [0x10000, 0x1000]
    assert df["window_start"].tolist() == [0x20000, 0x11000]
    assert df["hour"].tolist() == [11, 12]
    assert (df["magic"] == "GPS ").all()


def test_dump_main_writes_csv(mov_path, bad_mov_path, tmp_path):
    out_dir = tmp_path / "csv"

    assert dump_gps_logs.main(["--output-dir", str(out_dir), str(mov_path), str(bad_mov_path)]) == 1

    df = pd.read_csv(out_dir / "CLIP0001_gps.csv")
    assert len(df) == 2
    assert not (out_dir / "CLIP0002_gps.csv").exists()
