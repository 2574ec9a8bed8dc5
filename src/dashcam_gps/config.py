import pydantic_settings


class WindowSettings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_prefix="DASHCAM_GPS_WINDOW_")

    # --- Telemetry window ---
    # Units: bytes, relative to an audio chunk offset

    DISPLACEMENT: int = 0x10000
    LENGTH: int = 0x8000

    # Marker at the start of every GPS record
    MAGIC: str = "GPS "


class TrackPointSettings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="DASHCAM_GPS_TRACK_POINT_"
    )

    KNOTS_TO_MS: float = 0.514444

    # Low-speed bearings of 0 mean "unknown" on these cameras
    COURSE_MIN_SPEED_KNOTS: float = 2.0
    COURSE_MIN_BEARING: float = 0.00001


class DashcamGPSConfig(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="DASHCAM_GPS_", env_nested_delimiter="__"
    )

    WINDOW: WindowSettings = WindowSettings()
    TRACK_POINT: TrackPointSettings = TrackPointSettings()

    # Atoms known to hold nested atoms
    CONTAINER_ATOMS: list[str] = ["moov", "trak", "mdia", "minf", "stbl", "dinf"]

    INPUT_SUFFIX: str = ".mov"
    OUTPUT_SUFFIX: str = ".gpx"

    GPX_CREATOR: str = "dashcam-gps"


config = DashcamGPSConfig()
