"""
Recording File Module

Helpers mapping a dashcam recording to its output file: ``CLIP0001.MOV``
becomes ``CLIP0001.gpx`` in the same directory.  Existing outputs are only
replaced when explicitly allowed.
"""

from pathlib import Path
from typing import Union

from dashcam_gps.config import config
from dashcam_gps.exceptions import InvalidInputError, OutputExistsError


def gpx_path_for(mov_path: Union[str, Path], suffix: str | None = None) -> Path:
    """
    Derive the output path of a recording.

    Args:
        mov_path: Path of the ``.MOV`` recording (suffix checked case-insensitively)
        suffix: Output suffix, defaults to ``config.OUTPUT_SUFFIX``

    Returns:
        Path: *mov_path* with its suffix replaced

    Raises:
        InvalidInputError: If *mov_path* is not a MOV file
    """
    mov_path = Path(mov_path)
    if mov_path.suffix.lower() != config.INPUT_SUFFIX.lower():
        raise InvalidInputError(
            f"{mov_path}: Does not end with {config.INPUT_SUFFIX.upper()}"
        )
    return mov_path.with_suffix(suffix or config.OUTPUT_SUFFIX)


def check_output_path(output_path: Path, overwrite: bool) -> None:
    """
    Refuse to replace an existing output file unless *overwrite* is set.

    Raises:
        OutputExistsError: If *output_path* exists and *overwrite* is false
    """
    if not overwrite and output_path.exists():
        raise OutputExistsError(
            f"{output_path}: already exists. Use --overwrite to overwrite it anyway"
        )
