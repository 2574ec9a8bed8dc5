"""Utility helpers for the dashcam_gps package."""

from __future__ import annotations

import logging

import rich.console
import rich.logging

PACKAGE_LOGGER = "dashcam_gps"


def setup_logging(verbose: bool = False):
    """Send log records to stderr through rich.

    ``--verbose`` turns on debug output for this package only; third-party
    loggers stay at INFO.  Markup is off because messages carry raw atom
    types and record bytes, which may contain ``[``.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[
            rich.logging.RichHandler(
                console=rich.console.Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
                markup=False,
            )
        ],
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(
        logging.DEBUG if verbose else logging.NOTSET
    )
